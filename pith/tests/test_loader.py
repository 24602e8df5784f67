import json

import pytest

from pith.errors import PithError, ErrorCode
from pith.loader import load_fact_files, read_fact_file


def _write(path, content):
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return str(path)


class TestReadFactFile:

    def test_single_record(self, tmp_path):
        path = _write(tmp_path / "a.json", {"path": "src/a.ts", "lines": 3})

        facts = read_fact_file(path)

        assert [fact.path for fact in facts] == ["src/a.ts"]

    def test_record_list(self, tmp_path):
        path = _write(tmp_path / "all.json", [
            {"path": "src/a.ts", "lines": 3},
            {"path": "src/b.ts", "lines": 4, "imports": [{"from": "./a", "names": ["a"]}]},
        ])

        facts = read_fact_file(path)

        assert [fact.path for fact in facts] == ["src/a.ts", "src/b.ts"]
        assert facts[1].imports[0].from_ == "./a"

    def test_missing_file(self, tmp_path):
        with pytest.raises(PithError) as exc_info:
            read_fact_file(str(tmp_path / "missing.json"))
        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND

    @pytest.mark.parametrize("content", ["{broken", json.dumps({"lines": 3})])
    def test_invalid_content(self, tmp_path, content):
        path = _write(tmp_path / "bad.json", content)

        with pytest.raises(PithError) as exc_info:
            read_fact_file(path)
        assert exc_info.value.code == ErrorCode.PARSE_ERROR


@pytest.mark.asyncio
async def test_load_fact_files_skips_bad_files(tmp_path):
    good = _write(tmp_path / "a.json", {"path": "src/a.ts", "lines": 3})
    bad = _write(tmp_path / "bad.json", "{broken")
    more = _write(tmp_path / "more.json", [{"path": "src/b.ts", "lines": 1}, {"path": "src/c.ts", "lines": 2}])

    facts, errors = await load_fact_files([good, bad, more], max_concurrent=2)

    assert [fact.path for fact in facts] == ["src/a.ts", "src/b.ts", "src/c.ts"]
    assert len(errors) == 1
    assert errors[0].code == ErrorCode.PARSE_ERROR
