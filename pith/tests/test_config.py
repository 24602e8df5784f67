import json

import pytest

from pith.config import Settings, load_settings
from pith.errors import PithError, ErrorCode, format_error


class TestSettings:
    """Test settings defaults and derived values."""

    def test_defaults(self):
        settings = Settings()

        assert settings.min_module_members == 3
        assert settings.max_concurrency == 5
        assert settings.test_command_template == "npm test -- {path}"
        assert settings.tests_dir_names_list == ["__tests__"]
        assert "index.ts" in settings.index_file_names_list
        assert settings.source_extensions_list[0] == ".ts"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PITH_MAX_CONCURRENCY", "8")
        monkeypatch.setenv("PITH_TESTS_DIR_NAMES", "__tests__, test")

        settings = Settings()

        assert settings.max_concurrency == 8
        assert settings.tests_dir_names_list == ["__tests__", "test"]

    def test_store_path(self):
        settings = Settings(data_dir="out", store_file="nodes.json")

        assert str(settings.store_path).replace("\\", "/") == "out/nodes.json"


class TestLoadSettings:
    """Test pith.config.json loading."""

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path))

        assert settings.min_module_members == 3

    def test_file_values_applied(self, tmp_path):
        (tmp_path / "pith.config.json").write_text(json.dumps({
            "output": {"dataDir": "build/pith"},
            "builder": {
                "testCommand": "pnpm vitest run {path}",
                "indexFiles": ["index.ts", "mod.ts"],
                "minModuleMembers": 2,
                "maxConcurrency": 10,
            },
            "logging": {"level": "DEBUG"},
        }))

        settings = load_settings(str(tmp_path))

        assert settings.data_dir == "build/pith"
        assert settings.test_command_template == "pnpm vitest run {path}"
        assert settings.index_file_names_list == ["index.ts", "mod.ts"]
        assert settings.min_module_members == 2
        assert settings.max_concurrency == 10
        assert settings.log_level == "DEBUG"

    def test_unknown_keys_ignored(self, tmp_path):
        (tmp_path / "pith.config.json").write_text(json.dumps({"llm": {"provider": "openrouter"}}))

        assert load_settings(str(tmp_path)).max_concurrency == 5

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2]",
        json.dumps({"builder": {"minModuleMembers": 0}}),
        json.dumps({"builder": {"indexFiles": ["index.ts", 3]}}),
        json.dumps({"builder": []}),
    ])
    def test_invalid_file(self, tmp_path, content):
        (tmp_path / "pith.config.json").write_text(content)

        with pytest.raises(PithError) as exc_info:
            load_settings(str(tmp_path))
        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    def test_invalid_file_reports_suggestion(self, tmp_path):
        (tmp_path / "pith.config.json").write_text("{not json")

        with pytest.raises(PithError) as exc_info:
            load_settings(str(tmp_path))

        formatted = format_error(exc_info.value)
        assert "Type: CONFIG_ERROR" in formatted
        assert "Suggestion: Check your pith.config.json file" in formatted
