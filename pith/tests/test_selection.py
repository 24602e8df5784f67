import pytest

from pith.builder.selection import (
    is_test_file,
    logical_unit_name,
    should_create_function_node,
    should_create_module_node,
)
from pith.config import Settings
from pith.models import FunctionFact


def _function(is_exported: bool) -> FunctionFact:
    return FunctionFact(
        name="helper",
        signature="function helper(): void",
        is_exported=is_exported,
        start_line=1,
        end_line=3,
    )


class TestShouldCreateFunctionNode:

    def test_exported(self):
        assert should_create_function_node(_function(True)) is True

    def test_not_exported(self):
        assert should_create_function_node(_function(False)) is False


class TestShouldCreateModuleNode:

    def test_directory_with_index(self):
        assert should_create_module_node(["src/auth/index.ts", "src/auth/login.ts", "src/auth/logout.ts"])

    def test_three_or_more_members(self):
        assert should_create_module_node(["src/utils/helper.ts", "src/utils/format.ts", "src/utils/validate.ts"])

    def test_two_members_without_index(self):
        assert not should_create_module_node(["src/small/helper.ts", "src/small/format.ts"])
        assert not should_create_module_node(["a.ts", "b.ts"])

    def test_lone_index_file(self):
        assert should_create_module_node(["src/single/index.ts"])

    def test_index_name_must_match_exactly(self):
        assert not should_create_module_node(["src/x/reindex.ts"])

    def test_configured_threshold(self):
        settings = Settings(min_module_members=2)
        assert should_create_module_node(["src/small/helper.ts", "src/small/format.ts"], settings)


class TestIsTestFile:

    @pytest.mark.parametrize("path", [
        "src/builder/index.test.ts",
        "src/api/index.spec.ts",
        "src/__tests__/helper.ts",
        "src/utils/__tests__/parser.ts",
    ])
    def test_test_files(self, path):
        assert is_test_file(path) is True

    @pytest.mark.parametrize("path", [
        "src/builder/index.ts",
        "src/api/index.ts",
        "src/testUtils.ts",
        "src/mytest.ts",
        "src/test.ts",
    ])
    def test_source_files(self, path):
        assert is_test_file(path) is False


class TestLogicalUnitName:

    def test_source_and_sibling_test_match(self):
        assert logical_unit_name("src/builder/index.ts") == "src/builder/index"
        assert logical_unit_name("src/builder/index.test.ts") == "src/builder/index"
        assert logical_unit_name("src/builder/index.spec.ts") == "src/builder/index"

    def test_tests_directory_ignored(self):
        assert logical_unit_name("src/utils/__tests__/helper.test.ts") == "src/utils/helper"
        assert logical_unit_name("src/utils/__tests__/helper.ts") == "src/utils/helper"

    def test_root_file(self):
        assert logical_unit_name("index.ts") == "index"
