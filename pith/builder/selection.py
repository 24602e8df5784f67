"""
Predicates deciding which candidate entities become graph nodes.
"""
import posixpath
from typing import Iterable, Optional

from ..config import Settings, settings as default_settings
from ..models import FunctionFact

TEST_MARKERS = (".test", ".spec")


def _stem(file_name: str) -> str:
    """Base name without its final extension ('index.test.ts' -> 'index.test')."""
    stem, _ = posixpath.splitext(file_name)
    return stem


def should_create_function_node(func: FunctionFact) -> bool:
    """Only exported functions become nodes."""
    return func.is_exported


def should_create_module_node(member_paths: Iterable[str], settings: Optional[Settings] = None) -> bool:
    """A directory is a module if it has an index file or enough members."""
    settings = settings or default_settings
    members = list(member_paths)
    index_names = set(settings.index_file_names_list)

    if any(posixpath.basename(path) in index_names for path in members):
        return True
    return len(members) >= settings.min_module_members


def is_test_file(path: str, settings: Optional[Settings] = None) -> bool:
    """
    Check whether a path names a test file.

    A file is a test file if its stem ends in a '.test' or '.spec' marker, or
    if any of its directories is a tests directory such as '__tests__'.
    'src/testUtils.ts' is not a test file.
    """
    settings = settings or default_settings
    directory, file_name = posixpath.split(path)
    tests_dirs = set(settings.tests_dir_names_list)

    if any(segment in tests_dirs for segment in directory.split("/")):
        return True
    return _stem(file_name).endswith(TEST_MARKERS)


def logical_unit_name(path: str, settings: Optional[Settings] = None) -> str:
    """
    Name shared by a source file and its tests.

    'src/utils/__tests__/helper.test.ts' and 'src/utils/helper.ts' both map
    to 'src/utils/helper'.
    """
    settings = settings or default_settings
    directory, file_name = posixpath.split(path)
    tests_dirs = set(settings.tests_dir_names_list)

    stem = _stem(file_name)
    for marker in TEST_MARKERS:
        if stem.endswith(marker):
            stem = stem[: -len(marker)]
            break

    segments = [segment for segment in directory.split("/") if segment and segment not in tests_dirs]
    return "/".join(segments + [stem])
