"""Assertions and fake directory trees for testing code that touches the filesystem."""

__version__ = "0.1.0"

from fs_test_helpers.assertions import (
    assert_exists,
    assert_file_has_contents,
    assert_files_have_same_contents,
    assert_is_dir,
    assert_is_file,
    assert_matches,
)
from fs_test_helpers.fake import Dir, Fake, File, InvalidFakeError

__all__ = [
    "__version__",
    "Dir",
    "Fake",
    "File",
    "InvalidFakeError",
    "assert_exists",
    "assert_file_has_contents",
    "assert_files_have_same_contents",
    "assert_is_dir",
    "assert_is_file",
    "assert_matches",
]
