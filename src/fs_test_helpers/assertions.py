"""Assertions attached to filesystem queries.

Every helper raises `AssertionError` with a message naming the offending
path, so a failing expectation aborts the calling test the same way a
bare `assert` would.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from itertools import zip_longest
from pathlib import Path
from typing import BinaryIO

from fs_test_helpers.fake import DEFAULT_ENCODING, Dir, Fake

__all__ = [
    "READ_CHUNK_SIZE",
    "assert_exists",
    "assert_file_has_contents",
    "assert_files_have_same_contents",
    "assert_is_dir",
    "assert_is_file",
    "assert_matches",
]

# Size of each buffered read when streaming file bytes
READ_CHUNK_SIZE = 64 * 1024

_MISSING = object()

PathLike = str | os.PathLike[str]


def assert_exists(path: PathLike) -> None:
    """Fail unless `path` exists."""
    if not Path(path).exists():
        raise AssertionError(f"path {str(path)!r} does not exist")


def assert_is_dir(path: PathLike) -> None:
    """Fail unless `path` is a directory."""
    if not Path(path).is_dir():
        raise AssertionError(f"path {str(path)!r} is not a directory")


def assert_is_file(path: PathLike) -> None:
    """Fail unless `path` is a regular file."""
    if not Path(path).is_file():
        raise AssertionError(f"path {str(path)!r} is not a file")


def _file_bytes(fh: BinaryIO) -> Iterator[int]:
    """Stream the bytes of an open file one at a time, reading in chunks."""
    while chunk := fh.read(READ_CHUNK_SIZE):
        yield from chunk


def _describe(byte: object) -> str:
    return "end of data" if byte is _MISSING else f"0x{byte:02x}"


def _compare_streams(
    expected: Iterator[int],
    actual: Iterator[int],
    expected_label: str,
    actual_label: str,
) -> None:
    """Compare two byte streams position by position, including their length.

    A shorter stream never passes as a prefix of a longer one.
    """
    pairs = zip_longest(expected, actual, fillvalue=_MISSING)
    for position, (exp, act) in enumerate(pairs):
        if exp is _MISSING or act is _MISSING:
            shorter = expected_label if exp is _MISSING else actual_label
            raise AssertionError(
                f"length mismatch at byte {position}: {shorter} is shorter "
                f"({expected_label} has {_describe(exp)}, {actual_label} has {_describe(act)})"
            )
        if exp != act:
            raise AssertionError(
                f"byte {position} differs: {expected_label} has {_describe(exp)}, "
                f"{actual_label} has {_describe(act)}"
            )


def assert_file_has_contents(path: PathLike, contents: bytes) -> None:
    """Fail unless the file at `path` holds exactly `contents`.

    Args:
        path: File to read.
        contents: Expected bytes; the file must have the same length too.

    Raises:
        TypeError: If `contents` is not a bytes-like object.
    """
    expected = bytes(memoryview(contents))
    assert_is_file(path)
    with open(path, "rb") as fh:
        _compare_streams(
            iter(expected),
            _file_bytes(fh),
            "expected contents",
            f"path {str(path)!r}",
        )


def assert_files_have_same_contents(path_1: PathLike, path_2: PathLike) -> None:
    """Fail unless both paths are files with byte-for-byte identical contents."""
    assert_is_file(path_1)
    assert_is_file(path_2)
    with open(path_1, "rb") as fh_1, open(path_2, "rb") as fh_2:
        _compare_streams(
            _file_bytes(fh_1),
            _file_bytes(fh_2),
            f"path {str(path_1)!r}",
            f"path {str(path_2)!r}",
        )


def assert_matches(fake: Fake, base: PathLike, exact: bool = False) -> None:
    """Fail unless the filesystem under `base` has the shape of `fake`.

    Directories must be directories, files must be regular files holding
    exactly their declared contents (empty when none were declared).

    Args:
        fake: Tree that was expected to be created under `base`.
        base: Directory containing the top-level node.
        exact: Also fail when a directory on disk has entries the fake lacks.
    """
    base = Path(base)
    for relative, node in fake.walk():
        path = base / relative
        assert_exists(path)
        if isinstance(node, Dir):
            assert_is_dir(path)
            if exact:
                declared = {child.name for child in node.children}
                extra = sorted(p.name for p in path.iterdir() if p.name not in declared)
                if extra:
                    raise AssertionError(f"path {str(path)!r} has unexpected entries {extra}")
        else:
            expected = node.contents or ""
            assert_file_has_contents(path, expected.encode(DEFAULT_ENCODING))
