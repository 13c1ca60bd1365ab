"""Create "fake" directories and files for testing purposes.

A `Fake` is an in-memory description of a directory or a file. Trees of
fakes are built with `Fake.dir` and `Fake.file`, then materialized under a
base directory with `create`:

    tree = Fake.dir(
        "foo",
        [
            Fake.file("bar.file"),
            Fake.dir("baz", [Fake.file("fobe.file"), Fake.file("quux.file")]),
        ],
    )
    tree.create(tmp_path)

Contents are attached with `fill_with` or `fill_with_uuid`, which only
make sense for files.
"""

from __future__ import annotations

import logging
import os
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

__all__ = ["DEFAULT_ENCODING", "Dir", "Fake", "File", "InvalidFakeError"]

logger = logging.getLogger(__name__)

# Text contents are written as the raw bytes of this encoding
DEFAULT_ENCODING = "utf-8"


class InvalidFakeError(ValueError):
    """A fake was built in a way that can never be materialized."""

    pass


def _check_name(name: Any) -> str:
    """Convert a name to text and make sure it is a single path segment."""
    text = str(name)
    if not text or text in (".", ".."):
        raise InvalidFakeError(f"invalid name {text!r}")
    separators = {os.sep, "/"} | ({os.altsep} if os.altsep else set())
    if any(sep in text for sep in separators):
        raise InvalidFakeError(f"name {text!r} must be a single path segment")
    return text


class Fake(ABC):
    """A directory or file that can be created on the filesystem.

    Do not instantiate directly; use `Fake.dir` and `Fake.file`.
    """

    name: str

    @staticmethod
    def dir(name: Any, children: Sequence[Fake] = ()) -> Dir:
        """Build a directory node.

        Args:
            name: Path segment; anything convertible to text.
            children: Already-built nodes, created in this order.

        Returns:
            A new `Dir`.
        """
        return Dir(name, tuple(children))

    @staticmethod
    def file(name: Any) -> File:
        """Build an empty file node."""
        return File(name)

    @staticmethod
    def from_path(path: str | os.PathLike[str]) -> Fake:
        """Snapshot an existing directory or file into a fake tree.

        Children are sorted by name. File bytes are decoded with
        `DEFAULT_ENCODING`; an empty file yields a `File` without contents.

        Raises:
            InvalidFakeError: If the path is a symlink or neither a file nor a directory.
            OSError: If the path cannot be read.
            UnicodeDecodeError: If a file does not hold valid text.
        """
        path = Path(path)
        if path.is_symlink():
            raise InvalidFakeError(f"path {str(path)!r} is a symlink")
        if path.is_dir():
            children = [Fake.from_path(child) for child in sorted(path.iterdir())]
            return Dir(path.name, tuple(children))
        if path.is_file():
            data = path.read_bytes()
            return File(path.name, data.decode(DEFAULT_ENCODING) if data else None)
        raise InvalidFakeError(f"path {str(path)!r} is neither a file nor a directory")

    @property
    def contents(self) -> str | None:
        """Stored text for a file; None for an empty file or a directory."""
        return None

    def fill_with(self, contents: Any) -> File:
        """Return a file node that will be written with `contents`.

        Raises:
            InvalidFakeError: If called on a directory
                (only files can have contents written to them),
                or if `contents` is bytes rather than text.
        """
        raise InvalidFakeError(f"cannot add contents to Dir {self.name!r}")

    def fill_with_uuid(self) -> File:
        """Fill a file with a random uuid rendered as 32 lowercase hex digits.

        Useful e.g. to verify that a file has been copied intact.

        Raises:
            InvalidFakeError: If called on a directory.
        """
        return self.fill_with(uuid.uuid4().hex)

    @abstractmethod
    def create(self, base: str | os.PathLike[str]) -> Path:
        """Create the filesystem objects described by this fake under `base`.

        Returns:
            Path of the created top-level object.

        Raises:
            OSError: If a directory or file cannot be created or written.
        """

    def walk(self, prefix: Path | None = None) -> Iterator[tuple[Path, Fake]]:
        """Yield `(relative_path, node)` pairs depth-first, parents before children."""
        path = prefix / self.name if prefix is not None else Path(self.name)
        yield path, self


@dataclass(frozen=True)
class Dir(Fake):
    """A directory and the fakes created inside it."""

    name: str
    children: tuple[Fake, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Normalize the name and freeze the children."""
        object.__setattr__(self, "name", _check_name(self.name))
        object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            if not isinstance(child, Fake):
                raise InvalidFakeError(
                    f"children of Dir {self.name!r} must be fakes, got {type(child).__name__}"
                )

    def create(self, base: str | os.PathLike[str]) -> Path:
        path = Path(base) / self.name
        # Fails if it already exists; children must not land in a stale directory
        path.mkdir()
        logger.debug("Created directory %s", path)
        for child in self.children:
            child.create(path)
        return path

    def walk(self, prefix: Path | None = None) -> Iterator[tuple[Path, Fake]]:
        path = prefix / self.name if prefix is not None else Path(self.name)
        yield path, self
        for child in self.children:
            yield from child.walk(path)


@dataclass(frozen=True)
class File(Fake):
    """A regular file, empty unless filled."""

    name: str
    contents: str | None = None

    def __post_init__(self) -> None:
        """Normalize the name."""
        object.__setattr__(self, "name", _check_name(self.name))

    def fill_with(self, contents: Any) -> File:
        if isinstance(contents, (bytes, bytearray, memoryview)):
            raise InvalidFakeError(
                f"contents of File {self.name!r} must be text, got {type(contents).__name__}"
            )
        return replace(self, contents=str(contents))

    def create(self, base: str | os.PathLike[str]) -> Path:
        path = Path(base) / self.name
        data = self.contents.encode(DEFAULT_ENCODING) if self.contents is not None else b""
        with path.open("wb") as fh:
            fh.write(data)
        logger.debug("Created file %s (%d bytes)", path, len(data))
        return path
