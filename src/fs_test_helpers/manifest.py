"""YAML manifests describing fake trees.

A manifest is a YAML list of entries, each either a directory or a file:

    - dir: foo
      children:
        - file: bar.file
          contents: hello
        - dir: baz
          children:
            - file: fobe.file
              uuid: true

A single entry may also be given as a bare mapping.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from fs_test_helpers.fake import Fake

__all__ = ["FakeEntry", "Manifest", "ManifestError", "load_manifest", "parse_manifest"]

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """A manifest could not be parsed or does not describe valid fakes."""

    pass


class FakeEntry(BaseModel):
    """One directory or file in a manifest."""

    model_config = ConfigDict(extra="forbid")

    dir: str | None = None
    file: str | None = None
    children: list[FakeEntry] = Field(default_factory=list)
    contents: str | None = None
    uuid: bool = False

    @model_validator(mode="after")
    def _check_kind(self) -> FakeEntry:
        if (self.dir is None) == (self.file is None):
            raise ValueError("entry needs exactly one of 'dir' or 'file'")
        if self.dir is not None and (self.contents is not None or self.uuid):
            raise ValueError(f"dir {self.dir!r} cannot have contents")
        if self.file is not None and self.children:
            raise ValueError(f"file {self.file!r} cannot have children")
        if self.contents is not None and self.uuid:
            raise ValueError(f"file {self.file!r} sets both 'contents' and 'uuid'")
        return self

    def to_fake(self) -> Fake:
        """Build the fake this entry describes."""
        if self.dir is not None:
            return Fake.dir(self.dir, [child.to_fake() for child in self.children])
        fake = Fake.file(self.file)
        if self.uuid:
            return fake.fill_with_uuid()
        if self.contents is not None:
            return fake.fill_with(self.contents)
        return fake


class Manifest(BaseModel):
    """A list of top-level manifest entries."""

    entries: list[FakeEntry] = Field(default_factory=list)

    def to_fakes(self) -> list[Fake]:
        """Build every top-level fake, in manifest order."""
        return [entry.to_fake() for entry in self.entries]


def parse_manifest(text: str) -> list[Fake]:
    """Parse manifest YAML into fakes.

    Args:
        text: YAML document.

    Returns:
        Top-level fakes in document order.

    Raises:
        ManifestError: If the YAML is malformed or an entry is invalid.
    """
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid manifest YAML: {e}") from e

    if data is None:
        data = []
    elif isinstance(data, dict):
        data = [data]

    try:
        manifest = Manifest.model_validate({"entries": data})
        return manifest.to_fakes()
    except (ValidationError, ValueError) as e:
        raise ManifestError(f"Invalid manifest: {e}") from e


def load_manifest(path: Path) -> list[Fake]:
    """Load a manifest file into fakes.

    Raises:
        FileNotFoundError: If the manifest does not exist.
        ManifestError: If the manifest is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Manifest not found: {path}")
    logger.debug("Loading manifest %s", path)
    return parse_manifest(path.read_text(encoding="utf-8"))
