"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from fs_test_helpers.fake import Dir, Fake
from fs_test_helpers.plugin import fake_tree  # noqa: F401


@pytest.fixture
def example_tree() -> Dir:
    """The foo/bar.file, foo/baz/{fobe,quux}.file tree."""
    return Fake.dir(
        "foo",
        [
            Fake.file("bar.file"),
            Fake.dir(
                "baz",
                [
                    Fake.file("fobe.file"),
                    Fake.file("quux.file"),
                ],
            ),
        ],
    )


@pytest.fixture
def sample_manifest_content() -> str:
    """Manifest YAML describing a small tree with contents."""
    return """\
- dir: foo
  children:
    - file: bar.file
      contents: hello
    - dir: baz
      children:
        - file: fobe.file
        - file: quux.file
          contents: |
            line one
            line two
- file: top.file
"""


@pytest.fixture
def manifest_file(tmp_path: Path, sample_manifest_content: str) -> Path:
    """Write the sample manifest next to (not inside) the test's base directory."""
    path = tmp_path / "manifest.yaml"
    path.write_text(sample_manifest_content)
    return path


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Create an empty base directory for materialized fakes."""
    base = tmp_path / "base"
    base.mkdir()
    return base
