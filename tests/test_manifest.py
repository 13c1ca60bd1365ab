"""Tests for YAML fixture manifests."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from fs_test_helpers.assertions import assert_file_has_contents, assert_matches
from fs_test_helpers.fake import Dir, Fake, File
from fs_test_helpers.manifest import FakeEntry, ManifestError, load_manifest, parse_manifest


class TestParseManifest:
    """Tests for parse_manifest."""

    def test_parse_nested_tree(self, sample_manifest_content: str) -> None:
        """Test entries become the equivalent fakes."""
        fakes = parse_manifest(sample_manifest_content)

        assert fakes == [
            Fake.dir(
                "foo",
                [
                    Fake.file("bar.file").fill_with("hello"),
                    Fake.dir(
                        "baz",
                        [
                            Fake.file("fobe.file"),
                            Fake.file("quux.file").fill_with("line one\nline two\n"),
                        ],
                    ),
                ],
            ),
            Fake.file("top.file"),
        ]

    def test_single_mapping(self) -> None:
        """Test a bare mapping is one entry."""
        assert parse_manifest("file: one.file\ncontents: x\n") == [
            Fake.file("one.file").fill_with("x")
        ]

    def test_empty_document(self) -> None:
        """Test an empty manifest has no fakes."""
        assert parse_manifest("") == []

    def test_uuid_entry(self) -> None:
        """Test uuid: true fills the file with a fresh uuid."""
        (fake,) = parse_manifest("- file: id.file\n  uuid: true\n")

        assert isinstance(fake, File)
        assert re.fullmatch(r"[0-9a-f]{32}", fake.contents or "")

    def test_empty_directory(self) -> None:
        """Test a directory without children."""
        (fake,) = parse_manifest("- dir: empty\n")

        assert fake == Dir("empty", ())

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("- contents: x\n", "exactly one of 'dir' or 'file'"),
            ("- dir: a\n  file: b\n", "exactly one of 'dir' or 'file'"),
            ("- dir: a\n  contents: x\n", "cannot have contents"),
            ("- dir: a\n  uuid: true\n", "cannot have contents"),
            ("- file: a\n  children:\n    - file: b\n", "cannot have children"),
            ("- file: a\n  contents: x\n  uuid: true\n", "both 'contents' and 'uuid'"),
            ("- file: a\n  mode: 644\n", "Extra inputs"),
            ("- file: a/b\n", "single path segment"),
        ],
    )
    def test_invalid_entries(self, text: str, message: str) -> None:
        """Test invalid entries raise ManifestError naming the problem."""
        with pytest.raises(ManifestError, match=re.escape(message)):
            parse_manifest(text)

    def test_malformed_yaml(self) -> None:
        """Test broken YAML raises ManifestError."""
        with pytest.raises(ManifestError, match="Invalid manifest YAML"):
            parse_manifest("- dir: [unclosed\n")

    def test_scalar_document_rejected(self) -> None:
        """Test a manifest must be a list or mapping."""
        with pytest.raises(ManifestError):
            parse_manifest("just a string\n")


class TestLoadManifest:
    """Tests for load_manifest."""

    def test_load_and_create(self, manifest_file: Path, base_dir: Path) -> None:
        """Test a loaded manifest can be created and matches on disk."""
        fakes = load_manifest(manifest_file)
        for fake in fakes:
            fake.create(base_dir)

        for fake in fakes:
            assert_matches(fake, base_dir, exact=True)
        assert_file_has_contents(base_dir / "foo" / "bar.file", b"hello")

    def test_missing_manifest(self, tmp_path: Path) -> None:
        """Test a missing manifest raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Manifest not found"):
            load_manifest(tmp_path / "missing.yaml")

    def test_entry_to_fake(self) -> None:
        """Test a FakeEntry built directly converts the same way."""
        entry = FakeEntry(dir="d", children=[FakeEntry(file="f", contents="c")])

        assert entry.to_fake() == Fake.dir("d", [Fake.file("f").fill_with("c")])
