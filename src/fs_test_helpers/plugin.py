"""pytest plugin providing fake-tree fixtures.

Registered through the ``pytest11`` entry point, so installing the package
makes the fixtures available to every test session.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fs_test_helpers.fake import Fake

FakeTreeFactory = Callable[..., list[Path]]


@pytest.fixture
def fake_tree(tmp_path: Path) -> FakeTreeFactory:
    """Materialize fakes under the test's temporary directory.

    Returns a callable taking any number of fakes; each one is created
    under ``tmp_path`` in order and the created top-level paths are returned.
    The directory is removed by pytest's tmp_path retention policy.
    """

    def _create(*fakes: Fake) -> list[Path]:
        return [fake.create(tmp_path) for fake in fakes]

    return _create
