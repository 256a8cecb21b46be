"""Pytest configuration for asmprobe tests."""

from pathlib import Path

import pytest


@pytest.fixture
def make_files():
    """Create empty files (and their parent directories) under a base directory."""

    def _make(base: Path, *names: str) -> Path:
        base.mkdir(parents=True, exist_ok=True)
        for name in names:
            path = base / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"MZ")
        return base

    return _make


@pytest.fixture
def shared_dir(tmp_path: Path) -> Path:
    """An empty shared runtime directory so the fallback never hits the real interpreter."""
    path = tmp_path / "shared"
    path.mkdir()
    return path
