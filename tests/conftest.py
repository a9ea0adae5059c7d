"""
Shared pytest fixtures: engine states with a current file and small
directory trees built under tmp_path.
"""

import os
import sys
from pathlib import Path

# Add project root to sys.path so 'renamer', 'cli' can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from renamer.engine_state import EngineState
from renamer.models_fs import FileItem


def pytest_configure(config):
    config.addinivalue_line("markers", "gui: mark test as requiring GUI")


@pytest.fixture
def make_state():
    """Factory: EngineState whose current file is <directory>/<name>"""

    def _make(name: str = "file.txt", directory: str = "/data") -> EngineState:
        state = EngineState()
        state.current_file = FileItem(source=Path(directory) / name)
        return state

    return _make


@pytest.fixture
def make_files():
    """Factory: create empty files under a directory, returns their paths"""

    def _make(directory: Path, *names: str):
        paths = []
        for name in names:
            path = directory / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(name, encoding="utf-8")
            paths.append(path)
        return paths

    return _make


@pytest.fixture
def root(tmp_path) -> Path:
    """Canonical tmp_path, comparable with the walker's resolved paths"""
    return tmp_path.resolve()


@pytest.fixture
def photo_dir(root, make_files) -> Path:
    """photos/ with b.jpg, a.jpg and notes.txt"""
    photos = root / "photos"
    photos.mkdir()
    make_files(photos, "b.jpg", "a.jpg", "notes.txt")
    return photos
