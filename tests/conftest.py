"""Shared test fixtures."""

from __future__ import annotations

import pytest

from filescan.settings import Settings


@pytest.fixture(autouse=True)
def isolate_xdg(tmp_path_factory, monkeypatch):
    """Redirect trash and settings to a temp directory."""
    xdg_root = tmp_path_factory.mktemp("xdg")
    data_home = xdg_root / "xdg_data"
    config_home = xdg_root / "xdg_config"
    data_home.mkdir()
    config_home.mkdir()
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return data_home


@pytest.fixture
def trash_home(isolate_xdg):
    """Location of the isolated home trash."""
    return isolate_xdg / "Trash"


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small tree with one file of each category.

    Layout::

        tree/
            document.pdf        12 bytes
            image.JPG           20 bytes
            notes/
                deep/
                    movie.mkv    7 bytes
                    readme       3 bytes
                song.mp3         5 bytes
    """
    root = tmp_path / "tree"
    (root / "notes" / "deep").mkdir(parents=True)
    (root / "document.pdf").write_bytes(b"d" * 12)
    (root / "image.JPG").write_bytes(b"i" * 20)
    (root / "notes" / "song.mp3").write_bytes(b"s" * 5)
    (root / "notes" / "deep" / "movie.mkv").write_bytes(b"m" * 7)
    (root / "notes" / "deep" / "readme").write_bytes(b"r" * 3)
    return root
