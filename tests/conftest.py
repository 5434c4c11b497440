"""
Shared fixtures for the CiteMatch test suite.
"""

import pytest

from citematch.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real ~/.config/citematch/config.yaml."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("CITEMATCH_CONFIG", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def reporters_file(tmp_path):
    """A reporters file listing a few US reporters."""
    path = tmp_path / "reporters.txt"
    path.write_text("U.S.\nF.2d\n\nF. Supp.\n", encoding="utf-8")
    return path


@pytest.fixture
def data_dir(tmp_path):
    """An empty directory of court decisions."""
    path = tmp_path / "data"
    path.mkdir()
    return path
