from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from tests._fixtures.repos import GitRepoBuilder


@pytest.fixture(autouse=True)
def isolated_git_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global git config out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


@pytest.fixture
def repo_builder(tmp_path: Path) -> GitRepoBuilder:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    return GitRepoBuilder(tmp_path)
