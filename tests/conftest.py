from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from tests._fixtures.repo_builder import GitRepoBuilder, seed_history


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    """Provide an empty git repository on an unborn ``develop`` branch."""
    if shutil.which("git") is None:
        pytest.skip("git executable is not available")
    return GitRepoBuilder(tmp_path)


@pytest.fixture
def seeded_repo(git_repo: GitRepoBuilder) -> GitRepoBuilder:
    """Provide a repository with ``develop`` one commit ahead of ``main``."""
    seed_history(git_repo)
    return git_repo
