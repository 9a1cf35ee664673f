"""Shared pytest fixtures for minivcs tests."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from minivcs.core.config import Config
from minivcs.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.vcsconfig and VCS_* variables."""
    global_path = tmp_path_factory.mktemp('home') / '.vcsconfig'
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', global_path)
    for name in list(os.environ):
        if name.startswith('VCS_'):
            monkeypatch.delenv(name)
    return global_path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with user identity set."""
    repo.config_file.write_text(
        "[user]\n"
        "name = Test User\n"
        "email = test@example.com\n"
    )
    return repo


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run the test from inside the repository's work tree."""
    monkeypatch.chdir(repo.work_tree)
    return repo


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }
