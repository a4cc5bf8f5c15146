"""Shared test fixtures for Codebase Archeologist tests."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative_path: content}`` under ``root``."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


class GitRepo:
    """Minimal git driver for building histories in tests."""

    def __init__(self, root: Path):
        self.root = root
        self._tick = 0
        self.git("init", "-q")

    def git(self, *args: str) -> str:
        self._tick += 1
        stamp = f"2024-01-01T00:{self._tick // 60:02d}:{self._tick % 60:02d}+00:00"
        env = {
            **os.environ,
            "GIT_AUTHOR_DATE": stamp,
            "GIT_COMMITTER_DATE": stamp,
        }
        result = subprocess.run(
            ["git", "-C", str(self.root), "-c", "commit.gpgsign=false", *args],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )
        return result.stdout

    def commit(self, files: dict[str, str], message: str, author: str = "Alice") -> None:
        write_files(self.root, files)
        self.git("add", "--all")
        self.git(
            "-c", f"user.name={author}",
            "-c", f"user.email={author.lower()}@example.com",
            "commit", "-q", "-m", message,
        )


@pytest.fixture
def project(tmp_path):
    """Factory for a project root with a Source/ tree.

    Usage: ``root = project({"Source/Foo.h": "..."})``
    """

    def make(files=None) -> Path:
        root = tmp_path / "MyGame"
        (root / "Source").mkdir(parents=True, exist_ok=True)
        return write_files(root, files or {})

    return make


@pytest.fixture
def git_repo(tmp_path):
    """An initialised git repository at ``tmp_path / "MyGame"``."""
    if shutil.which("git") is None:
        pytest.skip("git not found")
    root = tmp_path / "MyGame"
    (root / "Source").mkdir(parents=True)
    return GitRepo(root)


@pytest.fixture
def write_tree():
    """``write_tree(root, {relative_path: content})`` helper."""
    return write_files
