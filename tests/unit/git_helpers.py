"""Helpers for building test repositories."""

from pathlib import Path

import git


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> str:
    """Write a file, commit it, and return the short hash."""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    commit = repo.index.commit(message)
    return commit.hexsha[:7]


def install_hook(repo_path: Path, name: str, body: str) -> Path:
    """Install an executable shell hook in a repository."""
    hook = Path(repo_path) / ".git" / "hooks" / name
    hook.parent.mkdir(parents=True, exist_ok=True)
    hook.write_text(f"#!/bin/sh\n{body}\n")
    hook.chmod(0o755)
    return hook
