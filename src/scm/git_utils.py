"""Thin wrappers around git commands."""

import subprocess
from collections.abc import Iterable, Iterator
from pathlib import Path

from common.logger import get_logger

from .models import ChangeRecord

logger = get_logger(__name__)

# Separates commits in `git log` output; cannot appear in a path
COMMIT_MARKER = "\x1e"


class GitError(RuntimeError):
    """Raised when a git command fails."""


def _run_git(args: Iterable[str], *, cwd: Path) -> str:
    """Run a git sub-command and return its stdout."""
    completed = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="surrogateescape",
    )
    if completed.returncode != 0:
        raise GitError(completed.stderr.strip() or "git command failed")
    return completed.stdout


def is_git_repository(path: Path) -> bool:
    """Return True if ``path`` is inside a git work tree or is a bare repository."""
    if not path.is_dir():
        return False
    try:
        _run_git(["rev-parse", "--git-dir"], cwd=path)
    except GitError:
        return False
    return True


def rev_parse(repo_root: Path, ref: str) -> str:
    """
    Resolve a ref (branch, tag, abbreviated hash) to a full commit hash.

    Raises:
        GitError: If the ref does not name a commit
    """
    return _run_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=repo_root).strip()


def commit_exists(repo_root: Path, commit_hash: str) -> bool:
    """Return True if the commit object is present in the repository."""
    try:
        rev_parse(repo_root, commit_hash)
    except GitError:
        return False
    return True


def iter_change_records(
    repo_root: Path,
    to_commit: str,
    from_commit: str | None = None,
) -> Iterator[ChangeRecord]:
    """
    Yield one ChangeRecord per commit reachable from ``to_commit``.

    Uses: git log --name-status from_commit..to_commit

    When ``from_commit`` is None the whole history of ``to_commit`` is listed,
    so every file ever touched shows up.

    Args:
        repo_root: Path to git repository root
        to_commit: Newest commit (inclusive)
        from_commit: Oldest commit (exclusive), or None

    Raises:
        GitError: If git command fails
    """
    revision_range = f"{from_commit}..{to_commit}" if from_commit else to_commit
    output = _run_git(
        [
            "-c",
            "core.quotePath=false",
            "log",
            "--name-status",
            "--find-renames",
            "--no-merges",
            f"--pretty=format:{COMMIT_MARKER}%H",
            revision_range,
            "--",
        ],
        cwd=repo_root,
    )

    for block in output.split(COMMIT_MARKER):
        lines = [line for line in block.splitlines() if line.strip()]
        if not lines:
            continue

        commit, entries = lines[0].strip(), lines[1:]
        paths: set[str] = set()
        for entry in entries:
            # Format: <status>\t<path> or <R|C><score>\t<old>\t<new>
            parts = entry.split("\t")
            if len(parts) < 2:
                logger.debug(f"Ignoring unexpected git log line in {commit}: {entry!r}")
                continue
            paths.update(parts[1:])

        yield ChangeRecord(commit=commit, paths=frozenset(paths))
