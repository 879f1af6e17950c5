"""Collect the files changed between two revisions."""

from common.logger import get_logger
from scm.filesystem import SCMFileSystem
from scm.git_utils import GitError
from scm.models import Head, Revision

from .errors import DiffError

logger = get_logger(__name__)


def collect_changed_paths(
    file_system: SCMFileSystem,
    head: Head,
    previous_revision: Revision | None,
) -> set[str]:
    """
    Union the paths touched by every change after ``previous_revision``.

    Renames count both the old and the new path. If ``previous_revision`` is
    None the file system reports the whole history of the head, so every file
    ever touched is returned.

    Args:
        file_system: File system pinned to the current revision
        head: Head being evaluated
        previous_revision: Baseline (exclusive), or None

    Returns:
        Set of repository-relative paths

    Raises:
        DiffError: If the changes cannot be listed
    """
    paths: set[str] = set()
    commits = 0
    try:
        for record in file_system.changes_since(previous_revision):
            commits += 1
            paths.update(record.paths)
    except GitError as e:
        raise DiffError(f"Cannot list changes of {head.name} since {previous_revision}: {e}") from e

    logger.debug(f"{head.name}: {len(paths)} changed file(s) across {commits} commit(s)")
    return paths
