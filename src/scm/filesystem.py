"""Read-only views of a repository at a given revision."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from common.logger import get_logger

from .git_utils import GitError, commit_exists, is_git_repository, iter_change_records, rev_parse
from .models import ChangeRecord, Head, Revision
from .sources import GitSCM, SCMSource, SCMSourceOwner

logger = get_logger(__name__)


class SCMFileSystem(ABC):
    """A repository pinned to one revision.

    Use as a context manager so the handle is always released.
    """

    def __init__(self, head: Head, revision: Revision):
        self.head = head
        self.revision = revision
        self.closed = False

    @abstractmethod
    def changes_since(self, previous: Revision | None) -> Iterator[ChangeRecord]:
        """Yield the change records after ``previous`` up to this revision.

        With ``previous`` None the whole history of the head is reported.
        """

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "SCMFileSystem":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class GitFileSystem(SCMFileSystem):
    """File system over a local git clone."""

    def __init__(self, repo_root: Path, head: Head, revision: Revision):
        super().__init__(head, revision)
        self.repo_root = repo_root

    def changes_since(self, previous: Revision | None) -> Iterator[ChangeRecord]:
        if self.closed:
            raise GitError(f"File system for {self.head.name} is closed")
        if previous is not None and previous.hash == self.revision.hash:
            return iter(())
        return iter_change_records(
            self.repo_root,
            to_commit=self.revision.hash,
            from_commit=previous.hash if previous is not None else None,
        )

    def __repr__(self) -> str:
        return f"GitFileSystem({self.repo_root}, {self.revision})"


def build_file_system(
    source: SCMSource,
    head: Head,
    revision: Revision | None,
    scm: GitSCM,
    owner: SCMSourceOwner,
) -> SCMFileSystem | None:
    """
    Open a file system for ``head`` at ``revision``.

    The owner's workspace must hold a git clone containing the revision. When
    ``revision`` is None the head's ref in the clone is used.

    Returns:
        The file system, or None if it cannot be built for this source
    """
    if not isinstance(scm, GitSCM):
        logger.debug(f"No file system support for {type(scm).__name__}")
        return None

    workspace = owner.workspace
    if not is_git_repository(workspace):
        logger.warning(f"{owner.name} workspace {workspace} is not a git repository")
        return None

    if revision is None:
        try:
            revision = Revision(head=head, hash=rev_parse(workspace, head.name))
        except GitError:
            logger.warning(f"Cannot resolve {head.name} in {workspace}")
            return None
    elif not commit_exists(workspace, revision.hash):
        logger.warning(f"Revision {revision} of {source.id} is not present in {workspace}")
        return None

    return GitFileSystem(workspace, head, revision)
