"""Source definitions: where a job's code comes from and how to check it out."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from .github import GitHubClient
from .models import Head, Revision, SourceConnection


@dataclass(frozen=True)
class SCMSourceOwner:
    """The job or project that owns a source.

    ``workspace`` is the local clone of the source repository.
    """

    name: str
    workspace: Path


@dataclass(frozen=True)
class GitSCM:
    """Checkout description for one head at one revision."""

    remote: str
    head: Head
    revision: Revision | None = None


class SCMSource(ABC):
    """Base class for all sources.

    A source knows its owner and can describe a checkout of any of its heads.
    """

    def __init__(self, id: str, owner: SCMSourceOwner | None = None):
        self.id = id
        self._owner = owner

    @property
    def owner(self) -> SCMSourceOwner | None:
        return self._owner

    @abstractmethod
    def build(self, head: Head, revision: Revision | None = None) -> GitSCM:
        """Describe the checkout of ``head`` at ``revision``."""


class RevisionResolvingSource(ABC):
    """Capability of sources that can ask their provider for a head's latest revision."""

    @property
    @abstractmethod
    def connection(self) -> SourceConnection:
        pass

    @property
    def credentials_id(self) -> str | None:
        return self.connection.credentials_id

    @abstractmethod
    def open_client(self, connection: SourceConnection):
        """Return a context-managed client exposing ``get_branch_revision(head)``."""


class GitSCMSource(SCMSource):
    """A plain git remote."""

    def __init__(self, id: str, remote: str, owner: SCMSourceOwner | None = None):
        super().__init__(id, owner)
        self.remote = remote

    def build(self, head: Head, revision: Revision | None = None) -> GitSCM:
        return GitSCM(remote=self.remote, head=head, revision=revision)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, remote={self.remote!r})"


class GitHubSCMSource(GitSCMSource, RevisionResolvingSource):
    """A repository hosted on GitHub; pull requests are discovered as heads."""

    def __init__(
        self,
        id: str,
        connection: SourceConnection,
        owner: SCMSourceOwner | None = None,
        remote: str | None = None,
    ):
        remote = remote or f"https://github.com/{connection.full_name}.git"
        super().__init__(id, remote, owner)
        self._connection = connection

    @property
    def connection(self) -> SourceConnection:
        return self._connection

    def open_client(self, connection: SourceConnection) -> GitHubClient:
        return GitHubClient(connection)
