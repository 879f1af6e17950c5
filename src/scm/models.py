"""Value objects shared by source-control backends."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Head:
    """A named line of development (a branch)."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TargetedHead(Head):
    """A head that merges into another head."""

    target: Head

    def target_head(self) -> Head:
        return self.target


@dataclass(frozen=True)
class PullRequestHead(TargetedHead):
    """A pull request, named like ``PR-12``, targeting a branch."""

    number: int = 0

    @classmethod
    def for_number(cls, number: int, target: Head) -> "PullRequestHead":
        return cls(name=f"PR-{number}", target=target, number=number)


@dataclass(frozen=True)
class Revision:
    """An immutable point in a head's history."""

    head: Head
    hash: str

    def __str__(self) -> str:
        return f"{self.head.name}@{self.hash[:12]}"


@dataclass(frozen=True)
class ChangeRecord:
    """Files touched by one commit.

    Renames and copies list both the old and the new path.
    """

    commit: str
    paths: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class SourceConnection:
    """Connection settings for a hosted repository."""

    api_uri: str
    repo_owner: str
    repository: str
    credentials_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.repo_owner}/{self.repository}"
