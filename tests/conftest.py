"""Shared fixtures: temporary git repositories and in-memory SCM fakes."""

import subprocess
from pathlib import Path

import pytest

from scm.filesystem import SCMFileSystem
from scm.models import ChangeRecord, Head, PullRequestHead, Revision, SourceConnection
from scm.sources import GitSCM, RevisionResolvingSource, SCMSource, SCMSourceOwner


class FakeFileSystem(SCMFileSystem):
    """File system returning canned change records."""

    def __init__(self, head, revision, paths_by_commit=(), error=None):
        super().__init__(head, revision)
        self.records = [
            ChangeRecord(commit=f"c{i}", paths=frozenset(paths))
            for i, paths in enumerate(paths_by_commit)
        ]
        self.error = error
        self.calls = []

    def changes_since(self, previous):
        self.calls.append(previous)
        if self.error is not None:
            raise self.error
        return iter(self.records)


class FakeSource(SCMSource):
    def build(self, head, revision=None):
        return GitSCM(remote="fake://repo", head=head, revision=revision)


class FakeClient:
    """Provider client returning canned branch tips."""

    def __init__(self, revisions=None, error=None):
        self.revisions = revisions or {}
        self.error = error
        self.requested = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def get_branch_revision(self, head):
        self.requested.append(head)
        if self.error is not None:
            raise self.error
        return Revision(head=head, hash=self.revisions[head.name])


class FakeGitHubSource(FakeSource, RevisionResolvingSource):
    def __init__(self, id, connection, client, owner=None):
        super().__init__(id, owner)
        self._connection = connection
        self.client = client
        self.opened = []

    @property
    def connection(self):
        return self._connection

    def open_client(self, connection):
        self.opened.append(connection)
        return self.client


@pytest.fixture
def main_head():
    return Head("main")


@pytest.fixture
def branch_head():
    return Head("feature/login")


@pytest.fixture
def pr_head(main_head):
    return PullRequestHead.for_number(42, target=main_head)


@pytest.fixture
def owner(tmp_path):
    return SCMSourceOwner(name="service-a", workspace=tmp_path)


@pytest.fixture
def connection():
    return SourceConnection(
        api_uri="https://api.github.test",
        repo_owner="acme",
        repository="monorepo",
        credentials_id="github-app",
    )


@pytest.fixture
def make_source(owner):
    """Factory for a plain source, owned by default."""

    def _make(with_owner=True):
        return FakeSource("fake", owner if with_owner else None)

    return _make


@pytest.fixture
def make_github_source(owner, connection):
    """Factory for a revision-resolving source backed by a FakeClient."""

    def _make(revisions=None, error=None, credentials_id="github-app"):
        conn = SourceConnection(
            api_uri=connection.api_uri,
            repo_owner=connection.repo_owner,
            repository=connection.repository,
            credentials_id=credentials_id,
        )
        return FakeGitHubSource("gh", conn, FakeClient(revisions, error), owner)

    return _make


@pytest.fixture
def install_file_system(monkeypatch):
    """Replace the file system builder used by the strategy.

    Returns a function taking change paths per commit (or ``error``, or
    ``unavailable=True``) and returning a dict that records the built
    file systems under ``"built"``.
    """

    def _install(paths_by_commit=(), error=None, unavailable=False):
        state = {"built": []}

        def _build(source, head, revision, scm, owner):
            if unavailable:
                return None
            fs = FakeFileSystem(head, revision, paths_by_commit, error)
            state["built"].append(fs)
            return fs

        monkeypatch.setattr("buildstrategy.strategy.build_file_system", _build)
        return state

    return _install


@pytest.fixture
def temp_git_repo(tmp_path):
    """
    Create a temporary git repository with proper git config.
    Returns the repo path.
    """
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()

    subprocess.run(
        ["git", "init", "--initial-branch", "main"],
        cwd=repo_path,
        check=True,
        capture_output=True,
    )
    for key, value in (("user.name", "Test User"), ("user.email", "test@example.com")):
        subprocess.run(
            ["git", "config", key, value],
            cwd=repo_path,
            check=True,
            capture_output=True,
        )

    return repo_path


@pytest.fixture
def git_commit():
    """Write files, stage everything and commit; returns the new commit hash."""

    def _commit(repo_path: Path, files: dict[str, str] | None = None, message="commit") -> str:
        for rel_path, content in (files or {}).items():
            target = repo_path / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        subprocess.run(["git", "add", "-A"], cwd=repo_path, check=True, capture_output=True)
        subprocess.run(
            ["git", "commit", "--allow-empty", "-m", message],
            cwd=repo_path,
            check=True,
            capture_output=True,
        )
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=repo_path,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    return _commit
