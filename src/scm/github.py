"""GitHub REST API client used to look up branch tips."""

from typing import Any

import requests

from common.constants import USER_AGENT
from common.env import env
from common.logger import get_logger

from .models import Head, Revision, SourceConnection

logger = get_logger(__name__)


class GitHubError(Exception):
    """GitHub API request failed."""


class GitHubNotFoundError(GitHubError):
    """Repository or branch does not exist (or is not visible to the token)."""


class GitHubClient:
    """Minimal client for the GitHub REST API.

    Only the branch endpoint is needed:
    GET /repos/{owner}/{repo}/branches/{branch}

    API Documentation: https://docs.github.com/en/rest/branches/branches
    """

    def __init__(
        self,
        connection: SourceConnection,
        token: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the client.

        Args:
            connection: Repository coordinates and API endpoint
            token: Bearer token; looked up from the environment when None
            timeout: Request timeout in seconds; None waits indefinitely
        """
        self.connection = connection
        self.base_url = (connection.api_uri or env.github_api_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else env.github_timeout()
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": USER_AGENT,
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        token = token or env.github_token(connection.credentials_id)
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise GitHubError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise GitHubNotFoundError(f"Not found: {url}")
        if response.status_code in (401, 403):
            raise GitHubError(f"Access denied ({response.status_code}) for {url}")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise GitHubError(f"GitHub API error for {url}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise GitHubError(f"Invalid JSON from {url}") from e

    def get_branch_revision(self, head: Head) -> Revision:
        """Return the latest revision of a branch.

        Args:
            head: Branch to look up

        Returns:
            Revision pointing at the branch tip

        Raises:
            GitHubNotFoundError: If the branch does not exist
            GitHubError: If the request fails or the response is malformed
        """
        conn = self.connection
        branch = requests.utils.quote(head.name, safe="/")
        data = self._get(f"/repos/{conn.repo_owner}/{conn.repository}/branches/{branch}")

        commit = data.get("commit") if isinstance(data, dict) else None
        sha = commit.get("sha") if isinstance(commit, dict) else None
        if not sha:
            raise GitHubError(f"Branch {head.name} of {conn.full_name} has no commit sha")

        logger.debug(f"{conn.full_name} {head.name} is at {sha}")
        return Revision(head=head, hash=sha)
