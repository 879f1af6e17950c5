"""Resolve the baseline revision of a pull request from its target branch."""

import logging

from common.logger import get_logger
from scm.github import GitHubClient
from scm.models import Head, Revision, SourceConnection, TargetedHead
from scm.sources import RevisionResolvingSource, SCMSource

from .errors import ResolutionError

logger = get_logger(__name__)


def resolve_head_revision(
    connection: SourceConnection,
    head: Head,
    listener: logging.Logger | None = None,
    open_client=GitHubClient,
) -> Revision:
    """
    Ask the provider for the latest revision of ``head``.

    Args:
        connection: Repository to query
        head: Branch to look up
        listener: Logger receiving progress messages (default: module logger)
        open_client: Factory returning a context-managed provider client

    Returns:
        Latest known revision of the head

    Raises:
        ResolutionError: If the client cannot be opened, the provider cannot be
            reached or the head is unknown
    """
    listener = listener or logger
    listener.info(f"Retrieving latest revision of {head.name} from {connection.full_name}")
    try:
        with open_client(connection) as client:
            revision = client.get_branch_revision(head)
    except Exception as e:
        raise ResolutionError(
            f"Cannot resolve {head.name} in {connection.full_name}: {e}"
        ) from e
    listener.info(f"{head.name} of {connection.full_name} resolved to {revision.hash}")
    return revision


def resolve_target_baseline(
    source: SCMSource,
    head: Head,
    listener: logging.Logger | None = None,
) -> Revision | None:
    """
    Return the tip of the branch a pull request merges into.

    Only sources that can resolve revisions, heads that have a target and
    connections with a credential identifier qualify; otherwise None.

    Raises:
        ResolutionError: If the target branch tip cannot be retrieved
    """
    listener = listener or logger
    if not isinstance(source, RevisionResolvingSource) or not isinstance(head, TargetedHead):
        return None

    target = head.target_head()
    listener.debug(f"targetHead: {target}")

    if source.credentials_id is None:
        listener.debug(f"No credentials configured for {source.connection.full_name}, keeping baseline")
        return None

    return resolve_head_revision(
        source.connection, target, listener=listener, open_client=source.open_client
    )
