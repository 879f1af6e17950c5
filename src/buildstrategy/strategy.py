"""Decide whether a branch or pull request change should trigger a build."""

import logging
from abc import ABC, abstractmethod

from common.constants import DISPLAY_NAME
from common.logger import get_logger
from scm.filesystem import build_file_system
from scm.models import Head, Revision
from scm.sources import SCMSource

from .changes import collect_changed_paths
from .errors import BuildStrategyError, FilesystemUnavailable, OwnerUnavailable, ResolutionError
from .matcher import match_path
from .resolver import resolve_target_baseline

logger = get_logger(__name__)


def parse_included_regions(included_regions: str | None) -> list[str]:
    """
    Split a newline-separated region configuration into patterns.

    Each line is stripped. Blank lines between real patterns are kept as empty
    patterns, which never match a file path. A configuration without any
    non-blank line yields an empty list.

    Example:
        >>> parse_included_regions("src/**\\n  docs/*.md  \\n")
        ['src/**', 'docs/*.md', '']
    """
    if not included_regions:
        return []
    regions = [line.strip() for line in included_regions.split("\n")]
    if not any(regions):
        return []
    return regions


class BranchBuildStrategy(ABC):
    """Base class for strategies deciding whether a head change is built automatically."""

    display_name = ""

    @abstractmethod
    def is_automatic_build(
        self,
        source: SCMSource,
        head: Head,
        current_revision: Revision | None,
        previous_revision: Revision | None,
    ) -> bool:
        """Return True if the change from ``previous_revision`` should be built."""
        pass


class IncludeRegionBranchBuildStrategy(BranchBuildStrategy):
    """Build only when a changed file falls inside one of the included regions.

    Any failure while evaluating results in a build.

    Example:
        >>> strategy = IncludeRegionBranchBuildStrategy("src/service-a/**")
        >>> strategy.is_automatic_build(source, head, current, previous)
        True
    """

    display_name = DISPLAY_NAME

    def __init__(self, included_regions: str, logger: logging.Logger | None = None):
        """
        Args:
            included_regions: Newline-separated Ant-style patterns
            logger: Logger for decision messages (default: module logger)
        """
        self.included_regions = included_regions
        self.logger = logger or logging.getLogger(__name__)

    def is_automatic_build(
        self,
        source: SCMSource,
        head: Head,
        current_revision: Revision | None,
        previous_revision: Revision | None,
    ) -> bool:
        try:
            return self._evaluate(source, head, current_revision, previous_revision)
        except BuildStrategyError as e:
            self.logger.error(f"{e}, triggering build of {head.name}")
            return True
        except Exception:
            # Never cancel a build because evaluation broke
            self.logger.exception(f"Unexpected exception while checking {head.name}")
            return True

    def _evaluate(
        self,
        source: SCMSource,
        head: Head,
        current_revision: Revision | None,
        previous_revision: Revision | None,
    ) -> bool:
        log = self.logger
        log.info(f"Checking if {head.name} needs to be built")

        # The first build of a pull request has no previous revision, which
        # would make the whole repository history count as changed. Diff
        # against the tip of the target branch instead.
        try:
            baseline = resolve_target_baseline(source, head, listener=log)
        except ResolutionError as e:
            log.warning(f"{e}; keeping previous revision {previous_revision}")
        else:
            if baseline is not None:
                log.debug(f"prevRevision before: {previous_revision}")
                previous_revision = baseline
                log.debug(f"prevRevision after: {previous_revision}")

        regions = parse_included_regions(self.included_regions)
        log.info(f"Included regions: {regions}")

        if not regions:
            log.info("No included regions configured, not triggering the build")
            return False

        scm = source.build(head, current_revision)

        owner = source.owner
        if owner is None:
            raise OwnerUnavailable(f"Error verifying owner of source {source.id}")

        file_system = build_file_system(source, head, current_revision, scm, owner)
        if file_system is None:
            raise FilesystemUnavailable(f"Error building SCM file system for {head.name}")

        with file_system:
            changed_paths = collect_changed_paths(file_system, head, previous_revision)

        for path in sorted(changed_paths):
            for region in regions:
                if match_path(region, path):
                    log.info(
                        f"Triggering build, matched included region: {region} with file path: {path}"
                    )
                    return True
                log.debug(f"Didn't match included region: {region} with file path: {path}")

        log.info("Didn't match any included regions, not triggering build")
        return False


def should_build(
    source: SCMSource,
    head: Head,
    current_revision: Revision | None,
    previous_revision: Revision | None,
    included_regions: str,
    logger: logging.Logger | None = None,
) -> bool:
    """
    Decide whether ``head`` at ``current_revision`` should be built.

    Never raises: evaluation errors return True.
    """
    strategy = IncludeRegionBranchBuildStrategy(included_regions, logger=logger)
    return strategy.is_automatic_build(source, head, current_revision, previous_revision)
