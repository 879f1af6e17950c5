"""Decide whether a branch or pull request needs a build from the files it changed."""

from .changes import collect_changed_paths
from .errors import (
    BuildStrategyError,
    DiffError,
    FilesystemUnavailable,
    OwnerUnavailable,
    ResolutionError,
)
from .matcher import match_path
from .resolver import resolve_head_revision, resolve_target_baseline
from .strategy import (
    BranchBuildStrategy,
    IncludeRegionBranchBuildStrategy,
    parse_included_regions,
    should_build,
)

__all__ = [
    "BranchBuildStrategy",
    "BuildStrategyError",
    "DiffError",
    "FilesystemUnavailable",
    "IncludeRegionBranchBuildStrategy",
    "OwnerUnavailable",
    "ResolutionError",
    "collect_changed_paths",
    "match_path",
    "parse_included_regions",
    "resolve_head_revision",
    "resolve_target_baseline",
    "should_build",
]
