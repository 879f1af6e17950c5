#!/usr/bin/env python3
"""CLI interface for the include region build strategy."""

import argparse
import sys
from pathlib import Path

from common.env import env
from common.logger import error, setup_logging, skipped, success
from scm.git_utils import GitError, is_git_repository, rev_parse
from scm.models import Head, PullRequestHead, Revision, SourceConnection
from scm.sources import GitHubSCMSource, GitSCMSource, SCMSource, SCMSourceOwner

from .strategy import IncludeRegionBranchBuildStrategy

EXIT_SKIP = 1


def _read_regions(args) -> str:
    if args.regions_file:
        return args.regions_file.read_text(encoding="utf-8")
    if args.regions is not None:
        return "\n".join(args.regions)
    return env.included_regions()


def _build_source(args, owner: SCMSourceOwner) -> SCMSource:
    if args.github_owner and args.github_repo:
        connection = SourceConnection(
            api_uri=args.api_uri or env.github_api_url(),
            repo_owner=args.github_owner,
            repository=args.github_repo,
            credentials_id=args.credentials_id,
        )
        return GitHubSCMSource(id=connection.full_name, connection=connection, owner=owner)
    return GitSCMSource(id=str(args.repo), remote=str(args.repo), owner=owner)


def _build_head(args) -> Head:
    if args.target:
        return PullRequestHead.for_number(args.pr_number, target=Head(args.target))
    return Head(args.head)


def _resolve(repo: Path, head: Head, ref: str | None) -> Revision | None:
    if ref is None:
        return None
    return Revision(head=head, hash=rev_parse(repo, ref))


def cmd_check(args):
    """Decide whether the head should be built.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 to build; with --exit-code, 1 to skip)
    """
    if not is_git_repository(args.repo):
        error(f"{args.repo} is not a git repository")
        return 2

    head = _build_head(args)
    try:
        current = _resolve(args.repo, head, args.current)
        previous = _resolve(args.repo, head, args.previous)
    except GitError as e:
        error(f"Cannot resolve revision: {e}")
        return 2

    owner = SCMSourceOwner(name=args.repo.name, workspace=args.repo)
    source = _build_source(args, owner)
    strategy = IncludeRegionBranchBuildStrategy(_read_regions(args))

    if strategy.is_automatic_build(source, head, current, previous):
        success(f"{head.name}: build")
        return 0

    skipped(f"{head.name}: skip")
    return EXIT_SKIP if args.exit_code else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description=IncludeRegionBranchBuildStrategy.display_name)
    parser.add_argument(
        "--log-level",
        default=env.log_level(),
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Decide whether a branch or pull request should be built"
    )
    check_parser.add_argument(
        "--repo",
        type=Path,
        default=Path("."),
        help="Local clone of the repository (default: current directory)",
    )
    check_parser.add_argument(
        "--head",
        default="HEAD",
        help="Branch name being built (default: HEAD)",
    )
    check_parser.add_argument(
        "--current",
        default="HEAD",
        help="Revision being built (default: HEAD)",
    )
    check_parser.add_argument(
        "--previous",
        default=None,
        help="Revision of the previous build (default: none)",
    )
    check_parser.add_argument(
        "--target",
        default=None,
        help="Target branch; treats the head as a pull request",
    )
    check_parser.add_argument(
        "--pr-number",
        type=int,
        default=0,
        help="Pull request number used to name the head",
    )
    check_parser.add_argument("--github-owner", default=None, help="GitHub repository owner")
    check_parser.add_argument("--github-repo", default=None, help="GitHub repository name")
    check_parser.add_argument(
        "--credentials-id",
        default=None,
        help="Credential identifier; enables target branch lookup on GitHub",
    )
    check_parser.add_argument(
        "--api-uri",
        default=None,
        help="GitHub API URL (default: GITHUB_API_URL)",
    )
    regions_group = check_parser.add_mutually_exclusive_group()
    regions_group.add_argument(
        "--regions",
        nargs="+",
        default=None,
        help="Included region patterns (default: INCLUDED_REGIONS)",
    )
    regions_group.add_argument(
        "--regions-file",
        type=Path,
        default=None,
        help="File with one included region pattern per line",
    )
    check_parser.add_argument(
        "--exit-code",
        action="store_true",
        help=f"Exit with {EXIT_SKIP} when the build should be skipped",
    )
    check_parser.set_defaults(func=cmd_check)

    return parser


def main():
    """Main entry point for the CLI."""
    args = build_parser().parse_args()
    setup_logging(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
