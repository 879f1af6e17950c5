"""Tests for the command-line interface."""

import pytest

from buildstrategy.cli import EXIT_SKIP, build_parser


@pytest.fixture
def repo_with_history(temp_git_repo, git_commit):
    base = git_commit(temp_git_repo, {"src/service-a/main.go": "a", "src/service-b/main.go": "b"})
    tip = git_commit(temp_git_repo, {"src/service-b/main.go": "b2"})
    return temp_git_repo, base, tip


def run(*argv):
    args = build_parser().parse_args(list(argv))
    return args.func(args)


def test_build_when_region_changed(repo_with_history):
    repo, base, _ = repo_with_history

    code = run("check", "--repo", str(repo), "--head", "main", "--previous", base, "--regions", "src/service-b/**", "--exit-code")

    assert code == 0


def test_skip_with_exit_code(repo_with_history):
    repo, base, _ = repo_with_history

    code = run("check", "--repo", str(repo), "--head", "main", "--previous", base, "--regions", "src/service-a/**", "--exit-code")

    assert code == EXIT_SKIP


def test_skip_without_exit_code(repo_with_history):
    repo, base, _ = repo_with_history

    assert run("check", "--repo", str(repo), "--previous", base, "--regions", "src/service-a/**") == 0


def test_regions_file(repo_with_history, tmp_path):
    repo, base, _ = repo_with_history
    regions = tmp_path / "regions.txt"
    regions.write_text("docs/**\n  src/service-b/*.go  \n")

    code = run("check", "--repo", str(repo), "--previous", base, "--regions-file", str(regions), "--exit-code")

    assert code == 0


def test_regions_from_environment(repo_with_history, monkeypatch):
    repo, base, _ = repo_with_history
    monkeypatch.setenv("INCLUDED_REGIONS", "src/service-a/**")

    assert run("check", "--repo", str(repo), "--previous", base, "--exit-code") == EXIT_SKIP


def test_not_a_repository(tmp_path):
    assert run("check", "--repo", str(tmp_path), "--regions", "src/**") == 2


def test_unknown_previous_revision(repo_with_history):
    repo, _, _ = repo_with_history

    assert run("check", "--repo", str(repo), "--previous", "no-such-ref", "--regions", "src/**") == 2
