"""End-to-end tests for releasegate.orchestrator."""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from releasegate.config import GateConfig
from releasegate.models import ExitSignal, Invalid, Valid
from releasegate.orchestrator import Verifier
from releasegate.rules import default_rules
from tests._fixtures.fake_repository import FakeRepository, merge, touching
from tests._fixtures.repo_builder import GitRepoBuilder


def _run(repo: GitRepoBuilder, base: str = "develop", head: str = "release") -> tuple[ExitSignal, str]:
    stream = io.StringIO()
    signal = Verifier(stream=stream).run(repo.path(), base, head)
    return signal, stream.getvalue()


def test_scenario_a_valid_branch_exits_zero(seeded_repo: GitRepoBuilder) -> None:
    commits = seeded_repo.release_branch(["merge", "html", "checksums"])

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.SUCCESS
    assert "Found 3 commit(s) on top of develop" in output
    assert f"PASS Commit 1 ({commits[0]}): Merge commit" in output
    assert "Inject commit hash" in output
    assert "Update checksums" in output
    assert output.rstrip().endswith("OK: Release branch structure is valid")


def test_scenario_b_missing_merge_fails_slot_one(seeded_repo: GitRepoBuilder) -> None:
    commits = seeded_repo.release_branch(["other", "html", "checksums"])

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.FAILURE
    assert f"ERROR: Commit 1 ({commits[0]}): first commit is not a merge" in output
    assert "Run: git merge origin/main" in output
    assert "PASS" not in output


def test_scenario_c_swapped_order_fails_slot_two(seeded_repo: GitRepoBuilder) -> None:
    seeded_repo.release_branch(["merge", "checksums", "html"])

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.FAILURE
    assert "PASS Commit 1" in output
    assert "ERROR: Commit 2" in output
    assert "  CHECKSUMS.json" in output
    assert "Commit 3" not in output


def test_combined_commit_fails_slot_two(seeded_repo: GitRepoBuilder) -> None:
    seeded_repo.release_branch(["merge", "both", "checksums"])

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.FAILURE
    assert "second commit touches wrong files" in output
    assert "  frontend/index.html" in output


def test_empty_third_commit_fails(seeded_repo: GitRepoBuilder) -> None:
    seeded_repo.release_branch(["merge", "html", "empty"])

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.FAILURE
    assert "third commit touches wrong files" in output
    assert "  (none)" in output


def test_extra_commit_is_a_count_mismatch(seeded_repo: GitRepoBuilder) -> None:
    seeded_repo.release_branch(["merge", "html", "checksums", "checksums"])

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.FAILURE
    assert "ERROR: wrong commit count: expected exactly 3 commits, found 4" in output


def test_no_commits_is_a_count_mismatch(seeded_repo: GitRepoBuilder) -> None:
    signal, output = _run(seeded_repo, base="develop", head="develop")

    assert signal is ExitSignal.FAILURE
    assert "Found 0 commit(s) on top of develop" in output
    assert "ERROR: wrong commit count: expected exactly 3 commits, found 0" in output


def test_unknown_ref_fails_with_remedy(seeded_repo: GitRepoBuilder) -> None:
    signal, output = _run(seeded_repo, base="origin/develop", head="HEAD")

    assert signal is ExitSignal.FAILURE
    assert "ERROR: Cannot resolve 'origin/develop' to a commit" in output
    assert "Remedy: supply valid base and head references." in output


def test_non_repository_fails_cleanly(tmp_path: Path) -> None:
    stream = io.StringIO()

    signal = Verifier(stream=stream).run(tmp_path, "develop", "HEAD")

    assert signal is ExitSignal.FAILURE
    assert "is not a Git repository" in stream.getvalue()


def test_config_supplies_default_refs(tmp_path: Path) -> None:
    repository = FakeRepository(
        [merge("c1"), touching("c2", "frontend/index.html"), touching("c3", "CHECKSUMS.json")],
        refs=("develop", "release"),
    )
    config = GateConfig(root=tmp_path, base="develop", head="release")
    stream = io.StringIO()

    signal = Verifier(repository_factory=lambda _path: repository, stream=stream).run(
        tmp_path, config=config
    )

    assert signal is ExitSignal.SUCCESS
    assert repository.calls[0] == ("resolve_range", "develop..release")
    assert "c1 Merge main" in stream.getvalue()


def test_verify_returns_result_without_reporting() -> None:
    repository = FakeRepository([merge("c1"), touching("c2", "frontend/index.html"), touching("c3")])

    result = Verifier().verify(repository, "origin/develop", "HEAD", rules=default_rules())

    assert isinstance(result, Invalid)
    assert result.slot == 3


@pytest.mark.parametrize(
    "commits, expected_slot",
    [
        ([merge("c1"), touching("c2", "frontend/index.html"), touching("c3", "CHECKSUMS.json")], None),
        ([touching("c1", "x"), touching("c2", "frontend/index.html"), touching("c3", "CHECKSUMS.json")], 1),
        ([merge("c1"), touching("c2", "CHECKSUMS.json"), touching("c3", "frontend/index.html")], 2),
    ],
)
def test_verify_scenarios_with_fake_repository(commits, expected_slot) -> None:  # type: ignore[no-untyped-def]
    repository = FakeRepository(commits)

    result = Verifier().verify(repository, "origin/develop", "HEAD", rules=default_rules())

    if expected_slot is None:
        assert isinstance(result, Valid)
    else:
        assert isinstance(result, Invalid)
        assert result.slot == expected_slot


def test_non_utf8_file_name_is_reported_as_slot_three(seeded_repo: GitRepoBuilder) -> None:
    name = os.fsdecode(b"caf\xe9.txt")
    seeded_repo.release_branch(["merge", "html"])
    try:
        (seeded_repo.path() / name).write_text("latin-1 name\n", encoding="utf-8")
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem rejects non-UTF-8 file names")
    seeded_repo.commit("Add latin-1 file name")

    signal, output = _run(seeded_repo)

    assert signal is ExitSignal.FAILURE
    assert "third commit touches wrong files" in output
    assert "  caf\\xe9.txt" in output
    assert "Run: make generate-checksums" in output


def test_repo_path_may_be_a_subdirectory(seeded_repo: GitRepoBuilder) -> None:
    seeded_repo.release_branch()
    stream = io.StringIO()

    signal = Verifier(stream=stream).run(seeded_repo.path() / "frontend", "develop", "release")

    assert signal is ExitSignal.SUCCESS
    assert "OK: Release branch structure is valid" in stream.getvalue()
