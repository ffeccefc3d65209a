"""Read-only repository queries backed by the git binary."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Protocol, Sequence

from ..logging import get_logger
from ..models import ChangedPathSet, CommitRange, CommitRef, ParentSet


class GitError(RuntimeError):
    """Base class for failures while querying repository history."""


class NotARepositoryError(GitError):
    """Raised when the target directory is not a Git checkout."""


class GitCommandError(GitError):
    """Raised when a git invocation exits non-zero or cannot be started."""

    def __init__(self, args: Sequence[str], returncode: int | None, stderr: str = "") -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"`{' '.join(self.command)}` failed with exit code {returncode}{detail}")


class RefResolutionError(GitError):
    """Raised when a base or head reference does not name a commit."""

    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"Cannot resolve '{ref}' to a commit")


class EmptyRangeError(GitError):
    """Raised when head carries no commits that base lacks."""

    def __init__(self, base: str, head: str) -> None:
        self.base = base
        self.head = head
        super().__init__(f"No commits found in {base}..{head}")


class RepositoryQuery(Protocol):
    """Narrow history surface the verification engine depends on."""

    def resolve_range(self, base: str, head: str) -> CommitRange:
        """Return commits reachable from head and not from base, oldest first."""

    def parents(self, commit: CommitRef) -> ParentSet:
        """Return the immediate parents of ``commit``."""

    def changed_paths(self, commit: CommitRef) -> ChangedPathSet:
        """Return paths changed by ``commit`` relative to its first parent."""

    def describe(self, commit: CommitRef) -> str:
        """Return a one-line ``<short-hash> <subject>`` description."""


class GitRepository:
    """Implements :class:`RepositoryQuery` by shelling out to git."""

    def __init__(self, repo_path: str | Path, runner: Callable[..., str] | None = None) -> None:
        self.root = Path(repo_path)
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")
        if not _inside_checkout(self.root):
            raise NotARepositoryError(f"{self.root} is not a Git repository")

    def resolve_ref(self, ref: str) -> CommitRef:
        try:
            output = self._run(["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        except GitCommandError as exc:
            raise RefResolutionError(ref) from exc
        commit = output.strip()
        if not commit:
            raise RefResolutionError(ref)
        self.logger.debug("Resolved %s to %s", ref, commit)
        return commit

    def resolve_range(self, base: str, head: str) -> CommitRange:
        base_commit = self.resolve_ref(base)
        head_commit = self.resolve_ref(head)
        output = self._run(
            ["git", "rev-list", "--reverse", "--topo-order", f"{base_commit}..{head_commit}"]
        )
        commit_range = CommitRange.from_lines(output.splitlines())
        self.logger.debug("Range %s..%s holds %d commit(s)", base, head, len(commit_range))
        if not commit_range:
            raise EmptyRangeError(base, head)
        return commit_range

    def parents(self, commit: CommitRef) -> ParentSet:
        # First word is the commit itself, the rest are its parents in order.
        output = self._run(["git", "rev-list", "--parents", "-n", "1", commit])
        words = output.split()
        return tuple(words[1:])

    def changed_paths(self, commit: CommitRef) -> ChangedPathSet:
        parents = self.parents(commit)
        if parents:
            args = ["git", "diff", "--name-only", "--no-renames", "-z", parents[0], commit]
        else:
            args = [
                "git",
                "diff-tree",
                "--root",
                "--no-commit-id",
                "--name-only",
                "--no-renames",
                "-r",
                "-z",
                commit,
            ]
        output = self._run(args)
        return frozenset(path for path in output.split("\0") if path)

    def describe(self, commit: CommitRef) -> str:
        return self._run(["git", "log", "-1", "--format=%h %s", commit]).strip()

    # ------------------------------------------------------------------
    # Internals

    def _run(self, args: Iterable[str]) -> str:
        command = list(args)
        self.logger.debug("Running %s", " ".join(command))
        return self._runner(command, cwd=self.root, capture_output=True)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        import subprocess

        command = list(args)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                check=True,
                text=True,
                errors="surrogateescape",
                capture_output=capture_output,
            )
        except subprocess.CalledProcessError as exc:
            raise GitCommandError(command, exc.returncode, exc.stderr or "") from exc
        except FileNotFoundError as exc:
            raise GitCommandError(command, None, str(exc)) from exc
        return completed.stdout if capture_output else ""


def _inside_checkout(path: Path) -> bool:
    candidate = path.absolute()
    return any((directory / ".git").exists() for directory in (candidate, *candidate.parents))


__all__ = [
    "EmptyRangeError",
    "GitCommandError",
    "GitError",
    "GitRepository",
    "NotARepositoryError",
    "RefResolutionError",
    "RepositoryQuery",
]
