"""Core data models shared across releasegate components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, Iterator, Optional, Sequence, Tuple, Union, overload


CommitRef = str
ParentSet = Tuple[CommitRef, ...]
ChangedPathSet = FrozenSet[str]


@dataclass(frozen=True)
class CommitRange:
    """Commits reachable from head but not from base, oldest first."""

    commits: Tuple[CommitRef, ...] = ()

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "CommitRange":
        """Build a range from ordered hashes, dropping blanks and repeats."""
        seen: set[str] = set()
        ordered: list[str] = []
        for line in lines:
            commit = line.strip()
            if not commit or commit in seen:
                continue
            seen.add(commit)
            ordered.append(commit)
        return cls(commits=tuple(ordered))

    def __len__(self) -> int:
        return len(self.commits)

    def __iter__(self) -> Iterator[CommitRef]:
        return iter(self.commits)

    @overload
    def __getitem__(self, index: int) -> CommitRef: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[CommitRef, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[CommitRef, Tuple[CommitRef, ...]]:
        return self.commits[index]


@dataclass(frozen=True)
class Valid:
    """Every positional check passed."""

    commits: Tuple[CommitRef, ...]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """The first failing check, with the fix a release manager should apply.

    ``slot`` is 1-based; slot 0 denotes the whole-range commit count check.
    """

    slot: int
    reason: str
    remedy: str
    commits: Tuple[CommitRef, ...] = ()
    commit: Optional[CommitRef] = None
    command: Optional[str] = None
    changed_files: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return False


VerificationResult = Union[Valid, Invalid]


class ExitSignal(IntEnum):
    """Process exit status surfaced to the invoking environment."""

    SUCCESS = 0
    FAILURE = 1


__all__ = [
    "ChangedPathSet",
    "CommitRange",
    "CommitRef",
    "ExitSignal",
    "Invalid",
    "ParentSet",
    "Valid",
    "VerificationResult",
]
