"""Base classes for positional slot rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..git.repository import RepositoryQuery
from ..models import CommitRef


class StructuralError(RuntimeError):
    """Raised when a commit, or the range as a whole, breaks the release shape."""

    def __init__(
        self,
        slot: int,
        reason: str,
        remedy: str,
        *,
        commit: Optional[CommitRef] = None,
        command: Optional[str] = None,
        changed_files: Sequence[str] = (),
    ) -> None:
        super().__init__(reason)
        self.slot = slot
        self.reason = reason
        self.remedy = remedy
        self.commit = commit
        self.command = command
        self.changed_files = tuple(sorted(changed_files))


class CountMismatchError(StructuralError):
    """Raised before any slot rule runs when the range has the wrong length."""

    def __init__(self, expected: int, found: int, remedy: str) -> None:
        super().__init__(0, "wrong commit count", remedy)
        self.expected = expected
        self.found = found


class SlotRule(ABC):
    """Contract for the predicate guarding one position in the commit range."""

    #: Short label printed next to a passing slot.
    title: str
    reason: str
    remedy: str
    command: Optional[str] = None

    @abstractmethod
    def evaluate(self, repository: RepositoryQuery, commit: CommitRef, slot: int) -> None:
        """Return silently when ``commit`` satisfies the rule, raise StructuralError otherwise."""

    def violation(
        self, slot: int, commit: CommitRef, changed_files: Sequence[str] = ()
    ) -> StructuralError:
        return StructuralError(
            slot,
            self.reason,
            self.remedy,
            commit=commit,
            command=self.command,
            changed_files=changed_files,
        )
