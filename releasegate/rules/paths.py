"""Slot rule requiring a commit to touch exactly one designated file."""

from __future__ import annotations

from typing import Optional

from ..git.repository import RepositoryQuery
from ..models import CommitRef
from .base import SlotRule


class ExactPathRule(SlotRule):
    """Passes when the first-parent diff is exactly ``{path}``.

    A commit that touches the file plus anything else fails, and so does an
    empty commit.
    """

    def __init__(
        self,
        path: str,
        *,
        title: str,
        reason: str,
        remedy: str,
        command: Optional[str] = None,
    ) -> None:
        self.path = path
        self.title = title
        self.reason = reason
        self.remedy = remedy
        self.command = command

    def evaluate(self, repository: RepositoryQuery, commit: CommitRef, slot: int) -> None:
        changed = repository.changed_paths(commit)
        if changed != {self.path}:
            raise self.violation(slot, commit, changed_files=changed)
