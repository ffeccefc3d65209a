"""Slot rule requiring a merge commit."""

from __future__ import annotations

from typing import Optional

from ..git.repository import RepositoryQuery
from ..models import CommitRef
from .base import SlotRule


class MergeCommitRule(SlotRule):
    """Passes for any commit with two or more parents.

    Only the parent count is checked; which branches were merged is not.
    """

    title = "Merge commit"
    reason = "first commit is not a merge"
    remedy = "merge the base-of-truth branch into the release branch as the first commit."

    def __init__(self, command: Optional[str] = "git merge origin/main") -> None:
        self.command = command

    def evaluate(self, repository: RepositoryQuery, commit: CommitRef, slot: int) -> None:
        if len(repository.parents(commit)) < 2:
            raise self.violation(slot, commit)
