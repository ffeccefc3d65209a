"""Positional classification of a release branch's commit range."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .git.repository import RepositoryQuery
from .logging import get_logger
from .models import CommitRange, CommitRef, Invalid, Valid, VerificationResult
from .rules import COUNT_REMEDY, CountMismatchError, SlotRule, StructuralError, default_rules


class ClassificationListener(Protocol):
    """Receives slot outcomes as soon as they are decided."""

    def slot_passed(self, slot: int, rule: SlotRule, commit: CommitRef) -> None:
        """Called once per passing slot, in slot order."""


class ShapeClassifier:
    """Applies one rule per position and stops at the first violation."""

    def __init__(
        self,
        repository: RepositoryQuery,
        rules: Optional[Sequence[SlotRule]] = None,
        listener: Optional[ClassificationListener] = None,
    ) -> None:
        self.repository = repository
        self.rules = tuple(rules) if rules is not None else default_rules()
        self.listener = listener
        self.logger = get_logger("classifier")

    @property
    def expected_count(self) -> int:
        return len(self.rules)

    def classify(self, commit_range: CommitRange) -> VerificationResult:
        try:
            self._check_count(commit_range)
            for slot, (rule, commit) in enumerate(zip(self.rules, commit_range), start=1):
                rule.evaluate(self.repository, commit, slot)
                self.logger.debug("Slot %d (%s) passed for %s", slot, rule.title, commit)
                if self.listener is not None:
                    self.listener.slot_passed(slot, rule, commit)
        except StructuralError as exc:
            self.logger.info("Slot %d failed: %s", exc.slot, exc.reason)
            return Invalid(
                slot=exc.slot,
                reason=exc.reason,
                remedy=exc.remedy,
                commits=commit_range.commits,
                commit=exc.commit,
                command=exc.command,
                changed_files=exc.changed_files,
            )
        return Valid(commits=commit_range.commits)

    def _check_count(self, commit_range: CommitRange) -> None:
        if len(commit_range) != self.expected_count:
            raise CountMismatchError(self.expected_count, len(commit_range), COUNT_REMEDY)


__all__ = ["ClassificationListener", "ShapeClassifier"]
