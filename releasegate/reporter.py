"""Human-readable verification trace and exit signal."""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, Set, TextIO

from .models import CommitRange, CommitRef, ExitSignal, Invalid, VerificationResult
from .rules import SlotRule


class Reporter:
    """Writes the slot-by-slot trace to stdout as the run progresses.

    Lines are flushed immediately so a person watching CI output sees each
    passing slot before a later failure is printed.
    """

    def __init__(
        self,
        rules: Sequence[SlotRule],
        *,
        describe: Optional[Callable[[CommitRef], str]] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.rules = tuple(rules)
        self.describe = describe
        self._stream = stream
        self._base: Optional[str] = None
        self._emitted: Set[int] = set()

    def header(self, base: str, head: str) -> None:
        self._base = base
        self._emit("Verifying release branch structure...")
        self._emit(f"Base: {base}")
        self._emit(f"Head: {head}")
        self._emit("")

    def range_found(self, commit_range: CommitRange) -> None:
        target = self._base or "base"
        self._emit(f"Found {len(commit_range)} commit(s) on top of {target}")
        self._emit("")

    def slot_passed(self, slot: int, rule: SlotRule, commit: CommitRef) -> None:
        if slot in self._emitted:
            return
        self._emitted.add(slot)
        self._emit(f"PASS Commit {slot} ({commit}): {rule.title}")
        self._emit(self._description(commit))
        self._emit("")

    def report(self, result: VerificationResult) -> ExitSignal:
        if isinstance(result, Invalid):
            passed = result.commits[: max(result.slot - 1, 0)]
        else:
            passed = result.commits
        for slot, (rule, commit) in enumerate(zip(self.rules, passed), start=1):
            self.slot_passed(slot, rule, commit)

        if isinstance(result, Invalid):
            self._report_failure(result)
            return ExitSignal.FAILURE
        self._emit("OK: Release branch structure is valid")
        return ExitSignal.SUCCESS

    def error(self, message: str, remedy: str) -> ExitSignal:
        """Report a failure that happened before classification could run."""
        self._emit(f"ERROR: {message}")
        self._emit(f"Remedy: {remedy}")
        return ExitSignal.FAILURE

    # ------------------------------------------------------------------
    # Internals

    def _report_failure(self, result: Invalid) -> None:
        if result.slot == 0:
            self._emit(
                f"ERROR: {result.reason}: expected exactly {len(self.rules)} commits, "
                f"found {len(result.commits)}"
            )
            self._emit(f"Remedy: {result.remedy}")
            self._emit("")
            target = self._base or "the base branch"
            self._emit(f"Release branches must have exactly {len(self.rules)} commits on top of {target}:")
            for slot, rule in enumerate(self.rules, start=1):
                suffix = f" ({rule.command})" if rule.command else ""
                self._emit(f"  {slot}. {rule.title}{suffix}")
            return

        commit = f" ({result.commit})" if result.commit else ""
        self._emit(f"ERROR: Commit {result.slot}{commit}: {result.reason}")
        rule = self.rules[result.slot - 1] if result.slot <= len(self.rules) else None
        expected = getattr(rule, "path", None)
        if expected:
            self._emit(f"Expected only: {expected}")
            self._emit("Files changed:")
            if result.changed_files:
                for path in result.changed_files:
                    self._emit(f"  {path}")
            else:
                self._emit("  (none)")
        self._emit("")
        self._emit(f"Remedy: {result.remedy}")
        if result.command:
            self._emit(f"Run: {result.command}")

    def _description(self, commit: CommitRef) -> str:
        if self.describe is None:
            return commit
        return self.describe(commit) or commit

    def _emit(self, line: str) -> None:
        stream = self._stream or sys.stdout
        print(_printable(line), file=stream, flush=True)


def _printable(line: str) -> str:
    # Undecodable path bytes arrive as lone surrogates; show them as \xNN escapes.
    return line.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


__all__ = ["Reporter"]
