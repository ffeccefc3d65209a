"""Pipeline orchestration: resolve the range, classify it, report the outcome."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from .classifier import ShapeClassifier
from .config import GateConfig, load_config
from .git.repository import (
    EmptyRangeError,
    GitError,
    GitRepository,
    RefResolutionError,
    RepositoryQuery,
)
from .logging import get_logger
from .models import CommitRange, ExitSignal, VerificationResult
from .reporter import Reporter
from .rules import SlotRule, default_rules


class Verifier:
    """Runs the release branch gate against a single repository."""

    def __init__(
        self,
        repository_factory: Callable[[Path], RepositoryQuery] | None = None,
        rules: Optional[Sequence[SlotRule]] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._repository_factory = repository_factory or GitRepository
        self._rules = tuple(rules) if rules is not None else None
        self._stream = stream
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path,
        base: Optional[str] = None,
        head: Optional[str] = None,
        *,
        config: Optional[GateConfig] = None,
    ) -> ExitSignal:
        """Verify ``base..head`` in the repository at ``path`` and return the exit signal."""
        repo_path = Path(path).expanduser().resolve()
        config = config or load_config(repo_path)
        base = base or config.base
        head = head or config.head
        rules = self._rules or default_rules(config)
        self.logger.info("Verifying %s..%s in %s", base, head, repo_path)

        reporter = Reporter(rules, stream=self._stream)
        reporter.header(base, head)

        try:
            repository = self._repository_factory(repo_path)
            reporter.describe = repository.describe
            result = self.verify(repository, base, head, rules=rules, reporter=reporter)
        except RefResolutionError as exc:
            self.logger.debug("Reference resolution failed", exc_info=True)
            return reporter.error(str(exc), "supply valid base and head references.")
        except GitError as exc:
            self.logger.debug("Git query failed", exc_info=True)
            return reporter.error(str(exc), "check that the repository history is available.")

        return reporter.report(result)

    def verify(
        self,
        repository: RepositoryQuery,
        base: str,
        head: str,
        *,
        rules: Sequence[SlotRule],
        reporter: Optional[Reporter] = None,
    ) -> VerificationResult:
        """Resolve and classify ``base..head`` without producing an exit signal."""
        try:
            commit_range = repository.resolve_range(base, head)
        except EmptyRangeError:
            self.logger.info("No commits between %s and %s", base, head)
            commit_range = CommitRange()
        if reporter is not None:
            reporter.range_found(commit_range)

        classifier = ShapeClassifier(repository, rules, listener=reporter)
        return classifier.classify(commit_range)


__all__ = ["Verifier"]
