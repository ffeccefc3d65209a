"""Positional rules describing the shape of a release branch."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Tuple

from ..config import GateConfig
from .base import CountMismatchError, SlotRule, StructuralError
from .merge import MergeCommitRule
from .paths import ExactPathRule

COUNT_REMEDY = (
    "restructure the branch to exactly three commits: merge, index.html update, checksum update."
)


def default_rules(config: GateConfig | None = None) -> Tuple[SlotRule, ...]:
    """Return the merge, hash-injection and checksum rules in slot order."""
    if config is None:
        config = GateConfig(root=Path("."))
    html_name = PurePosixPath(config.paths.html).name
    checksums_name = PurePosixPath(config.paths.checksums).name
    return (
        MergeCommitRule(command=config.merge_command),
        ExactPathRule(
            config.paths.html,
            title=f"{html_name} update (commit hash injection)",
            reason="second commit touches wrong files",
            remedy=(
                "regenerate the commit-hash-injection commit so it touches only the "
                "designated HTML file."
            ),
            command=config.commands.inject,
        ),
        ExactPathRule(
            config.paths.checksums,
            title=f"{checksums_name} update",
            reason="third commit touches wrong files",
            remedy="regenerate the checksum commit so it touches only the checksum manifest.",
            command=config.commands.checksums,
        ),
    )


__all__ = [
    "COUNT_REMEDY",
    "CountMismatchError",
    "ExactPathRule",
    "MergeCommitRule",
    "SlotRule",
    "StructuralError",
    "default_rules",
]
