"""Git-backed repository queries."""

from .repository import (
    EmptyRangeError,
    GitCommandError,
    GitError,
    GitRepository,
    NotARepositoryError,
    RefResolutionError,
    RepositoryQuery,
)

__all__ = [
    "EmptyRangeError",
    "GitCommandError",
    "GitError",
    "GitRepository",
    "NotARepositoryError",
    "RefResolutionError",
    "RepositoryQuery",
]
