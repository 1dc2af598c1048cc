"""Schemas for the application."""

from .commit import (
    ChangedPath,
    ChangeSet,
    CommitOutcome,
    CommitRequest,
    CommitResult,
    FileAddition,
    FileDeletion,
    FileStatus,
    RunState,
)

__all__ = [
    "ChangedPath",
    "ChangeSet",
    "CommitOutcome",
    "CommitRequest",
    "CommitResult",
    "FileAddition",
    "FileDeletion",
    "FileStatus",
    "RunState",
]
