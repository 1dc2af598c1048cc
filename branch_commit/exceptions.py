"""Errors raised by the commit pipeline.

Every stage raises a subclass of PipelineError; the entry point turns it into
a single failure message and a non-zero exit status.
"""

from typing import Any, Dict, List, Optional


class PipelineError(Exception):
    """Base class for all run failures."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigError(PipelineError):
    """Required configuration (the token, the repository) is missing."""


class ListingError(PipelineError):
    """The working-tree status query reported an error."""


class ReadError(PipelineError):
    """A changed file could not be read from disk."""

    def __init__(self, path: str, detail: Optional[str] = None):
        super().__init__(f"Failed to read changed file: {path}", detail=detail)
        self.path = path


class ResolutionError(PipelineError):
    """The branch head could not be resolved."""


class EmptyChangeSetError(PipelineError):
    """A commit was requested with neither additions nor deletions."""


class TransportError(PipelineError):
    """Any other failure talking to the GitHub API."""

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, detail=detail)
        self.errors = errors or []


class ConflictError(PipelineError):
    """The branch moved past the expected head before the commit landed."""

    def __init__(self, expected_head_oid: str, detail: Optional[str] = None):
        super().__init__(
            f"Branch head moved past {expected_head_oid}; commit rejected",
            detail=detail,
        )
        self.expected_head_oid = expected_head_oid
