"""Collaborator protocol interfaces."""

from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Protocol, runtime_checkable


class ListingResult(NamedTuple):
    """Raw output of the working-tree status query."""

    stdout: str
    stderr: str
    returncode: int = 0


@runtime_checkable
class ChangeListerProtocol(Protocol):
    """Protocol for listing working-tree changes."""

    @property
    def workspace(self) -> Path:
        """Working tree root."""
        ...

    def list_changed_paths(self) -> ListingResult:
        """List modified tracked files plus untracked, non-ignored files."""
        ...


@runtime_checkable
class WorkspaceProtocol(Protocol):
    """Protocol for reading files out of the working tree."""

    def exists(self, path: str) -> bool:
        """Return True if the path exists as a file on disk."""
        ...

    def read_base64(self, path: str) -> str:
        """Return the full file contents encoded as base64 text."""
        ...


@runtime_checkable
class GraphQLClientProtocol(Protocol):
    """Protocol for executing parameterized GraphQL documents."""

    async def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Run a query or mutation and return its `data` object."""
        ...
