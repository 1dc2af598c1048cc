"""Interfaces for the collaborators the pipeline depends on."""

from .collaborators import (
    ChangeListerProtocol,
    GraphQLClientProtocol,
    ListingResult,
    WorkspaceProtocol,
)

__all__ = [
    "ChangeListerProtocol",
    "GraphQLClientProtocol",
    "ListingResult",
    "WorkspaceProtocol",
]
