"""Commit working-tree changes to a GitHub branch through the GraphQL API."""

__version__ = "0.1.0"
