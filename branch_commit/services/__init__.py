"""Services for the application."""

from .change_classifier import classify_changes, collect_changed_paths, parse_status_output
from .commit_builder import build_commit_request
from .commit_pipeline import CommitPipeline, run_commit
from .commit_submitter import submit_commit
from .git_manager import GitManager
from .github_client import GitHubGraphQLClient
from .head_resolver import qualify_branch, resolve_head_oid, unqualify_branch
from .workspace import WorkspaceFiles

__all__ = [
    "CommitPipeline",
    "GitHubGraphQLClient",
    "GitManager",
    "WorkspaceFiles",
    "build_commit_request",
    "classify_changes",
    "collect_changed_paths",
    "parse_status_output",
    "qualify_branch",
    "resolve_head_oid",
    "run_commit",
    "submit_commit",
    "unqualify_branch",
]
