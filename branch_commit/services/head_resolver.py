"""Resolves the latest commit on a branch, the anchor for the commit mutation."""

import logging
from typing import Any, Dict

from ..exceptions import ResolutionError, TransportError
from ..protocols import GraphQLClientProtocol
from .queries import RESOLVE_BRANCH_HEAD

logger = logging.getLogger(__name__)


def qualify_branch(branch: str) -> str:
    """Return the fully qualified ref name, e.g. refs/heads/main."""
    if branch.startswith("refs/"):
        return branch
    return f"refs/heads/{branch}"


def unqualify_branch(branch: str) -> str:
    """Return the short branch name, e.g. main for refs/heads/main."""
    prefix = "refs/heads/"
    if branch.startswith(prefix):
        return branch[len(prefix):]
    return branch


def _is_not_found(error: TransportError) -> bool:
    return any(e.get("type") == "NOT_FOUND" for e in error.errors if isinstance(e, dict))


def extract_head_oid(data: Dict[str, Any], owner: str, repo: str, branch: str) -> str:
    repository = data.get("repository")
    if not repository:
        raise ResolutionError(f"Repository {owner}/{repo} not found")

    ref = repository.get("ref")
    if not ref:
        raise ResolutionError(f"Branch {branch} not found in {owner}/{repo}")

    history = (ref.get("target") or {}).get("history")
    if history is None:
        raise ResolutionError(f"Ref {branch} does not point at a commit")

    nodes = history.get("nodes") or []
    if not nodes:
        raise ResolutionError(f"Branch {branch} has no commit history")

    head = nodes[0]
    if not isinstance(head, dict) or not head.get("oid"):
        raise ResolutionError(
            f"Unexpected history entry for branch {branch}", detail=repr(head)
        )

    return head["oid"]


async def resolve_head_oid(
    client: GraphQLClientProtocol, owner: str, repo: str, branch: str
) -> str:
    """
    Look up the tip commit oid of the named branch.

    The branch is looked up by its qualified name, so a run never falls back
    to the repository's default branch.

    Raises:
        ResolutionError: If the repository, branch, or history is missing.
        TransportError: On any other API failure.
    """
    variables = {"owner": owner, "name": repo, "qualifiedName": qualify_branch(branch)}
    try:
        data = await client.execute(RESOLVE_BRANCH_HEAD, variables)
    except TransportError as e:
        if _is_not_found(e):
            raise ResolutionError(e.message, detail=e.detail) from e
        raise

    oid = extract_head_oid(data, owner, repo, branch)
    logger.debug(f"expectedHeadOid: {oid}")
    return oid
