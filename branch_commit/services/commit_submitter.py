"""Submits a commit request as a single createCommitOnBranch mutation."""

import logging
from typing import Any, Dict

from ..exceptions import ConflictError, TransportError
from ..protocols import GraphQLClientProtocol
from ..schemas import CommitRequest, CommitResult
from .queries import CREATE_COMMIT_ON_BRANCH

logger = logging.getLogger(__name__)

STALE_DATA = "STALE_DATA"
# GitHub's wording when expectedHeadOid no longer matches the branch tip
STALE_HEAD_MARKER = "expected branch to point to"


def is_conflict(error: TransportError) -> bool:
    for item in error.errors:
        if not isinstance(item, dict):
            continue
        if item.get("type") == STALE_DATA:
            return True
        message = str(item.get("message", "")).lower()
        if STALE_HEAD_MARKER in message:
            return True
    return False


def extract_commit(data: Dict[str, Any]) -> CommitResult:
    commit = (data.get("createCommitOnBranch") or {}).get("commit") or {}
    if not commit.get("oid"):
        raise TransportError(
            "createCommitOnBranch returned no commit", detail=repr(data)
        )
    return CommitResult(oid=commit["oid"], url=commit.get("url"))


async def submit_commit(
    client: GraphQLClientProtocol, request: CommitRequest
) -> CommitResult:
    """
    Send the whole change-set in one mutation.

    The mutation carries expectedHeadOid, so GitHub rejects it if the branch
    moved since the head was resolved. A rejection is reported as a conflict
    and is not retried here.

    Raises:
        ConflictError: If the branch head no longer matches.
        TransportError: On any other API failure.
    """
    logger.debug("Creating commit...")
    try:
        data = await client.execute(
            CREATE_COMMIT_ON_BRANCH, {"input": request.to_mutation_input()}
        )
    except TransportError as e:
        if is_conflict(e):
            raise ConflictError(request.expected_head_oid, detail=e.detail) from e
        raise

    result = extract_commit(data)
    logger.debug(f"result: {result.oid}")
    return result
