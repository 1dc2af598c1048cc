from ..config.settings import CommitTarget
from ..exceptions import EmptyChangeSetError
from ..schemas import ChangeSet, CommitRequest
from .head_resolver import unqualify_branch


def build_commit_request(
    change_set: ChangeSet, expected_head_oid: str, target: CommitTarget
) -> CommitRequest:
    """Assemble the commit request; refuses an empty change-set.

    createCommitOnBranch wants the short branch name, so a refs/heads/
    prefix on the target branch is dropped.
    """
    if change_set.is_empty:
        raise EmptyChangeSetError("Refusing to build a commit with no file changes")

    return CommitRequest(
        owner=target.owner,
        repo=target.repo,
        branch=unqualify_branch(target.branch),
        message=target.message,
        expected_head_oid=expected_head_oid,
        changes=change_set,
    )
