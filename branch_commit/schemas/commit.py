from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    """Enum for working-tree change statuses."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"


class RunState(str, Enum):
    """States a single commit run moves through."""

    START = "start"
    LISTING = "listing"
    NOOP = "noop"
    CLASSIFYING = "classifying"
    RESOLVING = "resolving"
    BUILDING = "building"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    CONFLICTED = "conflicted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            RunState.NOOP,
            RunState.SUCCEEDED,
            RunState.CONFLICTED,
            RunState.FAILED,
        )


class ChangedPath(BaseModel):
    """A path reported by the status query."""

    path: str
    status: FileStatus


class FileAddition(BaseModel):
    """A file to create or overwrite, with its contents snapshot."""

    model_config = ConfigDict(frozen=True)

    path: str
    contents_base64: str


class FileDeletion(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str


class ChangeSet(BaseModel):
    """Additions and deletions that make up one commit."""

    additions: List[FileAddition] = Field(default_factory=list)
    deletions: List[FileDeletion] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.additions and not self.deletions

    @property
    def paths(self) -> List[str]:
        return [a.path for a in self.additions] + [d.path for d in self.deletions]


class CommitRequest(BaseModel):
    owner: str
    repo: str
    branch: str
    message: str
    expected_head_oid: str
    changes: ChangeSet

    @property
    def name_with_owner(self) -> str:
        return f"{self.owner}/{self.repo}"

    def to_mutation_input(self) -> Dict[str, Any]:
        """Render the CreateCommitOnBranchInput variable for the mutation."""
        headline, _, body = self.message.strip().partition("\n")
        message: Dict[str, str] = {"headline": headline.strip()}
        if body.strip():
            message["body"] = body.strip()

        file_changes: Dict[str, List[Dict[str, str]]] = {}
        if self.changes.additions:
            file_changes["additions"] = [
                {"path": a.path, "contents": a.contents_base64}
                for a in self.changes.additions
            ]
        if self.changes.deletions:
            file_changes["deletions"] = [
                {"path": d.path} for d in self.changes.deletions
            ]

        return {
            "branch": {
                "repositoryNameWithOwner": self.name_with_owner,
                "branchName": self.branch,
            },
            "message": message,
            "fileChanges": file_changes,
            "expectedHeadOid": self.expected_head_oid,
        }


class CommitResult(BaseModel):
    """The commit the remote created."""

    oid: str
    url: Optional[str] = None


class CommitOutcome(BaseModel):
    """Observable result of a run that did not fail."""

    state: RunState
    commit: Optional[CommitResult] = None
    additions: int = 0
    deletions: int = 0

    @property
    def committed(self) -> bool:
        return self.state == RunState.SUCCEEDED and self.commit is not None
