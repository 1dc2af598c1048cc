import json
import logging
import os
from typing import Any, Dict, List, Optional

import httpx
import pytest

from branch_commit.config import CommitTarget
from branch_commit.config.logging_config import PACKAGE_LOGGER

ENV_PREFIXES = ("GITHUB_", "INPUT_", "RUNNER_")
ENV_NAMES = ("DEBUG", "REQUEST_TIMEOUT", "COMMIT_MESSAGE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the CI environment running the tests out of Settings."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIXES) or name in ENV_NAMES:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def target() -> CommitTarget:
    return CommitTarget(
        owner="octo",
        repo="widgets",
        branch="feature/x",
        message="Update generated files",
        token="test_token",
    )


class GitHubStub:
    """Minimal stand-in for the GitHub GraphQL endpoint.

    Tracks a single branch head. createCommitOnBranch is rejected with
    STALE_DATA when expectedHeadOid does not match the current head.
    """

    def __init__(self, head_oid: str = "a" * 40, branch: str = "refs/heads/feature/x"):
        self.head_oid = head_oid
        self.branch = branch
        self.requests: List[Dict[str, Any]] = []
        self.head_after_resolve: Optional[str] = None
        self._commit_count = 0

    @property
    def mutations(self) -> List[Dict[str, Any]]:
        return [r for r in self.requests if "createCommitOnBranch" in r["query"]]

    @property
    def queries(self) -> List[Dict[str, Any]]:
        return [r for r in self.requests if "ResolveBranchHead" in r["query"]]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        if "ResolveBranchHead" in body["query"]:
            return self._resolve(body["variables"])
        return self._commit(body["variables"]["input"])

    def _resolve(self, variables: Dict[str, Any]) -> httpx.Response:
        if variables["qualifiedName"] != self.branch:
            return httpx.Response(200, json={"data": {"repository": {"ref": None}}})
        data = {
            "repository": {
                "ref": {"target": {"history": {"nodes": [{"oid": self.head_oid}]}}}
            }
        }
        if self.head_after_resolve:
            # Someone else pushes right after we looked
            self.head_oid = self.head_after_resolve
        return httpx.Response(200, json={"data": data})

    def _commit(self, commit_input: Dict[str, Any]) -> httpx.Response:
        expected = commit_input["expectedHeadOid"]
        if expected != self.head_oid:
            return httpx.Response(
                200,
                json={
                    "data": {"createCommitOnBranch": None},
                    "errors": [
                        {
                            "type": "STALE_DATA",
                            "path": ["createCommitOnBranch"],
                            "message": (
                                f'Expected branch to point to "{expected}" '
                                f'but it did not. Pull and try again.'
                            ),
                        }
                    ],
                },
            )
        self._commit_count += 1
        self.head_oid = f"{self._commit_count:x}".rjust(40, "c")
        commit = {
            "oid": self.head_oid,
            "url": f"https://github.com/octo/widgets/commit/{self.head_oid}",
        }
        return httpx.Response(
            200, json={"data": {"createCommitOnBranch": {"commit": commit}}}
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def github_stub() -> GitHubStub:
    return GitHubStub()
