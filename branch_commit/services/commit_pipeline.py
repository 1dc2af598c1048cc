"""Coordinates one run: list changes, classify, resolve head, build, submit."""

import asyncio
import logging
from typing import Optional

from ..config.settings import CommitTarget, Settings, to_target
from ..exceptions import ConflictError, ListingError
from ..protocols import ChangeListerProtocol, GraphQLClientProtocol, WorkspaceProtocol
from ..schemas import ChangeSet, CommitOutcome, RunState
from .change_classifier import classify_changes, parse_status_output
from .commit_builder import build_commit_request
from .commit_submitter import submit_commit
from .git_manager import GitManager
from .github_client import GitHubGraphQLClient
from .head_resolver import resolve_head_oid
from .workspace import WorkspaceFiles

logger = logging.getLogger(__name__)


class CommitPipeline:
    """Commits the working-tree changes of one checkout to one branch."""

    def __init__(
        self,
        target: CommitTarget,
        git_manager: ChangeListerProtocol,
        client: GraphQLClientProtocol,
        files: Optional[WorkspaceProtocol] = None,
    ):
        self.target = target
        self.git_manager = git_manager
        self.client = client
        self.files = files
        self.state = RunState.START

    def _transition(self, state: RunState) -> None:
        if self.state.is_terminal:
            raise RuntimeError(f"Run already finished in state {self.state.value}")
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state

    async def run(self) -> CommitOutcome:
        """
        Execute the run once.

        Returns a NOOP outcome when nothing changed, otherwise a SUCCEEDED
        outcome with the new commit. Every failure is raised after the state
        is set to CONFLICTED or FAILED.
        """
        try:
            return await self._run()
        except ConflictError:
            self._transition(RunState.CONFLICTED)
            raise
        except Exception:
            if not self.state.is_terminal:
                self._transition(RunState.FAILED)
            raise

    async def _run(self) -> CommitOutcome:
        self._transition(RunState.LISTING)
        listing = await asyncio.to_thread(self.git_manager.list_changed_paths)
        if listing.stderr.strip() or listing.returncode != 0:
            raise ListingError(
                f"git stderr: {listing.stderr.strip()}",
                detail=f"exit status {listing.returncode}",
            )

        paths = parse_status_output(listing.stdout)
        if not paths:
            logger.info("No changes detected, nothing to commit")
            self._transition(RunState.NOOP)
            return CommitOutcome(state=RunState.NOOP)

        self._transition(RunState.CLASSIFYING)
        files = self.files or WorkspaceFiles(str(self.git_manager.workspace))
        change_set: ChangeSet = await asyncio.to_thread(classify_changes, paths, files)
        logger.info(
            f"Found {len(change_set.additions)} additions and "
            f"{len(change_set.deletions)} deletions"
        )

        self._transition(RunState.RESOLVING)
        logger.debug("getting expectedHeadOid...")
        head_oid = await resolve_head_oid(
            self.client, self.target.owner, self.target.repo, self.target.branch
        )

        self._transition(RunState.BUILDING)
        request = build_commit_request(change_set, head_oid, self.target)

        self._transition(RunState.SUBMITTING)
        result = await submit_commit(self.client, request)

        self._transition(RunState.SUCCEEDED)
        logger.info(
            f"Committed {result.oid} to {self.target.name_with_owner}@{self.target.branch}"
        )
        return CommitOutcome(
            state=RunState.SUCCEEDED,
            commit=result,
            additions=len(change_set.additions),
            deletions=len(change_set.deletions),
        )


async def run_commit(settings: Settings) -> CommitOutcome:
    """
    Validate configuration, wire the real collaborators and run once.

    Raises:
        ConfigError: Before any git or network call when the token or
            repository is missing.
    """
    target = to_target(settings)
    git_manager = GitManager(target.workspace)
    async with GitHubGraphQLClient(
        token=target.token,
        url=settings.GITHUB_GRAPHQL_URL,
        timeout=settings.REQUEST_TIMEOUT,
    ) as client:
        pipeline = CommitPipeline(target=target, git_manager=git_manager, client=client)
        return await pipeline.run()
