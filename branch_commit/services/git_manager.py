import logging
from pathlib import Path
from typing import Optional

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from ..exceptions import ListingError
from ..protocols import ListingResult

logger = logging.getLogger(__name__)

LS_FILES_ARGS = ("-z", "--others", "--modified", "--exclude-standard")


class GitManager:
    """Lists working-tree changes of the checked-out repository."""

    def __init__(self, local_path: str = "."):
        self.local_path = Path(local_path)
        self.repo: Optional[Repo] = None

    def setup_repository(self) -> Repo:
        """Open the repository containing the local path."""
        if self.repo is not None:
            return self.repo
        try:
            self.repo = Repo(self.local_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise ListingError(
                f"Not a git repository: {self.local_path}", detail=str(e)
            ) from e
        logger.debug(f"Opened repository at {self.repo.working_tree_dir}")
        return self.repo

    @property
    def workspace(self) -> Path:
        """Root of the working tree; ls-files paths are relative to it."""
        repo = self.setup_repository()
        return Path(repo.working_tree_dir or self.local_path)

    def list_changed_paths(self) -> ListingResult:
        """
        Run `git ls-files -z --others --modified --exclude-standard`.

        Tracked files deleted from disk are reported as modified, so they show
        up here alongside edits and new untracked files. The command never
        raises on a non-zero exit; the caller inspects the result. Entries are
        NUL-terminated so paths with quotes, tabs or newlines come back unquoted.
        """
        repo = self.setup_repository()
        returncode, stdout, stderr = repo.git.ls_files(
            *LS_FILES_ARGS, with_extended_output=True, with_exceptions=False
        )
        logger.debug(f"git ls-files output:\n{stdout}")
        return ListingResult(stdout=stdout, stderr=stderr, returncode=returncode)
