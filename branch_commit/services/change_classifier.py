"""Turns the status query output into a change-set."""

import logging
from typing import Iterable, List

from ..protocols import WorkspaceProtocol
from ..schemas import ChangedPath, ChangeSet, FileAddition, FileDeletion, FileStatus

logger = logging.getLogger(__name__)


def parse_status_output(output: str) -> List[str]:
    """
    Split status output into paths, skipping blanks and repeats.

    NUL-separated output (ls-files -z) is taken verbatim. Newline-separated
    output has each line stripped of surrounding whitespace.
    """
    if "\0" in output:
        entries = output.split("\0")
    else:
        entries = [line.strip() for line in output.split("\n")]

    paths: List[str] = []
    seen = set()
    for path in entries:
        if not path.strip() or path in seen:
            continue
        seen.add(path)
        paths.append(path)
    return paths


def collect_changed_paths(
    paths: Iterable[str], files: WorkspaceProtocol
) -> List[ChangedPath]:
    return [
        ChangedPath(
            path=path,
            status=FileStatus.MODIFIED if files.exists(path) else FileStatus.DELETED,
        )
        for path in paths
        if path.strip()
    ]


def classify_changes(paths: Iterable[str], files: WorkspaceProtocol) -> ChangeSet:
    """
    Split changed paths into additions and deletions.

    A path that still exists on disk is read once and its base64 snapshot is
    kept; a missing path becomes a deletion. Input order is preserved.

    Raises:
        ReadError: If an existing file cannot be read.
    """
    change_set = ChangeSet()
    for changed in collect_changed_paths(paths, files):
        if changed.status == FileStatus.DELETED:
            logger.debug(f"File removed: {changed.path}")
            change_set.deletions.append(FileDeletion(path=changed.path))
        else:
            change_set.additions.append(
                FileAddition(
                    path=changed.path, contents_base64=files.read_base64(changed.path)
                )
            )
    return change_set
