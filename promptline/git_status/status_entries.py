"""Working tree and index status entries."""

import logging
from dataclasses import dataclass
from enum import Flag
from typing import List, Optional

from git import Repo

from ..errors import ErrorCategory, error_handler
from .utils import GitStatusResult


class StatusBits(Flag):
    """Per-path status bits; the empty set means the path is unchanged."""
    CURRENT = 0
    INDEX_NEW = 1 << 0
    INDEX_MODIFIED = 1 << 1
    INDEX_DELETED = 1 << 2
    INDEX_RENAMED = 1 << 3
    INDEX_TYPECHANGE = 1 << 4
    WT_NEW = 1 << 7
    WT_MODIFIED = 1 << 8
    WT_DELETED = 1 << 9
    WT_TYPECHANGE = 1 << 10
    WT_RENAMED = 1 << 11
    CONFLICTED = 1 << 15


@dataclass(frozen=True)
class StatusEntry:
    """One changed path as reported by ``git status``."""
    path: str
    status: StatusBits
    original_path: Optional[str] = None


_INDEX_CODES = {
    "A": StatusBits.INDEX_NEW,
    "C": StatusBits.INDEX_NEW,
    "M": StatusBits.INDEX_MODIFIED,
    "D": StatusBits.INDEX_DELETED,
    "R": StatusBits.INDEX_RENAMED,
    "T": StatusBits.INDEX_TYPECHANGE,
}

_WORKTREE_CODES = {
    "A": StatusBits.WT_NEW,
    "M": StatusBits.WT_MODIFIED,
    "D": StatusBits.WT_DELETED,
    "R": StatusBits.WT_RENAMED,
    "T": StatusBits.WT_TYPECHANGE,
}

_UNMERGED_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

READ_ONLY_GIT_ENV = {"GIT_OPTIONAL_LOCKS": "0"}


def status_from_code(code: str) -> StatusBits:
    """Translate a two-letter porcelain status code into status bits."""
    if code == "??":
        return StatusBits.WT_NEW
    if code in _UNMERGED_CODES:
        return StatusBits.CONFLICTED

    status = StatusBits.CURRENT
    status |= _INDEX_CODES.get(code[0], StatusBits.CURRENT)
    status |= _WORKTREE_CODES.get(code[1], StatusBits.CURRENT)
    return status


def parse_porcelain(output: str) -> List[StatusEntry]:
    """
    Parse ``git status --porcelain=v1 -z`` output.

    Records are NUL separated. A rename or copy record is followed by one
    extra field holding the original path. Ignored (``!!``) records are
    skipped.
    """
    entries = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        if len(record) < 4:
            continue

        code, path = record[:2], record[3:]
        original_path = None
        if code[0] in "RC" or code[1] in "RC":
            if i < len(fields):
                original_path = fields[i]
            i += 1

        if code == "!!":
            continue

        entries.append(StatusEntry(path=path, status=status_from_code(code), original_path=original_path))

    return entries


def enumerate_status(repo: Repo) -> GitStatusResult:
    """
    List the status entries of the working tree and index.

    Untracked files are included. Entries whose status is exactly
    ``StatusBits.CURRENT`` are dropped.

    Returns:
        GitStatusResult whose value is the list of StatusEntry objects
    """
    logger = logging.getLogger('promptline.git_status.status_entries')

    try:
        # Read-only: no index.lock, no stat refresh written back to .git/index
        output = repo.git.status(
            "--porcelain=v1", "-z", "--untracked-files=normal",
            env=READ_ONLY_GIT_ENV
        )
    except Exception as e:
        response = error_handler.handle_git_error(
            e, ErrorCategory.STATUS_ENUMERATION, {'path': repo.working_tree_dir}
        )
        return GitStatusResult(
            success=False,
            message=response.message,
            operation="enumerate_status",
            error_code=response.error_code
        )

    entries = [entry for entry in parse_porcelain(output) if entry.status != StatusBits.CURRENT]
    logger.debug(f"Found {len(entries)} changed paths")

    return GitStatusResult(
        success=True,
        message=f"Found {len(entries)} changed paths",
        operation="enumerate_status",
        value=entries
    )
