"""Repository status summary for the shell prompt.

The summary is the branch name followed by glyphs in a fixed order:
dirty, new, untracked, deleted, moved, clean, ahead, behind. Spacing is
carried by the glyph tokens themselves.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from git import Repo

from ..colored_tokens import Color, Token, TokenSeq
from ..errors import ErrorCategory, error_handler
from .divergence import DivergenceState, resolve_divergence
from .status_entries import StatusBits, StatusEntry, enumerate_status
from .utils import GitStatusResult


RenderedSummary = TokenSeq

DIRTY_BITS = (StatusBits.INDEX_MODIFIED | StatusBits.INDEX_TYPECHANGE
              | StatusBits.WT_MODIFIED | StatusBits.WT_TYPECHANGE)
DELETED_BITS = StatusBits.INDEX_DELETED | StatusBits.WT_DELETED
MOVED_BITS = StatusBits.INDEX_RENAMED | StatusBits.WT_RENAMED

DIRTY_GLYPH = Token("＊", Color.BLUE)
NEW_GLYPH = Token("＋", Color.GREEN, bold=True)
UNTRACKED_GLYPH = Token("？", Color.YELLOW, bold=True)
DELETED_GLYPH = Token("Ｘ", Color.RED, bold=True)
MOVED_GLYPH = Token("➜", Color.YELLOW, bold=True)
CLEAN_GLYPH = Token(" ✔", Color.GREEN, bold=True)


@dataclass(frozen=True)
class ClassifiedFlags:
    """Flags folded from a set of status entries."""
    is_dirty: bool = False
    has_new: bool = False
    has_untracked: bool = False
    has_deleted: bool = False
    has_moved: bool = False

    @property
    def is_clean(self) -> bool:
        return not (self.is_dirty or self.has_new or self.has_untracked
                    or self.has_deleted or self.has_moved)


def classify(entries: Iterable[StatusEntry]) -> ClassifiedFlags:
    """Fold status entries into ClassifiedFlags."""
    combined = StatusBits.CURRENT
    for entry in entries:
        if entry.status == StatusBits.CURRENT:
            continue
        combined |= entry.status

    return ClassifiedFlags(
        is_dirty=bool(combined & DIRTY_BITS),
        has_new=bool(combined & StatusBits.INDEX_NEW),
        has_untracked=bool(combined & StatusBits.WT_NEW),
        has_deleted=bool(combined & DELETED_BITS),
        has_moved=bool(combined & MOVED_BITS),
    )


def render_summary(branch: str, flags: ClassifiedFlags,
                   divergence: DivergenceState) -> RenderedSummary:
    """Build the token sequence for a branch, its flags and divergence."""
    summary = TokenSeq((Token(branch, Color.GREEN),))

    if flags.is_dirty:
        summary = summary.append(DIRTY_GLYPH)
    if flags.has_new:
        summary = summary.append(NEW_GLYPH)
    if flags.has_untracked:
        summary = summary.append(UNTRACKED_GLYPH)
    if flags.has_deleted:
        summary = summary.append(DELETED_GLYPH)
    if flags.has_moved:
        summary = summary.append(MOVED_GLYPH)
    if flags.is_clean:
        summary = summary.append(CLEAN_GLYPH)

    if divergence.is_ahead:
        spacer = " " if flags.is_clean or flags.has_deleted or flags.has_moved else ""
        summary = summary.append(Token(spacer + "↑", Color.CYAN))
    if divergence.is_behind:
        spacer = " " if not divergence.is_ahead and (flags.is_clean or flags.has_moved) else ""
        summary = summary.append(Token(spacer + "↓", Color.CYAN))

    return summary


def resolve_head(repo: Repo) -> GitStatusResult:
    """
    Resolve HEAD to its short name and commit.

    The value is a ``(name, hexsha)`` pair; a detached HEAD is named
    ``HEAD``. An unborn branch or unreadable HEAD fails.
    """
    try:
        if not repo.head.is_valid():
            return GitStatusResult(
                success=False,
                message="HEAD does not point to a commit",
                operation="resolve_head",
                error_code="UNBORN_HEAD"
            )
        name = "HEAD" if repo.head.is_detached else repo.head.reference.name
        hexsha = repo.head.commit.hexsha
    except Exception as e:
        response = error_handler.handle_git_error(
            e, ErrorCategory.HEAD_RESOLUTION, {'path': repo.working_tree_dir}
        )
        return GitStatusResult(
            success=False,
            message=response.message,
            operation="resolve_head",
            error_code=response.error_code
        )

    return GitStatusResult(
        success=True,
        message=f"HEAD is {name} at {hexsha[:8]}",
        operation="resolve_head",
        value=(name, hexsha)
    )


def summarize(repo: Repo) -> Optional[RenderedSummary]:
    """
    Summarize the state of ``repo`` as styled tokens.

    Returns None when HEAD cannot be resolved or the status cannot be
    listed. A failure to compare with the upstream only drops the
    ahead/behind glyphs.
    """
    logger = logging.getLogger('promptline.git_status.summarizer')

    head = resolve_head(repo)
    if not head.success:
        logger.debug(f"No summary: {head.message}")
        return None
    branch, head_sha = head.value

    status = enumerate_status(repo)
    if not status.success:
        logger.debug(f"No summary: {status.message}")
        return None

    flags = classify(status.value)
    divergence = resolve_divergence(repo, head_sha)
    logger.debug(f"Summarizing {branch}: {flags}, {divergence}")

    return render_summary(branch, flags, divergence)
