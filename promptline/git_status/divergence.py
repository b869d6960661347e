"""Ahead/behind comparison against the upstream tracking branch."""

import logging
from dataclasses import dataclass

from git import Repo
from git.exc import GitCommandError

from ..errors import ErrorCategory, error_handler
from .utils import GitStatusResult


@dataclass(frozen=True)
class DivergenceState:
    """How far HEAD and its upstream have moved apart."""
    ahead: int = 0
    behind: int = 0

    @property
    def is_ahead(self) -> bool:
        return self.ahead > 0

    @property
    def is_behind(self) -> bool:
        return self.behind > 0


def count_exclusive_commits(repo: Repo, include: str, exclude: str) -> int:
    """Count commits reachable from ``include`` but not from ``exclude``."""
    return int(repo.git.rev_list("--count", include, f"^{exclude}"))


def resolve_upstream(repo: Repo) -> GitStatusResult:
    """
    Resolve the commit of ``@{upstream}`` for the current branch.

    Only the single configured upstream is consulted. A detached HEAD, a
    branch without tracking configuration, or an upstream ref that was never
    fetched is reported as ``NO_UPSTREAM``.
    """
    try:
        if repo.head.is_detached:
            return GitStatusResult(
                success=False,
                message="HEAD is detached, no upstream to compare against",
                operation="resolve_upstream",
                error_code="NO_UPSTREAM"
            )

        upstream_sha = repo.git.rev_parse("--verify", "--quiet", "@{upstream}")
    except GitCommandError:
        return GitStatusResult(
            success=False,
            message="No upstream configured for the current branch",
            operation="resolve_upstream",
            error_code="NO_UPSTREAM"
        )
    except Exception as e:
        response = error_handler.handle_git_error(
            e, ErrorCategory.DIVERGENCE, {'path': repo.working_tree_dir}
        )
        return GitStatusResult(
            success=False,
            message=response.message,
            operation="resolve_upstream",
            error_code=response.error_code
        )

    return GitStatusResult(
        success=True,
        message=f"Upstream is at {upstream_sha[:8]}",
        operation="resolve_upstream",
        value=upstream_sha
    )


def resolve_divergence(repo: Repo, head_sha: str) -> DivergenceState:
    """
    Compare ``head_sha`` with the upstream tip.

    Any failure, including a missing upstream, yields a state that is
    neither ahead nor behind.
    """
    logger = logging.getLogger('promptline.git_status.divergence')

    upstream = resolve_upstream(repo)
    if not upstream.success:
        logger.debug(upstream.message)
        return DivergenceState()

    try:
        ahead = count_exclusive_commits(repo, head_sha, upstream.value)
        behind = count_exclusive_commits(repo, upstream.value, head_sha)
    except Exception as e:
        error_handler.handle_git_error(
            e, ErrorCategory.DIVERGENCE, {'path': repo.working_tree_dir}
        )
        return DivergenceState()

    logger.debug(f"{upstream.message}: ahead {ahead}, behind {behind}")
    return DivergenceState(ahead=ahead, behind=behind)
