"""Repository discovery for the current working directory."""

import logging
from pathlib import Path
from typing import Union

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from ..errors import ErrorCategory, error_handler
from .utils import GitStatusResult


def discover(start_path: Union[str, Path]) -> GitStatusResult:
    """
    Find the Git repository enclosing ``start_path``.

    Parent directories are searched up to the filesystem root. Not being
    inside a repository is an ordinary outcome, reported as an unsuccessful
    result with error code ``NOT_A_REPOSITORY``.

    Args:
        start_path: Directory to start the upward search from

    Returns:
        GitStatusResult whose value is the discovered ``git.Repo``
    """
    logger = logging.getLogger('promptline.git_status.locator')

    try:
        repo = Repo(start_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        response = error_handler.handle_git_error(
            e, ErrorCategory.DISCOVERY, {'path': str(start_path)}
        )
        return GitStatusResult(
            success=False,
            message=response.message,
            operation="discover",
            error_code=response.error_code
        )
    except Exception as e:
        response = error_handler.handle_git_error(
            e, ErrorCategory.DISCOVERY, {'path': str(start_path)}
        )
        return GitStatusResult(
            success=False,
            message=response.message,
            operation="discover",
            error_code="DISCOVERY_ERROR"
        )

    logger.debug(f"Discovered repository at {repo.working_tree_dir or repo.git_dir} from {start_path}")

    return GitStatusResult(
        success=True,
        message=f"Repository found at {repo.working_tree_dir or repo.git_dir}",
        operation="discover",
        value=repo
    )
