"""Error handling framework for promptline.

Nothing raised while inspecting a repository is allowed to reach the shell.
Failures are classified here, logged quietly and turned into result objects.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional

from git.exc import (
    GitCommandError, InvalidGitRepositoryError, NoSuchPathError, BadName
)


class ErrorCategory(Enum):
    """Categories of errors for structured error handling."""
    DISCOVERY = "discovery"
    HEAD_RESOLUTION = "head_resolution"
    STATUS_ENUMERATION = "status_enumeration"
    DIVERGENCE = "divergence"
    CONFIGURATION = "configuration"


@dataclass
class ErrorResponse:
    """Standardized error description for a failed lookup."""
    error: str
    error_code: str
    message: str
    timestamp: str
    category: str
    context: Optional[Dict[str, Any]] = None


class ErrorHandler:
    """Classifies Git errors and logs them without ever re-raising."""

    def __init__(self):
        self.logger = logging.getLogger('promptline.error_handler')

    def handle_git_error(self, error: Exception, category: ErrorCategory,
                         context: Dict[str, Any] = None) -> ErrorResponse:
        """Handle an error raised while reading repository state."""
        context = context or {}

        if isinstance(error, NoSuchPathError):
            error_code = "PATH_NOT_FOUND"
            message = f"Path does not exist: {context.get('path', 'unknown')}"
        elif isinstance(error, InvalidGitRepositoryError):
            error_code = "NOT_A_REPOSITORY"
            message = "Not inside a Git repository"
        elif isinstance(error, GitCommandError):
            error_code = "GIT_COMMAND_ERROR"
            message = f"Git command failed with status {error.status}: {error.stderr.strip() if isinstance(error.stderr, str) else error.stderr}"
        elif isinstance(error, BadName):
            error_code = "BAD_REFERENCE"
            message = f"Reference could not be resolved: {error}"
        elif isinstance(error, (ValueError, TypeError)) and "reference" in str(error).lower():
            error_code = "BAD_REFERENCE"
            message = f"Reference could not be resolved: {error}"
        elif isinstance(error, PermissionError):
            error_code = "PERMISSION_DENIED"
            message = "Permission denied reading repository"
        elif isinstance(error, OSError):
            error_code = "IO_ERROR"
            message = f"File system error: {str(error)}"
        else:
            error_code = f"{category.name}_ERROR"
            message = f"{category.value.replace('_', ' ').capitalize()} failed: {str(error)}"

        error_response = ErrorResponse(
            error=f"{category.value} failed",
            error_code=error_code,
            message=message,
            timestamp=datetime.now().isoformat(),
            category=category.value,
            context=context
        )

        # Prompt rendering degrades silently, so this stays at debug level
        self.logger.debug(
            f"Git error ({category.value}): {message}",
            extra={
                'operation': category.value,
                'error_code': error_code,
                'path': context.get('path')
            }
        )

        return error_response

    def handle_configuration_error(self, error: Exception) -> ErrorResponse:
        """Handle configuration errors; the caller falls back to defaults."""
        error_response = ErrorResponse(
            error="Configuration error",
            error_code="CONFIGURATION_INVALID",
            message=f"Falling back to default configuration: {error}",
            timestamp=datetime.now().isoformat(),
            category=ErrorCategory.CONFIGURATION.value
        )

        self.logger.debug(
            error_response.message,
            extra={
                'operation': 'configuration_error',
                'error_code': error_response.error_code
            }
        )

        return error_response


# Initialize global error handler
error_handler = ErrorHandler()
