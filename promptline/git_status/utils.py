"""Utility classes for Git status lookups."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class GitStatusResult:
    """Result of a single Git status lookup step."""
    success: bool
    message: str
    operation: str
    error_code: Optional[str] = None
    value: Any = None
