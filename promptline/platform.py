"""Path utilities for promptline."""

import os
from pathlib import Path
from typing import Optional, Union


def normalize_path(path: Union[str, Path]) -> Path:
    """
    Normalize a path for the current platform.

    Args:
        path: Path to normalize

    Returns:
        Normalized Path object
    """
    if isinstance(path, str):
        path = Path(path)

    # Expand user home directory (~) first, then resolve to absolute path
    return path.expanduser().resolve()


def get_home_directory() -> Optional[Path]:
    """Return the user's home directory, or None when it cannot be determined."""
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def get_current_directory() -> Optional[Path]:
    """Return the current working directory, or None if it has been removed."""
    try:
        return Path(os.getcwd())
    except (FileNotFoundError, PermissionError):
        return None


def shorten_path(cwd: Union[str, Path], home: Optional[Union[str, Path]]) -> str:
    """
    Replace a leading home directory prefix in ``cwd`` with ``~``.

    The match is a literal string prefix, applied at most once, and only when
    it ends on a path component boundary (``/home/al`` does not shorten
    ``/home/alice``). Without a home directory the path is returned unchanged.
    """
    cwd = str(cwd)
    if not home:
        return cwd

    home = str(home).rstrip("/\\") or str(home)
    if cwd == home:
        return "~"
    if cwd.startswith(home) and cwd[len(home)] in ("/", os.sep):
        return "~" + cwd[len(home):]
    return cwd
