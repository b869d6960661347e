"""
promptline - Git-aware shell prompt helper.

Prints the current directory, shortened against the home directory, followed
by a compact colored summary of the enclosing Git repository's state.
"""

__version__ = "1.0.0"
__description__ = "Git-aware shell prompt helper"

from .cli import main

__all__ = ["main"]
