"""Git repository status lookups for promptline."""

from .locator import discover
from .summarizer import ClassifiedFlags, RenderedSummary, classify, render_summary, summarize
from .divergence import DivergenceState, count_exclusive_commits
from .status_entries import StatusBits, StatusEntry
from .utils import GitStatusResult

__all__ = [
    'discover',
    'summarize',
    'classify',
    'render_summary',
    'ClassifiedFlags',
    'RenderedSummary',
    'DivergenceState',
    'count_exclusive_commits',
    'StatusBits',
    'StatusEntry',
    'GitStatusResult'
]
