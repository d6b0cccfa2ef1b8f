"""Batch ranking of grant opportunities for a company."""

from .ranker import (
    OPEN_STATUSES,
    evaluate,
    is_open,
    rank_opportunities,
    rank_with_settings,
    summarize_opportunities,
    summarize_with_settings,
)

__all__ = [
    "OPEN_STATUSES",
    "evaluate",
    "is_open",
    "rank_opportunities",
    "rank_with_settings",
    "summarize_opportunities",
    "summarize_with_settings",
]
