"""Rank grant opportunities for a company.

Scores and rates every open grant for one company, keeps the matches above a
caller-supplied threshold and orders them by rating, so the grants most worth
pursuing come first. Each (company, grant) pair is independent, so pairs are
evaluated concurrently.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from ..config.config import MatchingSettings, load_settings
from ..models.company_profile import CompanyProfile
from ..models.grant import Grant, GrantStatus
from ..models.match_result import OpportunitySummary, RankedOpportunity
from ..rating.composer import compose_rating, days_until
from ..rating.weights import DEFAULT_WEIGHTS, RatingWeights, load_weights
from ..scorer.engine import score_match

logger = logging.getLogger(__name__)

OPEN_STATUSES = {GrantStatus.OPEN, GrantStatus.CLOSING_SOON}


def is_open(grant: Grant) -> bool:
    """Whether a grant still accepts applications."""
    return grant.status in OPEN_STATUSES


def evaluate(
    company: CompanyProfile,
    grant: Grant,
    weights: RatingWeights = DEFAULT_WEIGHTS,
    today: Optional[date] = None,
) -> RankedOpportunity:
    """Score and rate a single pair."""
    match = score_match(company, grant, today=today)
    rating = compose_rating(company, grant, match.score, weights=weights, today=today)
    return RankedOpportunity(grant=grant, match=match, rating=rating)


def rank_opportunities(
    company: CompanyProfile,
    grants: Iterable[Grant],
    min_match_score: Optional[int] = None,
    limit: Optional[int] = None,
    max_workers: Optional[int] = None,
    weights: RatingWeights = DEFAULT_WEIGHTS,
    today: Optional[date] = None,
) -> List[RankedOpportunity]:
    """Evaluate all open grants for a company and order them by rating.

    Ordering: rating desc, match score desc, earliest deadline (grants without
    a deadline last), grant id.

    Args:
        company: Company snapshot
        grants: Candidate grants; closed, upcoming and cancelled ones are skipped
        min_match_score: Drop matches scoring below this (None keeps all)
        limit: Keep at most this many results (None keeps all)
        max_workers: Thread pool size (None lets the executor decide)
        weights: Rating weights configuration
        today: Reference date shared by every evaluation in the batch

    Returns:
        Ranked opportunities, best first

    Raises:
        DimensionMismatchError: If any pair carries embeddings of different lengths
    """

    today = today or datetime.now(timezone.utc).date()
    candidates = [g for g in grants if is_open(g)]

    if not candidates:
        logger.info(f"No open grants to rank for company {company.id}")
        return []

    results: List[RankedOpportunity] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_grant = {
            executor.submit(evaluate, company, grant, weights, today): grant
            for grant in candidates
        }
        for future in as_completed(future_to_grant):
            results.append(future.result())

    if min_match_score is not None:
        results = [r for r in results if r.match.score >= min_match_score]

    results.sort(key=_sort_key)

    if limit is not None:
        results = results[:limit]

    logger.info(
        f"Ranked {len(candidates)} open grants for company {company.id}: "
        f"{len(results)} kept"
    )
    return results


def rank_with_settings(
    company: CompanyProfile,
    grants: Iterable[Grant],
    settings: Optional[MatchingSettings] = None,
    today: Optional[date] = None,
) -> List[RankedOpportunity]:
    """Rank using thresholds, limits and weights from ``MatchingSettings``."""

    settings = settings or load_settings()
    weights = load_weights(settings.weights_file)
    return rank_opportunities(
        company,
        grants,
        min_match_score=settings.min_match_score,
        limit=settings.max_results,
        max_workers=settings.max_workers,
        weights=weights,
        today=today,
    )


def summarize_opportunities(
    ranked: List[RankedOpportunity],
    high_match_threshold: int = 75,
    top_n: int = 10,
    today: Optional[date] = None,
) -> OpportunitySummary:
    """Headline numbers for a ranked list.

    Args:
        ranked: Output of ``rank_opportunities`` (best first)
        high_match_threshold: Match score counted as a recommendation
        top_n: How many of the best-ranked grants the average covers
        today: Reference date for the next deadline countdown
    """

    recommended = sum(1 for r in ranked if r.match.score >= high_match_threshold)

    top = ranked[:top_n]
    average = round(sum(r.match.score for r in top) / len(top)) if top else 0

    next_up = next((r for r in ranked if r.grant.deadline), None)
    if next_up is None:
        return OpportunitySummary(
            total_evaluated=len(ranked),
            recommended_grants=recommended,
            average_match_score=average,
        )

    return OpportunitySummary(
        total_evaluated=len(ranked),
        recommended_grants=recommended,
        average_match_score=average,
        days_to_deadline=days_until(next_up.grant.deadline, today),
        deadline_grant_title=next_up.grant.title.split(" - ")[0] or next_up.grant.title,
        next_deadline=next_up.grant.deadline,
    )


def summarize_with_settings(
    ranked: List[RankedOpportunity],
    settings: Optional[MatchingSettings] = None,
    today: Optional[date] = None,
) -> OpportunitySummary:
    """Summarize using the high-match threshold and top-N from ``MatchingSettings``."""

    settings = settings or load_settings()
    return summarize_opportunities(
        ranked,
        high_match_threshold=settings.high_match_threshold,
        top_n=settings.summary_top_n,
        today=today,
    )


def _sort_key(item: RankedOpportunity):
    deadline = item.grant.deadline
    return (
        -item.rating.value,
        -item.match.score,
        deadline is None,
        deadline or date.max,
        item.grant.id,
    )
