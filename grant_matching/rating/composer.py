"""Composite opportunity rating.

Blends how well the company fits (match score) with how valuable the grant is
for a company of its scale and how easy it is to qualify. The rating decides
which grants are surfaced first: a modest, easy, well-matched grant should
outrank a huge grant that is nearly impossible to win.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional

from ..models.company_profile import CompanyProfile
from ..models.grant import EMBRAPII_UNIT, Grant
from ..models.match_result import Rating
from .weights import DEFAULT_WEIGHTS, RatingWeights

logger = logging.getLogger(__name__)

NEUTRAL_VALUE_SCORE = 0.5
OPEN_GRANT_EASE_SCORE = 0.9

# Ease penalties per restriction type
NARROW_SIZE_PENALTY = 0.05
MAX_EMPLOYEES_PENALTY = 0.05
NARROW_STATES_PENALTY = 0.08
NARROW_CNAE_PENALTY = 0.10
MIN_YEARS_PENALTY = 0.10
COUNTERPART_PENALTY = 0.15
REQUIRED_PARTNERS_PENALTY = 0.15
PRIORITY_THEMES_PENALTY = 0.05
REVENUE_BOUNDS_PENALTY = 0.05

NARROW_SIZE_LIMIT = 3
NARROW_STATES_LIMIT = 10
NARROW_CNAE_LIMIT = 20
MIN_YEARS_LIMIT = 2

EMBRAPII_READY_BONUS = 0.10
COUNTERPART_READY_BONUS = 0.05


def compose_rating(
    company: CompanyProfile,
    grant: Grant,
    match_score: int,
    weights: RatingWeights = DEFAULT_WEIGHTS,
    today: Optional[date] = None,
) -> Rating:
    """Combine match, value and ease into a 0-100 rating.

    rating = 0.40 * match_score + 30 * value_score + 30 * ease_score
    (with the default weights).

    Args:
        company: Company snapshot
        grant: Grant being rated
        match_score: Output of ``score_match`` for this pair
        weights: Rating weights configuration
        today: Reference date for deadline proximity

    Returns:
        Rating with the composite value and its sub-scores
    """

    match_score = min(100, max(0, int(match_score)))
    value = value_score(company, grant)
    ease = ease_score(company, grant, today)

    raw = (
        match_score * weights.match +
        value * 100 * weights.value +
        ease * 100 * weights.ease
    )
    rating = min(100, max(0, int(round(raw))))

    logger.debug(
        "Rated grant %s for company %s: %d (match=%d value=%.2f ease=%.2f)",
        grant.id, company.id, rating, match_score, value, ease
    )

    return Rating(value=rating, match_score=match_score, value_score=value, ease_score=ease)


def value_score(company: CompanyProfile, grant: Grant) -> float:
    """Score (0-1) the grant amount relative to company size.

    Ideal grant size is 10-50% of annual revenue. Without revenue data the
    absolute amount is used instead.
    """

    if not grant.value_max:
        return NEUTRAL_VALUE_SCORE

    grant_value = grant.value_max
    revenue = company.annual_revenue or 0

    if revenue > 0:
        ratio = grant_value / revenue

        if 0.1 <= ratio <= 0.5:
            return 1.0  # Perfect value range
        elif 0.05 <= ratio < 0.1:
            return 0.8
        elif 0.5 < ratio <= 1.0:
            return 0.9  # High value but ambitious
        elif ratio > 1.0:
            return 0.7  # Very ambitious, potentially transformative
        else:
            return 0.6  # Small relative value

    if grant_value >= 1_000_000:
        return 1.0
    if grant_value >= 500_000:
        return 0.9
    if grant_value >= 250_000:
        return 0.8
    if grant_value >= 100_000:
        return 0.7
    return 0.5


def ease_score(company: CompanyProfile, grant: Grant, today: Optional[date] = None) -> float:
    """Score (0-1) how straightforward it is to qualify.

    Starts at 1.0, loses a fixed amount per restriction type, is adjusted by
    deadline proximity, and regains some ease when the company already meets
    a demanding requirement.
    """

    criteria = grant.eligibility_criteria
    if criteria is None:
        return OPEN_GRANT_EASE_SCORE

    penalty = 0.0
    if criteria.company_size and len(criteria.company_size) < NARROW_SIZE_LIMIT:
        penalty += NARROW_SIZE_PENALTY
    if criteria.max_employees:
        penalty += MAX_EMPLOYEES_PENALTY
    if criteria.states and len(criteria.states) < NARROW_STATES_LIMIT:
        penalty += NARROW_STATES_PENALTY
    if criteria.cnae_codes and len(criteria.cnae_codes) < NARROW_CNAE_LIMIT:
        penalty += NARROW_CNAE_PENALTY
    if criteria.min_years_operation and criteria.min_years_operation > MIN_YEARS_LIMIT:
        penalty += MIN_YEARS_PENALTY
    if criteria.counterpart_required:
        penalty += COUNTERPART_PENALTY
    if criteria.required_partners:
        penalty += REQUIRED_PARTNERS_PENALTY
    if any(t.strip() for t in criteria.priority_themes or []):
        penalty += PRIORITY_THEMES_PENALTY
    if criteria.has_revenue_bounds:
        penalty += REVENUE_BOUNDS_PENALTY

    ease = 1.0 - penalty
    ease += deadline_adjustment(grant.deadline, today)

    if (
        criteria.required_partners
        and EMBRAPII_UNIT in criteria.required_partners
        and company.partnerships.embrapii_units
    ):
        ease += EMBRAPII_READY_BONUS

    if criteria.counterpart_required and company.financial and company.financial.has_counterpart_capacity:
        ease += COUNTERPART_READY_BONUS

    return max(0.0, min(1.0, round(ease, 4)))


def deadline_adjustment(deadline: Optional[date], today: Optional[date] = None) -> float:
    """Ease adjustment for time left before the deadline."""

    days = days_until(deadline, today)
    if days is None:
        return 0.0
    if days > 90:
        return 0.10  # Plenty of time to prepare
    if days > 60:
        return 0.05
    if days < 15:
        return -0.15  # Very tight deadline
    return 0.0


def days_until(deadline: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole days from today until the deadline (negative once it has passed)."""
    if deadline is None:
        return None
    today = today or datetime.now(timezone.utc).date()
    return (deadline - today).days
