"""Rule-weighted match scoring engine.

Scores how well a company fits a grant's eligibility criteria (0-100) and
classifies every factor's outcome as POSITIVE, WARNING or BLOCKER. This is the
single scoring implementation; every consumer (grant listing, dashboard,
background matching) calls ``score_match``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..eligibility.cnae import match_cnae
from ..models.company_profile import CompanyProfile
from ..models.grant import EMBRAPII_UNIT, Grant, GrantEligibilityCriteria
from ..models.match_result import MatchResult, Reason
from .semantic import semantic_bonus

logger = logging.getLogger(__name__)

OPEN_GRANT_SCORE = 75

SIZE_LABELS = {
    "MEI": "Individual microentrepreneur",
    "MICRO": "Micro company",
    "SMALL": "Small company",
    "MEDIUM": "Medium company",
    "LARGE": "Large company",
}


@dataclass(frozen=True)
class FactorScore:
    """Contribution of one scoring factor."""

    name: str
    points: float
    reason: Optional[Reason] = None


def score_match(company: CompanyProfile, grant: Grant, today: Optional[date] = None) -> MatchResult:
    """Score a company against a grant.

    Factors (additive, evaluated in this order):
    1. Company size (20)            7. R&D themes (15)
    2. Max employees (5 / -10)      8. Revenue bounds (15)
    3. Location (15)                9. Years of operation (10 / -15)
    4. Revenue vs grant value (15)  10. Counterpart capacity (10)
    5. Priority sectors (20)        11. Required partnerships (5)
    6. CNAE (25 / -20 / -50)        12. Patents (bonus, max 5)

    When both embeddings are present a semantic bonus of up to 10 points is
    layered on top. It never changes eligibility.

    Args:
        company: Company snapshot
        grant: Grant with optional eligibility criteria
        today: Reference date for age computations (defaults to today, UTC)

    Returns:
        MatchResult with clamped score and ordered reasons

    Raises:
        DimensionMismatchError: If both embeddings are present but differ in length
    """

    criteria = grant.eligibility_criteria
    if criteria is None:
        return MatchResult(
            grant_id=grant.id,
            score=OPEN_GRANT_SCORE,
            reasons=[Reason.positive("Grant open to all companies")],
        )

    factors = [
        _score_company_size(company, criteria),
        _score_max_employees(company, criteria),
        _score_location(company, criteria),
        _score_budget_alignment(company, grant),
        _score_sector(company, criteria),
        _score_cnae(company, criteria),
        _score_rd_themes(company, criteria),
        _score_revenue_bounds(company, criteria),
        _score_years_of_operation(company, criteria, today),
        _score_counterpart(company, criteria),
        _score_partnerships(company, criteria),
        _score_patents(company),
        _score_semantic(company, grant),
    ]

    total = sum(f.points for f in factors)
    score = clamp_score(total)
    reasons = [f.reason for f in factors if f.reason is not None]

    logger.debug(
        "Scored company %s vs grant %s: raw=%.2f score=%d (%s)",
        company.id,
        grant.id,
        total,
        score,
        ", ".join(f"{f.name}={f.points:g}" for f in factors),
    )

    return MatchResult(grant_id=grant.id, score=score, reasons=reasons)


def clamp_score(raw: float) -> int:
    """Round and clamp a raw total into [0, 100]."""
    return min(100, max(0, int(round(raw))))


def _score_company_size(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """Exact membership in the allowed size set."""

    if not criteria.company_size:
        return FactorScore("size", 10)

    label = SIZE_LABELS.get(company.size.value, company.size.value)
    if company.size in criteria.company_size:
        return FactorScore("size", 20, Reason.positive(f"Company size ({label}) is eligible"))

    allowed = ", ".join(s.value for s in criteria.company_size)
    return FactorScore(
        "size", 0, Reason.warning(f"Company size ({label}) may not fit this grant (allowed: {allowed})")
    )


def _score_max_employees(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """Employee ceiling, evaluated only when both sides are known."""

    if not criteria.max_employees or company.employee_count is None:
        return FactorScore("max_employees", 0)

    if company.employee_count <= criteria.max_employees:
        return FactorScore(
            "max_employees",
            5,
            Reason.positive(
                f"Employee count ({company.employee_count}) within the limit "
                f"(max: {criteria.max_employees})"
            ),
        )

    return FactorScore(
        "max_employees",
        -10,
        Reason.blocker(f"Company exceeds the limit of {criteria.max_employees} employees"),
    )


def _score_location(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """State membership. A mismatch is a hard blocker."""

    if not criteria.states:
        return FactorScore("location", 10, Reason.positive("No geographic restriction"))

    if not company.state:
        return FactorScore(
            "location",
            10,
            Reason.warning(
                f"Grant restricted to {', '.join(criteria.states)} - add your state to confirm"
            ),
        )

    allowed = {s.upper() for s in criteria.states}
    if company.state in allowed:
        return FactorScore(
            "location",
            15,
            Reason.positive(f"Location ({company.state}) meets the geographic requirements"),
        )

    return FactorScore(
        "location",
        0,
        Reason.blocker(f"Grant restricted to other states ({', '.join(criteria.states)})"),
    )


def _score_budget_alignment(company: CompanyProfile, grant: Grant) -> FactorScore:
    """Company revenue should be proportional to the grant's value band."""

    revenue = company.annual_revenue
    if revenue is None or not grant.value_min or not grant.value_max:
        return FactorScore("budget", 8)

    grant_min = grant.value_min
    grant_max = grant.value_max

    if grant_min * 0.5 <= revenue <= grant_max * 10:
        return FactorScore(
            "budget",
            15,
            Reason.positive(
                "Revenue compatible with the grant value range "
                f"({format_brl(grant_min)} - {format_brl(grant_max)})"
            ),
        )

    if revenue >= grant_min * 0.2:
        return FactorScore(
            "budget", 8, Reason.warning("Revenue below the ideal range, but the company may still apply")
        )

    return FactorScore("budget", 0, Reason.warning("Revenue may be outside the grant's ideal range"))


def _score_sector(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """Case-insensitive substring match against priority sectors, either direction."""

    if not criteria.priority_sectors:
        return FactorScore("sector", 10, Reason.positive("No sector restriction"))

    preview = ", ".join(criteria.priority_sectors[:2])
    if len(criteria.priority_sectors) > 2:
        preview += "..."

    sector = company.sector.strip().lower()
    if not sector:
        return FactorScore(
            "sector", 5, Reason.warning(f"Add your sector to compare with priority sectors: {preview}")
        )

    if any(
        p.lower() in sector or sector in p.lower()
        for p in criteria.priority_sectors
        if p.strip()
    ):
        return FactorScore(
            "sector", 20, Reason.positive(f"Sector ({company.sector}) is a priority for this grant")
        )

    return FactorScore("sector", 5, Reason.warning(f"Sector is not a priority (priority sectors: {preview})"))


def _score_cnae(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    result = match_cnae(company.cnaes, criteria.cnae_codes, criteria.excluded_activities)
    return FactorScore("cnae", result.points, result.reason)


def _score_rd_themes(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """5 points per grant theme overlapping a company theme, max 15."""

    grant_themes = [t.strip() for t in criteria.priority_themes or [] if t.strip()]
    if not grant_themes:
        return FactorScore("rd_themes", 8)

    company_themes = [t.strip().lower() for t in company.rd_themes if t.strip()]
    if not company_themes:
        return FactorScore(
            "rd_themes",
            0,
            Reason.warning("Grant prioritises specific R&D themes - complete your profile for better matching"),
        )

    matched = [
        theme
        for theme in grant_themes
        if any(theme.lower() in ct or ct in theme.lower() for ct in company_themes)
    ]

    if not matched:
        return FactorScore(
            "rd_themes", 3, Reason.warning("Company R&D themes do not match the grant priorities")
        )

    points = min(15, len(matched) * 5)
    if len(matched) == 1:
        text = f"R&D theme aligned: {matched[0]}"
    else:
        text = f"{len(matched)} R&D themes aligned with the grant"
    return FactorScore("rd_themes", points, Reason.positive(text))


def _score_revenue_bounds(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """Revenue against the grant's min/max bounds."""

    revenue = company.annual_revenue
    if revenue is None:
        return FactorScore("revenue_bounds", 5)

    meets_min = not criteria.min_revenue or revenue >= criteria.min_revenue
    meets_max = not criteria.max_revenue or revenue <= criteria.max_revenue

    if meets_min and meets_max:
        reason = None
        if criteria.has_revenue_bounds:
            reason = Reason.positive("Revenue within the eligibility limits")
        return FactorScore("revenue_bounds", 15, reason)

    if meets_min:
        return FactorScore("revenue_bounds", 5, Reason.warning("Revenue above the maximum allowed"))
    if meets_max:
        return FactorScore(
            "revenue_bounds",
            5,
            Reason.warning(f"Revenue below the required minimum ({format_brl(criteria.min_revenue)})"),
        )

    return FactorScore("revenue_bounds", 0, Reason.warning("Revenue outside the eligibility limits"))


def _score_years_of_operation(
    company: CompanyProfile,
    criteria: GrantEligibilityCriteria,
    today: Optional[date],
) -> FactorScore:
    """Minimum company age, evaluated only when both sides are known."""

    years = company.years_of_operation(today)
    if not criteria.min_years_operation or years is None:
        return FactorScore("years_of_operation", 0)

    required = f"{criteria.min_years_operation:g}"
    if years >= criteria.min_years_operation:
        return FactorScore(
            "years_of_operation",
            10,
            Reason.positive(f"Company has {int(years)} years of operation (minimum: {required})"),
        )

    return FactorScore(
        "years_of_operation",
        -15,
        Reason.blocker(f"Company needs at least {required} years of operation"),
    )


def _score_counterpart(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """Self-declared counterpart capacity vs the required percentage."""

    if not criteria.counterpart_required:
        return FactorScore("counterpart", 10, Reason.positive("No financial counterpart required"))

    required = criteria.counterpart_percentage or 0
    financial = company.financial

    if financial is None:
        return FactorScore(
            "counterpart",
            0,
            Reason.warning(f"Grant requires {required:g}% counterpart - declare your counterpart capacity"),
        )

    if not financial.has_counterpart_capacity:
        return FactorScore(
            "counterpart", 0, Reason.blocker(f"Grant requires a {required:g}% counterpart")
        )

    if financial.typical_counterpart is not None and financial.typical_counterpart >= required:
        return FactorScore(
            "counterpart",
            10,
            Reason.positive(f"Company has counterpart capacity ({required:g}% required)"),
        )

    return FactorScore(
        "counterpart", 5, Reason.warning(f"Required counterpart of {required:g}% may be challenging")
    )


def _score_partnerships(company: CompanyProfile, criteria: GrantEligibilityCriteria) -> FactorScore:
    """Required partnerships. Only EMBRAPII_UNIT is evaluated."""

    if not criteria.required_partners:
        return FactorScore("partnerships", 5, Reason.positive("No mandatory partnerships"))

    if EMBRAPII_UNIT in criteria.required_partners:
        if company.partnerships.embrapii_units:
            return FactorScore(
                "partnerships", 5, Reason.positive("Company already partners with an EMBRAPII unit")
            )
        return FactorScore(
            "partnerships", 0, Reason.warning("Requires a partnership with an EMBRAPII unit")
        )

    return FactorScore(
        "partnerships",
        0,
        Reason.warning(f"Requires partnerships: {', '.join(criteria.required_partners)}"),
    )


def _score_patents(company: CompanyProfile) -> FactorScore:
    """One point per registered or pending patent, max 5."""

    total = company.patents.total
    if total <= 0:
        return FactorScore("patents", 0)

    label = "1 patent" if total == 1 else f"{total} patents"
    return FactorScore(
        "patents",
        min(5, total),
        Reason.positive(f"Holds {label} (demonstrates innovation capacity)"),
    )


def _score_semantic(company: CompanyProfile, grant: Grant) -> FactorScore:
    bonus = semantic_bonus(company.embedding, grant.embedding)
    if not bonus:
        return FactorScore("semantic", 0)

    return FactorScore(
        "semantic",
        bonus,
        Reason.positive(f"Profile semantically similar to the call ({bonus * 10:.0f}% similarity)"),
    )


def format_brl(value: float) -> str:
    """Compact BRL amount: R$ 1.5M, R$ 250k, R$ 900."""
    if value >= 1_000_000:
        return f"R$ {value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"R$ {value / 1_000:.0f}k"
    return f"R$ {value:,.0f}"
