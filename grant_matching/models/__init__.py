"""Shared Pydantic models for grant matching - contract between engine and callers."""

from .company_profile import (
    CompanySize,
    CnaeEntry,
    FinancialProfile,
    PatentPortfolio,
    Partnerships,
    CompanyProfile,
)
from .grant import EMBRAPII_UNIT, GrantStatus, GrantEligibilityCriteria, Grant
from .match_result import (
    ReasonTag,
    Reason,
    MatchResult,
    Rating,
    RankedOpportunity,
    OpportunitySummary,
)

__all__ = [
    "CompanySize",
    "CnaeEntry",
    "FinancialProfile",
    "PatentPortfolio",
    "Partnerships",
    "CompanyProfile",
    "EMBRAPII_UNIT",
    "GrantStatus",
    "GrantEligibilityCriteria",
    "Grant",
    "ReasonTag",
    "Reason",
    "MatchResult",
    "Rating",
    "RankedOpportunity",
    "OpportunitySummary",
]
