"""MatchResult and Rating - Derived outputs of the matching engine.

Computed on demand; persisting them is the caller's responsibility.
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, computed_field

from .grant import Grant


class ReasonTag(str, Enum):
    POSITIVE = "POSITIVE"
    WARNING = "WARNING"
    BLOCKER = "BLOCKER"


class Reason(BaseModel):
    """One classified explanation emitted by a scoring factor."""

    tag: ReasonTag
    text: str

    model_config = {"frozen": True}

    @classmethod
    def positive(cls, text: str) -> "Reason":
        return cls(tag=ReasonTag.POSITIVE, text=text)

    @classmethod
    def warning(cls, text: str) -> "Reason":
        return cls(tag=ReasonTag.WARNING, text=text)

    @classmethod
    def blocker(cls, text: str) -> "Reason":
        return cls(tag=ReasonTag.BLOCKER, text=text)


class MatchResult(BaseModel):
    """Fit of a company for a grant.

    ``eligible`` is derived from the reasons: a single BLOCKER disqualifies,
    whatever the numeric score.
    """

    grant_id: str = Field(..., description="Links to Grant.id")
    score: int = Field(..., ge=0, le=100, description="Bounded match score")
    reasons: list[Reason] = Field(default_factory=list, description="Ordered, factor by factor")

    model_config = {"frozen": True}

    @computed_field
    @property
    def eligible(self) -> bool:
        return not any(r.tag == ReasonTag.BLOCKER for r in self.reasons)

    @property
    def blockers(self) -> list[str]:
        return [r.text for r in self.reasons if r.tag == ReasonTag.BLOCKER]

    @property
    def warnings(self) -> list[str]:
        return [r.text for r in self.reasons if r.tag == ReasonTag.WARNING]

    @property
    def positives(self) -> list[str]:
        return [r.text for r in self.reasons if r.tag == ReasonTag.POSITIVE]


class Rating(BaseModel):
    """Overall opportunity quality used to decide what to surface first."""

    value: int = Field(..., ge=0, le=100, description="Composite rating")
    match_score: int = Field(..., ge=0, le=100)
    value_score: float = Field(..., ge=0, le=1, description="Grant size vs company scale")
    ease_score: float = Field(..., ge=0, le=1, description="Qualification complexity and deadline pressure")

    model_config = {"frozen": True}


class RankedOpportunity(BaseModel):
    """A grant evaluated for one company."""

    grant: Grant
    match: MatchResult
    rating: Rating

    model_config = {"frozen": True}


class OpportunitySummary(BaseModel):
    """Headline numbers for a company's ranked opportunities."""

    total_evaluated: int = Field(..., ge=0)
    recommended_grants: int = Field(..., ge=0, description="Matches at or above the high-match threshold")
    average_match_score: int = Field(..., ge=0, le=100, description="Average over the top ranked grants")
    days_to_deadline: Optional[int] = Field(None, description="Days until the first ranked deadline")
    deadline_grant_title: Optional[str] = Field(None)
    next_deadline: Optional[date] = Field(None)
