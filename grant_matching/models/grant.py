"""Grant and GrantEligibilityCriteria - Funding opportunity and its admission rules."""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .company_profile import CompanySize


EMBRAPII_UNIT = "EMBRAPII_UNIT"


class GrantStatus(str, Enum):
    UPCOMING = "UPCOMING"
    OPEN = "OPEN"
    CLOSING_SOON = "CLOSING_SOON"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class GrantEligibilityCriteria(BaseModel):
    """Admission rules attached to a grant.

    Every field is optional. An absent field and an empty list both mean
    "no restriction" and earn the neutral credit documented per factor in the
    scorer.
    """

    # Size
    company_size: Optional[list[CompanySize]] = Field(None, description="Allowed company sizes")
    max_employees: Optional[int] = Field(None, ge=0, description="Employee ceiling")

    # Location
    states: Optional[list[str]] = Field(None, description="Allowed 2-letter state codes")

    # Sector (soft preference)
    priority_sectors: Optional[list[str]] = Field(None, description="Preferred sectors")
    priority_themes: Optional[list[str]] = Field(None, description="Preferred R&D themes")

    # Activity codes
    cnae_codes: Optional[list[str]] = Field(None, description="Accepted CNAE codes")
    excluded_activities: Optional[list[str]] = Field(None, description="Disqualifying CNAE codes")

    # Financial
    min_revenue: Optional[float] = Field(None, ge=0, description="Minimum annual revenue (BRL)")
    max_revenue: Optional[float] = Field(None, ge=0, description="Maximum annual revenue (BRL)")

    # Age
    min_years_operation: Optional[float] = Field(None, ge=0, description="Minimum years of existence")

    # Counterpart
    counterpart_required: bool = Field(default=False, description="Company must co-fund the project")
    counterpart_percentage: Optional[float] = Field(None, ge=0, le=100, description="Required counterpart %")

    # Partnerships
    required_partners: Optional[list[str]] = Field(None, description="Partner-type tags, e.g. EMBRAPII_UNIT")

    model_config = {"frozen": True}

    @property
    def has_revenue_bounds(self) -> bool:
        return bool(self.min_revenue or self.max_revenue)


class Grant(BaseModel):
    """Funding opportunity as supplied by the persistence layer."""

    id: str = Field(..., description="Grant identifier")
    title: str = Field(default="", description="Call title")
    agency: Optional[str] = Field(None, description="Issuing agency, e.g. FINEP, FAPESP")

    value_min: Optional[float] = Field(None, ge=0, description="Minimum funding (BRL)")
    value_max: Optional[float] = Field(None, ge=0, description="Maximum funding (BRL)")
    deadline: Optional[date] = Field(None, description="Submission deadline")
    status: GrantStatus = Field(default=GrantStatus.OPEN)

    embedding: Optional[list[float]] = Field(None, description="Call text embedding vector")
    eligibility_criteria: Optional[GrantEligibilityCriteria] = Field(
        None, description="None means the grant is open to all companies"
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "finep-subvencao-2025",
                "title": "Subvenção Econômica à Inovação",
                "agency": "FINEP",
                "value_min": 500000.0,
                "value_max": 3000000.0,
                "deadline": "2025-11-30",
                "status": "OPEN",
                "eligibility_criteria": {
                    "company_size": ["SMALL", "MEDIUM"],
                    "states": ["SP"],
                    "cnae_codes": ["62.01-5-01", "62.02-3-00"],
                    "counterpart_required": True,
                    "counterpart_percentage": 10,
                },
            }
        },
    }
