"""CompanyProfile - Snapshot of a company's static attributes and structured profile."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


DAYS_PER_YEAR = 365.25


class CompanySize(str, Enum):
    """Company size bands (porte) used by Brazilian funding agencies."""

    MEI = "MEI"
    MICRO = "MICRO"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class CnaeEntry(BaseModel):
    """A single economic-activity code registered for the company."""

    code: str = Field(..., description="CNAE code, e.g. 62.01-5-01")
    description: str = Field(default="", description="Activity description")
    is_primary: bool = Field(default=False, description="True for the main registered activity")

    model_config = {"frozen": True}


class FinancialProfile(BaseModel):
    """Self-declared financial capacity."""

    has_counterpart_capacity: bool = Field(default=False, description="Can self-fund part of a project")
    typical_counterpart: Optional[float] = Field(
        None, ge=0, le=100, description="Typical counterpart percentage (0-100)"
    )

    model_config = {"frozen": True}


class PatentPortfolio(BaseModel):
    """Intellectual property counts."""

    registered: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return self.registered + self.pending


class Partnerships(BaseModel):
    """Research partnerships. Only presence of EMBRAPII units is evaluated."""

    embrapii_units: list[str] = Field(default_factory=list, description="Partner EMBRAPII units")

    model_config = {"frozen": True}


class CompanyProfile(BaseModel):
    """Immutable company snapshot consumed by the matching engine.

    Hydrated by the persistence layer; the engine never queries storage.
    """

    id: str = Field(..., description="Company identifier")
    name: str = Field(default="", description="Trade name")
    size: CompanySize = Field(..., description="Company size band")
    sector: str = Field(default="", description="Free-text sector of activity")
    state: Optional[str] = Field(None, min_length=2, max_length=2, description="2-letter state code")

    annual_revenue: Optional[float] = Field(None, ge=0, description="Annual revenue in BRL")
    employee_count: Optional[int] = Field(None, ge=0, description="Number of employees")
    foundation_date: Optional[date] = Field(None, description="Company foundation date")

    cnaes: list[CnaeEntry] = Field(default_factory=list, description="Registered CNAEs, primary first")
    rd_themes: list[str] = Field(default_factory=list, description="R&D themes the company works on")
    financial: Optional[FinancialProfile] = Field(None, description="None when never declared")
    patents: PatentPortfolio = Field(default_factory=PatentPortfolio)
    partnerships: Partnerships = Field(default_factory=Partnerships)

    embedding: Optional[list[float]] = Field(None, description="Profile embedding vector")

    model_config = {"frozen": True}

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v):
        """Blank states are unknown; codes are stored upper-case."""
        if isinstance(v, str):
            v = v.strip().upper()
            return v or None
        return v

    @field_validator("sector", mode="before")
    @classmethod
    def blank_sector(cls, v):
        return "" if v is None else v

    @field_validator("cnaes")
    @classmethod
    def single_primary(cls, v: list[CnaeEntry]) -> list[CnaeEntry]:
        """At most one CNAE may be flagged as primary."""
        primaries = [c.code for c in v if c.is_primary]
        if len(primaries) > 1:
            raise ValueError(f"Only one primary CNAE allowed, got {', '.join(primaries)}")
        return v

    @property
    def primary_cnae(self) -> Optional[CnaeEntry]:
        return next((c for c in self.cnaes if c.is_primary), None)

    @property
    def cnae_codes(self) -> list[str]:
        return [c.code for c in self.cnaes]

    def years_of_operation(self, today: Optional[date] = None) -> Optional[float]:
        """Age in years, or None when the foundation date is unknown."""
        if self.foundation_date is None:
            return None
        today = today or datetime.now(timezone.utc).date()
        return (today - self.foundation_date).days / DAYS_PER_YEAR
