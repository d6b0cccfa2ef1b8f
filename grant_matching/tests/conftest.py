"""Pytest configuration and fixtures."""

from datetime import date, timedelta

import pytest

from grant_matching.models import (
    CnaeEntry,
    CompanyProfile,
    CompanySize,
    Grant,
    GrantEligibilityCriteria,
)

TODAY = date(2025, 6, 1)


@pytest.fixture
def today():
    """Fixed reference date so age and deadline computations are stable."""
    return TODAY


@pytest.fixture
def make_company():
    """Factory for a bare company: SMALL, no optional data."""

    def _make(**overrides) -> CompanyProfile:
        defaults = dict(id="company-1", name="Acme Tecnologia", size=CompanySize.SMALL)
        defaults.update(overrides)
        return CompanyProfile(**defaults)

    return _make


@pytest.fixture
def make_grant():
    """Factory for a grant. Pass ``criteria={...}`` to attach eligibility criteria."""

    def _make(criteria=None, **overrides) -> Grant:
        defaults = dict(id="grant-1", title="Subvenção Econômica", agency="FINEP")
        defaults.update(overrides)
        if criteria is not None:
            defaults["eligibility_criteria"] = GrantEligibilityCriteria(**criteria)
        return Grant(**defaults)

    return _make


@pytest.fixture
def software_company(make_company):
    """Scenario company: primary CNAE 62.01-5-01, SMALL, SP, R$ 1.5M revenue."""
    return make_company(
        id="software-sp",
        sector="Tecnologia da Informação",
        state="SP",
        annual_revenue=1_500_000,
        employee_count=25,
        foundation_date=TODAY - timedelta(days=8 * 365),
        cnaes=[
            CnaeEntry(code="62.01-5-01", description="Desenvolvimento de software sob encomenda", is_primary=True),
            CnaeEntry(code="62.04-0-00", description="Consultoria em tecnologia da informação"),
        ],
    )


@pytest.fixture
def finep_grant(make_grant):
    """Scenario grant matching the software company on CNAE, size and state."""
    return make_grant(
        id="finep-2025",
        value_min=500_000,
        value_max=3_000_000,
        deadline=TODAY + timedelta(days=45),
        criteria=dict(
            cnae_codes=["62.01-5-01"],
            company_size=["SMALL", "MEDIUM"],
            states=["SP"],
        ),
    )
