"""CNAE matcher for Brazilian grant eligibility.

CNAE codes are hierarchical (``division.group-class/subclass``, e.g.
``62.01-5-01``). An exact match with the primary activity is the strongest
evidence, a secondary exact match is weaker, a shared division is weak
evidence, and no match at all is a strong negative signal. Only the excluded
list disqualifies outright.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from ..models.company_profile import CnaeEntry
from ..models.match_result import Reason

# Points contributed to the match score per tier
EXCLUDED_POINTS = -50
UNRESTRICTED_POINTS = 12
MISSING_DATA_POINTS = 5
PRIMARY_MATCH_POINTS = 25
SECONDARY_MATCH_POINTS = 15
DIVISION_MATCH_POINTS = 10
NO_MATCH_POINTS = -20

MAX_EXAMPLE_CODES = 3


class CnaeTier(str, Enum):
    EXCLUDED = "EXCLUDED"
    UNRESTRICTED = "UNRESTRICTED"
    MISSING_DATA = "MISSING_DATA"
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    DIVISION = "DIVISION"
    NO_MATCH = "NO_MATCH"


@dataclass(frozen=True)
class CnaeMatch:
    """Outcome of matching a company's CNAEs against a grant's code lists."""

    tier: CnaeTier
    points: int
    reason: Optional[Reason] = None


def cnae_division(code: str) -> str:
    """Return the division of a CNAE code (text before the first dot)."""
    return code.strip().split(".", 1)[0]


def match_cnae(
    company_cnaes: Sequence[CnaeEntry],
    accepted_codes: Optional[Iterable[str]] = None,
    excluded_codes: Optional[Iterable[str]] = None,
) -> CnaeMatch:
    """Classify company CNAEs against accepted and excluded code lists.

    Tiers are evaluated in order and the first applicable one wins:

    1. Any company code excluded          -> BLOCKER, -50
    2. No accepted list                   -> +12
    3. Company has no CNAE data           -> WARNING, +5
    4. Primary code accepted              -> +25
    5. A secondary code accepted          -> +15
    6. Same division as an accepted code  -> WARNING, +10
    7. No match                           -> WARNING, -20

    Args:
        company_cnaes: Company codes in registration order
        accepted_codes: Codes the grant accepts (None/empty = unrestricted)
        excluded_codes: Codes that disqualify the company

    Returns:
        CnaeMatch with tier, score contribution and optional reason
    """

    excluded = set(excluded_codes or [])
    accepted = list(dict.fromkeys(accepted_codes or []))
    codes = [c.code for c in company_cnaes]

    hits = [code for code in codes if code in excluded]
    if hits:
        return CnaeMatch(
            tier=CnaeTier.EXCLUDED,
            points=EXCLUDED_POINTS,
            reason=Reason.blocker(
                f"CNAE {hits[0]} is in this grant's list of excluded activities"
            ),
        )

    if not accepted:
        return CnaeMatch(tier=CnaeTier.UNRESTRICTED, points=UNRESTRICTED_POINTS)

    if not codes:
        return CnaeMatch(
            tier=CnaeTier.MISSING_DATA,
            points=MISSING_DATA_POINTS,
            reason=Reason.warning(
                "This grant restricts eligible CNAEs - add your CNAEs for precise matching"
            ),
        )

    accepted_set = set(accepted)
    primary = next((c for c in company_cnaes if c.is_primary), None)

    if primary and primary.code in accepted_set:
        return CnaeMatch(
            tier=CnaeTier.PRIMARY,
            points=PRIMARY_MATCH_POINTS,
            reason=Reason.positive(f"Primary CNAE {primary.code} is eligible for this grant"),
        )

    secondary = next(
        (c.code for c in company_cnaes if not c.is_primary and c.code in accepted_set),
        None,
    )
    if secondary:
        return CnaeMatch(
            tier=CnaeTier.SECONDARY,
            points=SECONDARY_MATCH_POINTS,
            reason=Reason.positive(f"Secondary CNAE {secondary} is eligible for this grant"),
        )

    company_divisions = {cnae_division(code) for code in codes}
    if any(cnae_division(code) in company_divisions for code in accepted):
        return CnaeMatch(
            tier=CnaeTier.DIVISION,
            points=DIVISION_MATCH_POINTS,
            reason=Reason.warning(
                "CNAE in the same division as an accepted code - verify the exact requirements"
            ),
        )

    examples = ", ".join(accepted[:MAX_EXAMPLE_CODES])
    if len(accepted) > MAX_EXAMPLE_CODES:
        examples += "..."
    return CnaeMatch(
        tier=CnaeTier.NO_MATCH,
        points=NO_MATCH_POINTS,
        reason=Reason.warning(f"No CNAE in the accepted list - accepted CNAEs: {examples}"),
    )
