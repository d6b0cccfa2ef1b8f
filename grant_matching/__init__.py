"""Grant matching engine: eligibility, match scoring and opportunity rating."""

from .errors import DimensionMismatchError, GrantMatchingError
from .eligibility import match_cnae
from .rating import compose_rating
from .ranking import rank_opportunities, summarize_opportunities
from .scorer import cosine_similarity, score_match

__all__ = [
    "DimensionMismatchError",
    "GrantMatchingError",
    "match_cnae",
    "compose_rating",
    "rank_opportunities",
    "summarize_opportunities",
    "cosine_similarity",
    "score_match",
]
