"""Rule-weighted match scoring engine for company/grant pairs."""

from .engine import score_match, clamp_score, FactorScore, OPEN_GRANT_SCORE
from .semantic import cosine_similarity, semantic_bonus, MAX_SEMANTIC_BONUS

__all__ = [
    "score_match",
    "clamp_score",
    "FactorScore",
    "OPEN_GRANT_SCORE",
    "cosine_similarity",
    "semantic_bonus",
    "MAX_SEMANTIC_BONUS",
]
