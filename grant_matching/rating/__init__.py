"""Composite opportunity rating (match + value + ease)."""

from .composer import compose_rating, value_score, ease_score, deadline_adjustment, days_until
from .weights import DEFAULT_WEIGHTS, RatingWeights, load_weights, save_weights

__all__ = [
    "compose_rating",
    "value_score",
    "ease_score",
    "deadline_adjustment",
    "days_until",
    "DEFAULT_WEIGHTS",
    "RatingWeights",
    "load_weights",
    "save_weights",
]
