"""Semantic similarity between company and grant embeddings.

An optional, supplementary signal: embeddings may be stale or missing, so the
scorer only uses them as a small bonus on top of the rule-based total.
"""

from typing import Optional, Sequence

import numpy as np

from ..errors import DimensionMismatchError

MAX_SEMANTIC_BONUS = 10.0


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity between two vectors, in [-1, 1].

    Raises:
        DimensionMismatchError: If the vectors have different lengths
    """
    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)

    if vec_a.shape != vec_b.shape:
        raise DimensionMismatchError(vec_a.size, vec_b.size)

    norm_product = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if norm_product == 0:
        return 0.0

    similarity = float(np.dot(vec_a, vec_b) / norm_product)
    return max(-1.0, min(1.0, similarity))


def semantic_bonus(
    company_embedding: Optional[Sequence[float]],
    grant_embedding: Optional[Sequence[float]],
) -> Optional[float]:
    """Bonus points (0-10) from embedding similarity.

    Returns None when either embedding is absent or empty; that is an expected
    condition and the term is simply skipped. Negative similarity earns no
    bonus rather than a penalty.
    """
    if not company_embedding or not grant_embedding:
        return None

    similarity = cosine_similarity(company_embedding, grant_embedding)
    return max(0.0, similarity) * MAX_SEMANTIC_BONUS
