"""
Similarity utilities: cosine similarity for taste matching.
"""

from typing import List, Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")


def cosine_similarity(v1: List[float], v2: List[float]) -> float:
    """Compute cosine similarity between two vectors."""
    if v1 is None or v2 is None or len(v1) == 0 or len(v2) == 0:
        return 0.0
    v1 = np.asarray(v1, dtype=float)
    v2 = np.asarray(v2, dtype=float)
    dot_product = np.dot(v1, v2)
    norm_product = np.linalg.norm(v1) * np.linalg.norm(v2)
    return float(dot_product / norm_product) if norm_product > 0 else 0.0


def rank_by_similarity(
    taste: List[float],
    candidates: Sequence[Tuple[T, List[float]]],
    limit: int,
) -> List[Tuple[T, float]]:
    """
    Order (item, embedding) pairs by descending cosine similarity to taste.

    Mirrors the datastore's `1 - (embedding <=> taste)` ordering. Sort is
    stable, so equal similarities keep candidate order.
    """
    if limit <= 0:
        return []
    scored = [(item, cosine_similarity(emb, taste)) for item, emb in candidates]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:limit]
