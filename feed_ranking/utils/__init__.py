"""Shared utilities for similarity and embedding vectors."""

from .similarity import cosine_similarity, rank_by_similarity
from .vectors import coerce_embedding, format_embedding, mean_vector, parse_embedding

__all__ = [
    "cosine_similarity",
    "rank_by_similarity",
    "coerce_embedding",
    "format_embedding",
    "mean_vector",
    "parse_embedding",
]
