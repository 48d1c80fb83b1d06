"""
Embedding vector helpers: validation, averaging, and the text encoding.

Embeddings are written to the datastore as a bracketed, comma-separated list
of floats ("[0.1,0.2,0.3]"), the input format of the pgvector `vector` type.
"""

import json
import numbers
from typing import Any, List, Optional, Sequence

import numpy as np


def coerce_embedding(value: Any) -> Optional[List[float]]:
    """
    Return value as a list of floats if it is a non-empty sequence of real
    numbers, else None. Booleans and NaN/inf are rejected.
    """
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if not isinstance(value, (list, tuple)) or not value:
        return None
    out = []
    for v in value:
        if isinstance(v, bool) or not isinstance(v, numbers.Real):
            return None
        f = float(v)
        if not np.isfinite(f):
            return None
        out.append(f)
    return out


def format_embedding(values: Sequence[float]) -> str:
    """Encode an embedding as pgvector text: "[v1,v2,...]"."""
    return "[" + ",".join(repr(float(v)) for v in values) + "]"


def parse_embedding(value: Any) -> List[float]:
    """
    Decode an embedding read back from the datastore.

    Accepts the bracketed text form, a numpy array (pgvector's SQLAlchemy
    type returns float32 arrays), or any sequence of numbers.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed embedding text: {value[:40]!r}") from e
    vector = coerce_embedding(value)
    if vector is None:
        raise ValueError("Embedding must be a non-empty sequence of numbers")
    return vector


def mean_vector(vectors: Sequence[Sequence[float]]) -> Optional[List[float]]:
    """
    Element-wise arithmetic mean of equally sized vectors (not normalized).

    Returns None for no vectors. Raises ValueError on mismatched dimensions.
    """
    if not vectors:
        return None
    dims = {len(v) for v in vectors}
    if len(dims) != 1:
        raise ValueError(f"Cannot average embeddings of differing dimensions: {sorted(dims)}")
    stacked = np.asarray(vectors, dtype=float)
    return stacked.mean(axis=0).tolist()
