"""Shape checks for embedding responses, shared by every provider."""

from __future__ import annotations
import math
from numbers import Real
from typing import Any

from ..errors import ServiceError


def coerce_embeddings(raw: Any, expected: int) -> list[list[float]]:
    """
    Turn a provider response into a list of float vectors.
    - Accepts lists, tuples and numpy arrays (anything with .tolist()).
    - Raises ServiceError on wrong count, empty or ragged vectors,
      and non-numeric or non-finite values.
    """
    if hasattr(raw, "tolist"):
        raw = raw.tolist()
    if not isinstance(raw, (list, tuple)):
        raise ServiceError(f"Malformed embedding response: {type(raw).__name__}")
    if len(raw) != expected:
        raise ServiceError(
            f"Embedding count mismatch: expected {expected}, got {len(raw)}"
        )

    vectors: list[list[float]] = []
    dim = None
    for idx, vec in enumerate(raw):
        if hasattr(vec, "tolist"):
            vec = vec.tolist()
        if not isinstance(vec, (list, tuple)) or not vec:
            raise ServiceError(f"Embedding {idx} is empty or not a sequence")
        if dim is None:
            dim = len(vec)
        elif len(vec) != dim:
            raise ServiceError(
                f"Embedding {idx} has dimension {len(vec)}, expected {dim}"
            )
        out = []
        for v in vec:
            if isinstance(v, bool) or not isinstance(v, Real):
                raise ServiceError(f"Embedding {idx} has a non-numeric value")
            f = float(v)
            if not math.isfinite(f):
                raise ServiceError(f"Embedding {idx} has a non-finite value")
            out.append(f)
        vectors.append(out)
    return vectors
