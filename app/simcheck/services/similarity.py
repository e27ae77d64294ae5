"""
Purpose: Pairwise cosine similarity over embedding vectors, ranked.

Conventions:
- A zero-magnitude vector has similarity 0.0 with everything.
- Scores are clamped to [-1, 1].
- Ties keep (i, j) ascending order: pairs are generated lexicographically
  and sorted with a stable sort.

Testing: Pure functions; hand-built vectors with known angles.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from ..models import SimilarityResult


def _as_matrix(vectors: Sequence[Sequence[float]]) -> np.ndarray:
    try:
        mat = np.asarray(vectors, dtype=np.float64)
    except ValueError as e:
        raise ValueError("Embedding vectors must share one dimensionality") from e
    if mat.ndim != 2 or mat.shape[1] == 0:
        raise ValueError("Expected a non-empty 2-D array of embedding vectors")
    return mat


def _rescale(mat: np.ndarray) -> np.ndarray:
    """Divide each row by its largest magnitude so norms cannot overflow or underflow."""
    peak = np.max(np.abs(mat), axis=-1, keepdims=True)
    return mat / np.where(peak == 0.0, 1.0, peak)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between a and b; 0.0 if either has zero length."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ValueError(f"Dimension mismatch: {va.shape} vs {vb.shape}")
    va = _rescale(va)
    vb = _rescale(vb)
    na = np.linalg.norm(va)
    nb = np.linalg.norm(vb)
    if na == 0.0 or nb == 0.0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / (na * nb), -1.0, 1.0))


def similarity_matrix(vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """N x N cosine matrix; rows of zero vectors score 0.0."""
    mat = _rescale(_as_matrix(vectors))
    norms = np.linalg.norm(mat, axis=1)
    safe = np.where(norms == 0.0, 1.0, norms)
    unit = mat / safe[:, None]
    sims = unit @ unit.T
    zero = norms == 0.0
    sims[zero, :] = 0.0
    sims[:, zero] = 0.0
    return np.clip(sims, -1.0, 1.0)


def rank_pairs(
    vectors: Sequence[Sequence[float]],
    labels: Sequence[str],
) -> list[SimilarityResult]:
    """
    Score every unordered pair (i, j), i < j, and sort by similarity, highest first.
    Returns all N*(N-1)/2 results.
    """
    n = len(vectors)
    if n < 2:
        raise ValueError("At least two vectors are required")
    if len(labels) != n:
        raise ValueError(f"Got {len(labels)} labels for {n} vectors")

    sims = similarity_matrix(vectors)

    results = [
        SimilarityResult(
            pair=(i, j),
            similarity=float(sims[i, j]),
            labels=(labels[i], labels[j]),
        )
        for i in range(n)
        for j in range(i + 1, n)
    ]
    return sorted(results, key=lambda r: -r.similarity)
