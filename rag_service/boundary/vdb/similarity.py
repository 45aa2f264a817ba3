"""
Vector similarity functions.

Dependencies: numpy
System role: Cosine scoring for the vector index
"""

import math
from collections.abc import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two vectors.

    Vectors of different length are not comparable and score 0.0, as do
    vectors with zero magnitude.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: dot(a, b) / sqrt(|a|^2 * |b|^2), clipped to [-1, 1]
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    # A single sqrt over both squared norms makes (v, v) score exactly 1.0
    norm_a2 = float(np.dot(va, va))
    norm_b2 = float(np.dot(vb, vb))
    if norm_a2 == 0.0 or norm_b2 == 0.0:
        return 0.0

    score = float(np.dot(va, vb)) / math.sqrt(norm_a2 * norm_b2)
    return max(-1.0, min(1.0, score))
