"""
Test suite for cosine similarity.

System role: Verification of vector scoring identities
"""

import numpy as np
import pytest

from rag_service.boundary.vdb.similarity import cosine_similarity


def random_vectors(count: int, dimensions: int = 384, seed: int = 7) -> list[list[float]]:
    rng = np.random.default_rng(seed)
    return rng.normal(size=(count, dimensions)).tolist()


class TestCosineSimilarity:
    """Cosine identities and degenerate inputs."""

    def test_identical_vectors_score_exactly_one(self):
        for vector in random_vectors(200):
            assert cosine_similarity(vector, vector) == 1.0

    def test_orthogonal_vectors_score_zero(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors_score_exactly_minus_one(self):
        for vector in random_vectors(200, seed=11):
            negated = [-value for value in vector]

            assert cosine_similarity(vector, negated) == -1.0

    def test_similarity_is_symmetric(self):
        vectors = random_vectors(40, seed=3)
        pairs = list(zip(vectors[::2], vectors[1::2])) + [
            ([1.0, 2.0, 3.0], [3.0, -1.0, 0.5]),
            ([0.1, 0.0, 0.9], [0.7, 0.7, 0.0]),
        ]

        for a, b in pairs:
            assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 1.0], [5.0, 5.0]) == pytest.approx(1.0)

    def test_dimension_mismatch_scores_zero(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0

    def test_zero_magnitude_scores_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0

    def test_empty_vectors_score_zero(self):
        assert cosine_similarity([], []) == 0.0

    def test_result_stays_in_range(self):
        score = cosine_similarity([0.1, 0.2, 0.3], [0.1, 0.2, 0.3000001])

        assert -1.0 <= score <= 1.0
