"""Cosine similarity between embedding vectors."""

import math
from typing import Dict, Mapping, Optional, Sequence


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors, in [-1, 1].

    Returns 0.0 when the lengths differ or either vector has zero magnitude.
    """
    if len(a) != len(b):
        return 0.0

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denominator == 0:
        return 0.0
    # Rounding can push identical vectors a hair past 1.
    return max(-1.0, min(1.0, dot / denominator))


def score_cosine(
    query_vector: Sequence[float], candidate_vectors: Mapping[str, Optional[Sequence[float]]]
) -> Dict[str, float]:
    """
    Similarity of the query vector to each candidate's cached vector.

    Candidates without a vector score 0.0 and stay in the result, so entries
    that have not been embedded yet still take part in ranking.
    """
    return {
        candidate_id: cosine_similarity(query_vector, vector) if vector else 0.0
        for candidate_id, vector in candidate_vectors.items()
    }
