"""
Score normalization and blending.

Each scorer's raw output is min-max normalized over the current candidate
set, then blended: 0.3 * bm25 + 0.7 * cosine when vectors were used, bm25
alone otherwise.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

BM25_WEIGHT = 0.3
COSINE_WEIGHT = 0.7


def normalize_scores(scores: Mapping[str, float]) -> Dict[str, float]:
    """
    Min-max normalize scores into [0, 1].

    When every score is equal the range is zero; each score then maps to
    1.0 if the shared value is positive, else 0.0.
    """
    if not scores:
        return {}

    low = min(scores.values())
    high = max(scores.values())
    spread = high - low

    if spread == 0:
        return {key: 1.0 if value > 0 else 0.0 for key, value in scores.items()}
    return {key: (value - low) / spread for key, value in scores.items()}


def combine_scores(
    ids: Iterable[str],
    bm25_norm: Mapping[str, float],
    cosine_norm: Optional[Mapping[str, float]] = None,
) -> Dict[str, float]:
    """
    Blend normalized scores per id.

    Ids missing from a score map count as 0. Passing cosine_norm=None means
    the vector scorer did not run and the result is the BM25 score.
    """
    combined: Dict[str, float] = {}
    for key in ids:
        lexical = bm25_norm.get(key, 0.0)
        if cosine_norm is None:
            combined[key] = lexical
        else:
            combined[key] = BM25_WEIGHT * lexical + COSINE_WEIGHT * cosine_norm.get(key, 0.0)
    return combined


def rank(
    ordered_ids: Iterable[str], final_scores: Mapping[str, float], limit: int
) -> List[Tuple[str, float]]:
    """
    Top `limit` ids by final score, dropping anything <= 0.

    The sort is stable, so ids with equal scores keep the order they were
    given in.
    """
    scored = [(key, final_scores.get(key, 0.0)) for key in ordered_ids]
    scored = [item for item in scored if item[1] > 0]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored[:limit]
