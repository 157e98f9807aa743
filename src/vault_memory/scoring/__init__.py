"""
Relevance scoring for memory recall.

- BM25Scorer: lexical relevance with diacritic-insensitive tokens
- cosine_similarity / score_cosine: semantic relevance from embeddings
- normalize_scores / combine_scores / rank: blending policy
"""

from vault_memory.scoring.bm25 import BM25Scorer, Candidate
from vault_memory.scoring.combiner import (
    BM25_WEIGHT,
    COSINE_WEIGHT,
    combine_scores,
    normalize_scores,
    rank,
)
from vault_memory.scoring.cosine import cosine_similarity, score_cosine

__all__ = [
    "BM25Scorer",
    "Candidate",
    "cosine_similarity",
    "score_cosine",
    "normalize_scores",
    "combine_scores",
    "rank",
    "BM25_WEIGHT",
    "COSINE_WEIGHT",
]
