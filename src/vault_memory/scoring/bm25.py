"""
BM25 lexical scoring over a small, ad-hoc candidate set.

Document frequencies and average length are computed per call from the
candidates themselves; there is no persistent index.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence

from vault_memory.utils.text_normalizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A document to score: correlation id plus the text to match against."""

    id: str
    text: str


class BM25Scorer:
    """
    Classic Okapi BM25.

    score(D, Q) = sum over query tokens q of
        idf(q) * tf(q, D) * (k1 + 1) / (tf(q, D) + k1 * (1 - b + b * |D| / avgdl))

    with idf(q) = ln((N - df(q) + 0.5) / (df(q) + 0.5) + 1), which stays
    positive even when a token appears in every candidate.

    Repeated query tokens contribute once per occurrence.
    """

    def __init__(self, k1: float = 1.5, b: float = 0.75):
        self.k1 = k1
        self.b = b

    def score(self, query: str, candidates: Sequence[Candidate]) -> Dict[str, float]:
        """
        Score every candidate against the query.

        Args:
            query: Free-text query (normalized and tokenized internally)
            candidates: Documents to rank

        Returns:
            Raw BM25 score per candidate id (0.0 for candidates sharing no
            token with the query). Empty when the query has no tokens, which
            callers must treat as "no lexical signal".
        """
        query_tokens = tokenize(query)
        if not query_tokens or not candidates:
            return {}

        doc_tokens: List[List[str]] = [tokenize(c.text) for c in candidates]
        n_docs = len(candidates)
        avg_len = sum(len(tokens) for tokens in doc_tokens) / n_docs

        doc_sets = [set(tokens) for tokens in doc_tokens]
        idf: Dict[str, float] = {}
        for token in set(query_tokens):
            df = sum(1 for doc in doc_sets if token in doc)
            idf[token] = math.log((n_docs - df + 0.5) / (df + 0.5) + 1)

        scores: Dict[str, float] = {}
        for candidate, tokens in zip(candidates, doc_tokens):
            tf = Counter(tokens)
            length_norm = 1 - self.b + self.b * (len(tokens) / avg_len if avg_len else 0.0)
            total = 0.0
            for token in query_tokens:
                freq = tf.get(token, 0)
                if freq == 0:
                    continue
                total += idf[token] * (freq * (self.k1 + 1)) / (freq + self.k1 * length_norm)
            scores[candidate.id] = total

        logger.debug(
            f"BM25 scored {n_docs} candidates for {len(query_tokens)} query tokens "
            f"({sum(1 for s in scores.values() if s > 0)} matched)"
        )
        return scores
