"""
Unit tests for BM25 scoring.
"""

import math

import pytest

from vault_memory.scoring.bm25 import BM25Scorer, Candidate


@pytest.fixture
def scorer():
    return BM25Scorer()


@pytest.fixture
def candidates():
    return [
        Candidate(id="1", text="fact I live in Hà Nội"),
        Candidate(id="2", text="preference Thích uống cà phê sữa đá mỗi sáng"),
        Candidate(id="3", text="fact I work as a software engineer in Hà Nội"),
    ]


def test_default_parameters(scorer):
    assert scorer.k1 == 1.5
    assert scorer.b == 0.75


def test_unique_token_ranks_its_document_first(scorer, candidates):
    scores = scorer.score("ca phe", candidates)

    assert scores["2"] > 0
    assert scores["1"] == 0
    assert scores["3"] == 0


def test_every_candidate_gets_a_score(scorer, candidates):
    scores = scorer.score("engineer", candidates)

    assert set(scores) == {"1", "2", "3"}


def test_empty_query_returns_no_signal(scorer, candidates):
    assert scorer.score("", candidates) == {}
    assert scorer.score(" ,.! ", candidates) == {}


def test_no_candidates(scorer):
    assert scorer.score("anything", []) == {}


def test_rarer_term_scores_higher(scorer, candidates):
    """'engineer' appears once, 'ha noi' twice: the rarer term carries more weight."""
    scores = scorer.score("engineer noi", candidates)

    assert scores["3"] > scores["1"]


def test_shorter_document_wins_for_same_term(scorer):
    docs = [
        Candidate(id="short", text="pizza"),
        Candidate(id="long", text="pizza with a very long description of many other things"),
    ]

    scores = scorer.score("pizza", docs)

    assert scores["short"] > scores["long"]


def test_single_document_score_matches_formula(scorer):
    """N=1, df=1, |D|=avgdl: score = ln(1 + 1/3) * tf*(k1+1)/(tf+k1)."""
    scores = scorer.score("pho", [Candidate(id="a", text="pho bo")])

    idf = math.log((1 - 1 + 0.5) / (1 + 0.5) + 1)
    expected = idf * (1 * 2.5) / (1 + 1.5)
    assert scores["a"] == pytest.approx(expected)


def test_query_matches_without_diacritics(scorer, candidates):
    accented = scorer.score("cà phê", candidates)
    plain = scorer.score("ca phe", candidates)

    assert accented == plain
