"""Shared fixtures: deterministic in-process embedding backends."""

import zlib
from typing import Dict, List, Optional

import pytest

from vault_memory.errors import EmbeddingProviderError
from vault_memory.utils.text_normalizer import tokenize


class FakeEmbedding:
    """
    Deterministic TextEmbedding for tests.

    Vectors are hashed bags of normalized tokens, so texts sharing words are
    similar. Explicit vectors can be pinned per text. Every call is recorded.
    """

    def __init__(
        self,
        provider: str = "fake",
        dimension: int = 16,
        max_batch_size: int = 100,
        fail: bool = False,
        vectors: Optional[Dict[str, List[float]]] = None,
    ):
        self._provider = provider
        self._dimension = dimension
        self._max_batch_size = max_batch_size
        self.fail = fail
        self.vectors = vectors or {}
        self.single_calls: List[str] = []
        self.batch_calls: List[List[str]] = []

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return f"{self._provider}-test-model"

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    def vector_for(self, text: str) -> List[float]:
        if text in self.vectors:
            return self.vectors[text]
        vector = [0.0] * self._dimension
        for token in tokenize(text):
            vector[zlib.crc32(token.encode("utf-8")) % self._dimension] += 1.0
        return vector

    async def embed_document(self, text: str) -> List[float]:
        self.single_calls.append(text)
        if self.fail:
            raise EmbeddingProviderError(self._provider, "simulated transport error")
        return self.vector_for(text)

    async def embed_query(self, text: str) -> List[float]:
        return await self.embed_document(text)

    async def embed_documents(self, texts: List[str]) -> List[Optional[List[float]]]:
        self.batch_calls.append(list(texts))
        if self.fail:
            raise EmbeddingProviderError(self._provider, "simulated transport error")
        return [self.vector_for(text) for text in texts]


@pytest.fixture
def fake_backend():
    """A healthy fake embedding backend."""
    return FakeEmbedding()


@pytest.fixture
def failing_backend():
    """A fake backend whose every call fails."""
    return FakeEmbedding(fail=True)


@pytest.fixture
def embedding_factory():
    """The FakeEmbedding class, for tests that need custom backends."""
    return FakeEmbedding
