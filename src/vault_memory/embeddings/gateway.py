"""
Embedding provider gateway.

Selects at most one active backend (first configured wins) and exposes a
fail-soft embedding interface: every failure becomes a None vector for the
affected item(s), so callers degrade to keyword-only retrieval instead of
erroring.
"""

import logging
from typing import List, Optional, Sequence

from vault_memory.config import MemorySettings
from vault_memory.embeddings.gemini_embedding import GeminiEmbedding
from vault_memory.embeddings.openai_embedding import OpenAIEmbedding
from vault_memory.embeddings.protocol import TextEmbedding
from vault_memory.models import NO_MODEL_ID

logger = logging.getLogger(__name__)


class EmbeddingGateway:
    """
    Uniform embed/embed_batch capability over interchangeable backends.

    Backends are given in priority order; the first one is the only one
    ever called. There is no blending across providers and no retry.

    Example:
        >>> gateway = EmbeddingGateway([OpenAIEmbedding(api_key="sk-...")])
        >>> gateway.model_id()
        'openai:1536'
        >>> await gateway.embed("I like phở")  # None on any failure
    """

    def __init__(self, backends: Optional[Sequence[TextEmbedding]] = None):
        self._backends = list(backends or [])
        self._active: Optional[TextEmbedding] = self._backends[0] if self._backends else None

        if self._active is None:
            logger.info("No embedding provider configured, using keyword-only retrieval")
        else:
            logger.info(
                f"Embedding provider selected: {self._active.provider} "
                f"({self._active.model_name}, {self._active.dimension} dimensions)"
            )

    @classmethod
    def from_keys(
        cls,
        openai_api_key: Optional[str] = None,
        gemini_api_key: Optional[str] = None,
        settings: Optional[MemorySettings] = None,
    ) -> "EmbeddingGateway":
        """
        Build a gateway from API keys in fixed priority order: OpenAI, then Gemini.

        Blank keys count as unset. Model names, dimensions and timeouts come
        from settings when given, otherwise the backend defaults apply.
        """
        backends: List[TextEmbedding] = []
        if openai_api_key and openai_api_key.strip():
            kwargs = {}
            if settings is not None:
                kwargs = dict(
                    model=settings.openai_embedding_model,
                    dimensions=settings.openai_embedding_dimensions,
                    base_url=settings.openai_base_url,
                    timeout=settings.embedding_timeout,
                )
            backends.append(OpenAIEmbedding(api_key=openai_api_key.strip(), **kwargs))
        if gemini_api_key and gemini_api_key.strip():
            kwargs = {}
            if settings is not None:
                kwargs = dict(
                    model=settings.gemini_embedding_model,
                    dimensions=settings.gemini_embedding_dimensions,
                    timeout=settings.embedding_timeout,
                )
            backends.append(GeminiEmbedding(api_key=gemini_api_key.strip(), **kwargs))
        return cls(backends)

    @classmethod
    def from_settings(cls, settings: MemorySettings) -> "EmbeddingGateway":
        return cls.from_keys(
            openai_api_key=settings.openai_api_key,
            gemini_api_key=settings.gemini_api_key,
            settings=settings,
        )

    @property
    def active(self) -> Optional[TextEmbedding]:
        """The backend in use, or None when no provider is configured."""
        return self._active

    @property
    def provider(self) -> Optional[str]:
        return self._active.provider if self._active else None

    @property
    def is_active(self) -> bool:
        return self._active is not None

    def model_id(self) -> str:
        """
        Identity of the vectors this gateway produces.

        "<provider>:<dimension>" (e.g. "openai:1536"), or "none" without a
        provider. Changes exactly when the backend or its dimension changes.
        """
        if self._active is None:
            return NO_MODEL_ID
        return f"{self._active.provider}:{self._active.dimension}"

    @staticmethod
    def _usable(vector: Optional[List[float]]) -> Optional[List[float]]:
        return list(vector) if vector else None

    async def embed(self, text: str) -> Optional[List[float]]:
        """
        Embed one text.

        Returns:
            The vector, or None if no provider is active or the call failed
        """
        if self._active is None:
            return None

        # Custom backends may raise anything, not just EmbeddingProviderError.
        try:
            vector = await self._active.embed_document(text)
        except Exception as e:
            logger.warning(f"Embedding failed, continuing without vector: {e}")
            return None

        return self._usable(vector)

    async def embed_batch(self, texts: Sequence[str]) -> List[Optional[List[float]]]:
        """
        Embed many texts, preserving input order and length.

        Inputs are split into sub-batches of the backend's max_batch_size and
        sent one after another. A failed sub-batch yields None for each of its
        items; later sub-batches are still attempted.
        """
        texts = list(texts)
        results: List[Optional[List[float]]] = [None] * len(texts)
        if self._active is None or not texts:
            return results

        batch_size = max(1, self._active.max_batch_size)
        for start in range(0, len(texts), batch_size):
            batch = texts[start : start + batch_size]
            try:
                vectors = await self._active.embed_documents(batch)
            except Exception as e:
                logger.warning(
                    f"Batch embedding failed for items {start}-{start + len(batch) - 1}: {e}"
                )
                continue

            for offset, vector in enumerate(vectors[: len(batch)]):
                results[start + offset] = self._usable(vector)

            logger.debug(f"Embedded batch of {len(batch)} texts starting at {start}")

        return results

    async def aclose(self) -> None:
        """Release HTTP resources held by backends that keep a client open."""
        for backend in self._backends:
            close = getattr(backend, "aclose", None)
            if close is not None:
                await close()
