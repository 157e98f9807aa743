"""Gemini embedding adapter for vault-memory."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from vault_memory.embeddings.models import (
    GeminiBatchEmbedContentsResponse,
    GeminiEmbedContentResponse,
)
from vault_memory.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


class GeminiEmbedding:
    """
    Embedding adapter using the Gemini (Generative Language) REST API.

    Single texts go to models/{model}:embedContent with
    {"content": {"parts": [{"text": ...}]}} and come back as
    {"embedding": {"values": [...]}}. Batches of up to 100 texts go to
    models/{model}:batchEmbedContents and come back as
    {"embeddings": [{"values": [...]}]} in request order.

    The API key is sent in the x-goog-api-key header so it never appears
    in logged URLs.

    Example:
        >>> embedder = GeminiEmbedding(api_key="AIza...")
        >>> vector = await embedder.embed_document("Tôi thích cà phê")
        >>> len(vector)
        768
    """

    MAX_BATCH_SIZE = 100

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-004",
        dimensions: int = 768,
        base_url: str = GEMINI_API_BASE,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini embedder.

        Args:
            api_key: Gemini API key
            model: Embedding model name without the "models/" prefix
            dimensions: Output dimension of the model (768 for text-embedding-004)
            base_url: API root
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._api_key = api_key
        self._model = model
        self._dimension = dimensions
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

        logger.info(f"Gemini embedder initialized: {model} ({self._dimension} dimensions)")

    @property
    def provider(self) -> str:
        return "gemini"

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def max_batch_size(self) -> int:
        return self.MAX_BATCH_SIZE

    def _content_request(self, text: str) -> Dict[str, Any]:
        return {"model": f"models/{self._model}", "content": {"parts": [{"text": text}]}}

    async def _post(self, method: str, body: Dict[str, Any], response_model: type) -> BaseModel:
        url = f"{self._base_url}/models/{self._model}:{method}"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                r = await client.post(
                    url,
                    json=body,
                    headers={"x-goog-api-key": self._api_key},
                )
                r.raise_for_status()
                return response_model.model_validate(r.json())
        except (httpx.HTTPError, ValueError) as e:
            raise EmbeddingProviderError(self.provider, str(e)) from e

    async def embed_document(self, text: str) -> List[float]:
        """
        Generate embedding for a single text via embedContent.

        Raises:
            EmbeddingProviderError: If the request fails or the body is malformed
        """
        response = await self._post(
            "embedContent", self._content_request(text), GeminiEmbedContentResponse
        )
        return response.embedding.values

    async def embed_query(self, text: str) -> List[float]:
        return await self.embed_document(text)

    async def embed_documents(self, texts: List[str]) -> List[Optional[List[float]]]:
        """
        Embed up to MAX_BATCH_SIZE texts with one batchEmbedContents call.

        Embeddings are positional; a short response leaves trailing slots None.
        """
        if not texts:
            return []

        response = await self._post(
            "batchEmbedContents",
            {"requests": [self._content_request(text) for text in texts]},
            GeminiBatchEmbedContentsResponse,
        )

        results: List[Optional[List[float]]] = [None] * len(texts)
        for i, embedding in enumerate(response.embeddings[: len(texts)]):
            results[i] = embedding.values
        return results
