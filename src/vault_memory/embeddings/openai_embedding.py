"""OpenAI embedding adapter for vault-memory."""

import logging
from typing import List, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from vault_memory.embeddings.models import OpenAIEmbeddingResponse
from vault_memory.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)


class OpenAIEmbedding:
    """
    Embedding adapter using OpenAI's embedding API.

    Requests are sent as {"model", "input", "dimensions"} to /v1/embeddings
    and answered with {"data": [{"embedding", "index"}]}. Results are placed
    by their "index", so a response that omits or reorders items still maps
    each vector to the right input.

    Also compatible with OpenAI-compatible APIs (Azure, OpenRouter, etc.)

    Example:
        >>> embedder = OpenAIEmbedding(api_key="sk-...")
        >>> vector = await embedder.embed_document("I like phở")
        >>> len(vector)
        1536
    """

    MAX_BATCH_SIZE = 2048

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-large",
        dimensions: int = 1536,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            api_key: OpenAI API key
            model: OpenAI model name (default: text-embedding-3-large)
            dimensions: Requested output dimension (default: 1536)
            base_url: Custom endpoint (None = official OpenAI, or Azure/OpenRouter)
            timeout: Request timeout in seconds
            max_retries: SDK-level retries for failed requests (default: none)
            http_client: Optional httpx client (used by tests to inject a transport)
        """
        self._model = model
        self._dimension = dimensions
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            http_client=http_client,
        )

        logger.info(f"OpenAI embedder initialized: {model} ({self._dimension} dimensions)")

    @property
    def provider(self) -> str:
        return "openai"

    @property
    def dimension(self) -> int:
        """Vector dimension produced by this model."""
        return self._dimension

    @property
    def model_name(self) -> str:
        """Identifier of the OpenAI model."""
        return self._model

    @property
    def max_batch_size(self) -> int:
        return self.MAX_BATCH_SIZE

    async def _create(self, input_value) -> OpenAIEmbeddingResponse:
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=input_value,
                dimensions=self._dimension,
                encoding_format="float",
            )
            return OpenAIEmbeddingResponse.model_validate(response)
        except (OpenAIError, ValueError) as e:
            raise EmbeddingProviderError(self.provider, str(e)) from e

    async def embed_document(self, text: str) -> List[float]:
        """
        Generate embedding for a single text.

        Raises:
            EmbeddingProviderError: If the request fails or the response has no vector
        """
        response = await self._create(text)
        if not response.data:
            raise EmbeddingProviderError(self.provider, "response contained no embeddings")
        return response.data[0].embedding

    async def embed_query(self, text: str) -> List[float]:
        """OpenAI models don't distinguish documents from queries."""
        return await self.embed_document(text)

    async def embed_documents(self, texts: List[str]) -> List[Optional[List[float]]]:
        """
        Embed up to MAX_BATCH_SIZE texts in one request.

        Items missing from the response, or with an out-of-range index,
        are left as None.
        """
        if not texts:
            return []

        response = await self._create(texts)

        results: List[Optional[List[float]]] = [None] * len(texts)
        for item in response.data:
            if 0 <= item.index < len(texts):
                results[item.index] = item.embedding
        return results

    async def aclose(self) -> None:
        await self._client.close()
