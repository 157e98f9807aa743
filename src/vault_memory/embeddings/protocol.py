"""
Text embedding protocol for vault-memory.

Describes one embedding backend. Backends raise EmbeddingProviderError on
any failure; the EmbeddingGateway is the only caller and turns those errors
into missing vectors.
"""

from typing import List, Optional, Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class TextEmbedding(Protocol):
    """
    Protocol for text embedding backends.

    All implementations must:

    1. Report a stable provider name and output dimension
    2. Honour max_batch_size as the largest number of texts per request
    3. Return one slot per input from embed_documents(), None where the
       provider returned nothing for that input
    4. Raise EmbeddingProviderError (never a transport-specific exception)

    Example:
        >>> embedder = GeminiEmbedding(api_key="...")
        >>> vector = await embedder.embed_document("I like phở")
        >>> len(vector) == embedder.dimension
        True
    """

    @property
    def provider(self) -> str:
        """
        Short backend name used in the cache model id.

        Returns:
            Provider identifier (e.g., "openai", "gemini")
        """
        ...

    @property
    def dimension(self) -> int:
        """
        Vector dimension produced by this embedder.

        Part of the model id: vectors of different dimensions are never compared.
        """
        ...

    @property
    def model_name(self) -> str:
        """Identifier of the embedding model (e.g., "text-embedding-004")."""
        ...

    @property
    def max_batch_size(self) -> int:
        """Largest number of texts the provider accepts in one request."""
        ...

    async def embed_document(self, text: str) -> List[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector

        Raises:
            EmbeddingProviderError: On transport error, non-success status
                or malformed response
        """
        ...

    async def embed_query(self, text: str) -> List[float]:
        """
        Generate embedding for a search query.

        Same failure contract as embed_document().
        """
        ...

    async def embed_documents(self, texts: List[str]) -> List[Optional[List[float]]]:
        """
        Generate embeddings for at most max_batch_size texts in one request.

        Args:
            texts: Texts to embed

        Returns:
            List with one entry per input (same order), None where the
            response carried no vector for that input

        Raises:
            EmbeddingProviderError: If the request as a whole failed
        """
        ...
