"""
Response models for embedding providers.

Only the fields vault-memory consumes are declared; everything else in a
provider response is ignored. A response missing a declared field fails
validation and is treated as a provider failure.
"""

from typing import List

from pydantic import BaseModel, ConfigDict


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True)


class OpenAIEmbeddingItem(_ProviderModel):
    embedding: List[float]
    index: int


class OpenAIEmbeddingResponse(_ProviderModel):
    """Body of POST /v1/embeddings: {"data": [{"embedding": [...], "index": 0}]}."""

    data: List[OpenAIEmbeddingItem]


class GeminiContentEmbedding(_ProviderModel):
    values: List[float]


class GeminiEmbedContentResponse(_ProviderModel):
    """Body of models/{model}:embedContent: {"embedding": {"values": [...]}}."""

    embedding: GeminiContentEmbedding


class GeminiBatchEmbedContentsResponse(_ProviderModel):
    """Body of models/{model}:batchEmbedContents: {"embeddings": [{"values": [...]}]}."""

    embeddings: List[GeminiContentEmbedding]
