"""
Text embedding abstractions for vault-memory.

Provides a protocol for single embedding backends, two HTTP adapters and the
fail-soft gateway that the retrieval engine talks to:
- OpenAIEmbedding: OpenAI embeddings API (official SDK)
- GeminiEmbedding: Gemini embedContent / batchEmbedContents
- EmbeddingGateway: priority selection and None-on-failure semantics
"""

from vault_memory.embeddings.gateway import EmbeddingGateway
from vault_memory.embeddings.gemini_embedding import GeminiEmbedding
from vault_memory.embeddings.openai_embedding import OpenAIEmbedding
from vault_memory.embeddings.protocol import TextEmbedding

__all__ = [
    "TextEmbedding",
    "EmbeddingGateway",
    "OpenAIEmbedding",
    "GeminiEmbedding",
]
