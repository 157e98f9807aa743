"""
Custom Embedding Backend Example

Demonstrates how to plug a custom embedding backend into the gateway using
the TextEmbedding protocol.
"""

import asyncio
import tempfile
import zlib
from pathlib import Path
from typing import List, Optional

from vault_memory import RetrievalEngine
from vault_memory.embeddings import EmbeddingGateway, TextEmbedding
from vault_memory.storage import MemoryLog, VectorCache
from vault_memory.utils import tokenize


class HashingEmbedding:
    """
    Offline bag-of-words embedder.

    Implements TextEmbedding protocol via duck typing. Texts that share
    words get similar vectors, which is enough to demo hybrid ranking.
    """

    def __init__(self, dimension: int = 64):
        self._dimension = dimension

    @property
    def provider(self) -> str:
        return "hashing"

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return f"hashing-{self._dimension}"

    @property
    def max_batch_size(self) -> int:
        return 500

    async def embed_document(self, text: str) -> List[float]:
        vector = [0.0] * self._dimension
        for token in tokenize(text):
            vector[zlib.crc32(token.encode("utf-8")) % self._dimension] += 1.0
        return vector

    async def embed_query(self, text: str) -> List[float]:
        return await self.embed_document(text)

    async def embed_documents(self, texts: List[str]) -> List[Optional[List[float]]]:
        return [await self.embed_document(text) for text in texts]


async def main():
    backend = HashingEmbedding()
    print(f"Implements TextEmbedding: {isinstance(backend, TextEmbedding)}")

    with tempfile.TemporaryDirectory() as vault:
        engine = RetrievalEngine(
            memory_log=MemoryLog(Path(vault) / "system" / "memories.md"),
            vector_cache=VectorCache(Path(vault) / "system" / "memory-vectors.json"),
            gateway=EmbeddingGateway([backend]),
        )

        await engine.save("Goes running by Hồ Tây every Sunday", "fact")
        await engine.save("Prefers running in the early morning", "preference")
        await engine.save("Allergic to shellfish", "fact")

        result = await engine.recall("running")
        print(f"Model id: {engine.gateway.model_id()}")
        print(f"Used vectors: {result.used_vectors}")
        for entry, score in zip(result.entries, result.scores):
            print(f"{score:.3f}  {entry.content}")


if __name__ == "__main__":
    asyncio.run(main())
