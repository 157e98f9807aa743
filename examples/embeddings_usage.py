"""
Example: Embedding providers with vault-memory

Demonstrates:
1. OpenAIEmbedding and GeminiEmbedding directly
2. EmbeddingGateway provider selection and model ids
3. Fail-soft behaviour (None instead of exceptions)

Set OPENAI_API_KEY and/or GEMINI_API_KEY before running; examples for a
missing key are skipped.
"""

import asyncio
import os

from vault_memory.embeddings import EmbeddingGateway, GeminiEmbedding, OpenAIEmbedding
from vault_memory.scoring import cosine_similarity


async def example_openai():
    """Example: OpenAI embeddings, reduced to 1536 dimensions."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        print("Skipping OpenAI example - set OPENAI_API_KEY")
        return

    print("\n=== OpenAI Embedding ===")

    embedder = OpenAIEmbedding(api_key=api_key)
    print(f"Model: {embedder.model_name}")
    print(f"Dimension: {embedder.dimension}")

    vectors = await embedder.embed_documents(
        ["Thích uống cà phê sữa đá", "Likes iced milk coffee", "Works night shifts"]
    )
    print(f"Same meaning, two languages: {cosine_similarity(vectors[0], vectors[1]):.3f}")
    print(f"Unrelated: {cosine_similarity(vectors[0], vectors[2]):.3f}")

    await embedder.aclose()


async def example_gemini():
    """Example: Gemini text-embedding-004 (768 dimensions)."""
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        print("Skipping Gemini example - set GEMINI_API_KEY")
        return

    print("\n=== Gemini Embedding ===")

    embedder = GeminiEmbedding(api_key=api_key)
    vector = await embedder.embed_document("Preparing for a trip to Đà Lạt")
    print(f"Model: {embedder.model_name}")
    print(f"Vector length: {len(vector)}")


async def example_gateway():
    """Example: provider selection and fail-soft embedding."""
    print("\n=== Embedding Gateway ===")

    gateway = EmbeddingGateway.from_keys(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
    )
    print(f"Active provider: {gateway.provider}")
    print(f"Model id: {gateway.model_id()}")

    vector = await gateway.embed("I like phở")
    print(f"Embedded: {vector is not None}")

    # A bad key never raises, it just yields no vector
    broken = EmbeddingGateway.from_keys(gemini_api_key="not-a-real-key")
    print(f"Bad key gives: {await broken.embed('I like phở')}")

    await gateway.aclose()


async def main():
    """Run all examples."""
    print("vault-memory Embedding Examples\n")
    print("=" * 60)

    await example_openai()
    await example_gemini()
    await example_gateway()

    print("\n" + "=" * 60)
    print("All examples completed!")


if __name__ == "__main__":
    asyncio.run(main())
