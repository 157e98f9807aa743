"""
Basic vault-memory usage

Demonstrates:
1. Saving memories of each type
2. Recent-first recall with and without a day window
3. Ranked recall (keyword-only when no API key is set)
4. Preference context for prompt building
5. The tool-call surface used by the chat loop

Runs against a temporary vault, so nothing outside it is touched.
Set OPENAI_API_KEY or GEMINI_API_KEY to enable semantic ranking.
"""

import asyncio
import os
import tempfile

from vault_memory import MemorySettings, MemoryToolExecutor, RetrievalEngine


async def main():
    with tempfile.TemporaryDirectory() as vault:
        settings = MemorySettings(vault_path=vault)
        engine = RetrievalEngine.from_settings(settings)

        print(f"Vault: {vault}")
        print(f"Embedding model: {engine.gateway.model_id()}")

        print("\n=== Saving memories ===")
        for content, kind in [
            ("Works as a nurse at Bạch Mai hospital", "fact"),
            ("Thích uống cà phê sữa đá, không đường", "preference"),
            ("Preparing for a trip to Đà Lạt next month", "context"),
            ("Felt anxious about the night shifts this week", "emotional"),
            ("Prefers short answers in the morning", "preference"),
        ]:
            result = await engine.save(content, kind)
            print(result.message)

        rejected = await engine.save("Secretly loves karaoke", "secret")
        print(rejected.message)

        print("\n=== Today's memories (newest first) ===")
        print((await engine.recall(days=0)).message)

        print("\n=== Ranked recall: 'ca phe' ===")
        result = await engine.recall("ca phe", limit=3)
        for entry, score in zip(result.entries, result.scores):
            print(f"{score:.3f}  [{entry.kind}] {entry.content}")
        print(f"Used vectors: {result.used_vectors}")

        print("\n=== Preference context ===")
        print(engine.get_preference_context())

        print("\n=== Tool calls ===")
        executor = MemoryToolExecutor(engine)
        print(await executor.execute("recall_memory", {"query": "trip", "limit": 1}))
        print(await executor.execute("forget_memory", {}))

        if os.getenv("OPENAI_API_KEY") or os.getenv("GEMINI_API_KEY"):
            print("\n=== Backfill ===")
            print((await engine.backfill_embeddings()).message)

        await engine.aclose()


if __name__ == "__main__":
    asyncio.run(main())
