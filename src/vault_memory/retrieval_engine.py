"""
Hybrid lexical-semantic retrieval over the memory log.

The engine owns one MemoryLog, one VectorCache and one EmbeddingGateway.
Construct it once per vault and reuse it: the vector cache is loaded on first
use and kept in memory afterwards.
"""

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from vault_memory.config import MemorySettings
from vault_memory.embeddings import EmbeddingGateway
from vault_memory.errors import InvalidKindError
from vault_memory.models import BackfillResult, MemoryEntry, RecallResult, SaveResult, parse_kind
from vault_memory.scoring import (
    BM25Scorer,
    Candidate,
    combine_scores,
    normalize_scores,
    rank,
    score_cosine,
)
from vault_memory.storage import MemoryLog, VectorCache
from vault_memory.utils.files import resolve_vault_path

logger = logging.getLogger(__name__)

DEFAULT_RECALL_LIMIT = 10
BACKFILL_CHUNK_SIZE = 50
PREVIEW_CHARS = 80


class RetrievalEngine:
    def __init__(
        self,
        memory_log: MemoryLog,
        vector_cache: VectorCache,
        gateway: Optional[EmbeddingGateway] = None,
        scorer: Optional[BM25Scorer] = None,
        default_limit: int = DEFAULT_RECALL_LIMIT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.memory_log = memory_log
        self.vector_cache = vector_cache
        self.gateway = gateway or EmbeddingGateway()
        self.scorer = scorer or BM25Scorer()
        self.default_limit = default_limit
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Optional[MemorySettings] = None) -> "RetrievalEngine":
        """Wire log, cache and gateway from settings (environment by default)."""
        settings = settings or MemorySettings()
        vault: Path = settings.vault_path
        return cls(
            memory_log=MemoryLog(resolve_vault_path(vault, settings.memories_path)),
            vector_cache=VectorCache(resolve_vault_path(vault, settings.vectors_path)),
            gateway=EmbeddingGateway.from_settings(settings),
            default_limit=settings.recall_limit,
        )

    def set_embedding_keys(
        self,
        openai: Optional[str] = None,
        gemini: Optional[str] = None,
        settings: Optional[MemorySettings] = None,
    ) -> None:
        """
        Swap the embedding gateway, e.g. after the user edits their API keys.

        The cached vectors are checked against the new model id on the next
        cache access and cleared if it changed.
        """
        self.gateway = EmbeddingGateway.from_keys(
            openai_api_key=openai, gemini_api_key=gemini, settings=settings
        )

    async def save(self, content: str, kind: Optional[str] = None) -> SaveResult:
        """
        Append a memory to the log and cache its embedding.

        The embedding is best effort: a failed or missing provider leaves a
        null vector for backfill to fill in later, and the save still succeeds.

        Args:
            content: Memory text
            kind: One of fact, preference, context, emotional (default: fact)

        Returns:
            SaveResult with status "saved", or "invalid_kind" and the
            validation message

        Raises:
            OSError: If the memory log cannot be written
        """
        try:
            memory_kind = parse_kind(kind)
        except InvalidKindError as e:
            logger.info(f"Rejected memory with invalid type: {kind!r}")
            return SaveResult(status="invalid_kind", message=str(e))

        entry = self.memory_log.append(memory_kind, content, self._clock())

        self.vector_cache.load(self.gateway.model_id())
        vector = await self.gateway.embed(entry.content) if self.gateway.is_active else None
        self.vector_cache.upsert(entry.id, entry.content, entry.kind, vector)
        self.vector_cache.save()

        entry.vector = vector
        preview = entry.content[:PREVIEW_CHARS]
        if len(entry.content) > PREVIEW_CHARS:
            preview += "..."

        logger.info(
            f"Saved memory {entry.id} ({memory_kind}), embedded={vector is not None}"
        )
        return SaveResult(
            status="saved",
            message=f"Saved memory ({memory_kind}): {preview}",
            entry=entry,
            embedded=vector is not None,
        )

    async def recall(
        self,
        query: Optional[str] = None,
        days: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> RecallResult:
        """
        Retrieve memories, most relevant (with a query) or most recent first.

        Args:
            query: Free-text query; empty or None returns the latest entries
            days: Keep only entries dated on/after today - days
            limit: Maximum entries to return (default: engine default, 10)

        Returns:
            RecallResult; "no_log" and "no_matches" are normal outcomes
        """
        max_entries = limit if limit and limit > 0 else self.default_limit
        query = query.strip() if query else None

        entries = self.memory_log.read()
        if entries is None:
            return RecallResult(status="no_log", query=query)

        if days is not None:
            entries = self._within_days(entries, days)

        if not query:
            recent = list(reversed(entries[-max_entries:])) if entries else []
            if not recent:
                return RecallResult(status="no_matches", query=query)
            return RecallResult(status="found", entries=recent, query=query)

        return await self._ranked(query, entries, max_entries)

    def _within_days(self, entries: List[MemoryEntry], days: int) -> List[MemoryEntry]:
        cutoff: date = self._clock().date() - timedelta(days=days)
        cutoff_str = cutoff.isoformat()
        return [entry for entry in entries if entry.date >= cutoff_str]

    async def _ranked(
        self, query: str, entries: List[MemoryEntry], max_entries: int
    ) -> RecallResult:
        # Newest first, so the stable sort breaks ties in favour of recent entries.
        by_key: Dict[str, MemoryEntry] = {}
        candidates: List[Candidate] = []
        for position in range(len(entries) - 1, -1, -1):
            entry = entries[position]
            key = str(position)
            by_key[key] = entry
            candidates.append(Candidate(id=key, text=f"{entry.kind} {entry.content}"))

        bm25_norm = normalize_scores(self.scorer.score(query, candidates))

        cosine_norm = None
        if self.gateway.is_active and candidates:
            cosine_norm = await self._cosine_scores(query, by_key)

        final = combine_scores(by_key.keys(), bm25_norm, cosine_norm)
        ranked = rank([c.id for c in candidates], final, max_entries)

        logger.debug(
            f"Recall '{query[:50]}': {len(candidates)} candidates, {len(ranked)} ranked, "
            f"vectors={cosine_norm is not None}"
        )

        if not ranked:
            return RecallResult(
                status="no_matches", query=query, used_vectors=cosine_norm is not None
            )

        return RecallResult(
            status="found",
            entries=[by_key[key] for key, _ in ranked],
            query=query,
            scores=[score for _, score in ranked],
            used_vectors=cosine_norm is not None,
        )

    async def _cosine_scores(
        self, query: str, by_key: Dict[str, MemoryEntry]
    ) -> Optional[Dict[str, float]]:
        query_vector = await self.gateway.embed(query)
        if query_vector is None:
            logger.info("Query embedding unavailable, ranking with BM25 only")
            return None

        self.vector_cache.load(self.gateway.model_id())
        cached: Dict[Tuple[str, str], Optional[List[float]]] = self.vector_cache.vectors_by_key()

        candidate_vectors = {}
        for key, entry in by_key.items():
            vector = cached.get((entry.id, entry.content))
            entry.vector = vector
            candidate_vectors[key] = vector

        return normalize_scores(score_cosine(query_vector, candidate_vectors))

    async def backfill_embeddings(self) -> BackfillResult:
        """
        Embed every log entry that has no cached vector under the current model.

        Missing cache entries are created from the log first, and cache entries
        that no longer match any log entry (e.g. after a hand edit) are dropped.
        Safe to re-run: entries that already have a vector are never re-embedded.
        """
        if not self.gateway.is_active:
            return BackfillResult(status="no_provider")

        entries = self.memory_log.read()
        if entries is None:
            return BackfillResult(status="no_log")

        self.vector_cache.load(self.gateway.model_id())
        pruned = self.vector_cache.prune({(entry.id, entry.content) for entry in entries})

        pending = []
        seen = set()
        for entry in entries:
            cached = self.vector_cache.upsert(entry.id, entry.content, entry.kind)
            if cached.vector is None and id(cached) not in seen:
                seen.add(id(cached))
                pending.append(cached)

        embedded = 0
        for start in range(0, len(pending), BACKFILL_CHUNK_SIZE):
            chunk = pending[start : start + BACKFILL_CHUNK_SIZE]
            vectors = await self.gateway.embed_batch([cached.content for cached in chunk])
            for cached, vector in zip(chunk, vectors):
                if vector is not None:
                    cached.vector = vector
                    embedded += 1

        self.vector_cache.save()

        logger.info(f"Backfill finished: {embedded}/{len(pending)} memories embedded")
        return BackfillResult(
            status="done", attempted=len(pending), embedded=embedded, pruned=pruned
        )

    async def get_recent_memories(self, limit: int = DEFAULT_RECALL_LIMIT) -> RecallResult:
        return await self.recall(None, None, limit)

    def get_preference_context(self) -> str:
        """Preference memories as a bullet list for prompt building ("" if none)."""
        entries = self.memory_log.read() or []
        lines = []
        for entry in entries:
            if entry.kind != "preference":
                continue
            body = " ".join(line.strip() for line in entry.content.splitlines()).strip()
            if body:
                lines.append(f"- {body}")
        return "\n".join(lines)

    async def aclose(self) -> None:
        await self.gateway.aclose()
