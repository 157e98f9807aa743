"""
Versioned vector cache side-file.

Correlates memory log entries with embedding vectors. The file is derived
data: it can be deleted at any time and is rebuilt (with null vectors) by
saving or backfilling. It is kept in memory after the first load and
written back whole, atomically, on save().

Every non-null vector in the cache was produced by the model recorded in
model_id. Loading under a different model id nulls every vector.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Literal, Optional, Set, Tuple

from pydantic import ValidationError

from vault_memory.errors import CorruptCacheError
from vault_memory.models import VectorCacheData, VectorCacheEntry
from vault_memory.utils.files import atomic_write_text

logger = logging.getLogger(__name__)

LoadStatus = Literal["loaded", "created", "recovered"]


def parse_cache(raw: str) -> VectorCacheData:
    """
    Parse the cache file body.

    Raises:
        CorruptCacheError: On invalid JSON, unknown version or malformed entries
    """
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise CorruptCacheError(f"invalid JSON: {e}") from e

    try:
        return VectorCacheData.model_validate(payload)
    except ValidationError as e:
        raise CorruptCacheError(f"schema mismatch: {e.error_count()} errors") from e


class VectorCache:
    """
    File-backed vector cache owned by one RetrievalEngine.

    Entries are matched on (id, content) rather than id alone, because ids
    have minute resolution and two memories saved in the same minute share one.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Optional[VectorCacheData] = None
        self.last_load_status: Optional[LoadStatus] = None

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    def load(self, model_id: str) -> VectorCacheData:
        """
        Return the cache, reading it from disk on first use.

        A missing file yields an empty store; an unreadable one is discarded
        and replaced with an empty store. In every case the result is tagged
        with model_id, and vectors from any other model are nulled.

        Args:
            model_id: Identity of the currently active embedding model

        Returns:
            The in-memory cache
        """
        if self._data is None:
            self._data = self._read(model_id)

        if self._data.model_id != model_id:
            self._invalidate(model_id)

        return self._data

    def _read(self, model_id: str) -> VectorCacheData:
        if not self.path.is_file():
            self.last_load_status = "created"
            logger.info(f"No vector cache at {self.path}, starting empty ({model_id})")
            return VectorCacheData(model_id=model_id)

        try:
            data = parse_cache(self.path.read_text(encoding="utf-8"))
        except (CorruptCacheError, OSError) as e:
            self.last_load_status = "recovered"
            logger.warning(f"Discarding unreadable vector cache {self.path}: {e}")
            return VectorCacheData(model_id=model_id)

        self.last_load_status = "loaded"
        logger.info(
            f"Loaded vector cache: {len(data.entries)} entries, model={data.model_id}"
        )
        return data

    def _invalidate(self, model_id: str) -> None:
        cleared = 0
        for entry in self._data.entries:
            if entry.vector is not None:
                entry.vector = None
                cleared += 1

        logger.warning(
            f"Embedding model changed ({self._data.model_id} -> {model_id}), "
            f"cleared {cleared} cached vectors"
        )
        self._data.model_id = model_id

    def _require(self) -> VectorCacheData:
        if self._data is None:
            raise RuntimeError("VectorCache.load() must be called before use")
        return self._data

    def find(self, entry_id: str, content: str) -> Optional[VectorCacheEntry]:
        for entry in self._require().entries:
            if entry.id == entry_id and entry.content == content:
                return entry
        return None

    def upsert(
        self, entry_id: str, content: str, kind: str, vector: Optional[List[float]] = None
    ) -> VectorCacheEntry:
        """
        Insert or update the cache entry for one log entry.

        A None vector never overwrites an existing vector.
        """
        entry = self.find(entry_id, content)
        if entry is None:
            entry = VectorCacheEntry(id=entry_id, content=content, kind=kind, vector=vector)
            self._require().entries.append(entry)
        else:
            entry.kind = kind
            if vector is not None:
                entry.vector = vector
        return entry

    def prune(self, keep: Set[Tuple[str, str]]) -> int:
        """
        Drop entries whose (id, content) is not in keep.

        Returns:
            Number of entries removed
        """
        data = self._require()
        before = len(data.entries)
        data.entries = [entry for entry in data.entries if (entry.id, entry.content) in keep]
        removed = before - len(data.entries)
        if removed:
            logger.info(f"Pruned {removed} cache entries no longer in the memory log")
        return removed

    def vectors_by_key(self) -> Dict[Tuple[str, str], Optional[List[float]]]:
        """Map (id, content) to vector for every cached entry."""
        return {(entry.id, entry.content): entry.vector for entry in self._require().entries}

    def save(self) -> bool:
        """
        Persist the whole cache with a single atomic overwrite.

        Returns:
            False if the write failed; the previous file is left intact and
            the in-memory copy stays authoritative until the next save
        """
        data = self._require()
        try:
            atomic_write_text(self.path, data.model_dump_json(by_alias=True))
        except OSError as e:
            logger.warning(f"Could not write vector cache {self.path}: {e}")
            return False

        logger.debug(f"Saved vector cache: {len(data.entries)} entries ({data.model_id})")
        return True

    def reset(self) -> None:
        """Forget the in-memory copy so the next load() reads the file again."""
        self._data = None
        self.last_load_status = None
