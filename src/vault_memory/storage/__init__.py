"""
Persistent storage for vault-memory.

- MemoryLog: append-only Markdown log, the source of truth
- VectorCache: rebuildable JSON side-file of embeddings, tagged by model
"""

from vault_memory.storage.memory_log import LOG_HEADER, MemoryLog, parse_log
from vault_memory.storage.vector_cache import VectorCache, parse_cache

__all__ = [
    "MemoryLog",
    "VectorCache",
    "parse_log",
    "parse_cache",
    "LOG_HEADER",
]
