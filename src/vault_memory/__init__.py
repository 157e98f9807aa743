"""
vault-memory: hybrid keyword and semantic memory for a personal assistant.

Core components:
- storage: append-only Markdown memory log and the JSON vector cache
- embeddings: OpenAI / Gemini backends behind a fail-soft gateway
- scoring: BM25, cosine similarity and the score blending policy
- retrieval_engine: save / recall / backfill facade
- tools: save_memory / recall_memory tool-call surface
"""

__version__ = "0.1.0"

from vault_memory.config import MemorySettings
from vault_memory.embeddings import EmbeddingGateway
from vault_memory.models import (
    MEMORY_KINDS,
    BackfillResult,
    MemoryEntry,
    MemoryKind,
    RecallResult,
    SaveResult,
)
from vault_memory.retrieval_engine import RetrievalEngine
from vault_memory.tools import MEMORY_TOOLS, MemoryToolExecutor

__all__ = [
    "__version__",
    # Models
    "MemoryEntry",
    "MemoryKind",
    "MEMORY_KINDS",
    "SaveResult",
    "RecallResult",
    "BackfillResult",
    # Services
    "MemorySettings",
    "EmbeddingGateway",
    "RetrievalEngine",
    "MemoryToolExecutor",
    "MEMORY_TOOLS",
]
