from dataclasses import dataclass, field
from typing import List, Literal, Optional, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from vault_memory.errors import InvalidKindError

MemoryKind = Literal["fact", "preference", "context", "emotional"]

MEMORY_KINDS: tuple = get_args(MemoryKind)

DEFAULT_KIND: MemoryKind = "fact"

CACHE_SCHEMA_VERSION = 1

NO_MODEL_ID = "none"


def parse_kind(kind: Optional[str]) -> MemoryKind:
    """
    Validate a caller-supplied memory type.

    An omitted or empty type falls back to "fact".

    Raises:
        InvalidKindError: If the type is not one of MEMORY_KINDS
    """
    if not kind:
        return DEFAULT_KIND
    if kind not in MEMORY_KINDS:
        raise InvalidKindError(kind, MEMORY_KINDS)
    return kind


class MemoryEntry(BaseModel):
    """
    One saved memory as read back from the memory log.

    The id is the creation time at minute resolution ("YYYY-MM-DD HH:MM").
    It is also the log heading, so it is not guaranteed to be unique.
    The kind is kept as free text because the log may have been edited by
    other tools; validation happens on save.
    """

    id: str
    kind: str
    content: str
    vector: Optional[List[float]] = None

    @property
    def date(self) -> str:
        """Calendar day of the entry (YYYY-MM-DD)."""
        return self.id.split(" ")[0]


class VectorCacheEntry(BaseModel):
    """A cached embedding for one log entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    kind: str = Field(validation_alias=AliasChoices("kind", "type"))
    vector: Optional[List[float]] = None


class VectorCacheData(BaseModel):
    """
    On-disk shape of the vector cache side-file.

    Every non-null vector was produced by model_id. The file is derived data
    and may be deleted at any time; it is rebuilt from the log by backfill.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    version: Literal[1] = CACHE_SCHEMA_VERSION
    model_id: str = Field(
        default=NO_MODEL_ID,
        validation_alias=AliasChoices("modelId", "model"),
        serialization_alias="modelId",
    )
    entries: List[VectorCacheEntry] = Field(default_factory=list)


@dataclass
class SaveResult:
    """
    Outcome of RetrievalEngine.save().

    Attributes:
        status: "saved", or "invalid_kind" when the type failed validation
        message: Human-readable confirmation or validation message
        entry: The entry written to the log (None when rejected)
        embedded: Whether an embedding was stored for the entry
    """

    status: Literal["saved", "invalid_kind"]
    message: str
    entry: Optional[MemoryEntry] = None
    embedded: bool = False


@dataclass
class RecallResult:
    """
    Outcome of RetrievalEngine.recall().

    "no_log" and "no_matches" are ordinary results, not errors.
    scores holds the final blended score per returned entry when a query ran.
    """

    status: Literal["found", "no_log", "no_matches"]
    entries: List[MemoryEntry] = field(default_factory=list)
    query: Optional[str] = None
    scores: List[float] = field(default_factory=list)
    used_vectors: bool = False

    @property
    def message(self) -> str:
        if self.status == "no_log":
            return "No memories saved yet."
        if self.status == "no_matches":
            if self.query:
                return f'No memories found matching "{self.query}".'
            return "No memories found."
        return "\n\n".join(
            f"## {entry.date}\nType: {entry.kind}\n{entry.content}" for entry in self.entries
        )


@dataclass
class BackfillResult:
    """Outcome of RetrievalEngine.backfill_embeddings()."""

    status: Literal["done", "no_provider", "no_log"]
    attempted: int = 0
    embedded: int = 0
    pruned: int = 0

    @property
    def message(self) -> str:
        if self.status == "no_provider":
            return "No API key."
        if self.status == "no_log":
            return "No memories."
        return f"Backfilled {self.attempted} memories."
