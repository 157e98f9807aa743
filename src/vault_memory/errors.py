"""
Exception taxonomy for vault-memory.

Only InvalidKindError and PathTraversalError are meant to reach callers.
Provider and cache errors are raised at the layer that owns the resource and
absorbed one level up (EmbeddingGateway and VectorCache respectively).
"""


class VaultMemoryError(Exception):
    """Base class for all vault-memory errors."""


class InvalidKindError(VaultMemoryError, ValueError):
    """Raised when a memory type is not one of the supported kinds."""

    def __init__(self, kind: str, valid_kinds: tuple):
        self.kind = kind
        self.valid_kinds = valid_kinds
        super().__init__(f'Invalid memory type "{kind}". Use: {", ".join(valid_kinds)}')


class EmbeddingProviderError(VaultMemoryError):
    """Raised by an embedding backend on transport, status or parse failure."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class CorruptCacheError(VaultMemoryError):
    """Raised when the vector cache file cannot be parsed or has the wrong schema."""


class PathTraversalError(VaultMemoryError, ValueError):
    """Raised when a vault-relative path resolves outside the vault root."""
