"""Utility functions for vault-memory."""

from vault_memory.utils.files import atomic_write_text, resolve_vault_path
from vault_memory.utils.text_normalizer import normalize, tokenize

__all__ = [
    "normalize",
    "tokenize",
    "resolve_vault_path",
    "atomic_write_text",
]
