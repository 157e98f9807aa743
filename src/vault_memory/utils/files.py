"""Filesystem helpers for files kept inside the vault."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from vault_memory.errors import PathTraversalError

logger = logging.getLogger(__name__)


def resolve_vault_path(vault_path: Union[str, Path], relative: Union[str, Path]) -> Path:
    """
    Resolve a vault-relative path, refusing anything outside the vault.

    Args:
        vault_path: Root directory of the vault
        relative: Path relative to the vault root (e.g. "system/memories.md")

    Returns:
        Absolute path inside the vault

    Raises:
        PathTraversalError: If the path escapes the vault root
    """
    root = Path(vault_path).resolve()
    resolved = (root / relative).resolve()
    if resolved != root and root not in resolved.parents:
        raise PathTraversalError(f"Path traversal blocked: {relative}")
    return resolved


def atomic_write_text(path: Path, content: str) -> None:
    """
    Replace a file's content atomically.

    Writes to a temporary file in the same directory, fsyncs it, then
    renames it over the target. A crash leaves either the old or the new
    content, never a partial file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    logger.debug(f"Wrote {len(content)} chars to {path}")
