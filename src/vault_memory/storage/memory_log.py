"""
Append-only Markdown memory log.

The log is the source of truth for memory content. Each saved memory is one
block:

    ## 2026-10-18 14:05
    Type: preference
    Prefers phở over bún chả

Blocks are only ever appended; this module never rewrites or deletes them.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from vault_memory.models import MemoryEntry

logger = logging.getLogger(__name__)

LOG_HEADER = "# Memories\n\n> Auto-managed by Life Companion AI. Each entry is a saved memory.\n"

ENTRY_ID_FORMAT = "%Y-%m-%d %H:%M"

_BLOCK_SPLIT = re.compile(r"^## ", re.MULTILINE)
_ENTRY_ID = re.compile(r"^\d{4}-\d{2}-\d{2}( \d{2}:\d{2})?$")
_TYPE_PREFIX = "Type:"


def make_entry_id(moment: datetime) -> str:
    """Minute-resolution id used as the block heading."""
    return moment.strftime(ENTRY_ID_FORMAT)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR to LF, matching what read_text() gives back."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def format_block(entry: MemoryEntry) -> str:
    return f"\n## {entry.id}\nType: {entry.kind}\n{entry.content}\n"


def parse_log(text: str) -> List[MemoryEntry]:
    """
    Parse log text into entries in file (chronological) order.

    Blocks without a date heading or a "Type:" line are skipped with a
    warning; they are usually hand-edited notes rather than saved memories.
    """
    entries: List[MemoryEntry] = []

    for block in _BLOCK_SPLIT.split(text)[1:]:
        lines = block.strip().split("\n")
        heading = lines[0].strip()
        type_line = lines[1].strip() if len(lines) > 1 else ""

        if not _ENTRY_ID.match(heading) or not type_line.startswith(_TYPE_PREFIX):
            logger.warning(f"Skipping malformed memory block: '{heading[:50]}'")
            continue

        entries.append(
            MemoryEntry(
                id=heading,
                kind=type_line[len(_TYPE_PREFIX):].strip(),
                content="\n".join(lines[2:]).strip(),
            )
        )

    return entries


class MemoryLog:
    """
    File-backed memory log.

    The file is created lazily, with a header, on the first append.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Optional[List[MemoryEntry]]:
        """
        Load every entry.

        Returns:
            Entries in chronological order, or None when the log does not
            exist yet (no memories saved)
        """
        if not self.exists():
            return None

        entries = parse_log(self.path.read_text(encoding="utf-8"))
        logger.debug(f"Read {len(entries)} memories from {self.path}")
        return entries

    def append(self, kind: str, content: str, moment: Optional[datetime] = None) -> MemoryEntry:
        """
        Append one memory block.

        Args:
            kind: Validated memory kind
            content: Memory text
            moment: Creation time (default: now, local time)

        Returns:
            The entry as it will be read back

        Raises:
            OSError: If the log cannot be written
        """
        entry = MemoryEntry(
            id=make_entry_id(moment or datetime.now()),
            kind=kind,
            content=normalize_newlines(content).strip(),
        )
        block = format_block(entry)

        if self.exists():
            with self.path.open("a", encoding="utf-8") as f:
                f.write(block)
        else:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(LOG_HEADER + block, encoding="utf-8")
            logger.info(f"Created memory log at {self.path}")

        logger.debug(f"Appended memory {entry.id} ({kind}): '{entry.content[:50]}'")
        return entry
