"""
Tool-call surface for the chat loop.

MEMORY_TOOLS advertises save_memory and recall_memory to the model;
MemoryToolExecutor runs a tool call against a RetrievalEngine and always
returns a string, never raises.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from vault_memory.models import MEMORY_KINDS
from vault_memory.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)


MEMORY_TOOLS: List[Dict[str, Any]] = [
    {
        "name": "save_memory",
        "description": (
            "Save a fact, preference, context or emotional note about the user "
            "so it can be recalled in later conversations."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "The memory to save"},
                "type": {
                    "type": "string",
                    "enum": list(MEMORY_KINDS),
                    "description": "Memory type (default: fact)",
                },
            },
            "required": ["content"],
        },
    },
    {
        "name": "recall_memory",
        "description": (
            "Recall saved memories. With a query, returns the most relevant ones; "
            "without, the most recent."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "What to look for"},
                "days": {"type": "number", "description": "Only memories from the last N days"},
                "limit": {"type": "number", "description": "Maximum results (default: 10)"},
            },
        },
    },
]


class SaveMemoryInput(BaseModel):
    content: str
    type: Optional[str] = None


class RecallMemoryInput(BaseModel):
    query: Optional[str] = None
    days: Optional[int] = None
    limit: Optional[int] = None

    @field_validator("days", "limit", mode="before")
    @classmethod
    def _truncate_numbers(cls, value):
        # The schema advertises "number"; fractional values are truncated.
        if isinstance(value, float):
            return int(value)
        return value


class MemoryToolExecutor:
    """Dispatches memory tool calls by name."""

    def __init__(self, engine: RetrievalEngine):
        self.engine = engine

    @property
    def tool_names(self) -> List[str]:
        return [tool["name"] for tool in MEMORY_TOOLS]

    async def save_memory(self, content: str, type: Optional[str] = None) -> str:
        result = await self.engine.save(content, type)
        return result.message

    async def recall_memory(
        self,
        query: Optional[str] = None,
        days: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> str:
        result = await self.engine.recall(query, days, limit)
        return result.message

    async def execute(self, name: str, tool_input: Dict[str, Any]) -> str:
        """
        Run one tool call.

        Args:
            name: Tool name from the model
            tool_input: Tool arguments as decoded from the model's JSON

        Returns:
            Tool output, "Unknown tool: <name>", or "Error executing <name>: ..."
        """
        try:
            if name == "save_memory":
                args = SaveMemoryInput.model_validate(tool_input)
                return await self.save_memory(args.content, args.type)
            if name == "recall_memory":
                args = RecallMemoryInput.model_validate(tool_input)
                return await self.recall_memory(args.query, args.days, args.limit)
            return f"Unknown tool: {name}"
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            return f"Error executing {name}: {e}"
