"""
Runtime configuration for vault-memory.

Values are read from environment variables (case-insensitive, no prefix)
and an optional .env file in the working directory.
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MemorySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Vault layout
    vault_path: Path = Path("/data/vault")
    memories_path: str = "system/memories.md"
    vectors_path: str = "system/memory-vectors.json"

    # Embedding providers, in priority order
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_embedding_model: str = "text-embedding-3-large"
    openai_embedding_dimensions: int = 1536
    gemini_embedding_model: str = "text-embedding-004"
    gemini_embedding_dimensions: int = 768
    embedding_timeout: float = 30.0

    recall_limit: int = 10
    log_level: str = "INFO"

    @field_validator("openai_api_key", "gemini_api_key", "openai_base_url", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_embedding_provider(self) -> bool:
        return bool(self.openai_api_key or self.gemini_api_key)
