"""
Tests for MemorySettings environment loading.
"""

from pathlib import Path

import pytest

from vault_memory.config import MemorySettings

ENV_VARS = [
    "VAULT_PATH",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_EMBEDDING_MODEL",
    "OPENAI_EMBEDDING_DIMENSIONS",
    "RECALL_LIMIT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = MemorySettings()

    assert settings.vault_path == Path("/data/vault")
    assert settings.memories_path == "system/memories.md"
    assert settings.vectors_path == "system/memory-vectors.json"
    assert settings.openai_api_key is None
    assert settings.gemini_api_key is None
    assert settings.openai_embedding_model == "text-embedding-3-large"
    assert settings.openai_embedding_dimensions == 1536
    assert settings.gemini_embedding_model == "text-embedding-004"
    assert settings.gemini_embedding_dimensions == 768
    assert settings.recall_limit == 10
    assert settings.has_embedding_provider is False


def test_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("VAULT_PATH", str(tmp_path))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_EMBEDDING_DIMENSIONS", "512")
    monkeypatch.setenv("RECALL_LIMIT", "3")

    settings = MemorySettings()

    assert settings.vault_path == tmp_path
    assert settings.openai_api_key == "sk-env"
    assert settings.openai_embedding_dimensions == 512
    assert settings.recall_limit == 3
    assert settings.has_embedding_provider is True


def test_blank_keys_are_unset(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("OPENAI_BASE_URL", "")

    settings = MemorySettings()

    assert settings.openai_api_key is None
    assert settings.gemini_api_key is None
    assert settings.openai_base_url is None
    assert settings.has_embedding_provider is False


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("GEMINI_API_KEY=gm-dotenv\nLOG_LEVEL=DEBUG\n")

    settings = MemorySettings()

    assert settings.gemini_api_key == "gm-dotenv"
    assert settings.log_level == "DEBUG"
