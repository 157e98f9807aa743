"""
Unit tests for the vector cache side-file.

Covers creation, model-change invalidation, corrupt-file recovery, upsert
semantics and atomic persistence.
"""

import json

import pytest

from vault_memory.storage.vector_cache import VectorCache, parse_cache
from vault_memory.errors import CorruptCacheError


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "system" / "memory-vectors.json"


@pytest.fixture
def vector_cache(cache_path):
    return VectorCache(cache_path)


def write_cache(path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_load_missing_file_creates_empty_store(vector_cache):
    data = vector_cache.load("openai:1536")

    assert data.version == 1
    assert data.model_id == "openai:1536"
    assert data.entries == []
    assert vector_cache.last_load_status == "created"


def test_load_invalid_json_recovers_empty_store(vector_cache, cache_path):
    cache_path.parent.mkdir(parents=True)
    cache_path.write_text("{not json", encoding="utf-8")

    data = vector_cache.load("gemini:768")

    assert data.entries == []
    assert data.model_id == "gemini:768"
    assert vector_cache.last_load_status == "recovered"


def test_load_wrong_version_recovers_empty_store(vector_cache, cache_path):
    write_cache(cache_path, {"version": 2, "modelId": "none", "entries": []})

    data = vector_cache.load("none")

    assert data.entries == []
    assert vector_cache.last_load_status == "recovered"


def test_parse_cache_rejects_non_object():
    with pytest.raises(CorruptCacheError):
        parse_cache("[1, 2, 3]")


def test_load_same_model_keeps_vectors(vector_cache, cache_path):
    write_cache(
        cache_path,
        {
            "version": 1,
            "modelId": "openai:1536",
            "entries": [{"id": "2026-10-18 09:00", "content": "a", "kind": "fact", "vector": [0.1, 0.2]}],
        },
    )

    data = vector_cache.load("openai:1536")

    assert data.entries[0].vector == [0.1, 0.2]
    assert vector_cache.last_load_status == "loaded"


def test_model_change_invalidates_every_vector(vector_cache, cache_path):
    write_cache(
        cache_path,
        {
            "version": 1,
            "modelId": "openai:1536",
            "entries": [
                {"id": "2026-10-18 09:00", "content": "a", "kind": "fact", "vector": [0.1, 0.2]},
                {"id": "2026-10-18 09:01", "content": "b", "kind": "fact", "vector": [0.3, 0.4]},
                {"id": "2026-10-18 09:02", "content": "c", "kind": "fact", "vector": None},
            ],
        },
    )

    data = vector_cache.load("gemini:768")

    assert data.model_id == "gemini:768"
    assert len(data.entries) == 3
    assert all(entry.vector is None for entry in data.entries)


def test_model_change_after_load_invalidates_in_memory_copy(vector_cache):
    vector_cache.load("openai:1536")
    vector_cache.upsert("2026-10-18 09:00", "a", "fact", [1.0, 0.0])

    data = vector_cache.load("none")

    assert data.model_id == "none"
    assert data.entries[0].vector is None


def test_legacy_field_names_are_accepted(vector_cache, cache_path):
    """Files written with "model"/"type" keys load as modelId/kind."""
    write_cache(
        cache_path,
        {
            "version": 1,
            "model": "gemini:768",
            "entries": [{"id": "2026-10-18 09:00", "content": "a", "type": "preference", "vector": [1.0]}],
        },
    )

    data = vector_cache.load("gemini:768")

    assert data.entries[0].kind == "preference"
    assert data.entries[0].vector == [1.0]


def test_upsert_inserts_then_updates(vector_cache):
    vector_cache.load("openai:1536")

    vector_cache.upsert("2026-10-18 09:00", "a", "fact")
    entry = vector_cache.upsert("2026-10-18 09:00", "a", "fact", [0.5, 0.5])

    assert entry.vector == [0.5, 0.5]
    assert len(vector_cache.load("openai:1536").entries) == 1


def test_upsert_none_never_clears_vector(vector_cache):
    vector_cache.load("openai:1536")
    vector_cache.upsert("2026-10-18 09:00", "a", "fact", [0.5, 0.5])

    entry = vector_cache.upsert("2026-10-18 09:00", "a", "fact", None)

    assert entry.vector == [0.5, 0.5]


def test_same_minute_entries_stay_separate(vector_cache):
    vector_cache.load("openai:1536")

    vector_cache.upsert("2026-10-18 09:00", "first", "fact", [1.0, 0.0])
    vector_cache.upsert("2026-10-18 09:00", "second", "fact", [0.0, 1.0])

    assert vector_cache.find("2026-10-18 09:00", "first").vector == [1.0, 0.0]
    assert vector_cache.find("2026-10-18 09:00", "second").vector == [0.0, 1.0]


def test_use_before_load_raises(vector_cache):
    with pytest.raises(RuntimeError):
        vector_cache.upsert("2026-10-18 09:00", "a", "fact")


def test_save_writes_versioned_json(vector_cache, cache_path):
    vector_cache.load("openai:1536")
    vector_cache.upsert("2026-10-18 09:00", "a", "fact", [0.25])
    vector_cache.upsert("2026-10-18 09:01", "b", "emotional")

    assert vector_cache.save() is True

    payload = json.loads(cache_path.read_text(encoding="utf-8"))
    assert payload == {
        "version": 1,
        "modelId": "openai:1536",
        "entries": [
            {"id": "2026-10-18 09:00", "content": "a", "kind": "fact", "vector": [0.25]},
            {"id": "2026-10-18 09:01", "content": "b", "kind": "emotional", "vector": None},
        ],
    }


def test_saved_cache_reloads(vector_cache, cache_path):
    vector_cache.load("gemini:768")
    vector_cache.upsert("2026-10-18 09:00", "a", "fact", [0.25, 0.75])
    vector_cache.save()

    fresh = VectorCache(cache_path)
    data = fresh.load("gemini:768")

    assert data.entries[0].vector == [0.25, 0.75]


def test_reset_forces_reread(vector_cache, cache_path):
    vector_cache.load("none")
    vector_cache.upsert("2026-10-18 09:00", "a", "fact")
    vector_cache.reset()

    assert vector_cache.is_loaded is False
    assert vector_cache.load("none").entries == []


def test_prune_drops_entries_missing_from_log(vector_cache):
    vector_cache.load("openai:1536")
    vector_cache.upsert("2026-10-18 09:00", "kept", "fact", [1.0])
    vector_cache.upsert("2026-10-18 09:01", "edited away", "fact", [0.5])

    removed = vector_cache.prune({("2026-10-18 09:00", "kept")})

    assert removed == 1
    assert vector_cache.find("2026-10-18 09:00", "kept").vector == [1.0]
    assert vector_cache.find("2026-10-18 09:01", "edited away") is None
