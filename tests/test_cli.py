"""
Tests for the vault-memory command line.
"""

import pytest

from vault_memory.cli import build_parser, main


@pytest.fixture(autouse=True)
def no_provider_env(monkeypatch, tmp_path):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def vault(tmp_path):
    path = tmp_path / "vault"
    path.mkdir()
    return path


def test_parser_recall_arguments():
    args = build_parser().parse_args(["recall", "cà phê", "--days", "7", "--limit", "3"])

    assert args.command == "recall"
    assert args.query == "cà phê"
    assert args.days == 7
    assert args.limit == 3


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_save_and_recall(vault, capsys):
    code = main(["--vault", str(vault), "save", "Prefers tea over coffee", "--type", "preference"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "Saved memory (preference): Prefers tea over coffee"
    assert (vault / "system" / "memories.md").is_file()
    assert (vault / "system" / "memory-vectors.json").is_file()

    code = main(["--vault", str(vault), "recall", "tea"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Type: preference\nPrefers tea over coffee" in out


def test_recall_empty_vault(vault, capsys):
    code = main(["--vault", str(vault), "recall"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "No memories saved yet."


def test_save_invalid_type(vault, capsys):
    code = main(["--vault", str(vault), "save", "Something", "--type", "rumor"])

    assert code == 0
    assert "Invalid memory type" in capsys.readouterr().out
    assert not (vault / "system" / "memories.md").exists()


def test_backfill_without_key(vault, capsys):
    code = main(["--vault", str(vault), "backfill"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "No API key."


def test_unwritable_vault_returns_error(tmp_path, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied")

    code = main(["--vault", str(blocker), "save", "Works as a nurse"])

    assert code == 1
    assert capsys.readouterr().out == ""
