import json

import pytest

from retrieval.cli import build_parser, main


@pytest.fixture
def base_args(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return ["--db", str(tmp_path / "cli.db"), "--embedder", "hashing", "--log-level", "WARNING"]


def test_ingest_and_search(base_args, tmp_path, capsys):
    document = tmp_path / "notes.txt"
    document.write_text("Offline search works. Embeddings stay local.", encoding="utf-8")

    assert main(base_args + ["ingest", "notes", str(document), "--source", "file"]) == 0
    assert json.loads(capsys.readouterr().out) == {"doc_id": "notes", "chunks": 1}

    assert main(base_args + ["search", "offline search", "-k", "3"]) == 0
    hits = json.loads(capsys.readouterr().out)
    assert hits[0]["doc_id"] == "notes"


def test_documents(base_args, tmp_path, capsys):
    document = tmp_path / "a.txt"
    document.write_text("Some text.", encoding="utf-8")
    main(base_args + ["ingest", "a", str(document)])
    capsys.readouterr()

    assert main(base_args + ["documents"]) == 0
    documents = json.loads(capsys.readouterr().out)
    assert documents[0]["doc_id"] == "a"
    assert documents[0]["source"] == "user"


def test_health(base_args, capsys):
    assert main(base_args + ["health"]) == 0
    assert json.loads(capsys.readouterr().out)["ready"] is True


def test_validation_error_exit_code(base_args, capsys):
    assert main(base_args + ["search", "   "]) == 1
    assert "query is required" in capsys.readouterr().err


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_missing_file_exit_code(base_args, tmp_path, capsys):
    assert main(base_args + ["ingest", "notes", str(tmp_path / "missing.txt")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_non_utf8_file_exit_code(base_args, tmp_path, capsys):
    document = tmp_path / "latin1.txt"
    document.write_bytes("caf\xe9 au lait".encode("latin-1"))
    assert main(base_args + ["ingest", "cafe", str(document)]) == 1
    assert "cannot read" in capsys.readouterr().err
