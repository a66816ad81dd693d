import pytest
from fastapi.testclient import TestClient

from retrieval.app import create_app
from retrieval.service import RetrievalService
from vector_store import SqliteVectorStore, StoreConfig

from conftest import KeywordEmbedder


@pytest.fixture
def client(service):
    return TestClient(create_app(service=service))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["model_loaded"] is True
    assert body["db_ready"] is True


def test_ingest_then_search(client):
    response = client.post(
        "/ingest",
        json={"doc_id": "a", "text": "The quick fox. The slow dog.", "chunk_chars": 20, "overlap_chars": 5},
    )
    assert response.status_code == 200
    assert response.json() == {"doc_id": "a", "chunks": 2}

    response = client.post("/search", json={"query": "fox", "k": 5})
    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["text"] for item in items] == ["The quick fox.", "fox. The slow dog."]
    assert set(items[0]) == {"id", "doc_id", "text", "score"}


def test_search_clamps_k(client):
    for word in ("cat", "dog", "bird"):
        client.post("/ingest", json={"doc_id": word, "text": f"The {word}."})

    response = client.post("/search", json={"query": "the", "k": 0})
    assert len(response.json()["items"]) == 1

    response = client.post("/search", json={"query": "the", "k": 500})
    assert len(response.json()["items"]) == 3


def test_search_blank_query_is_bad_request(client):
    response = client.post("/search", json={"query": "   "})
    assert response.status_code == 400


def test_ingest_missing_fields(client):
    response = client.post("/ingest", json={"doc_id": "a"})
    assert response.status_code == 422


def test_ingest_blank_text_is_bad_request(client):
    response = client.post("/ingest", json={"doc_id": "a", "text": "  "})
    assert response.status_code == 400


def test_dimension_mismatch_is_conflict(client, store):
    store.insert("legacy", "old vector", [1.0, 0.0, 0.0])
    response = client.post("/ingest", json={"doc_id": "a", "text": "The cat."})
    assert response.status_code == 409


def test_chat_context(client):
    client.post("/ingest", json={"doc_id": "animals", "text": "The cat."})
    client.post("/ingest", json={"doc_id": "nature", "text": "The river."})
    response = client.post(
        "/chat/context",
        json={"messages": [{"role": "user", "content": "the river"}], "k": 1},
    )
    assert response.status_code == 200
    assert response.json()["items"][0]["doc_id"] == "nature"


def test_embed(client):
    response = client.post("/embed", json={"texts": ["The cat.", "The dog."]})
    assert response.status_code == 200
    vectors = response.json()["vectors"]
    assert len(vectors) == 2


def test_documents(client):
    client.post("/ingest", json={"doc_id": "a", "text": "The cat.", "source": "upload"})
    response = client.get("/documents")
    assert response.status_code == 200
    documents = response.json()
    assert documents[0]["doc_id"] == "a"
    assert documents[0]["source"] == "upload"
    assert documents[0]["chunk_count"] == 1


def test_unready_service_returns_503(config, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    store = SqliteVectorStore(StoreConfig(db_path=str(blocker / "index.db")))
    client = TestClient(create_app(service=RetrievalService(config, store, KeywordEmbedder())))

    assert client.post("/ingest", json={"doc_id": "a", "text": "The cat."}).status_code == 503
    assert client.post("/search", json={"query": "cat"}).status_code == 503
    health = client.get("/health").json()
    assert health["db_ready"] is False
    assert health["ready"] is False
