import os
import sys
import json
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

# Add backend to sys.path
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from fakes import FakeLLM
from api.main import app
from core.pipeline.extraction import ExtractionPipeline
from core.generate.extractor import CompetencyExtractor
from core.errors import QuotaExceededError
from config.settings import ExtractionConfig

DOCUMENT = "# A\n\n## B\n\nshort text\n\n## C\n\n" + "Teachers chart reading scores weekly. " * 30

@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client

def use_llm(llm):
    extractor = CompetencyExtractor(llm, config=ExtractionConfig(request_delay_seconds=0))
    app.state.extraction_pipeline = ExtractionPipeline(extractor)
    app.state.llm_client = llm

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

def test_chunk_filter_and_preview(client):
    response = client.post("/api/chunks", json={"markdown_text": DOCUMENT, "min_words": 100})
    assert response.status_code == 200
    body = response.json()
    assert body["total_chunks"] == 3
    assert [c["chunk_id"] for c in body["chunks"]] == ["1.1", "2.1", "3.1"]
    assert body["chunks"][1]["hierarchy"] == "A > B"
    assert body["chunks"][2]["content_type"] == "main_content"

    filtered = client.post("/api/chunks/filter", json={"chunks": body["chunks"]}).json()
    assert [c["chunk_id"] for c in filtered["chunks"]] == ["3.1"]

    preview = client.post("/api/chunks/preview", json={"chunks": body["chunks"]}).json()
    assert preview["total_chunks"] == 3
    assert preview["content_type_counts"] == {"main_content": 1, "other": 2}

def test_chunk_rejects_non_string(client):
    response = client.post("/api/chunks", json={"markdown_text": 12})
    assert response.status_code == 422

def test_validate(client):
    chunks = client.post("/api/chunks", json={"markdown_text": DOCUMENT}).json()["chunks"]
    response = client.post("/api/competencies/validate", json={
        "competencies": [
            {"term": "reading scores", "source_chunk": "3.1"},
            {"term": "Phonics", "source_chunk": "3.1"},
        ],
        "chunks": chunks
    })

    assert response.status_code == 200
    body = response.json()
    assert [c["confidence"] for c in body["competencies"]] == [1.0, 0.2]
    assert body["summary"]["total"] == 2
    assert body["summary"]["low_confidence_terms"] == ["Phonics"]

def test_extract(client):
    reply = json.dumps({"competencies": [
        {"term": "reading scores", "category": "skill", "importance": "high", "definition": "Scores"}
    ]})
    use_llm(FakeLLM([reply]))

    response = client.post("/api/competencies/extract", json={"markdown_text": DOCUMENT, "min_words": 100})

    assert response.status_code == 200
    body = response.json()
    assert [c["chunk_id"] for c in body["keyword_chunks"]] == ["3.1"]
    assert body["competencies"][0]["source_chunk"] == "3.1"
    assert body["competencies"][0]["text_found"] is True
    assert body["failed_chunks"] == []

def test_extract_without_key_is_unauthorized(client):
    use_llm(FakeLLM(api_key=""))

    response = client.post("/api/competencies/extract", json={"markdown_text": DOCUMENT, "min_words": 100})
    assert response.status_code == 401

def test_extract_llm_failure_is_bad_gateway(client):
    pipeline = MagicMock()
    pipeline.run.side_effect = QuotaExceededError("insufficient_quota")
    app.state.extraction_pipeline = pipeline

    response = client.post("/api/competencies/extract", json={"markdown_text": DOCUMENT})
    assert response.status_code == 502
    assert response.json()["detail"].startswith("API Quota/Rate Limit Error")

def test_setup(client):
    use_llm(FakeLLM(api_key="sk-valid"))

    body = client.get("/api/setup", params={"probe": "false"}).json()
    assert body["api_key_found"] is True
    assert body["api_key_format_ok"] is True
    assert body["api_test_ok"] is False
