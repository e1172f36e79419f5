import pytest
from fastapi.testclient import TestClient

from annotator.analysis import lexicon as lexicon_module
from annotator.analysis.orchestrator import AnalysisOrchestrator
from annotator.config import settings
from annotator.dependencies import get_analysis_orchestrator
from annotator.main import app

from tests.fixtures.texts import LONG_TEXT


@pytest.fixture
def client(monkeypatch, plain_lexicon):
    # Skip the lifespan so the session lexicon is reused instead of rebuilt.
    monkeypatch.setattr(lexicon_module, "_shared", plain_lexicon)
    app.dependency_overrides[get_analysis_orchestrator] = lambda: AnalysisOrchestrator(
        plain_lexicon
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_analyze_returns_camel_case_document(client):
    response = client.post("/api/v1/analysis", json={"text": "I will kill this project"})

    assert response.status_code == 200
    body = response.json()
    assert body["basic"]["isFlagged"] is True
    assert body["basic"]["sentiment"]["label"] in {"positive", "negative", "neutral"}
    assert body["enriched"]["apiStatus"] == "Success"
    assert "sentimentScore" in body["enriched"]


def test_analyze_accepts_missing_text(client):
    response = client.post("/api/v1/analysis", json={})

    assert response.status_code == 200
    assert response.json()["enriched"]["summary"] == "No summary available"


def test_batch_preserves_order(client):
    response = client.post("/api/v1/analysis/batch", json={"texts": ["", LONG_TEXT]})

    assert response.status_code == 200
    first, second = response.json()
    assert first["basic"]["sentiment"]["label"] == "neutral"
    assert second["basic"]["contextLabel"] == "good_news"


def test_batch_over_limit_is_rejected(client, monkeypatch):
    monkeypatch.setattr(settings, "max_batch_size", 2)

    response = client.post("/api/v1/analysis/batch", json={"texts": ["a", "b", "c"]})

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_health_reports_ready_lexicon(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_health_without_lexicon_is_unavailable(client, monkeypatch):
    monkeypatch.setattr(lexicon_module, "_shared", None)

    response = client.get("/api/v1/health")

    assert response.status_code == 503
    assert response.json()["error"] == "LEXICON_UNAVAILABLE"
