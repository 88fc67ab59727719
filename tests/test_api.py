"""Tests for the FastAPI conversion service.

WHY: Validates that every endpoint behaves correctly: happy paths,
per-request overrides, and invalid configuration.

HOW: Uses the FastAPI TestClient as a context manager so the lifespan
builds the default converter exactly like a real deployment.

RULES:
- All tests use the FastAPI TestClient (synchronous)
- Each test gets a fresh lifespan, so env changes are picked up
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import SEP, TRAIL
from term2regex import __version__
from term2regex.config import RE_SPLIT_WORD
from term2regex.server.app import app


@pytest.fixture
def client():
    """TestClient with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


class TestConversions:
    """POST /conversions converts terms in order."""

    def test_default_config(self, client):
        resp = client.post("/conversions", json={"terms": ["anaemia", "of the anemia"]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["results"] == [
            {"term": "anaemia", "regex": "[Aa]na?emias?" + TRAIL},
            {"term": "of the anemia", "regex": "of" + SEP + "the" + SEP + "[Aa]nemias?" + TRAIL},
        ]
        assert body["config"]["trailing_context_pattern"] == TRAIL

    def test_empty_term_list(self, client):
        resp = client.post("/conversions", json={"terms": []})
        assert resp.status_code == 200
        assert resp.json()["results"] == []

    def test_overrides(self, client):
        resp = client.post("/conversions", json={
            "terms": ["und of"],
            "config": {"trailing_context_pattern": "", "stop_words": ["und"]},
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["results"][0]["regex"] == "und" + SEP + "[Oo]fs?"
        assert body["config"]["stop_words"] == ["und"]

    def test_overrides_do_not_leak(self, client):
        client.post("/conversions", json={
            "terms": ["x"],
            "config": {"trailing_context_pattern": ""},
        })
        resp = client.post("/conversions", json={"terms": ["of"]})
        assert resp.json()["results"][0]["regex"] == "of" + TRAIL

    def test_invalid_split_pattern_returns_422(self, client):
        resp = client.post("/conversions", json={
            "terms": ["a"],
            "config": {"word_split_pattern": "["},
        })
        assert resp.status_code == 422
        assert "word_split_pattern" in resp.json()["detail"]

    def test_unknown_dialect_returns_422(self, client):
        resp = client.post("/conversions", json={
            "terms": ["a"],
            "config": {"dialect": "perl"},
        })
        assert resp.status_code == 422

    def test_missing_terms_rejected(self, client):
        resp = client.post("/conversions", json={})
        assert resp.status_code == 422


class TestConfigEndpoints:
    """GET /config and GET /dialects describe the service."""

    def test_config(self, client):
        resp = client.get("/config")
        assert resp.status_code == 200
        body = resp.json()
        assert body["word_split_pattern"] == RE_SPLIT_WORD
        assert body["dialect"] == "python"
        assert "of" in body["stop_words"]
        assert body["stop_words"] == sorted(body["stop_words"])

    def test_config_follows_environment(self, monkeypatch):
        monkeypatch.setenv("TERM2REGEX_TRAIL_CONTEXT", "")
        with TestClient(app) as fresh:
            assert fresh.get("/config").json()["trailing_context_pattern"] == ""

    def test_dialects(self, client):
        resp = client.get("/dialects")
        assert resp.status_code == 200
        assert resp.json() == ["monq", "posix", "python"]


class TestHealth:
    """GET /health reports liveness."""

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__}
