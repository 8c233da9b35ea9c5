"""
Pytest tests for the FastAPI front door (status codes and payload shape).
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import FakeExplainer, FakeFetcher, FakePerformance
from seo_audit.app import create_app
from seo_audit.config import Settings
from seo_audit.core.errors import ExplanationQuotaExceeded, Fatal, FetchError
from seo_audit.core.orchestrator import AuditOrchestrator
from seo_audit.core.parsers import MarkupAnalyzer


def client_with(**providers):
    orchestrator = AuditOrchestrator(
        fetcher=providers.get("fetcher") or FakeFetcher(),
        analyzer=MarkupAnalyzer(),
        performance=providers.get("performance") or FakePerformance(),
        explainer=providers.get("explainer") or FakeExplainer(),
    )
    return TestClient(create_app(orchestrator=orchestrator, settings=Settings()))


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "ok"}


def test_seo_check_success(client):
    r = client.post("/api/seo-check", json={"url": "https://acme.example/"})
    assert r.status_code == 200
    data = r.json()
    assert data["url"] == "https://acme.example/"
    assert data["scores"] == {"performance": 90, "seo": 100, "overall": 95}
    assert data["pageFacts"]["title"] == "Acme Widgets | Handmade Tools!"
    assert data["pageFacts"]["imageCount"] == 10
    assert data["pageFacts"]["imagesMissingAlt"] == 1
    assert data["pageFacts"]["canonicalUrl"] == "https://acme.example/widgets"
    assert data["pageFacts"]["robotsDirective"] == "index, follow"
    assert data["explanation"] == "Looks good. Compress images."
    assert data["fetchedVia"] == "httpx"
    assert data["degraded"] == []


@pytest.mark.parametrize("body", [{"url": "acme.example"}, {"url": ""}, {}, {"url": 42}, {"link": "https://x.y"}])
def test_bad_url_is_400(client, fetcher, body):
    r = client.post("/api/seo-check", json=body)
    assert r.status_code == 400
    assert "valid URL" in r.json()["error"]
    assert fetcher.calls == []


def test_non_json_body_is_400(client):
    r = client.post("/api/seo-check", content=b"not json", headers={"content-type": "application/json"})
    assert r.status_code == 400


def test_unreachable_page_is_500():
    client = client_with(fetcher=FakeFetcher(error=FetchError("connection refused")))
    r = client.post("/api/seo-check", json={"url": "https://down.example/"})
    assert r.status_code == 500
    assert r.json() == {"error": "Something went wrong while analyzing the site."}


def test_performance_failure_still_200():
    client = client_with(performance=FakePerformance(error=TimeoutError("psi timeout")))
    r = client.post("/api/seo-check", json={"url": "https://acme.example/"})
    assert r.status_code == 200
    data = r.json()
    assert data["scores"]["performance"] == 0
    assert data["scores"]["seo"] == 100
    assert data["degraded"] == ["performance"]


def test_quota_exceeded_is_429():
    client = client_with(explainer=FakeExplainer(Fatal(ExplanationQuotaExceeded())))
    r = client.post("/api/seo-check", json={"url": "https://acme.example/"})
    assert r.status_code == 429
    assert "quota" in r.json()["error"]


def test_cors_headers(client):
    r = client.get("/health", headers={"Origin": "https://frontend.example"})
    assert r.headers.get("access-control-allow-origin") == "*"
