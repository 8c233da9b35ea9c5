"""
Pytest fixtures for the SEO audit tests. Providers are replaced with in-memory fakes.
"""

from __future__ import annotations

import pytest

from seo_audit.core.errors import FetchError, Ok
from seo_audit.core.parsers import MarkupAnalyzer
from seo_audit.models.schema import PerformanceFacts

TITLE_30 = "Acme Widgets | Handmade Tools!"
META_100 = ("Handmade widgets and tools " * 4)[:100]

GOOD_HTML = f"""<!doctype html>
<html>
<head>
  <title>  {TITLE_30}  </title>
  <meta name="description" content="{META_100}">
  <meta name="robots" content="index, follow">
  <link rel="canonical" href="https://acme.example/widgets">
</head>
<body>
  <h1> Handmade widgets </h1>
  {"".join(f'<img src="/img/{i}.webp" alt="widget {i}">' for i in range(9))}
  <img src="/img/9.webp">
</body>
</html>
"""


class FakeFetcher:
    backend = "httpx"

    def __init__(self, html: str = GOOD_HTML, error: Exception | None = None):
        self.html = html
        self.error = error
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


class FakePerformance:
    def __init__(self, ratio: float | None = 0.9, error: Exception | None = None):
        self.ratio = ratio
        self.error = error
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return PerformanceFacts(lighthouse_performance_ratio=self.ratio)


class FakeExplainer:
    def __init__(self, outcome=None):
        self.outcome = outcome or Ok("Looks good. Compress images.")
        self.calls = []

    async def explain(self, metrics):
        self.calls.append(metrics)
        return self.outcome


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def performance():
    return FakePerformance()


@pytest.fixture
def explainer():
    return FakeExplainer()


@pytest.fixture
def orchestrator(fetcher, performance, explainer):
    from seo_audit.core.orchestrator import AuditOrchestrator

    return AuditOrchestrator(
        fetcher=fetcher,
        analyzer=MarkupAnalyzer(),
        performance=performance,
        explainer=explainer,
    )


@pytest.fixture
def client(orchestrator):
    """FastAPI TestClient wired to the fake-provider orchestrator."""
    from fastapi.testclient import TestClient

    from seo_audit.app import create_app
    from seo_audit.config import Settings

    return TestClient(create_app(orchestrator=orchestrator, settings=Settings()))


@pytest.fixture
def unreachable_fetcher():
    return FakeFetcher(error=FetchError("connection refused"))
