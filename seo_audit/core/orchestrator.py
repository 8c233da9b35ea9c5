import asyncio
import datetime
import logging
from typing import Any, Dict

from ..config import Settings
from ..models.schema import AuditResult, PageFacts, ScoreSet
from .audit import compute_scores
from .errors import Degraded, FetchError, Fatal, Ok, PageUnreachableError, ValidationError
from .explain import ExplanationGenerator
from .fetch_page import PageFetcher
from .parsers import MarkupAnalyzer
from .performance import ABSENT, PerformanceProvider
from .utils import is_http_url

log = logging.getLogger("seo-audit")


def build_metrics(url: str, scores: ScoreSet, facts: PageFacts) -> Dict[str, Any]:
    """Payload handed to the language model."""
    return {
        "url": url,
        "scores": scores.model_dump(),
        "seoDetails": facts.model_dump(by_alias=True),
    }


class AuditOrchestrator:
    """
    One audit per call:

      validate -> (performance || fetch + analyze) -> score -> explain -> result

    Page fetch/analysis failure is fatal, a performance failure is recorded as an
    absent score, and the explanation falls back to fixed text unless the
    language model rejects the call for quota.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        analyzer: MarkupAnalyzer,
        performance: PerformanceProvider,
        explainer: ExplanationGenerator,
    ):
        self.fetcher = fetcher
        self.analyzer = analyzer
        self.performance = performance
        self.explainer = explainer

    async def _page_facts(self, url: str):
        try:
            html = await self.fetcher.fetch(url)
        except FetchError as e:
            log.error("Page fetch failed for %s: %s", url, e)
            return Fatal(PageUnreachableError(detail=str(e)))
        try:
            return Ok(self.analyzer.analyze(html))
        except Exception as e:
            log.exception("Markup analysis failed for %s", url)
            return Fatal(PageUnreachableError(detail=f"markup analysis failed: {e}"))

    async def _performance_facts(self, url: str):
        try:
            facts = await self.performance.fetch(url)
        except Exception as e:
            log.warning("Performance provider failed for %s: %s", url, e)
            return Degraded(str(e), ABSENT)
        if facts.absent:
            return Degraded("no performance score", facts)
        return Ok(facts)

    async def perform_audit(self, url: str) -> AuditResult:
        if not is_http_url(url):
            log.warning("Rejected audit request with invalid url: %r", url)
            raise ValidationError(detail=f"invalid url: {url!r}")
        url = url.strip()
        log.info("Audit requested for: %s", url)

        degraded = []
        perf_task = asyncio.create_task(self._performance_facts(url))
        page_task = asyncio.create_task(self._page_facts(url))
        try:
            page_outcome = await page_task
            if isinstance(page_outcome, Fatal):
                raise page_outcome.error
            perf_outcome = await perf_task
        finally:
            # fatal page branch or caller gone: drop whatever is still running
            for task in (perf_task, page_task):
                if not task.done():
                    task.cancel()

        page_facts = page_outcome.value
        if isinstance(perf_outcome, Degraded):
            degraded.append("performance")
        perf_facts = perf_outcome.value

        scores = compute_scores(perf_facts, page_facts)
        log.info(
            "Scores for %s: performance=%s seo=%s overall=%s",
            url, scores.performance, scores.seo, scores.overall,
        )

        explain_outcome = await self.explainer.explain(build_metrics(url, scores, page_facts))
        if isinstance(explain_outcome, Fatal):
            raise explain_outcome.error
        if isinstance(explain_outcome, Degraded):
            log.warning("Explanation degraded for %s: %s", url, explain_outcome.reason)
            degraded.append("explanation")

        return AuditResult(
            url=url,
            scores=scores,
            page_facts=page_facts,
            explanation=explain_outcome.value,
            fetched_via=getattr(self.fetcher, "backend", None),
            fetched_at=datetime.datetime.now(datetime.timezone.utc).isoformat(),
            degraded=degraded,
        )


def build_orchestrator(settings: Settings) -> AuditOrchestrator:
    """Construct every provider once, at process start."""
    return AuditOrchestrator(
        fetcher=PageFetcher(timeout=settings.page_timeout, render_js=settings.render_js),
        analyzer=MarkupAnalyzer(parser=settings.html_parser),
        performance=PerformanceProvider(
            api_key=settings.pagespeed_api_key,
            endpoint=settings.pagespeed_endpoint,
            timeout=settings.pagespeed_timeout,
        ),
        explainer=ExplanationGenerator(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.llm_timeout,
        ),
    )
