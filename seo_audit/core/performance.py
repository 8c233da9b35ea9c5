import asyncio
import logging
from typing import Any, Optional

import httpx

from ..config import PAGESPEED_ENDPOINT
from ..models.schema import PerformanceFacts

log = logging.getLogger("seo-audit")

ABSENT = PerformanceFacts()


def extract_performance_ratio(payload: Any) -> Optional[float]:
    """lighthouseResult.categories.performance.score, or None if missing/unusable."""
    if not isinstance(payload, dict):
        return None
    node: Any = payload
    for key in ("lighthouseResult", "categories", "performance", "score"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        return None
    if not 0 <= node <= 1:
        return None
    return float(node)


class PerformanceProvider:
    """Google PageSpeed Insights client. Never raises; failures come back as absent."""

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str = PAGESPEED_ENDPOINT,
        timeout: float = 60,
        strategy: str = "mobile",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.strategy = strategy
        self.transport = transport
        if not api_key:
            log.warning("PAGESPEED_API_KEY not set, performance scores will be 0")

    async def fetch(self, url: str) -> PerformanceFacts:
        if not self.api_key:
            log.warning("Skipping PageSpeed for %s: no API key", url)
            return ABSENT

        params = {"url": url, "key": self.api_key, "strategy": self.strategy}

        async def _get():
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                return await client.get(self.endpoint, params=params)

        try:
            # bounds the whole call, not just each connect/read
            r = await asyncio.wait_for(_get(), self.timeout)
            if r.status_code != 200:
                log.warning("PageSpeed returned status %s for %s", r.status_code, url)
                return ABSENT
            payload = r.json()
        except (asyncio.TimeoutError, httpx.TimeoutException):
            log.warning("PageSpeed timed out for %s", url)
            return ABSENT
        except httpx.HTTPError as e:
            log.warning("PageSpeed request failed for %s: %s", url, e)
            return ABSENT
        except ValueError as e:
            log.warning("PageSpeed returned malformed JSON for %s: %s", url, e)
            return ABSENT

        ratio = extract_performance_ratio(payload)
        if ratio is None:
            log.warning("PageSpeed response for %s has no performance score", url)
            return ABSENT
        log.info("PageSpeed performance ratio for %s: %.2f", url, ratio)
        return PerformanceFacts(lighthouse_performance_ratio=ratio)
