import asyncio
import logging
from typing import Optional

import httpx
from playwright.async_api import async_playwright

from .errors import FetchError
from .utils import default_headers

log = logging.getLogger("seo-audit")


async def fetch_via_httpx(
    url: str,
    timeout: float = 20,
    headers: Optional[dict] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    async def _get():
        async with httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, transport=transport
        ) as client:
            return await client.get(url, headers=headers or default_headers())

    try:
        # httpx timeouts are per connect/read; this bounds the whole call
        r = await asyncio.wait_for(_get(), timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise FetchError(f"timed out fetching {url}") from e
    except httpx.HTTPError as e:
        raise FetchError(f"httpx fetch failed: {e}") from e

    if not r.is_success:
        raise FetchError(f"{url} returned status {r.status_code}")
    log.info("Fetched via httpx (%s bytes)", len(r.content))
    return r.text


async def fetch_via_playwright(url: str, timeout: float = 45) -> str:
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=["--no-sandbox"])
            try:
                context = await browser.new_context(user_agent=default_headers()["User-Agent"])
                page = await context.new_page()
                response = await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
                if response is not None and not response.ok:
                    raise FetchError(f"{url} returned status {response.status}")
                html = await page.content()
            finally:
                await browser.close()
    except FetchError:
        raise
    except Exception as e:
        raise FetchError(f"Playwright fetch failed: {e}") from e

    log.info("Fetched page with Playwright")
    return html
