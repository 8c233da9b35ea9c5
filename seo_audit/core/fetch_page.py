from typing import Optional

import httpx

from .fetchers import fetch_via_httpx, fetch_via_playwright


class PageFetcher:
    """
    Single-attempt page retrieval.

    render_js=False -> plain httpx GET (default)
    render_js=True  -> headless Chromium via Playwright, for JS-rendered pages
    Raises FetchError on any failure; there is no fallback between backends.
    """

    def __init__(
        self,
        timeout: float = 20,
        render_js: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.render_js = render_js
        self.transport = transport

    @property
    def backend(self) -> str:
        return "playwright" if self.render_js else "httpx"

    async def fetch(self, url: str) -> str:
        if self.render_js:
            return await fetch_via_playwright(url, timeout=self.timeout)
        return await fetch_via_httpx(url, timeout=self.timeout, transport=self.transport)
