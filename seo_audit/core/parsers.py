import logging
from typing import Optional, Union

from bs4 import BeautifulSoup, FeatureNotFound

from ..models.schema import PageFacts

log = logging.getLogger("seo-audit")


def soup_of(markup: Union[str, bytes, None], parser: str = "lxml") -> BeautifulSoup:
    try:
        return BeautifulSoup(markup or "", parser)
    except FeatureNotFound:
        log.warning("HTML parser %r not available, falling back to html.parser", parser)
        return BeautifulSoup(markup or "", "html.parser")


def _rel_tokens(tag) -> list:
    # rel is multi-valued in bs4 (a list of tokens)
    value = tag.get("rel")
    if not value:
        return []
    if isinstance(value, str):
        value = value.split()
    return [v.lower() for v in value]


def _canonical_link(soup: BeautifulSoup):
    for tag in soup.find_all("link"):
        if "canonical" in _rel_tokens(tag):
            return tag
    return None


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    # name is a single value: "og description" is not "description"
    for tag in soup.find_all("meta"):
        value = tag.get("name")
        if isinstance(value, str) and value.strip().lower() == name:
            return tag.get("content") or ""
    return ""


def _first_text(soup: BeautifulSoup, tag_name: str) -> str:
    tag = soup.find(tag_name)
    return tag.get_text().strip() if tag is not None else ""


def _missing_alt(img) -> bool:
    alt = img.get("alt")
    return alt is None or alt == ""


def extract_page_facts(markup: Union[str, bytes, None], parser: Optional[str] = None) -> PageFacts:
    """
    Pull on-page SEO signals from raw markup.

    Pure and tolerant: broken or empty markup yields empty strings and zero counts.
    """
    soup = soup_of(markup, parser or "lxml")

    images = soup.find_all("img")
    canonical = _canonical_link(soup)

    return PageFacts(
        title=_first_text(soup, "title"),
        meta_description=_meta_content(soup, "description"),
        first_h1=_first_text(soup, "h1"),
        image_count=len(images),
        images_missing_alt=sum(1 for img in images if _missing_alt(img)),
        canonical_url=(canonical.get("href") or "") if canonical is not None else "",
        robots_directive=_meta_content(soup, "robots"),
    )


class MarkupAnalyzer:
    def __init__(self, parser: str = "lxml"):
        self.parser = parser

    def analyze(self, markup: Union[str, bytes, None]) -> PageFacts:
        return extract_page_facts(markup, self.parser)
