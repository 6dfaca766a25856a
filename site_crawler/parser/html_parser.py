# === FILE: site_crawler/parser/html_parser.py ===
"""HTML parsing utilities for SiteCrawler.

Turns raw markup into an :class:`~site_crawler.crawler.models.ExtractedPage`:

* h1              — text of the first ``<h1>`` in document order.
* first_paragraph — first ``<p>`` inside ``<main>`` if there is one,
  otherwise the first ``<p>`` anywhere.
* outgoing_links  — every ``<a href>``, resolved, duplicates kept.
* image_urls      — every ``<img src>``, resolved, duplicates kept.

Extraction never raises.  Markup the parser rejects produces a record with
default values and ``status=DEGRADED`` so a malformed page cannot abort the
crawl, and callers can still tell it apart from a page that is simply empty.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from site_crawler.crawler.link_extractor import extract_images, extract_links
from site_crawler.crawler.models import ExtractedPage, ExtractionStatus
from site_crawler.logger import LOGGER_NAME

__all__: Sequence[str] = (
    "parse_html",
    "get_h1_from_html",
    "get_first_paragraph_from_html",
    "get_urls_from_html",
    "get_images_from_html",
    "extract_page_data",
    "page_from_soup",
)

logger = logging.getLogger(LOGGER_NAME)

_PARSER = "html.parser"


def parse_html(html: str) -> Optional[BeautifulSoup]:
    """Parse *html*; ``None`` if the markup cannot be parsed at all."""
    try:
        return BeautifulSoup(html, _PARSER)
    except (ParserRejectedMarkup, AssertionError, TypeError) as exc:
        logger.warning("failed to parse HTML: %s", exc)
        return None


def _text(tag: object) -> str:
    return tag.get_text().strip() if isinstance(tag, Tag) else ""


def _h1(soup: BeautifulSoup) -> str:
    return _text(soup.find("h1"))


def _first_paragraph(soup: BeautifulSoup) -> str:
    main = soup.find("main")
    paragraph = main.find("p") if isinstance(main, Tag) else None
    if paragraph is None:
        paragraph = soup.find("p")
    return _text(paragraph)


def get_h1_from_html(html: str) -> str:
    soup = parse_html(html)
    return _h1(soup) if soup is not None else ""


def get_first_paragraph_from_html(html: str) -> str:
    soup = parse_html(html)
    return _first_paragraph(soup) if soup is not None else ""


def get_urls_from_html(html: str, base_url: str) -> List[str]:
    soup = parse_html(html)
    return extract_links(soup, base_url) if soup is not None else []


def get_images_from_html(html: str, base_url: str) -> List[str]:
    soup = parse_html(html)
    return extract_images(soup, base_url) if soup is not None else []


def extract_page_data(html: str, page_url: str) -> ExtractedPage:
    """Build the page record; references are resolved against *page_url*."""
    soup = parse_html(html)
    if soup is None:
        return ExtractedPage.empty(page_url, ExtractionStatus.DEGRADED)
    return page_from_soup(soup, page_url)


def page_from_soup(soup: BeautifulSoup, page_url: str) -> ExtractedPage:
    return ExtractedPage(
        url=page_url,
        h1=_h1(soup),
        first_paragraph=_first_paragraph(soup),
        outgoing_links=extract_links(soup, page_url),
        image_urls=extract_images(soup, page_url),
        status=ExtractionStatus.PARSED,
    )
