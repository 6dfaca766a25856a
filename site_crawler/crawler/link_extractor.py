# site_crawler/crawler/link_extractor.py
"""
Anchor and image reference extraction for SiteCrawler.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_crawler.utils import resolve_url


def _resolved_attrs(soup: BeautifulSoup, tag_name: str, attr: str, base_url: str) -> List[str]:
    urls: List[str] = []
    for tag in soup.find_all(tag_name):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attr)
        if not isinstance(value, str) or not value:
            continue
        absolute = resolve_url(value, base_url)
        if absolute is not None:
            urls.append(absolute)
    return urls


def extract_links(soup: BeautifulSoup, base_url: str) -> List[str]:
    """Every ``<a href>`` resolved against *base_url*, in document order."""
    return _resolved_attrs(soup, "a", "href", base_url)


def extract_images(soup: BeautifulSoup, base_url: str) -> List[str]:
    """Every ``<img src>`` resolved against *base_url*, in document order."""
    return _resolved_attrs(soup, "img", "src", base_url)
