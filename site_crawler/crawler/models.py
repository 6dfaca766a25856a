# site_crawler/crawler/models.py
"""
Data models for the SiteCrawler crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping


class ExtractionStatus(str, Enum):
    """How an :class:`ExtractedPage` was produced."""

    PARSED = "parsed"
    DEGRADED = "degraded"  # HTML could not be parsed, fields hold defaults
    SKIPPED = "skipped"  # no HTML body was obtained for the page


@dataclass(slots=True)
class ExtractedPage:
    """Structured metadata extracted from a single fetched page."""

    url: str
    h1: str = ""
    first_paragraph: str = ""
    outgoing_links: List[str] = field(default_factory=list)
    image_urls: List[str] = field(default_factory=list)
    status: ExtractionStatus = ExtractionStatus.PARSED

    @classmethod
    def empty(cls, url: str, status: ExtractionStatus = ExtractionStatus.SKIPPED) -> ExtractedPage:
        return cls(url=url, status=status)

    @property
    def is_empty(self) -> bool:
        return not (self.h1 or self.first_paragraph or self.outgoing_links or self.image_urls)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass(slots=True, frozen=True)
class CrawlResult:
    """Final state of one crawl run.

    ``visits`` counts every encounter of a normalized URL, ``visited`` holds
    the URLs admitted for fetching (they count toward ``max_pages``) and
    ``pages`` has one record per admitted URL.
    """

    base_url: str
    visits: Mapping[str, int]
    visited: FrozenSet[str]
    pages: Mapping[str, ExtractedPage]
    elapsed: float = 0.0
