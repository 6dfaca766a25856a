# === FILE: site_crawler/crawler/crawler.py ===
"""
Concurrent same-host crawler.

Each discovered URL becomes a traversal branch (an asyncio task).  A branch
filters by host, normalizes, passes admission, fetches through the
:class:`FetchGate`, extracts links and spawns one child branch per link,
then waits for all of its children.

Admission is a plain synchronous method: no ``await`` between reading and
updating the visit ledger, so on a single event loop no other branch can
observe the visited set halfway through an update.
"""
from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.fetcher import Fetcher, PageFetcher
from site_crawler.crawler.gate import FetchGate
from site_crawler.crawler.link_extractor import extract_links
from site_crawler.crawler.models import CrawlResult, ExtractedPage, ExtractionStatus
from site_crawler.exceptions import InvalidURL, TransportError, UnsupportedResponse
from site_crawler.logger import LOGGER_NAME
from site_crawler.parser.html_parser import page_from_soup, parse_html
from site_crawler.utils import extract_hostname, normalize_url

__all__ = ("Admission", "AsyncCrawler")


class Admission(Enum):
    NEW = "new"
    SEEN = "seen"
    BUDGET = "budget"


class AsyncCrawler:
    """Crawls one site; use a fresh instance per run."""

    def __init__(self, config: CrawlerConfig, fetcher: Optional[PageFetcher] = None) -> None:
        self.config = config
        self.base_url: str = config.seed_url
        self.max_pages: int = max(1, config.max_pages)
        self.gate = FetchGate(config.max_concurrency)
        self.logger = logging.getLogger(LOGGER_NAME)

        self._base_host = extract_hostname(self.base_url)
        self._fetcher = fetcher
        self.session: Optional[ClientSession] = None

        self._visits: Dict[str, int] = {}
        self._visited: Set[str] = set()
        self._pages: Dict[str, ExtractedPage] = {}
        self._stopped = False
        self._cancel = asyncio.Event()
        self._started = False
        self._elapsed = 0.0

        self._pending_branches = 0
        self.peak_branches = 0

    async def __aenter__(self) -> AsyncCrawler:
        if self._fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # Public state                                                       #
    # ------------------------------------------------------------------ #

    @property
    def visits(self) -> Mapping[str, int]:
        return MappingProxyType(dict(self._visits))

    @property
    def visited(self) -> FrozenSet[str]:
        return frozenset(self._visited)

    @property
    def pages(self) -> Mapping[str, ExtractedPage]:
        return MappingProxyType(dict(self._pages))

    @property
    def stopped(self) -> bool:
        return self._stopped

    def result(self) -> CrawlResult:
        return CrawlResult(
            base_url=self.base_url,
            visits=self.visits,
            visited=self.visited,
            pages=self.pages,
            elapsed=self._elapsed,
        )

    # ------------------------------------------------------------------ #
    # Crawl                                                              #
    # ------------------------------------------------------------------ #

    async def crawl(self) -> Mapping[str, int]:
        """Walk the site from the seed URL and return the visit ledger."""
        if self._fetcher is None:
            raise RuntimeError("Session not initialized")
        if self._started:
            raise RuntimeError("AsyncCrawler instances are single-use")
        self._started = True

        self.logger.info(
            "starting crawl of %s (concurrency=%d, maxPages=%d)",
            self.base_url, self.gate.limit, self.max_pages,
        )
        start = time.monotonic()
        await self._crawl_page(self.base_url)
        self._elapsed = time.monotonic() - start

        fetched = sum(1 for p in self._pages.values() if p.status is not ExtractionStatus.SKIPPED)
        self.logger.info(
            "Finished: %d pages admitted (%d fetched), %d URLs seen in %.2f s (%.2f pages/s)",
            len(self._visited), fetched, len(self._visits), self._elapsed,
            len(self._visited) / self._elapsed if self._elapsed else 0,
        )
        return self.visits

    def _admit(self, key: str) -> Admission:
        # must stay free of awaits
        self._visits[key] = self._visits.get(key, 0) + 1
        if key in self._visited:
            return Admission.SEEN
        if len(self._visited) >= self.max_pages:
            self._stop()
            return Admission.BUDGET
        self._visited.add(key)
        return Admission.NEW

    def _stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._cancel.set()
        self.logger.info("Reached max pages (%d), stopping crawl", self.max_pages)

    async def _crawl_page(self, current_url: str) -> None:
        self._pending_branches += 1
        self.peak_branches = max(self.peak_branches, self._pending_branches)
        try:
            await self._visit(current_url)
        finally:
            self._pending_branches -= 1

    async def _visit(self, current_url: str) -> None:
        if extract_hostname(current_url) != self._base_host:
            self.logger.debug("skipping %s: different host", current_url)
            return

        try:
            key = normalize_url(current_url)
        except InvalidURL as exc:
            self.logger.warning("skipping %s", exc)
            return

        if self._admit(key) is not Admission.NEW:
            return
        if self._stopped:
            self._pages[key] = ExtractedPage.empty(current_url)
            return

        self.logger.info("crawling %s", current_url)
        try:
            html = await self.gate.admit(lambda: self._fetcher.fetch(current_url, self._cancel))
        except TransportError as exc:
            self.logger.warning("%s", exc)
            self._pages[key] = ExtractedPage.empty(current_url)
            return
        except UnsupportedResponse as exc:
            self.logger.info("%s", exc)
            self._pages[key] = ExtractedPage.empty(current_url)
            return

        soup = parse_html(html)
        if soup is None:
            self._pages[key] = ExtractedPage.empty(current_url, ExtractionStatus.DEGRADED)
            return
        self._pages[key] = page_from_soup(soup, current_url)

        # links for traversal are resolved against the seed, not the page
        next_urls = extract_links(soup, self.base_url)

        children: List[asyncio.Task[None]] = []
        for next_url in next_urls:
            if self._stopped:
                break
            children.append(asyncio.create_task(self._crawl_page(next_url)))
        if children:
            await asyncio.gather(*children)
