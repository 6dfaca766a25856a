# site_crawler/crawler/fetcher.py
"""
Fetcher module: downloads HTML pages and supports mid-flight abort.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession

from site_crawler.config import CrawlerConfig
from site_crawler.exceptions import TransportError, UnsupportedResponse


class PageFetcher(Protocol):
    """Anything the crawler can ask for a page body."""

    async def fetch(self, url: str, cancel: Optional[asyncio.Event] = None) -> str: ...


class Fetcher:
    """Fetches HTML over a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str, cancel: Optional[asyncio.Event] = None) -> str:
        """
        Return the HTML body of *url*.

        Raises TransportError on network failure, timeout or when *cancel*
        is set before the response arrives; UnsupportedResponse on
        HTTP status >= 400 or a non-HTML content type.
        """
        if cancel is None:
            return await self._get(url)
        if cancel.is_set():
            raise TransportError(url, "crawl cancelled")

        request = asyncio.ensure_future(self._get(url))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({request, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not request.done():
                request.cancel()
                await asyncio.gather(request, return_exceptions=True)

        if request.cancelled():
            raise TransportError(url, "crawl cancelled")
        return request.result()

    async def _get(self, url: str) -> str:
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if resp.status > 399:
                    reason = f"HTTP {resp.status} {resp.reason or ''}".rstrip()
                    raise UnsupportedResponse(url, reason, resp.status)
                ctype = resp.headers.get("Content-Type", "")
                if "text/html" not in ctype.lower():
                    raise UnsupportedResponse(url, f"non-HTML content type {ctype!r}", resp.status)
                return await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
