# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Union

import pytest
from aiohttp import web

from site_crawler.config import CrawlerConfig
from site_crawler.exceptions import TransportError, UnsupportedResponse
from site_crawler.logger import LOGGER_NAME

SEED = "https://ex.com/"


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeFetcher:
    """In-memory stand-in for :class:`site_crawler.crawler.fetcher.Fetcher`.

    ``pages`` maps absolute URL -> HTML body, or an exception to raise.
    Unknown URLs behave like a 404.  ``delays`` holds per-URL latency; a
    delayed fetch is aborted as soon as the cancel event is set.
    """

    def __init__(
        self,
        pages: Dict[str, Union[str, Exception]],
        delays: Optional[Dict[str, float]] = None,
        default_delay: float = 0.0,
    ) -> None:
        self.pages = pages
        self.delays = delays or {}
        self.default_delay = default_delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def fetch(self, url: str, cancel: Optional[asyncio.Event] = None) -> str:
        self.calls.append(url)
        if cancel is not None and cancel.is_set():
            raise TransportError(url, "crawl cancelled")
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            delay = self.delays.get(url, self.default_delay)
            if cancel is None:
                await asyncio.sleep(delay)
            else:
                try:
                    await asyncio.wait_for(cancel.wait(), timeout=delay)
                except asyncio.TimeoutError:
                    pass
                else:
                    raise TransportError(url, "crawl cancelled")
            body = self.pages.get(url)
            if body is None:
                raise UnsupportedResponse(url, "HTTP 404 Not Found", 404)
            if isinstance(body, Exception):
                raise body
            return body
        finally:
            self.in_flight -= 1


@pytest.fixture(autouse=True)
def project_logger():
    """Let caplog see project records; undo CLI reconfiguration afterwards."""
    lg = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(lg.handlers), lg.level, lg.propagate
    lg.propagate = True
    yield lg
    lg.handlers[:] = handlers
    lg.setLevel(level)
    lg.propagate = propagate


@pytest.fixture()
def make_config():
    """Factory for CrawlerConfig with test-friendly defaults."""

    def _make(base_url: str = SEED, **kwargs) -> CrawlerConfig:
        kwargs.setdefault("timeout", 2.0)
        kwargs.setdefault("user_agent", "TestAgent/1.0")
        return CrawlerConfig(base_url=base_url, **kwargs)

    return _make


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()
