# File: site_crawler/engine.py
"""site_crawler.engine: точки входа для запуска обхода."""

from __future__ import annotations

from typing import Mapping

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.crawler import AsyncCrawler
from site_crawler.crawler.models import CrawlResult
from site_crawler.logger import logger

__all__ = ["start_crawl", "crawl_site_async"]


async def start_crawl(cfg: CrawlerConfig) -> CrawlResult:
    """
    Запускает AsyncCrawler в контексте и возвращает CrawlResult.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    """
    logger.debug("Starting crawl for %s", cfg.seed_url)
    async with AsyncCrawler(cfg) as crawler:
        await crawler.crawl()
    return crawler.result()


async def crawl_site_async(
    base_url: str, max_concurrency: int = 5, max_pages: int = 100
) -> Mapping[str, int]:
    """Обход сайта с параметрами по умолчанию; возвращает счётчики посещений."""
    cfg = CrawlerConfig(base_url=base_url, max_concurrency=max_concurrency, max_pages=max_pages)
    result = await start_crawl(cfg)
    return result.visits
