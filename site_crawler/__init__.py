"""
SiteCrawler package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from site_crawler.config import CrawlerConfig, load_config
from site_crawler.crawler.crawler import AsyncCrawler
from site_crawler.engine import crawl_site_async, start_crawl
from site_crawler.utils import normalize_url

__all__ = [
    "__version__",
    "AsyncCrawler",
    "CrawlerConfig",
    "crawl_site_async",
    "load_config",
    "normalize_url",
    "start_crawl",
]
