# File: site_crawler/aggregator.py
"""site_crawler.aggregator: Модуль агрегатора отчётов обхода."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, TypedDict

from site_crawler.crawler.models import CrawlResult, ExtractionStatus


class PageInfo(TypedDict):
    """Информация о веб-странице (одна строка отчёта)."""

    key: str
    url: str
    h1: str
    first_paragraph: str
    outgoing_links: List[str]
    image_urls: List[str]
    status: str
    visits: int


class VisitInfo(TypedDict):
    """Сколько раз на URL вели ссылки."""

    url: str
    count: int


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода сайта: страницы, счётчики посещений и сводка."""

    base_url: str = ""
    pages: List[PageInfo] = field(default_factory=list)
    visits: List[VisitInfo] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление CrawlReport."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def _aggregate_pages(result: CrawlResult) -> List[PageInfo]:
    """Преобразует записи страниц, сортируя по ключу."""
    pages: List[PageInfo] = []
    for key in sorted(result.pages):
        page = result.pages[key]
        pages.append(
            {
                "key": key,
                "url": page.url,
                "h1": page.h1,
                "first_paragraph": page.first_paragraph,
                "outgoing_links": list(page.outgoing_links),
                "image_urls": list(page.image_urls),
                "status": page.status.value,
                "visits": result.visits.get(key, 0),
            }
        )
    return pages


def _aggregate_visits(result: CrawlResult) -> List[VisitInfo]:
    """Счётчики по убыванию, при равенстве по URL."""
    ordered = sorted(result.visits.items(), key=lambda item: (-item[1], item[0]))
    return [{"url": url, "count": count} for url, count in ordered]


def aggregate_results(result: CrawlResult) -> CrawlReport:
    """Собирает все части отчёта в CrawlReport."""
    records = list(result.pages.values())
    report = CrawlReport(base_url=result.base_url)
    report.pages = _aggregate_pages(result)
    report.visits = _aggregate_visits(result)
    report.summary = {
        "pages_visited": len(result.visited),
        "urls_seen": len(result.visits),
        "pages_without_h1": sum(
            1 for p in records if p.status is ExtractionStatus.PARSED and not p.h1
        ),
        "pages_degraded": sum(1 for p in records if p.status is ExtractionStatus.DEGRADED),
        "pages_skipped": sum(1 for p in records if p.status is ExtractionStatus.SKIPPED),
        "elapsed": round(result.elapsed, 3),
    }
    return report
