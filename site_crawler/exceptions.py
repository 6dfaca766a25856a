"""site_crawler.exceptions: Ошибки краулера.

Ни одна из них не прерывает обход целиком: каждая завершает только ту
ветку, в которой возникла.
"""
from __future__ import annotations

from typing import Optional

__all__ = ("CrawlerError", "InvalidURL", "TransportError", "UnsupportedResponse")


class CrawlerError(Exception):
    """Базовый класс ошибок SiteCrawler."""


class InvalidURL(CrawlerError, ValueError):
    """URL не удаётся разобрать (нет схемы или хоста)."""

    def __init__(self, url: str, reason: str = "invalid url") -> None:
        super().__init__(f"{reason}: {url!r}")
        self.url = url
        self.reason = reason


class TransportError(CrawlerError):
    """Сетевая ошибка, таймаут или отмена запроса."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Got network error for {url}: {reason}")
        self.url = url
        self.reason = reason


class UnsupportedResponse(CrawlerError):
    """Ответ получен, но это не успешная HTML-страница."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"Unsupported response from {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status
