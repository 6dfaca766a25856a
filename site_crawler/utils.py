# File: site_crawler/utils.py
"""site_crawler.utils: Нормализация URL и разрешение относительных ссылок.

Хост и путь канонизируются через :mod:`yarl` (тот же разбор, что и у
aiohttp): IDN-хост переводится в punycode, путь percent-кодируется.
Поэтому ``https://bücher.de/a b`` и ``https://xn--bcher-kva.de/a%20b``
считаются одной страницей.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from urllib.parse import urljoin, urlsplit

from yarl import URL

from site_crawler.exceptions import InvalidURL
from site_crawler.logger import LOGGER_NAME

__all__: Sequence[str] = (
    "normalize_url",
    "resolve_url",
    "extract_hostname",
)

logger = logging.getLogger(LOGGER_NAME)

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def _parse_absolute(url: str) -> URL:
    try:
        parsed = URL(url)
        host = parsed.raw_host
    except ValueError as exc:
        raise InvalidURL(url, str(exc)) from exc
    if not parsed.scheme or not host:
        raise InvalidURL(url)
    return parsed


def _host(parsed: URL) -> str:
    """hostname[:port]; порт по умолчанию для схемы опускается."""
    hostname = parsed.raw_host or ""
    if ":" in hostname:
        hostname = f"[{hostname}]"
    port = parsed.explicit_port
    if port is not None and port != _DEFAULT_PORTS.get(parsed.scheme.lower()):
        return f"{hostname}:{port}"
    return hostname


def normalize_url(url: str) -> str:
    """Ключ дедупликации: host + path без одного завершающего слеша.

    Query и fragment отбрасываются, так что ``https://a.com/p/`` и
    ``https://a.com/p?x=1`` дают один и тот же ключ ``a.com/p``.
    """
    parsed = _parse_absolute(url)
    path = parsed.raw_path or "/"
    if path.endswith("/"):
        path = path[:-1]
    return f"{_host(parsed)}{path}"


def extract_hostname(url: str) -> Optional[str]:
    """Канонический hostname (без порта, IDN в punycode) или None."""
    try:
        return URL(url).raw_host
    except ValueError:
        return None


def resolve_url(reference: str, base_url: str) -> Optional[str]:
    """Делает ссылку абсолютной относительно base_url.

    Неразрешимая ссылка не считается ошибкой страницы: пишем в лог и
    возвращаем None, вызывающий код просто её пропускает.
    """
    ref = reference.strip()
    try:
        _parse_absolute(base_url)
        absolute = urljoin(base_url, ref)
        parsed = urlsplit(absolute)
    except ValueError as exc:
        logger.warning("invalid reference %r against %s: %s", reference, base_url, exc)
        return None
    if not parsed.scheme:
        logger.warning("invalid reference %r against %s: not absolute", reference, base_url)
        return None
    return absolute
