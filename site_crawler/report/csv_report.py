# site_crawler/report/csv_report.py

"""
Генерация CSV-отчёта: одна строка на страницу.

Поля со запятой, кавычкой или переводом строки берутся в кавычки,
кавычки внутри удваиваются.
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from site_crawler.crawler.models import ExtractedPage
from site_crawler.logger import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

CSV_HEADERS = ("page_url", "h1", "first_paragraph", "outgoing_link_urls", "image_urls")


def write_csv_report(
    pages: Mapping[str, Any],
    output_path: Union[Path, str] = "report.csv",
) -> Path:
    """
    Сохраняет записи страниц в CSV по указанному пути.

    :param pages: отображение URL -> ExtractedPage
    :param output_path: путь к CSV-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    skipped = 0
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for key in sorted(pages):
            page = pages[key]
            if not isinstance(page, ExtractedPage):
                skipped += 1
                continue
            writer.writerow(
                (
                    page.url or key,
                    page.h1,
                    page.first_paragraph,
                    ";".join(page.outgoing_links),
                    ";".join(page.image_urls),
                )
            )

    if skipped:
        logger.warning("CSV report: skipped %d entries that are not page records", skipped)
    return output
