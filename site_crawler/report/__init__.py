# File: site_crawler/report/__init__.py
"""site_crawler.report: Генерация отчётов (CSV, JSON и HTML) для CLI и тестов."""

from site_crawler.report.csv_report import write_csv_report
from site_crawler.report.html_report import render_html
from site_crawler.report.json_report import render_json

__all__ = ["write_csv_report", "render_json", "render_html"]
