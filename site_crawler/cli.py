# === FILE: site_crawler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCrawler через командную строку.

Команды:
  crawl BASE_URL [MAX_CONCURRENCY] [MAX_PAGES]
                Обойти сайт и вывести/сохранить отчёты
  config        Показать итоговую конфигурацию

Общие опции:
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Опции команды crawl:
  --config PATH       YAML/JSON-конфиг (аргументы командной строки важнее)
  --csv PATH          Сохранить CSV-отчёт
  --json PATH         Сохранить JSON-отчёт
  --html PATH         Сохранить HTML-отчёт
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Дополнительно:
  --version, -v       Показать версию SiteCrawler

Пример:
  site-crawler crawl https://example.com 5 100 --csv report.csv
"""
import asyncio
import sys
from pathlib import Path

import click
from jinja2 import TemplateError
from pydantic import ValidationError

from site_crawler import __version__
from site_crawler.aggregator import aggregate_results
from site_crawler.config import load_config
from site_crawler.engine import start_crawl
from site_crawler.logger import DEFAULT_FORMAT, init_logging
from site_crawler.report import render_html, render_json, write_csv_report

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load(config_path, **overrides):
    try:
        return load_config(config_path, **overrides)
    except ValidationError as e:
        print_error(f'Некорректная конфигурация: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


config_option = click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawler, version %(version)s')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, log_level, log_file, log_format):
    """Группа команд SiteCrawler CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@click.argument('max_concurrency', type=int, required=False)
@click.argument('max_pages', type=int, required=False)
@config_option
@click.option('--timeout', type=float, default=None, help='Таймаут на один запрос (секунд)')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option(
    '--csv', 'csv_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить CSV-отчёт в файл'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
def crawl(base_url, max_concurrency, max_pages, config_path, timeout, user_agent,
          csv_output, json_output, html_output, template_dir, pretty, crawl_timeout):
    """Обойти сайт начиная с BASE_URL и сгенерировать отчёты."""
    if base_url is None and config_path is None:
        print_error('Укажите BASE_URL или --config')

    cfg = _load(
        config_path,
        base_url=base_url,
        max_concurrency=max_concurrency,
        max_pages=max_pages,
        timeout=timeout,
        user_agent=user_agent,
    )
    try:
        if crawl_timeout:
            result = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            result = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')

    report = aggregate_results(result)

    if not (csv_output or json_output or html_output):
        click.echo(report.json(pretty=pretty))
        return

    if csv_output:
        try:
            saved_csv = write_csv_report(result.pages, csv_output)
            click.echo(f'CSV report: {saved_csv}')
        except OSError as e:
            print_error(f'Ошибка при сохранении CSV: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except (OSError, TemplateError) as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@config_option
def show_config(base_url, config_path):
    """Показать итоговую конфигурацию в JSON."""
    if base_url is None and config_path is None:
        print_error('Укажите BASE_URL или --config')
    cfg = _load(config_path, base_url=base_url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
