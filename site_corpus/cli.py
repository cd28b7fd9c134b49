# === FILE: site_corpus/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCorpus через командную строку.

Команды:
  crawl URL   Обойти сайт и вывести/сохранить собранный текст
  serve       Запустить HTTP-сервер с эндпоинтом POST /api/extract-url
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --limit INT         Макс. число страниц (override max_pages)
  --output PATH       Сохранить текст в файл
  --json PATH         Сохранить JSON-отчёт в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию SiteCorpus

Пример:
  site-corpus crawl https://example.com --limit 100 --json corpus.json --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from site_corpus import __version__
from site_corpus.config import load_config
from site_corpus.crawler.models import InvalidSeedURL
from site_corpus.engine import start_crawl
from site_corpus.logger import DEFAULT_FORMAT, configure
from site_corpus.report.json_report import render_json
from site_corpus.report.text_report import render_text
from site_corpus import server

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCorpus, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
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
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteCorpus CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц для обхода (override max_pages)'
)
@click.option(
    '--output', '-o', 'text_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить текст в файл'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def crawl(ctx, url, limit, text_output, json_output, pretty):
    """Обойти сайт начиная с URL и собрать текст."""
    cfg = ctx.obj['config']
    if limit is not None:
        cfg = cfg.model_copy(update={'max_pages': limit})
    try:
        text = asyncio.run(start_crawl(url, cfg))
    except InvalidSeedURL as e:
        print_error(f'Некорректный URL: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    # Если не сохраняем в файл — печатаем в stdout
    if not text_output and not json_output:
        click.echo(text)
        return

    if text_output:
        try:
            saved = render_text(text, text_output)
            click.echo(f'Text corpus: {saved}')
        except OSError as e:
            print_error(f'Ошибка при сохранении текста: {e}')

    if json_output:
        try:
            saved_json = render_json(url, text, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default='localhost', show_default=True, help='Адрес для прослушивания')
@click.option('--port', default=3000, show_default=True, type=int, help='Порт HTTP-сервера')
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP-сервер с эндпоинтом POST /api/extract-url."""
    server.run(host=host, port=port, config=ctx.obj['config'])


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
