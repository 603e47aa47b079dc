# === FILE: scriptscope/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска ScriptScope через командную строку.

Команды:
  scan      Обработать список целей, вывести и сохранить результаты
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  -i PATH             Файл со списком URL (по одному на строку), обязателен
  -w PATH             Файл с чувствительными словами (default: ~/bin/WordList.txt)
  -t SEC              Таймаут одного HTTP-запроса
  -o DIR              Каталог для результатов (default: ~/scriptscope_results)
  --save/--no-save    Сохранять результаты в txt-файлы по доменам
  --json PATH         Сохранить JSON-отчёт по всем целям
  --html PATH         Сохранить HTML-отчёт по всем целям

Дополнительно:
  --version, -v       Показать версию ScriptScope

Пример:
  scriptscope scan -i targets.txt -w WordList.txt -t 10 --json report.json
"""
import sys
from pathlib import Path
from typing import Any, Dict, List

import click

from scriptscope import __version__
from scriptscope.aggregator import ResultSet
from scriptscope.config import load_config
from scriptscope.engine import Engine
from scriptscope.logger import DEFAULT_FORMAT, init_logging
from scriptscope.parser.sensitive import load_keywords
from scriptscope.report.console import render_console
from scriptscope.report.html_report import render_html
from scriptscope.report.json_report import render_json
from scriptscope.report.text_files import save_results
from scriptscope.utils import read_lines

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='ScriptScope, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
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
    help='Путь к файлу логов'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд ScriptScope CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--input', '-i', 'targets_file',
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл со списком URL для анализа'
)
@click.option(
    '--wordlist', '-w', 'wordlist',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл с чувствительными словами'
)
@click.option(
    '--timeout', '-t', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут HTTP-запроса (секунд), override конфига'
)
@click.option(
    '--output', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для результатов'
)
@click.option(
    '--save/--no-save', 'save_results_flag',
    default=None,
    help='Сохранять результаты в файлы (по умолчанию из конфига)'
)
@click.option(
    '--resolution', 'resolution',
    type=click.Choice(['join', 'concat']),
    default=None,
    help='Как достраивать относительные пути к скриптам'
)
@click.option(
    '--scanner', 'script_scanner',
    type=click.Choice(['regex', 'soup']),
    default=None,
    help='Стратегия поиска <script src> на странице'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном report.html.j2'
)
@click.option(
    '--pretty/--compact', default=True,
    help='Преформатировать JSON-отчёт (отступ 2)'
)
@click.pass_context
def scan(ctx, targets_file, wordlist, timeout, output_dir, save_results_flag, resolution,
         script_scanner, json_output, html_output, template_dir, pretty):
    """Обработать цели из файла и вывести найденные ссылки, поддомены, скрипты и секреты."""
    overrides: Dict[str, Any] = {
        'wordlist': wordlist,
        'timeout': timeout,
        'output_dir': output_dir,
        'save_results': save_results_flag,
        'resolution': resolution,
        'script_scanner': script_scanner,
    }
    cfg = ctx.obj['config'].model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    try:
        targets = read_lines(targets_file)
    except OSError as e:
        print_error(f'Ошибка чтения файла целей {targets_file}: {e}')

    keywords = load_keywords(cfg.wordlist)
    engine = Engine(cfg, keywords)

    def on_result(result: ResultSet) -> None:
        render_console(result)
        if cfg.save_results:
            saved = save_results(result, cfg.results_root)
            if saved is not None:
                click.echo(f'Results saved to: {saved}')

    try:
        results: List[ResultSet] = engine.start_scan(targets, on_result)
    except Exception as e:
        print_error(f'Ошибка при сканировании: {e}')

    if json_output:
        try:
            saved_json = render_json(results, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(results, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
