# scriptscope/report/console.py
"""Вывод результатов одной цели в терминал, с цветными заголовками категорий."""
from __future__ import annotations

from typing import Sequence

import click

from scriptscope.aggregator import ResultSet

SEPARATOR = "_" * 93


def _print_category(label: str, items: Sequence[object], color: str) -> None:
    if not items:
        return
    click.echo()
    click.secho(f"{label}:", fg=color)
    for item in items:
        click.echo(str(item))


def render_console(result: ResultSet) -> None:
    """Печатает категории ResultSet; пустые категории пропускаются."""
    click.echo()
    click.secho(f"Results for: {result.target}", bold=True)
    _print_category("Links", result.links, "green")
    _print_category("Subdomains", result.subdomains, "cyan")
    _print_category("JS Files", result.scripts, "yellow")
    if result.sensitive:
        _print_category("Sensitive Data", result.sensitive, "red")
    else:
        click.echo()
        click.secho("No sensitive data found.", fg="red")
    click.echo(SEPARATOR)
