# File: scriptscope/report/__init__.py
"""scriptscope.report: вывод и сохранение результатов (терминал, txt по доменам, JSON, HTML)."""

from .console import render_console
from .html_report import render_html
from .json_report import render_json
from .text_files import save_results

__all__ = ["render_console", "save_results", "render_json", "render_html"]
