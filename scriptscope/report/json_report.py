# scriptscope/report/json_report.py

"""
Генерация JSON-отчёта для ScriptScope.

Сериализация списка ResultSet (по одному на цель) в файл.
"""
import json
from pathlib import Path
from typing import Iterable

from scriptscope.aggregator import ResultSet


def render_json(results: Iterable[ResultSet], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет результаты в формате JSON по указанному пути.

    :param results: объекты ResultSet, по одному на цель
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from scriptscope.report.json_report import render_json
    report_path = render_json(results, 'reports/report.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {"targets": [r.as_dict() for r in results]}

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
