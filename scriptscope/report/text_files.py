# scriptscope/report/text_files.py

"""
Сохранение результатов по доменам: <output_dir>/<домен>/{links,subdomains,jsfiles,sensitive}.txt.

Одна запись на строку, без заголовков. Пустые категории не записываются.
Ошибки файловой системы не фатальны: пишется предупреждение, запуск продолжается.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from scriptscope.aggregator import ResultSet
from scriptscope.logger import logger
from scriptscope.utils import registrable_domain

CATEGORY_FILES: Dict[str, str] = {
    "links": "links.txt",
    "subdomains": "subdomains.txt",
    "scripts": "jsfiles.txt",
    "sensitive": "sensitive.txt",
}


def _write_lines(path: Path, items: Sequence[object]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for item in items:
            f.write(f"{item}\n")


def save_results(result: ResultSet, output_dir: Union[str, Path]) -> Optional[Path]:
    """
    Записывает непустые категории ResultSet в каталог домена цели.

    :return: путь к каталогу домена или None, если сохранять нечего или не удалось
    """
    if result.is_empty():
        logger.debug("Nothing to save for %s", result.target)
        return None

    domain = registrable_domain(result.target)
    if not domain:
        logger.warning("Invalid URL provided, results for %r not saved", result.target)
        return None

    results_dir = Path(output_dir).expanduser() / domain
    try:
        results_dir.mkdir(parents=True, exist_ok=True)
        for attr, filename in CATEGORY_FILES.items():
            items = getattr(result, attr)
            if items:
                _write_lines(results_dir / filename, items)
    except OSError as exc:
        logger.warning("Cannot save results to %s: %s", results_dir, exc)
        return None

    logger.debug("Results saved to: %s", results_dir)
    return results_dir
