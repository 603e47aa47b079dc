# File: scriptscope/utils.py
"""scriptscope.utils: Утилиты для работы с доменами, URL и текстовыми списками (цели, словари)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, TypeVar, Union
from urllib.parse import urlsplit, urlunsplit

from scriptscope.logger import logger

__all__: Sequence[str] = (
    "registrable_domain",
    "canonicalize",
    "dedupe",
    "dedupe_sorted",
    "read_lines",
)

T = TypeVar("T")


def registrable_domain(url: str) -> str:
    """Возвращает две последние метки хоста (``a.b.example.com`` -> ``example.com``).

    Хост без точки возвращается как есть. Для URL, который не удаётся разобрать,
    возвращается пустая строка: вызывающий код должен трактовать её как
    «область не определена».
    """
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        logger.debug("Cannot parse URL for domain: %r", url)
        return ""
    parts = host.split(".")
    if len(parts) >= 2:
        return ".".join(parts[-2:])
    return host


def canonicalize(url: str) -> str:
    """Убирает фрагмент (``#...``) из URL. Неразбираемый URL возвращается без изменений."""
    try:
        parts = urlsplit(url)
        if not parts.fragment and "#" not in url:
            return url
        return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ""))
    except ValueError:
        logger.debug("Cannot canonicalize URL: %r", url)
        return url


def dedupe(items: Iterable[T]) -> List[T]:
    """Удаляет дубликаты, сохраняя порядок первого вхождения."""
    return list(dict.fromkeys(items))


def dedupe_sorted(items: Iterable[T], key: Optional[Callable[[T], Any]] = None) -> List[T]:
    """Удаляет дубликаты и сортирует по возрастанию (по ``key``, если задан)."""
    return sorted(set(items), key=key)


def read_lines(path: Union[str, Path]) -> List[str]:
    """Читает текстовый файл построчно, возвращает непустые строки без пробелов по краям.

    Ошибки чтения (``OSError``) пробрасываются: решать, фатальны ли они,
    должен вызывающий код.
    """
    p = Path(path).expanduser()
    lines = [
        line.strip()
        for line in p.read_text(encoding="utf-8", errors="replace").splitlines()
        if line.strip()
    ]
    logger.debug("Loaded %d lines from %s", len(lines), p)
    return lines
