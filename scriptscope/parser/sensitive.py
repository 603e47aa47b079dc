# scriptscope/parser/sensitive.py
"""
Sensitive-data matcher: plain, case-sensitive substring search of script
bodies against a keyword list (API key markers, tokens, internal hosts...).
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from scriptscope.logger import logger

__all__ = ("SensitiveFinding", "find_sensitive", "load_keywords", "DEFAULT_WORDLIST")

DEFAULT_WORDLIST = Path("~/bin/WordList.txt")


@dataclass(frozen=True, slots=True)
class SensitiveFinding:
    """A keyword found verbatim in the body of *source*."""

    keyword: str
    source: str

    def __str__(self) -> str:
        return f"{self.keyword} -> {self.source}"


def find_sensitive(content: str, source: str, keywords: Iterable[str]) -> List[SensitiveFinding]:
    """Return one finding per keyword contained in *content*, in keyword order.

    Blank keywords are skipped: an empty string is a substring of anything.
    """
    return [
        SensitiveFinding(keyword, source)
        for keyword in keywords
        if keyword.strip() and keyword in content
    ]


def load_keywords(
    path: Union[str, Path, None], default: Union[str, Path] = DEFAULT_WORDLIST
) -> Sequence[str]:
    """
    Load the keyword list from *path* (or *default* when *path* is None).

    Keywords are kept verbatim: only the line break (``\n`` or ``\r\n``) is
    removed and whitespace-only lines are dropped.

    An unreadable file is not fatal: a warning is logged and an empty tuple is
    returned so the crawl still reports links and subdomains.
    """
    source = Path(path if path is not None else default).expanduser()
    try:
        text = source.read_text(encoding="utf-8", errors="replace")
        keywords = tuple(
            line.removesuffix("\r") for line in text.split("\n") if line.strip()
        )
    except OSError as exc:
        if path is None:
            logger.warning("Default wordlist %s is missing, sensitive data search disabled", source)
        else:
            logger.warning("Cannot read wordlist %s: %s", source, exc)
        return ()
    logger.info("Loaded %d keywords from %s", len(keywords), source)
    return keywords
