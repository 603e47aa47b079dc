# scriptscope/parser/scanners.py
"""
Text scanners: the pattern-matching strategy behind every extractor.

An extractor never touches ``re`` directly; it asks a :class:`TextScanner` for
raw candidate strings and applies its own scoping on top. A different matching
strategy (for example a real tokenizer) only needs to implement ``scan``.
"""
from __future__ import annotations

import re
from typing import List, Protocol, Union, runtime_checkable

from bs4 import BeautifulSoup

__all__ = (
    "TextScanner",
    "RegexScanner",
    "SoupScriptScanner",
    "SCRIPT_SRC_PATTERN",
    "LINK_PATTERN",
    "SUBDOMAIN_PATTERN",
    "SCRIPT_SRC_SCANNER",
    "LINK_SCANNER",
    "SUBDOMAIN_SCANNER",
)

SCRIPT_SRC_PATTERN = r'src="([^"]+\.js)"'
LINK_PATTERN = r"""https?://[^\s"<>()']+"""
SUBDOMAIN_PATTERN = r"\b(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,6}\b"


@runtime_checkable
class TextScanner(Protocol):
    """Anything that turns text into a list of raw matches."""

    def scan(self, text: str) -> List[str]:
        ...


class RegexScanner:
    """Regular-expression scanner.

    ``group`` selects the capture group to report (0 is the whole match).
    With ``line_by_line`` the text is split on ``\\n`` first, so a match can
    never span two lines.
    """

    def __init__(
        self,
        pattern: Union[str, re.Pattern[str]],
        *,
        group: int = 0,
        line_by_line: bool = False,
    ) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.group = group
        self.line_by_line = line_by_line

    def scan(self, text: str) -> List[str]:
        chunks = text.split("\n") if self.line_by_line else [text]
        return [m.group(self.group) for chunk in chunks for m in self.pattern.finditer(chunk)]

    def __repr__(self) -> str:
        return f"RegexScanner({self.pattern.pattern!r}, group={self.group}, line_by_line={self.line_by_line})"


class SoupScriptScanner:
    """Reads ``<script src=...>`` attributes with BeautifulSoup.

    Unlike :data:`SCRIPT_SRC_SCANNER` it accepts single-quoted and unquoted
    attributes, but only on ``<script>`` tags.
    """

    def __init__(self, suffix: str = ".js") -> None:
        self.suffix = suffix

    def scan(self, text: str) -> List[str]:
        soup = BeautifulSoup(text, "html.parser")
        found: List[str] = []
        for tag in soup.find_all("script", src=True):
            src = tag.get("src")
            if isinstance(src, str) and src.strip().endswith(self.suffix):
                found.append(src.strip())
        return found

    def __repr__(self) -> str:
        return f"SoupScriptScanner(suffix={self.suffix!r})"


SCRIPT_SRC_SCANNER = RegexScanner(SCRIPT_SRC_PATTERN, group=1)
# \s and \b with ASCII semantics
LINK_SCANNER = RegexScanner(re.compile(LINK_PATTERN, re.ASCII), line_by_line=True)
SUBDOMAIN_SCANNER = RegexScanner(re.compile(SUBDOMAIN_PATTERN, re.ASCII), line_by_line=True)
