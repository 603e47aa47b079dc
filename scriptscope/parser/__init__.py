"""scriptscope.parser: извлечение ссылок, поддоменов, скриптов и чувствительных данных из текста."""

from .extractors import extract_links, extract_script_refs, extract_subdomains, resolve_reference
from .filters import filter_links, filter_subdomains
from .scanners import RegexScanner, SoupScriptScanner, TextScanner
from .sensitive import SensitiveFinding, find_sensitive, load_keywords

__all__ = [
    "TextScanner",
    "RegexScanner",
    "SoupScriptScanner",
    "resolve_reference",
    "extract_script_refs",
    "extract_links",
    "extract_subdomains",
    "filter_links",
    "filter_subdomains",
    "SensitiveFinding",
    "find_sensitive",
    "load_keywords",
]
