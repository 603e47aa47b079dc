# scriptscope/parser/filters.py
"""Scope filters: keep only strings that belong to the target's domain."""
from __future__ import annotations

from typing import Callable, Iterable, List

from scriptscope.logger import logger
from scriptscope.utils import dedupe, registrable_domain

__all__ = ("filter_links", "filter_subdomains")


def _scoped(items: Iterable[str], target: str, keep: Callable[[str, str], bool]) -> List[str]:
    domain = registrable_domain(target)
    # An empty domain would match everything as substring or suffix.
    if not domain:
        logger.warning("No registrable domain for %s, scope is empty", target)
        return []
    return dedupe(item for item in items if keep(item, domain))


def filter_links(items: Iterable[str], target: str) -> List[str]:
    """Links containing the target's registrable domain, duplicates removed, order kept."""
    return _scoped(items, target, lambda item, domain: domain in item)


def filter_subdomains(items: Iterable[str], target: str) -> List[str]:
    """Hostnames ending with the target's registrable domain, duplicates removed, order kept."""
    return _scoped(items, target, lambda item, domain: item.endswith(domain))
