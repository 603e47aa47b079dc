# scriptscope/parser/extractors.py
"""
Pattern extractors: script references from page markup, absolute links and
subdomain candidates from script bodies.

Every extractor is stateless and returns a plain list; duplicates are left in
place for the filters and the aggregator.
"""
from __future__ import annotations

from typing import List, Literal
from urllib.parse import urljoin

from scriptscope.logger import logger
from scriptscope.parser.scanners import (
    LINK_SCANNER,
    SCRIPT_SRC_SCANNER,
    SUBDOMAIN_SCANNER,
    TextScanner,
)
from scriptscope.utils import canonicalize, registrable_domain

__all__ = ("Resolution", "resolve_reference", "extract_script_refs", "extract_links", "extract_subdomains")

Resolution = Literal["join", "concat"]


def resolve_reference(ref: str, target: str, resolution: Resolution = "join") -> str:
    """
    Make a script reference absolute.

    ``concat`` glues ``target + "/" + ref`` for anything not starting with
    ``http``. ``join`` uses standard base-URL resolution, so ``/app.js`` and
    ``../app.js`` land where a browser would load them.
    """
    if resolution == "join":
        try:
            return urljoin(target, ref)
        except ValueError:
            logger.debug("Cannot join %r to %r, falling back to concatenation", ref, target)
    if ref.startswith("http"):
        return ref
    return f"{target}/{ref}"


def extract_script_refs(
    markup: str,
    target: str,
    *,
    resolution: Resolution = "join",
    scanner: TextScanner = SCRIPT_SRC_SCANNER,
) -> List[str]:
    """Return absolute, fragment-free URLs of every script declared in *markup*."""
    refs = [canonicalize(resolve_reference(raw, target, resolution)) for raw in scanner.scan(markup)]
    logger.debug("Found %d script references on %s", len(refs), target)
    return refs


def extract_links(content: str, target: str, *, scanner: TextScanner = LINK_SCANNER) -> List[str]:
    """
    Return absolute HTTP(S) links in *content* that mention the target's domain.

    Links ending with ``.js`` are dropped; scripts are reported separately.
    """
    domain = registrable_domain(target)
    if not domain:
        logger.warning("No registrable domain for %s, skipping link extraction", target)
        return []
    return [
        canonicalize(match)
        for match in scanner.scan(content)
        if domain in match and not match.endswith(".js")
    ]


def extract_subdomains(
    content: str, target: str, *, scanner: TextScanner = SUBDOMAIN_SCANNER
) -> List[str]:
    """Return hostname-shaped tokens in *content* that mention the target's domain."""
    domain = registrable_domain(target)
    if not domain:
        logger.warning("No registrable domain for %s, skipping subdomain extraction", target)
        return []
    return [match for match in scanner.scan(content) if domain in match]
