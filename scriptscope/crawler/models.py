# scriptscope/crawler/models.py
"""
Data models for the ScriptScope fetch layer.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PageData:
    """Holds the requested URL, HTTP status and decoded body of a fetched resource."""

    url: str
    content: str
    status: int = 200


class FetchError(Exception):
    """Transport-level failure: connection refused, DNS, TLS, timeout, bad URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
