# File: tests/conftest.py
from pathlib import Path
from typing import Dict, Union

import pytest

from scriptscope.config import ScanConfig
from scriptscope.crawler.models import FetchError, PageData


class FakeFetcher:
    """In-memory fetcher: url -> body, or url -> exception instance to raise."""

    def __init__(self, pages: Dict[str, Union[str, Exception]]) -> None:
        self.pages = pages
        self.requested: list[str] = []

    async def fetch(self, url: str) -> PageData:
        self.requested.append(url)
        body = self.pages.get(url)
        if body is None:
            raise FetchError(url, "connection refused")
        if isinstance(body, Exception):
            raise body
        return PageData(url, body)


@pytest.fixture()
def fake_fetcher_factory():
    return FakeFetcher


@pytest.fixture()
def wordlist_file(tmp_path) -> Path:
    """Wordlist with a blank line in the middle."""
    path = tmp_path / "WordList.txt"
    path.write_text("SECRET_KEY\n\napi_token\n", encoding="utf-8")
    return path


@pytest.fixture()
def targets_file(tmp_path) -> Path:
    path = tmp_path / "targets.txt"
    path.write_text("https://example.com\n\nhttps://other.org\n", encoding="utf-8")
    return path


@pytest.fixture()
def basic_config(tmp_path) -> ScanConfig:
    """Return a basic valid ScanConfig writing results under tmp_path."""
    return ScanConfig(timeout=2.0, user_agent="TestAgent/1.0", output_dir=tmp_path / "results")


@pytest.fixture()
def example_page() -> str:
    return (
        "<html><head>"
        '<script src="/static/app.js"></script>'
        '<script src="https://cdn.example.com/lib.js"></script>'
        "<script src='single.js'></script>"
        "</head><body></body></html>"
    )


@pytest.fixture()
def example_script() -> str:
    return "\n".join(
        [
            'var api = "https://api.example.com/v1/users?id=1#top";',
            'var other = "https://evil.net/collect";',
            'load("https://example.com/static/chunk.js");',
            "// staging: dev.example.com, admin.example.com",
            'var k = "SECRET_KEY_1";',
        ]
    )
