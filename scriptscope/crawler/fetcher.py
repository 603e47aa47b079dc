# scriptscope/crawler/fetcher.py
"""
Fetcher module: plain HTTP GET with a uniform timeout and no certificate checks.

Targets are often staging hosts with self-signed or expired certificates, so TLS
verification is switched off for every request. There are no retries: a
failure is reported once and the caller decides what to skip.
"""
from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Optional, Type

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from scriptscope.config import ScanConfig
from scriptscope.crawler.models import FetchError, PageData
from scriptscope.logger import logger


class Fetcher:
    """Sequential HTTP fetcher bound to one ``aiohttp`` session.

    Use as an async context manager::

        async with Fetcher(config) as fetcher:
            page = await fetcher.fetch("https://example.com")
    """

    def __init__(self, config: ScanConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> Fetcher:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            connector=TCPConnector(ssl=False),
            raise_for_status=False,
        )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its body decoded as UTF-8 (invalid bytes replaced).

        Any HTTP status is accepted; only transport failures and timeouts raise
        :class:`FetchError`.
        """
        if self.session is None:
            raise RuntimeError("Fetcher must be used as an async context manager")
        try:
            async with self.session.get(url) as resp:
                body = await resp.read()
                status = resp.status
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.config.timeout:g}s") from exc
        except (ClientError, ValueError) as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

        logger.debug("GET %s -> %s (%d bytes)", url, status, len(body))
        return PageData(url, body.decode("utf-8", errors="replace"), status)
