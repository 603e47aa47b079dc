# File: scriptscope/engine.py
"""scriptscope.engine: Orchestration layer: цель -> страница -> скрипты -> ResultSet."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from scriptscope.aggregator import Aggregator, ResultSet
from scriptscope.config import ScanConfig
from scriptscope.crawler.fetcher import Fetcher
from scriptscope.crawler.models import FetchError, PageData
from scriptscope.logger import logger
from scriptscope.parser.extractors import extract_links, extract_script_refs, extract_subdomains
from scriptscope.parser.filters import filter_links, filter_subdomains
from scriptscope.parser.scanners import SCRIPT_SRC_SCANNER, SoupScriptScanner, TextScanner
from scriptscope.parser.sensitive import find_sensitive

__all__ = ["Engine", "PageFetcher"]

ResultCallback = Callable[[ResultSet], None]


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> PageData:
        ...


class Engine:
    """Фасад для CLI и тестов: последовательная обработка целей одна за другой."""

    def __init__(self, config: ScanConfig, keywords: Sequence[str] = ()) -> None:
        """Инициализирует Engine с конфигурацией и уже загруженным списком ключевых слов."""
        self.config = config
        self.keywords: Sequence[str] = tuple(keywords)
        self.script_scanner: TextScanner = (
            SoupScriptScanner() if config.script_scanner == "soup" else SCRIPT_SRC_SCANNER
        )

    async def scan_target(self, fetcher: PageFetcher, target: str) -> Optional[ResultSet]:
        """Обрабатывает одну цель. Возвращает None, если не удалось загрузить саму страницу."""
        logger.info("Processing URL: %s", target)
        try:
            page = await fetcher.fetch(target)
        except FetchError as exc:
            logger.warning("Error fetching the URL %s: %s", target, exc.reason)
            return None

        scripts = extract_script_refs(
            page.content,
            target,
            resolution=self.config.resolution,
            scanner=self.script_scanner,
        )
        aggregator = Aggregator(target)
        if not scripts:
            logger.info("No JavaScript files found on %s", target)
            return aggregator.build()

        for script in scripts:
            try:
                js = await fetcher.fetch(script)
            except FetchError as exc:
                logger.warning("Error fetching JS file %s: %s", script, exc.reason)
                continue
            aggregator.add(
                links=filter_links(extract_links(js.content, target), target),
                subdomains=filter_subdomains(extract_subdomains(js.content, target), target),
                sensitive=find_sensitive(js.content, script, self.keywords),
            )

        result = aggregator.build(scripts)
        logger.info(
            "%s: %d links, %d subdomains, %d scripts, %d sensitive",
            target,
            len(result.links),
            len(result.subdomains),
            len(result.scripts),
            len(result.sensitive),
        )
        return result

    async def scan(
        self,
        targets: Iterable[str],
        on_result: Optional[ResultCallback] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> List[ResultSet]:
        """Обрабатывает цели строго по очереди; on_result вызывается сразу после каждой."""
        if fetcher is None:
            async with Fetcher(self.config) as own_fetcher:
                return await self._scan_all(own_fetcher, targets, on_result)
        return await self._scan_all(fetcher, targets, on_result)

    async def _scan_all(
        self,
        fetcher: PageFetcher,
        targets: Iterable[str],
        on_result: Optional[ResultCallback],
    ) -> List[ResultSet]:
        results: List[ResultSet] = []
        for target in targets:
            result = await self.scan_target(fetcher, target)
            if result is None:
                continue
            results.append(result)
            if on_result is not None:
                on_result(result)
        return results

    def start_scan(
        self, targets: Iterable[str], on_result: Optional[ResultCallback] = None
    ) -> List[ResultSet]:
        """Синхронная обёртка над :meth:`scan` для CLI."""
        logger.info("Starting scan…")
        return asyncio.run(self.scan(targets, on_result))
