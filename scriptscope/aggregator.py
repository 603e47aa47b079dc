# File: scriptscope/aggregator.py
"""scriptscope.aggregator: сбор результатов по всем скриптам одной цели в ResultSet."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from scriptscope.parser.sensitive import SensitiveFinding
from scriptscope.utils import dedupe_sorted


@dataclass(slots=True)
class ResultSet:
    """Итог по одной цели: четыре независимо отсортированные категории без дубликатов."""

    target: str
    links: List[str] = field(default_factory=list)
    subdomains: List[str] = field(default_factory=list)
    scripts: List[str] = field(default_factory=list)
    sensitive: List[SensitiveFinding] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.links or self.subdomains or self.scripts or self.sensitive)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "links": list(self.links),
            "subdomains": list(self.subdomains),
            "scripts": list(self.scripts),
            "sensitive": [{"keyword": f.keyword, "source": f.source} for f in self.sensitive],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ResultSet."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


class Aggregator:
    """Накопитель результатов по скриптам одной цели.

    Пример::

        agg = Aggregator(target)
        for script in scripts:
            agg.add(links, subdomains, findings)
        result = agg.build(scripts)
    """

    def __init__(self, target: str) -> None:
        self.target = target
        self._links: List[str] = []
        self._subdomains: List[str] = []
        self._sensitive: List[SensitiveFinding] = []

    def add(
        self,
        links: Iterable[str] = (),
        subdomains: Iterable[str] = (),
        sensitive: Iterable[SensitiveFinding] = (),
    ) -> None:
        """Добавляет результаты одного скрипта."""
        self._links.extend(links)
        self._subdomains.extend(subdomains)
        self._sensitive.extend(sensitive)

    def build(self, scripts: Iterable[str] = ()) -> ResultSet:
        """Удаляет дубликаты в каждой категории и сортирует их по возрастанию."""
        return ResultSet(
            target=self.target,
            links=dedupe_sorted(self._links),
            subdomains=dedupe_sorted(self._subdomains),
            scripts=dedupe_sorted(scripts),
            sensitive=dedupe_sorted(self._sensitive, key=str),
        )
