"""scriptscope.crawler: HTTP-слой (загрузка страниц и скриптов)."""

from .fetcher import Fetcher
from .models import FetchError, PageData

__all__ = ["Fetcher", "FetchError", "PageData"]
