# File: tests/test_engine.py
# Pipeline tests: in-memory fetcher for the logic, real aiohttp servers for the HTTP layer
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from scriptscope.config import ScanConfig
from scriptscope.crawler.fetcher import Fetcher
from scriptscope.crawler.models import FetchError
from scriptscope.engine import Engine
from scriptscope.parser.sensitive import SensitiveFinding

KEYWORDS = ("SECRET_KEY", "api_token", "")


# --------------------------------------------------------------------------- #
#                               Helper utilities                              #
# --------------------------------------------------------------------------- #


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def js_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()
    base = f"http://localhost:{unused_tcp_port}"

    async def handle_root(_):
        return web.Response(
            text=(
                '<script src="/main.js"></script>'
                '<script src="http://127.0.0.1:1/broken.js"></script>'
                '<script src="/missing.js"></script>'
            ),
            content_type="text/html",
        )

    async def handle_main(_):
        return web.Response(
            text=(
                f'fetch("{base}/api/v1/users#list");\n'
                f'import("{base}/chunks/vendor.js");\n'
                'var other = "https://evil.net/x";\n'
                'var key = "SECRET_KEY_1";\n'
            ),
            content_type="application/javascript",
        )

    async def handle_slow(_):
        await asyncio.sleep(1)
        return web.Response(text="late")

    app.router.add_get("/", handle_root)
    app.router.add_get("/main.js", handle_main)
    app.router.add_get("/slow", handle_slow)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


# --------------------------------------------------------------------------- #
#                         Pipeline with a fake fetcher                        #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_scan_target_collects_all_categories(
    basic_config, fake_fetcher_factory, example_page, example_script
):
    fetcher = fake_fetcher_factory(
        {
            "https://example.com": example_page,
            # app.js is absent -> FetchError, lib.js still gets processed
            "https://cdn.example.com/lib.js": example_script,
        }
    )
    engine = Engine(basic_config, KEYWORDS)

    result = await engine.scan_target(fetcher, "https://example.com")

    assert fetcher.requested == [
        "https://example.com",
        "https://example.com/static/app.js",
        "https://cdn.example.com/lib.js",
    ]
    assert result is not None
    assert result.links == ["https://api.example.com/v1/users?id=1"]
    assert result.subdomains == [
        "admin.example.com",
        "api.example.com",
        "dev.example.com",
        "example.com",
    ]
    assert result.scripts == ["https://cdn.example.com/lib.js", "https://example.com/static/app.js"]
    assert result.sensitive == [SensitiveFinding("SECRET_KEY", "https://cdn.example.com/lib.js")]


@pytest.mark.asyncio()
async def test_page_failure_skips_only_that_target(basic_config, fake_fetcher_factory):
    fetcher = fake_fetcher_factory(
        {
            "https://down.example.com": FetchError("https://down.example.com", "timed out"),
            "https://other.org": '<script src="a.js"></script>',
            "https://other.org/a.js": "https://other.org/login api_token",
        }
    )
    seen = []
    engine = Engine(basic_config, KEYWORDS)

    results = await engine.scan(
        ["https://down.example.com", "https://other.org"], on_result=seen.append, fetcher=fetcher
    )

    assert [r.target for r in results] == ["https://other.org"]
    assert seen == results
    assert results[0].links == ["https://other.org/login"]
    assert [f.keyword for f in results[0].sensitive] == ["api_token"]


@pytest.mark.asyncio()
async def test_page_without_scripts_gives_empty_result(basic_config, fake_fetcher_factory):
    fetcher = fake_fetcher_factory({"https://example.com": "<html>no scripts</html>"})
    result = await Engine(basic_config).scan_target(fetcher, "https://example.com")
    assert result is not None
    assert result.is_empty()


@pytest.mark.asyncio()
async def test_soup_scanner_and_concat_resolution(fake_fetcher_factory):
    config = ScanConfig(script_scanner="soup", resolution="concat", save_results=False)
    fetcher = fake_fetcher_factory(
        {
            "https://example.com/app": "<script src='bundle.js'></script>",
            "https://example.com/app/bundle.js": "cdn.example.com",
        }
    )
    result = await Engine(config).scan_target(fetcher, "https://example.com/app")
    assert result.scripts == ["https://example.com/app/bundle.js"]
    assert result.subdomains == ["cdn.example.com"]


@pytest.mark.asyncio()
async def test_targets_are_not_merged(basic_config, fake_fetcher_factory):
    fetcher = fake_fetcher_factory(
        {
            "https://a.com": '<script src="x.js"></script>',
            "https://a.com/x.js": "https://a.com/one https://b.com/two",
            "https://b.com": '<script src="x.js"></script>',
            "https://b.com/x.js": "https://a.com/one https://b.com/two",
        }
    )
    results = await Engine(basic_config).scan(["https://a.com", "https://b.com"], fetcher=fetcher)
    assert [r.links for r in results] == [["https://a.com/one"], ["https://b.com/two"]]


# --------------------------------------------------------------------------- #
#                          Real HTTP server (aiohttp)                         #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_end_to_end_against_server(js_server: str):
    config = ScanConfig(timeout=2.0, user_agent="TestAgent/1.0", save_results=False)
    results = await Engine(config, KEYWORDS).scan([js_server])

    assert len(results) == 1
    result = results[0]
    assert result.links == [f"{js_server}/api/v1/users"]
    assert result.scripts == sorted(
        [f"{js_server}/main.js", f"{js_server}/missing.js", "http://127.0.0.1:1/broken.js"]
    )
    assert result.sensitive == [SensitiveFinding("SECRET_KEY", f"{js_server}/main.js")]


@pytest.mark.asyncio()
async def test_fetcher_returns_body_for_any_status(js_server: str):
    async with Fetcher(ScanConfig(timeout=2.0)) as fetcher:
        page = await fetcher.fetch(f"{js_server}/missing.js")
    assert page.status == 404
    assert isinstance(page.content, str)


@pytest.mark.asyncio()
async def test_fetcher_timeout(js_server: str):
    async with Fetcher(ScanConfig(timeout=0.2)) as fetcher:
        with pytest.raises(FetchError) as excinfo:
            await fetcher.fetch(f"{js_server}/slow")
    assert "timed out" in excinfo.value.reason


@pytest.mark.asyncio()
async def test_fetcher_connection_refused():
    async with Fetcher(ScanConfig(timeout=2.0)) as fetcher:
        with pytest.raises(FetchError):
            await fetcher.fetch("http://127.0.0.1:1/app.js")


@pytest.mark.asyncio()
async def test_fetcher_requires_context_manager():
    with pytest.raises(RuntimeError):
        await Fetcher(ScanConfig()).fetch("http://127.0.0.1:1/")


def test_start_scan_runs_event_loop(monkeypatch, basic_config, fake_fetcher_factory):
    fetcher = fake_fetcher_factory({"https://example.com": "<p>empty</p>"})
    engine = Engine(basic_config)
    unpatched_scan = engine.scan

    async def scan_with_fake(targets, on_result=None, _fetcher=None):
        return await unpatched_scan(targets, on_result, fetcher=fetcher)

    monkeypatch.setattr(engine, "scan", scan_with_fake)
    results = engine.start_scan(["https://example.com"])
    assert [r.target for r in results] == ["https://example.com"]
