# File: tests/conftest.py
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Callable, Dict, List, Union

import pytest
from aiohttp import web

from site_mirror.config import MirrorConfig
from site_mirror.crawler.models import FetchFailure, PageData


class StubFetcher:
    """
    In-memory fetcher: maps URL -> (media type, body). Unknown URLs answer 404.
    Records every call so tests can assert what was (not) fetched.
    """

    def __init__(self, pages: Dict[str, tuple]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> Union[PageData, FetchFailure]:
        self.calls.append(url)
        if url not in self.pages:
            return FetchFailure(url, 404, "Not Found")
        media_type, body = self.pages[url]
        if isinstance(body, str):
            body = body.encode("utf-8")
        return PageData(url, body, media_type)


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    """Not-yet-existing output directory for a mirror run."""
    return tmp_path / "mirror"


@pytest.fixture()
def make_config(output_dir: Path) -> Callable[..., MirrorConfig]:
    """
    Factory for MirrorConfig with a temporary output directory.
    Keyword arguments override the defaults.
    """

    def _make(root_url: str = "https://example.com", **kwargs) -> MirrorConfig:
        kwargs.setdefault("output_dir", output_dir)
        kwargs.setdefault("concurrency", 1)
        return MirrorConfig(root_url=root_url, **kwargs)

    return _make


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()
