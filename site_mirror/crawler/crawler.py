# === FILE: site_mirror/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from site_mirror.config import MirrorConfig
from site_mirror.crawler.fetcher import Fetcher, build_ssl_context
from site_mirror.crawler.link_extractor import extract_links
from site_mirror.crawler.models import CrawlState, CrawlSummary, FetchFailure, PageData
from site_mirror.crawler.storage import ensure_directory, relative_path, save_content, target_path
from site_mirror.logger import LOGGER_NAME
from site_mirror.utils import canonicalize, combine_url, in_scope, resolve_url

__all__ = ("MirrorCrawler",)


class MirrorCrawler:
    """
    Async mirror crawler: fetch, persist, extract and enqueue until the frontier is empty.

    Workers share one frontier and one session. A URL is claimed before it is
    enqueued, so it is fetched at most once per run.
    """

    def __init__(self, config: MirrorConfig, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.root: str = config.root
        self.state = CrawlState()
        self.fetcher = fetcher
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> MirrorCrawler:
        if self.fetcher is None:
            kwargs: Dict[str, Any] = {}
            if self.config.timeout is not None:
                kwargs["timeout"] = ClientTimeout(total=self.config.timeout)
            connector = TCPConnector(
                ssl=build_ssl_context(self.config.trust_all_certificates),
                limit=self.config.concurrency,
            )
            self.session = ClientSession(
                connector=connector,
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
                **kwargs,
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlSummary:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with MirrorCrawler(...)'")
        self._progress("Crawling %s...", self.root)
        start = time.monotonic()
        if not self.config.url_list_only:
            self._ensure_directory(Path(self.config.output_dir))

        for seed in self.config.seeds:
            self.state.enqueue(canonicalize(combine_url(self.root, seed)), self.root)

        workers = [asyncio.create_task(self._worker()) for _ in range(self.config.concurrency)]
        drained = asyncio.create_task(self.state.frontier.join())
        try:
            # a worker only finishes early by raising
            await asyncio.wait({drained, *workers}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (drained, *workers):
                task.cancel()
            outcomes = await asyncio.gather(drained, *workers, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                raise outcome

        summary = self.state.summary(time.monotonic() - start)
        self._progress(
            "Done. Processed '%d' URLs. Failed '%d' URLs (%.2f s).",
            summary.visited_count,
            summary.failed_count,
            summary.duration,
        )
        return summary

    async def _worker(self) -> None:
        frontier = self.state.frontier
        while True:
            url, source = await frontier.get()
            try:
                await self._process(url, source)
            finally:
                frontier.task_done()

    async def _process(self, url: str, source: str) -> None:
        try:
            target = target_path(relative_path(url, self.root), self.config.output_dir)
        except ValueError as exc:
            self.logger.error("Cannot store URL '%s' (linked from '%s'): %s", url, source, exc)
            self.state.mark_failed(url)
            return

        if self.config.download_missing_only and target.is_file():
            self._progress("Skipping URL '%s', file '%s' already exists.", url, target)
            self.state.mark_visited(url)
            return

        self._progress("Processing URL '%s'.", url)
        result = await self.fetcher.fetch(url)
        if isinstance(result, FetchFailure):
            self._progress(
                "URL '%s' (linked from '%s') failed: %s.",
                url,
                source,
                result.describe(),
                level=logging.WARNING,
            )
            self.state.mark_failed(url)
            return
        self._progress("URL '%s' returned with code '%d'.", url, result.status)

        if not self.config.url_list_only:
            try:
                self._persist(target, result.content)
            except OSError as exc:
                self.logger.error("Could not write '%s' for URL '%s': %s", target, url, exc)
                self.state.mark_failed(url)
                return

        self.state.mark_visited(url)
        self._expand(result)

    def _expand(self, page: PageData) -> None:
        for link in extract_links(page.content, page.media_type):
            try:
                resolved = resolve_url(page.base_url, link)
            except ValueError as exc:
                self.logger.warning("Ignoring link '%s' on '%s': %s", link, page.url, exc)
                continue
            if in_scope(resolved, self.root):
                self.state.enqueue(resolved, page.url)

    def _persist(self, target: Path, content: bytes) -> None:
        self._ensure_directory(target.parent)
        self._progress("Writing file '%s'.", target)
        save_content(target, content)

    def _ensure_directory(self, path: Path) -> None:
        if ensure_directory(path):
            self._progress("Created directory '%s'.", path)

    def _progress(self, msg: str, *args: Any, level: int = logging.INFO) -> None:
        # url-list mode keeps the console quiet until the final list
        self.logger.log(logging.DEBUG if self.config.url_list_only else level, msg, *args)

    run = crawl
