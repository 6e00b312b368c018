# File: site_mirror/engine.py
"""site_mirror.engine: entry points that run one mirror pass for a given configuration."""

from __future__ import annotations

import asyncio
from typing import Tuple

from site_mirror.config import MirrorConfig
from site_mirror.crawler.crawler import MirrorCrawler
from site_mirror.crawler.models import CrawlSummary

__all__ = ["start_mirror", "run_mirror"]


async def start_mirror(cfg: MirrorConfig) -> CrawlSummary:
    """
    Run the crawler inside its session context and return the CrawlSummary.

    Parameters
    ----------
    cfg : MirrorConfig
        Configuration of the run.
    """
    async with MirrorCrawler(cfg) as crawler:
        return await crawler.crawl()


def run_mirror(cfg: MirrorConfig) -> Tuple[int, int]:
    """Blocking variant: returns ``(visited_count, failed_count)``."""
    summary = asyncio.run(start_mirror(cfg))
    return summary.visited_count, summary.failed_count
