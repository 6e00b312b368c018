# File: site_mirror/crawler/__init__.py
"""site_mirror.crawler: traversal engine, fetcher, link extraction and output mapping."""

from .crawler import MirrorCrawler
from .fetcher import Fetcher, build_ssl_context
from .link_extractor import extract_links
from .models import CrawlState, CrawlSummary, FetchFailure, FetchResult, PageData

__all__ = [
    "MirrorCrawler",
    "Fetcher",
    "build_ssl_context",
    "extract_links",
    "CrawlState",
    "CrawlSummary",
    "FetchFailure",
    "FetchResult",
    "PageData",
]
