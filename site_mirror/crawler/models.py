# site_mirror/crawler/models.py
"""
Data models for the SiteMirror crawler.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple, Union


@dataclass(slots=True)
class PageData:
    """A successfully fetched resource: raw body plus its declared media type."""

    url: str
    content: bytes
    media_type: str = ""
    status: int = 200
    final_url: Optional[str] = None

    @property
    def base_url(self) -> str:
        """URL the body was served from, after redirects. Relative links resolve against it."""
        return self.final_url or self.url


@dataclass(slots=True)
class FetchFailure:
    """A fetch that did not return HTTP 200 (``status``) or never got a response (``status=None``)."""

    url: str
    status: Optional[int]
    reason: str = ""

    def describe(self) -> str:
        if self.status is None:
            return self.reason or "transport error"
        return f"{self.status} {self.reason}".strip()


FetchResult = Union[PageData, FetchFailure]


@dataclass(slots=True)
class CrawlSummary:
    """Outcome of one crawl run."""

    visited: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def visited_count(self) -> int:
        return len(self.visited)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def as_dict(self) -> Dict[str, Any]:
        return {
            "visited_count": self.visited_count,
            "failed_count": self.failed_count,
            "duration": round(self.duration, 3),
            "visited": list(self.visited),
            "failed": list(self.failed),
        }


@dataclass(slots=True)
class CrawlState:
    """
    Mutable state of a single traversal.

    ``discovered`` holds every URL ever claimed for the frontier, so a URL is
    enqueued at most once. Every processed URL ends up in ``visited``; the ones
    that could not be fetched or stored are also in ``failed``.
    """

    visited: Set[str] = field(default_factory=set)
    failed: Set[str] = field(default_factory=set)
    discovered: Set[str] = field(default_factory=set)
    frontier: asyncio.Queue[Tuple[str, str]] = field(default_factory=asyncio.Queue)

    def claim(self, url: str) -> bool:
        """Reserve *url* for processing. Returns False if it was seen before."""
        if url in self.discovered or url in self.visited or url in self.failed:
            return False
        self.discovered.add(url)
        return True

    def enqueue(self, url: str, source: str) -> bool:
        if not self.claim(url):
            return False
        self.frontier.put_nowait((url, source))
        return True

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)

    def mark_failed(self, url: str) -> None:
        self.failed.add(url)
        self.visited.add(url)

    def summary(self, duration: float = 0.0) -> CrawlSummary:
        return CrawlSummary(
            visited=sorted(self.visited),
            failed=sorted(self.failed),
            duration=duration,
        )
