# site_mirror/crawler/fetcher.py
"""
Fetcher module: one GET per URL over a shared aiohttp session, no retries.
"""
from __future__ import annotations

import asyncio
import logging
import ssl

from aiohttp import ClientError, ClientSession
from site_mirror.crawler.models import FetchFailure, FetchResult, PageData
from site_mirror.logger import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def build_ssl_context(trust_all: bool = False) -> ssl.SSLContext:
    """
    TLS context for the crawl session: TLS 1.2 minimum.

    With *trust_all* every certificate is accepted (self-signed staging hosts);
    hostname and chain validation are both disabled.
    """
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    if trust_all:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def media_type_of(content_type: str) -> str:
    """``"Text/HTML; charset=UTF-8"`` -> ``"text/html"``."""
    return content_type.split(";", 1)[0].strip().lower()


class Fetcher:
    """Issues GET requests and classifies the outcome."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch *url* once.

        Redirects are followed by the session; the PageData keeps *url* as its
        key and records where the body actually came from.

        Returns PageData for HTTP 200, FetchFailure for any other status or a
        transport error. Recording the outcome is the caller's job.
        """
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    return FetchFailure(url, resp.status, resp.reason or "")
                media_type = media_type_of(resp.headers.get("Content-Type", ""))
                body = await resp.read()
                return PageData(url, body, media_type, resp.status, str(resp.url))
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.debug("Transport error for %s: %r", url, exc)
            return FetchFailure(url, None, str(exc) or type(exc).__name__)
