# site_mirror/crawler/link_extractor.py
"""
Link extraction for SiteMirror.

Pattern-based on purpose: the body is scanned as one text blob, so broken or
partial markup is never rejected, only under- or over-matched. Values are
returned verbatim; resolving them is the caller's job.
"""
from __future__ import annotations

import re
from typing import Callable, Dict, List, Tuple

__all__ = ("extract_links", "extract_html_links", "extract_css_links")


def _tag_attribute(tag: str, attribute: str, suffix: str = "") -> re.Pattern[str]:
    # [^>] spans newlines, so tags split across lines still match
    return re.compile(
        rf"<{tag}\b[^>]*?\s(?:{attribute})\s*=\s*"
        rf"(?:\"(?P<dq>[^\"]*?{suffix})\"|'(?P<sq>[^']*?{suffix})')",
        re.IGNORECASE,
    )


_HTML_PATTERNS: Tuple[re.Pattern[str], ...] = (
    _tag_attribute("a", "href|name"),
    _tag_attribute("img", "src"),
    _tag_attribute("script", "src"),
    _tag_attribute("link", "href", r"\.css"),
    _tag_attribute("link", "href", r"\.ico"),
)

_CSS_URL_RE = re.compile(
    r"url\(\s*(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)'|(?P<bare>[^\s)\"']+))\s*\)",
    re.IGNORECASE,
)


def _decode(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def _value(match: re.Match[str]) -> str:
    for value in match.groupdict().values():
        if value is not None:
            return value
    return ""


def extract_html_links(text: str) -> List[str]:
    """Anchor href/name, img src, script src, stylesheet and icon links, in document order."""
    found: List[Tuple[int, str]] = []
    for pattern in _HTML_PATTERNS:
        found.extend((m.start(), _value(m)) for m in pattern.finditer(text))
    found.sort(key=lambda item: item[0])
    return [value for _, value in found]


def extract_css_links(text: str) -> List[str]:
    """``url(...)`` references of a stylesheet."""
    return [_value(m) for m in _CSS_URL_RE.finditer(text)]


_EXTRACTORS: Dict[str, Callable[[str], List[str]]] = {
    "text/html": extract_html_links,
    "text/css": extract_css_links,
}


def extract_links(body: bytes, media_type: str) -> List[str]:
    """
    Raw link strings found in *body*, dispatched on *media_type*.

    Media types other than HTML and CSS are leaves and yield nothing.
    """
    extractor = _EXTRACTORS.get(media_type)
    if extractor is None or not body:
        return []
    return extractor(_decode(body))
