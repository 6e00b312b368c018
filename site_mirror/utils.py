# File: site_mirror/utils.py
"""site_mirror.utils: URL canonicalisation, resolution and scope checks for the crawler."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urldefrag, urljoin, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "canonicalize",
    "resolve_url",
    "combine_url",
    "in_scope",
)

# characters that may legally follow the root inside an in-scope URL
_BOUNDARY_CHARS = ("/", "?", "#")


def canonicalize(url: str) -> str:
    """Strip the fragment, drop an empty query and lower-case scheme and host.

    A URL with a host but no path gets ``/`` as its path, so ``http://a.b`` and
    ``http://a.b/`` are the same crawl unit. The result is a fixed point:
    ``canonicalize(canonicalize(u)) == canonicalize(u)``.
    """
    url, _ = urldefrag(url)
    parts = urlsplit(url)
    netloc = parts.netloc.lower()
    path = parts.path or ("/" if netloc else "")
    # urlunsplit omits "?" when the query is empty
    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, ""))


def resolve_url(base: str, reference: str) -> str:
    """Resolve *reference* (absolute, scheme-relative or relative) against *base*."""
    return canonicalize(urljoin(base, reference.strip()))


def combine_url(root: str, path: str) -> str:
    """Append a root-relative *path* to *root* with exactly one slash between them.

    Unlike :func:`urllib.parse.urljoin` this keeps the root's own path, so seed
    ``/404.html`` under ``https://host/docs`` becomes ``https://host/docs/404.html``.
    """
    if root.endswith("/") and path.startswith("/"):
        path = path[1:]
    elif not root.endswith("/") and not path.startswith("/"):
        path = "/" + path
    return root + path


def in_scope(url: str, root: str) -> bool:
    """True if *url* lives under *root*.

    The check is a string prefix test that only accepts the prefix at a path
    segment boundary: ``https://x.com/docs`` covers ``https://x.com/docs/a``
    and ``https://x.com/docs?p=1`` but not ``https://x.com/docs-archive``.
    """
    if not url.startswith(root):
        return False
    rest = url[len(root):]
    return not rest or root.endswith("/") or rest.startswith(_BOUNDARY_CHARS)
