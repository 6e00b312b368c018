# site_mirror/crawler/storage.py
"""
Mapping from crawled URLs to files under the output directory.
"""
from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Tuple, Union
from urllib.parse import urlsplit

# paths ending in one of these are stored verbatim, anything else is a directory route
FILE_EXTENSIONS: Tuple[str, ...] = (
    ".html",
    ".xml",
    ".js",
    ".css",
    ".jpg",
    ".png",
    ".ico",
    ".gif",
    ".svg",
    ".eot",
    ".ttf",
    ".woff",
)

INDEX_FILE = "index.html"


def relative_path(url: str, root: str) -> str:
    """
    Path component of *url* relative to the path of *root*, without the leading ``/``.

    ``relative_path("https://x.com/docs/a/b.html", "https://x.com/docs") == "a/b.html"``
    """
    path = urlsplit(url).path
    root_path = urlsplit(root).path.rstrip("/")
    if root_path and path.startswith(root_path):
        path = path[len(root_path):]
    return path[1:] if path.startswith("/") else path


def target_path(relative: str, output_dir: Union[str, Path]) -> Path:
    """
    File that stores *relative* under *output_dir*.

    ``about/team.html`` -> ``<output>/about/team.html``;
    ``about/team`` -> ``<output>/about/team/index.html``.
    Raises ValueError for paths that would escape *output_dir*.
    """
    pure = PurePosixPath(relative)
    if pure.is_absolute() or ".." in pure.parts:
        raise ValueError(f"Refusing to map path outside the output directory: {relative!r}")
    base = Path(output_dir)
    if relative.lower().endswith(FILE_EXTENSIONS):
        return base / relative
    return base / relative / INDEX_FILE


def ensure_directory(path: Path) -> bool:
    """Create *path* with parents. Returns True if it had to be created."""
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


def save_content(target: Path, content: bytes) -> None:
    """Binary write, replacing any existing file."""
    target.write_bytes(content)
