"""Image path resolution for hosts that keep assets next to the document.

The renderer never touches the filesystem; it only calls the resolver
stored in its :class:`RenderContext`. :func:`make_image_resolver` builds
such a resolver from a base directory using plain string manipulation.
"""
from __future__ import annotations

import posixpath
from pathlib import PurePosixPath
from typing import Callable

__all__ = ["make_image_resolver", "resolve_asset"]


def resolve_asset(src: str, *, base_dir: str | PurePosixPath, wiki_link: bool = False) -> str:
    """Return the browser-facing ``src`` for *src*.

    Rules
    -----
    1. Remote and data URIs are returned unchanged.
    2. ``file://`` URLs are returned unchanged.
    3. Absolute paths become ``file://`` URLs.
    4. Relative paths are joined to *base_dir*; wiki-links name a file
       by its bare name, so any ``|size`` or ``#anchor`` suffix is dropped.
    """
    if src.startswith(("http://", "https://", "data:", "file://")):
        return src

    if wiki_link:
        src = src.split("|", 1)[0].split("#", 1)[0].strip()

    if src.startswith("/"):
        return f"file://{posixpath.normpath(src)}"

    joined = posixpath.normpath(posixpath.join(str(base_dir), src))
    if joined.startswith("/"):
        return f"file://{joined}"
    return joined


def make_image_resolver(base_dir: str | PurePosixPath) -> Callable[[str, bool], str]:
    """Build a ``(path, is_wiki_link) -> src`` resolver rooted at *base_dir*."""

    def resolve(path: str, is_wiki_link: bool = False) -> str:
        return resolve_asset(path, base_dir=base_dir, wiki_link=is_wiki_link)

    return resolve
