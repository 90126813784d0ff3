"""
Path translation between public URL paths and filesystem paths.

All functions here are pure; none of them touch the filesystem.
"""

import posixpath
from pathlib import Path
from typing import Union

THUMBS_URL_PREFIX = '/gallery/thumbs'
THUMB_EXTENSION = '.jpg'


def normalize_url_path(p) -> str:
    """
    Normalize a public URL path.

    Backslashes become forward slashes and a single leading slash is ensured.

    Args:
        p: Raw path value from a descriptor

    Returns:
        Normalized path, or '' for empty or non-string input
    """
    if not isinstance(p, str) or not p:
        return ''
    p = p.replace('\\', '/')
    return p if p.startswith('/') else f"/{p}"


def strip_leading_slash(p: str) -> str:
    """Remove leading slashes from a URL path."""
    return p.lstrip('/')


def to_filesystem_path(url_path: str, public_root: Union[str, Path]) -> Path:
    """Resolve a public URL path to a file under the public root."""
    rel = strip_leading_slash(normalize_url_path(url_path))
    return Path(public_root) / rel


def derive_thumbnail_url(source_url: str, prefix: str = THUMBS_URL_PREFIX) -> str:
    """
    Derive the public URL of a source image's thumbnail.

    Converts: /photos/rome/01.png -> /gallery/thumbs/photos/rome/01.jpg

    The source directory structure is mirrored under the thumbnail prefix and
    the extension is always replaced, since thumbnails are re-encoded as JPEG.
    """
    rel = strip_leading_slash(normalize_url_path(source_url))
    src_dir = posixpath.dirname(rel)
    base, _ = posixpath.splitext(posixpath.basename(rel))
    thumb_rel = posixpath.join(strip_leading_slash(prefix), src_dir, f"{base}{THUMB_EXTENSION}")
    return '/' + posixpath.normpath(thumb_rel)


def has_parent_segment(url_path: str) -> bool:
    """True if the URL path contains a '..' segment."""
    return '..' in normalize_url_path(url_path).split('/')
