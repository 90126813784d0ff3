"""
Stable photo identifiers derived from source URLs.
"""

import re

from .paths import normalize_url_path

_SEPARATORS = re.compile(r'[/.]')
_DISALLOWED = re.compile(r'[^a-z0-9\-_]')
_DASH_RUNS = re.compile(r'-+')


def derive_id(src: str) -> str:
    """
    Derive a URL- and filesystem-safe id from a source URL.

    Converts: /photos/Rome 01.JPG -> photos-rome01-jpg

    Two sources that differ only in stripped characters map to the same id;
    the pipeline detects that case instead of resolving it here.
    """
    normalized = normalize_url_path(src).lower()
    slug = _SEPARATORS.sub('-', normalized)
    slug = _DISALLOWED.sub('', slug)
    slug = _DASH_RUNS.sub('-', slug)
    return slug.strip('-')
