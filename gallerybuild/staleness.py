"""
Staleness checks for cached thumbnails.

The thumbnail tree on disk acts as a cache keyed by thumbnail path. A cached
thumbnail is fresh unless it is missing or its source was modified after it.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

# Modification time reported for a file that does not exist.
ABSENT = -1

PathLike = Union[str, Path]


def is_stale(source_mtime: int, thumb_mtime: int) -> bool:
    """
    Decide whether a thumbnail must be regenerated.
    
    Equal timestamps count as fresh, so a source rewritten within the same
    clock tick as its thumbnail is not picked up.
    """
    return thumb_mtime <= ABSENT or source_mtime > thumb_mtime


def file_mtime_ns(path: PathLike) -> int:
    """Modification time in nanoseconds, or ABSENT if the file cannot be stat-ed."""
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return ABSENT


@dataclass(frozen=True)
class CacheVerdict:
    """Result of a thumbnail cache lookup."""
    thumb_path: str
    source_mtime: int
    thumb_mtime: int
    
    @property
    def exists(self) -> bool:
        return self.thumb_mtime != ABSENT
    
    @property
    def fresh(self) -> bool:
        return not is_stale(self.source_mtime, self.thumb_mtime)


class ThumbnailCache:
    """
    Looks up whether the thumbnail for a source is up to date.
    
    The stat function is injectable so the freshness rules can be exercised
    without real file timestamps.
    """
    
    def __init__(self, stat: Callable[[PathLike], int] = file_mtime_ns):
        """
        Initialize cache.
        
        Args:
            stat: Callable returning a path's mtime, or ABSENT when missing
        """
        self.stat = stat
    
    def lookup(self, source_path: PathLike, thumb_path: PathLike) -> CacheVerdict:
        """Stat source and thumbnail and return the verdict for thumb_path."""
        return CacheVerdict(
            thumb_path=str(thumb_path),
            source_mtime=self.stat(source_path),
            thumb_mtime=self.stat(thumb_path),
        )
    
    def needs_regeneration(self, source_path: PathLike, thumb_path: PathLike) -> bool:
        """True if the thumbnail is missing or older than its source."""
        return not self.lookup(source_path, thumb_path).fresh
