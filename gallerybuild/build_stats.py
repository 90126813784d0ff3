"""
BuildStats - Statistics for a build run.
"""

import time
from dataclasses import dataclass, field


@dataclass
class BuildStats:
    """
    Statistics for a build run.
    
    Attributes:
        total_photos: Number of descriptors in the document
        regenerated: Thumbnails written (or, in dry-run, that would be written)
        cached: Thumbnails that were already up to date
        bytes_generated: Total bytes of thumbnails written
        start_time: Start timestamp
    """
    total_photos: int = 0
    regenerated: int = 0
    cached: int = 0
    bytes_generated: int = 0
    start_time: float = field(default_factory=time.time)
    
    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time
    
    @property
    def completed_count(self) -> int:
        """Photos resolved so far."""
        return self.regenerated + self.cached
    
    @property
    def remaining_count(self) -> int:
        """Photos still to resolve."""
        return self.total_photos - self.completed_count
    
    @property
    def rate_per_second(self) -> float:
        """Resolved photos per second."""
        if self.elapsed_seconds > 0:
            return self.completed_count / self.elapsed_seconds
        return 0.0
