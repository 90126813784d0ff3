"""
BuildProgress - Tracks and displays build progress.
"""

import logging
from typing import Optional

from .build_stats import BuildStats
from .photo_record import ResolvedPhoto


class BuildProgress:
    """
    Tracks and displays build progress with optional per-photo output.
    """
    
    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 50,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.
        
        Args:
            show_files: If True, print each photo as it's resolved
            log_interval: Log summary progress every N photos (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0
    
    def on_photo_resolved(self, index: int, photo: ResolvedPhoto, regenerated: bool, dry_run: bool = False) -> None:
        """
        Called when a photo has been resolved.
        
        Args:
            index: Descriptor index
            photo: The resolved photo
            regenerated: Whether its thumbnail was rewritten
            dry_run: Whether the build is a dry run
        """
        if not self.show_files:
            return
        if regenerated and dry_run:
            tag = 'DRY RUN'
        elif regenerated:
            tag = 'NEW'
        else:
            tag = 'OK'
        print(f"  [{tag}] #{index} {photo.format_status(regenerated)}")
    
    def on_progress_update(self, stats: BuildStats) -> None:
        """Called after every photo to report overall progress."""
        done = stats.completed_count
        
        if not self.show_files and done - self.last_logged >= self.log_interval:
            self.last_logged = done
            
            rate = stats.rate_per_second
            eta_seconds = stats.remaining_count / rate if rate > 0 else 0.0
            
            self.logger.info(
                f"Progress: {done}/{stats.total_photos} photos "
                f"({stats.regenerated} regenerated, {stats.cached} up to date, "
                f"{rate:.1f}/s, ~{eta_seconds:.0f}s remaining, {stats.remaining_count} left)"
            )
