"""
Reporter - Generates human-readable reports from a gallery manifest.
"""

import logging
import sys
from typing import Optional, TextIO

from .build_stats import BuildStats
from .manifest import Manifest


class Reporter:
    """
    Generates human-readable reports from manifest data.
    """
    
    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.
        
        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)
    
    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)
    
    def _format_bytes(self, bytes_val: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} PB"
    
    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f} seconds"
        elif seconds < 3600:
            return f"{seconds / 60:.1f} minutes"
        else:
            return f"{seconds / 3600:.1f} hours"
    
    def report_summary(self, manifest: Manifest) -> None:
        """Generate a summary report."""
        self._print("=" * 70)
        self._print("GALLERY MANIFEST SUMMARY")
        self._print("=" * 70)
        self._print()
        
        self._print("Manifest Information:")
        self._print(f"  Generated:   {manifest.generated_at}")
        self._print(
            f"  Thumbnails:  {manifest.thumb.format} @ {manifest.thumb.width}px, "
            f"quality {manifest.thumb.quality}"
        )
        self._print(f"  Photos:      {manifest.total_photos:,}")
        self._print()
        
        if not manifest.photos:
            self._print("No photos in manifest.")
            self._print()
            return
        
        self._print("Directories:")
        self._print("-" * 70)
        self._print(f"{'Directory':<40} {'Photos':>10} {'Full Width':>12}")
        self._print("-" * 70)
        
        for directory, photos in sorted(manifest.photos_by_directory().items()):
            # Photos narrower than the policy width keep their own width
            full_width = sum(1 for p in photos if p.thumb_width == manifest.thumb.width)
            self._print(f"{directory:<40} {len(photos):>10,} {full_width:>12,}")
        
        self._print("-" * 70)
        self._print()
    
    def report_photos(self, manifest: Manifest) -> None:
        """Generate a per-photo listing."""
        self.report_summary(manifest)
        
        self._print("Photos:")
        self._print("-" * 70)
        self._print(f"{'Id':<36} {'Original':>15} {'Thumbnail':>15}")
        self._print("-" * 70)
        
        for photo in manifest.photos:
            original = f"{photo.width}x{photo.height}"
            thumb = f"{photo.thumb_width}x{photo.thumb_height}"
            self._print(f"{photo.id:<36} {original:>15} {thumb:>15}")
            if photo.title:
                self._print(f"    {photo.title}")
        
        self._print("-" * 70)
        self._print()
    
    def report_build(self, stats: BuildStats, dry_run: bool = False) -> None:
        """Print the outcome of a build run."""
        label = "Would regenerate" if dry_run else "Regenerated"
        self._print(f"Photos: {stats.total_photos}")
        self._print(f"{label}: {stats.regenerated}")
        self._print(f"Up to date: {stats.cached}")
        if stats.bytes_generated:
            self._print(f"Written: {self._format_bytes(stats.bytes_generated)}")
        self._print(f"Time: {self._format_duration(stats.elapsed_seconds)}")
