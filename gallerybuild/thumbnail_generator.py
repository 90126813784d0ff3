"""
ThumbnailGenerator - Produces thumbnails for source images when they are stale.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import ThumbnailWriteFailure
from .image_codec import ImageCodec, PillowCodec
from .staleness import ThumbnailCache

PathLike = Union[str, Path]


def compute_thumbnail_size(width: int, height: int, max_width: int) -> Tuple[int, int]:
    """
    Compute thumbnail dimensions for a source image.
    
    The width is capped at max_width without upscaling, and the height keeps
    the source aspect ratio, rounded half up, never below 1.
    
    Example: 2000x1000 with max_width 900 -> (900, 450)
    """
    thumb_width = min(max_width, width)
    thumb_height = max(1, (2 * height * thumb_width + width) // (2 * width))
    return thumb_width, thumb_height


@dataclass(frozen=True)
class ThumbnailResult:
    """
    Dimensions measured for one photo.
    
    Attributes:
        width: Source width
        height: Source height
        thumb_width: Thumbnail width
        thumb_height: Thumbnail height
        regenerated: Whether the thumbnail was (or in dry-run, would be) rewritten
        thumb_bytes: Size of the written thumbnail, 0 if nothing was written
    """
    width: int
    height: int
    thumb_width: int
    thumb_height: int
    regenerated: bool
    thumb_bytes: int = 0


class ThumbnailGenerator:
    """
    Generates thumbnails through an ImageCodec, skipping up-to-date ones.
    """
    
    def __init__(
        self,
        codec: Optional[ImageCodec] = None,
        cache: Optional[ThumbnailCache] = None,
        max_width: int = 900,
        quality: int = 78,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize thumbnail generator.
        
        Args:
            codec: Image codec (default: PillowCodec)
            cache: Thumbnail cache used for staleness checks
            max_width: Maximum thumbnail width (default: 900)
            quality: JPEG quality for output (default: 78)
            dry_run: If True, never write thumbnails
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.codec = codec or PillowCodec(logger=self.logger)
        self.cache = cache or ThumbnailCache()
        self.max_width = max_width
        self.quality = quality
        self.dry_run = dry_run
    
    def process(self, source_path: PathLike, thumb_path: PathLike) -> ThumbnailResult:
        """
        Measure a source image and regenerate its thumbnail if stale.
        
        Args:
            source_path: Filesystem path of the original
            thumb_path: Filesystem path of the thumbnail
            
        Returns:
            ThumbnailResult, also on cache hits
            
        Raises:
            UnreadableImage: If the source cannot be decoded
            ThumbnailWriteFailure: If the thumbnail cannot be written
        """
        width, height = self.codec.read_dimensions(source_path)
        thumb_width, thumb_height = compute_thumbnail_size(width, height, self.max_width)
        
        if not self.cache.needs_regeneration(source_path, thumb_path):
            self.logger.debug(f"Thumbnail up to date: {thumb_path}")
            return ThumbnailResult(width, height, thumb_width, thumb_height, regenerated=False)
        
        if self.dry_run:
            self.logger.debug(f"[DRY RUN] Would generate: {thumb_path}")
            return ThumbnailResult(width, height, thumb_width, thumb_height, regenerated=True)
        
        self.logger.debug(f"Generating thumbnail: {source_path} -> {thumb_path}")
        data = self.codec.render_thumbnail(source_path, (thumb_width, thumb_height), self.quality)
        self._write_atomic(Path(thumb_path), data)
        
        return ThumbnailResult(
            width, height, thumb_width, thumb_height,
            regenerated=True,
            thumb_bytes=len(data),
        )
    
    def _write_atomic(self, path: Path, data: bytes) -> None:
        """
        Write data via a temporary file in the destination directory.
        
        The temporary file is created with the process umask, so the renamed
        thumbnail gets the same permissions as any other file written here.
        """
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        created = False
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'xb') as f:
                created = True
                f.write(data)
            os.replace(tmp_path, path)
        except OSError as e:
            if created and tmp_path.exists():
                tmp_path.unlink()
            raise ThumbnailWriteFailure(str(path), e.strerror or str(e)) from e
