"""
ImageCodec - Decodes source images and renders thumbnails.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import ExifTags, Image, ImageOps, UnidentifiedImageError

from .errors import UnreadableImage

PathLike = Union[str, Path]

# EXIF orientations that rotate the image by 90 or 270 degrees.
TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}

DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError)


class ImageCodec:
    """
    Interface for the image operations the pipeline needs.
    
    Implementations raise UnreadableImage when a source cannot be decoded.
    """
    
    def read_dimensions(self, path: PathLike) -> Tuple[int, int]:
        """
        Return the upright (width, height) of the image at path.
        
        EXIF orientations 5-8 swap the stored dimensions, so the values match
        the rotated thumbnail rather than the raw pixel grid.
        """
        raise NotImplementedError
    
    def render_thumbnail(self, path: PathLike, size: Tuple[int, int], quality: int) -> bytes:
        """
        Render an upright thumbnail covering exactly `size`, cropping the excess.
        
        Returns:
            Encoded thumbnail bytes
        """
        raise NotImplementedError


class PillowCodec(ImageCodec):
    """
    ImageCodec backed by Pillow, producing JPEG thumbnails.
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
    
    def read_dimensions(self, path: PathLike) -> Tuple[int, int]:
        try:
            with Image.open(path) as img:
                width, height = img.size
                orientation = img.getexif().get(ExifTags.Base.Orientation)
        except DECODE_ERRORS as e:
            raise UnreadableImage(str(path), str(e)) from e
        
        if not width or not height:
            raise UnreadableImage(str(path), "zero width or height")
        
        if orientation in TRANSPOSED_ORIENTATIONS:
            return height, width
        return width, height
    
    def render_thumbnail(self, path: PathLike, size: Tuple[int, int], quality: int) -> bytes:
        try:
            with Image.open(path) as img:
                img = ImageOps.exif_transpose(img)
                img = self._convert_color_mode(img)
                img = self._cover(img, size)
                
                output = io.BytesIO()
                img.save(output, format='JPEG', quality=quality, optimize=True, progressive=True)
        except DECODE_ERRORS as e:
            self.logger.error(f"Error rendering thumbnail for {path}: {e}")
            raise UnreadableImage(str(path), str(e)) from e
        
        return output.getvalue()
    
    @staticmethod
    def _cover(img: Image.Image, size: Tuple[int, int]) -> Image.Image:
        """Center-crop to the target aspect ratio and downscale; never enlarge."""
        width, height = size
        if width > img.width or height > img.height:
            # Requested box exceeds the source; keep the source resolution
            scale = min(img.width / width, img.height / height)
            width = max(1, int(width * scale))
            height = max(1, int(height * scale))
        return ImageOps.fit(
            img, (width, height),
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )
    
    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Flatten transparency onto white and convert to RGB for JPEG output."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode == 'P':
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img
