"""
BuildConfig - Locations and thumbnail policy for a gallery build.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

DEFAULT_THUMB_WIDTH = 900
DEFAULT_THUMB_QUALITY = 78


@dataclass
class BuildConfig:
    """
    Configuration for one pipeline run.
    
    Attributes:
        public_root: Directory serving public assets (originals and thumbnails)
        descriptors_path: JSON document listing the photo descriptors
        manifest_path: Where the manifest is written
        thumb_width: Maximum thumbnail width in pixels
        thumb_quality: JPEG quality for thumbnails
        workers: Number of photos processed concurrently
        dry_run: If True, write neither thumbnails nor the manifest
    """
    public_root: str
    descriptors_path: str
    manifest_path: str
    thumb_width: int = DEFAULT_THUMB_WIDTH
    thumb_quality: int = DEFAULT_THUMB_QUALITY
    workers: int = 1
    dry_run: bool = False
    
    @classmethod
    def for_project(cls, project_root: Union[str, Path] = '.', **overrides) -> 'BuildConfig':
        """
        Create configuration for the conventional project layout.
        
        public/                               -> public_root
        src/data/gallery.json                 -> descriptors_path
        src/generated/gallery.manifest.json   -> manifest_path
        """
        root = Path(project_root)
        values = {
            'public_root': str(root / 'public'),
            'descriptors_path': str(root / 'src' / 'data' / 'gallery.json'),
            'manifest_path': str(root / 'src' / 'generated' / 'gallery.manifest.json'),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
    
    @classmethod
    def from_env(cls, project_root: Optional[str] = None) -> 'BuildConfig':
        """Create configuration from GALLERY_* environment variables."""
        config = cls.for_project(project_root or os.environ.get('GALLERY_PROJECT_ROOT', '.'))
        
        config.public_root = os.environ.get('GALLERY_PUBLIC_ROOT', config.public_root)
        config.descriptors_path = os.environ.get('GALLERY_DESCRIPTORS', config.descriptors_path)
        config.manifest_path = os.environ.get('GALLERY_MANIFEST', config.manifest_path)
        config.thumb_width = _env_int('GALLERY_THUMB_WIDTH', config.thumb_width)
        config.thumb_quality = _env_int('GALLERY_THUMB_QUALITY', config.thumb_quality)
        config.workers = _env_int('GALLERY_WORKERS', config.workers)
        
        return config
    
    def validate(self) -> List[str]:
        """
        Check the configuration.
        
        Returns:
            List of error messages, empty if valid
        """
        errors = []
        
        if not isinstance(self.thumb_width, int) or self.thumb_width <= 0:
            errors.append(f"Thumbnail width must be a positive integer (got {self.thumb_width!r})")
        if not isinstance(self.thumb_quality, int) or not 1 <= self.thumb_quality <= 100:
            errors.append(f"Thumbnail quality must be between 1 and 100 (got {self.thumb_quality!r})")
        if not isinstance(self.workers, int) or self.workers < 1:
            errors.append(f"Workers must be at least 1 (got {self.workers!r})")
        if not self.public_root:
            errors.append("Public root is not set")
        elif not os.path.isdir(self.public_root):
            errors.append(f"Public root does not exist: {self.public_root}")
        if not self.descriptors_path:
            errors.append("Descriptor document path is not set")
        if not self.manifest_path:
            errors.append("Manifest path is not set")
        
        return errors


def _env_int(name: str, default: int):
    """Integer environment variable; unparsable values are kept for validate() to report."""
    value = os.environ.get(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        return value
