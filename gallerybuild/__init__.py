"""
Incremental gallery build for a static photo site.

For every photo descriptor:
    1. Validate the entry and locate its source file
    2. Derive a stable id and the thumbnail path
    3. Regenerate the thumbnail only if the source is newer
Then write a single manifest describing every photo, in descriptor order.
"""

__version__ = "1.0.0"

from .build_config import BuildConfig
from .errors import (
    GalleryBuildError,
    MalformedInputDocument,
    InvalidDescriptor,
    MissingSourceFile,
    UnreadableImage,
    ThumbnailWriteFailure,
    DerivedPathCollision,
)
from .paths import normalize_url_path, to_filesystem_path, derive_thumbnail_url
from .identifiers import derive_id
from .photo_record import PhotoDescriptor, ResolvedPhoto
from .descriptor_validator import DescriptorValidator, load_descriptors
from .staleness import ThumbnailCache, is_stale
from .image_codec import ImageCodec, PillowCodec
from .thumbnail_generator import ThumbnailGenerator, compute_thumbnail_size
from .manifest import Manifest, ThumbPolicy
from .build_stats import BuildStats
from .build_progress import BuildProgress
from .pipeline import Pipeline, BuildState
from .reporter import Reporter

__all__ = [
    "BuildConfig",
    "GalleryBuildError",
    "MalformedInputDocument",
    "InvalidDescriptor",
    "MissingSourceFile",
    "UnreadableImage",
    "ThumbnailWriteFailure",
    "DerivedPathCollision",
    "normalize_url_path",
    "to_filesystem_path",
    "derive_thumbnail_url",
    "derive_id",
    "PhotoDescriptor",
    "ResolvedPhoto",
    "DescriptorValidator",
    "load_descriptors",
    "ThumbnailCache",
    "is_stale",
    "ImageCodec",
    "PillowCodec",
    "ThumbnailGenerator",
    "compute_thumbnail_size",
    "Manifest",
    "ThumbPolicy",
    "BuildStats",
    "BuildProgress",
    "Pipeline",
    "BuildState",
    "Reporter",
]
