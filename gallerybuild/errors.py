"""
Errors raised by the gallery build pipeline.

Every failure aborts the whole run; nothing here is recovered locally.
"""

from typing import Optional


class GalleryBuildError(Exception):
    """Base class for all build failures."""


class MalformedInputDocument(GalleryBuildError):
    """The descriptor document could not be read, parsed, or is not a list."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed descriptor document {path}: {reason}")


class InvalidDescriptor(GalleryBuildError):
    """A descriptor entry is missing a required field or has an unusable value."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"descriptors[{index}]: {reason}")


class MissingSourceFile(GalleryBuildError):
    """The source file referenced by a descriptor does not exist."""

    def __init__(self, index: int, path: str):
        self.index = index
        self.path = path
        super().__init__(f"Missing file for descriptors[{index}].src: expected {path}")


class UnreadableImage(GalleryBuildError):
    """The image codec could not determine the dimensions of a source image."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"Could not read dimensions for {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ThumbnailWriteFailure(GalleryBuildError):
    """A thumbnail could not be written to its destination."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write thumbnail {path}: {reason}")


class DerivedPathCollision(GalleryBuildError):
    """Two descriptors derive the same id or thumbnail path."""

    def __init__(self, index: int, other_index: int, field: str, value: str):
        self.index = index
        self.other_index = other_index
        self.field = field
        self.value = value
        super().__init__(
            f"descriptors[{index}] derives the same {field} as "
            f"descriptors[{other_index}]: {value}"
        )
