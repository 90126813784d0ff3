"""
PhotoDescriptor and ResolvedPhoto - Input and output records for a single photo.
"""

from dataclasses import dataclass
from typing import Optional

# Descriptor text fields: (attribute name, wire name)
TEXT_FIELDS = (
    ('title', 'title'),
    ('shot_using', 'shotUsing'),
    ('location', 'location'),
    ('description', 'description'),
)


@dataclass(frozen=True)
class PhotoDescriptor:
    """
    One entry of the descriptor document.
    
    Attributes:
        src: Normalized public URL path of the original (e.g., '/photos/rome-01.jpg')
        title: Display title
        shot_using: Camera / lens description
        location: Where the photo was taken
        description: Free text
    """
    src: str
    title: str = ''
    shot_using: str = ''
    location: str = ''
    description: str = ''


@dataclass(frozen=True)
class ResolvedPhoto:
    """
    Manifest entry for a single photo.
    
    Attributes:
        id: Identifier derived from src
        src: Public URL path of the original
        thumb_src: Public URL path of the thumbnail
        width: Source width in pixels
        height: Source height in pixels
        thumb_width: Thumbnail width in pixels
        thumb_height: Thumbnail height in pixels
        title, shot_using, location, description: Trimmed descriptor text
    """
    id: str
    src: str
    thumb_src: str
    width: int
    height: int
    thumb_width: int
    thumb_height: int
    title: str = ''
    shot_using: str = ''
    location: str = ''
    description: str = ''
    
    @classmethod
    def from_descriptor(
        cls,
        descriptor: PhotoDescriptor,
        photo_id: str,
        thumb_src: str,
        width: int,
        height: int,
        thumb_width: int,
        thumb_height: int,
    ) -> 'ResolvedPhoto':
        """Combine a descriptor with its derived and measured values."""
        return cls(
            id=photo_id,
            src=descriptor.src,
            thumb_src=thumb_src,
            width=width,
            height=height,
            thumb_width=thumb_width,
            thumb_height=thumb_height,
            title=descriptor.title,
            shot_using=descriptor.shot_using,
            location=descriptor.location,
            description=descriptor.description,
        )
    
    def to_dict(self) -> dict:
        """Convert to the manifest wire format."""
        return {
            'id': self.id,
            'src': self.src,
            'thumbSrc': self.thumb_src,
            'width': self.width,
            'height': self.height,
            'thumbWidth': self.thumb_width,
            'thumbHeight': self.thumb_height,
            'title': self.title,
            'shotUsing': self.shot_using,
            'location': self.location,
            'description': self.description,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'ResolvedPhoto':
        """Create from the manifest wire format."""
        return cls(
            id=data['id'],
            src=data['src'],
            thumb_src=data['thumbSrc'],
            width=data['width'],
            height=data['height'],
            thumb_width=data['thumbWidth'],
            thumb_height=data['thumbHeight'],
            title=data.get('title', ''),
            shot_using=data.get('shotUsing', ''),
            location=data.get('location', ''),
            description=data.get('description', ''),
        )
    
    def format_status(self, regenerated: Optional[bool] = None) -> str:
        """
        Format a human-readable status line.
        
        Returns:
            Status string like "/photos/a.jpg - 2000x1000 -> 900x450 (regenerated)"
        """
        status = f"{self.src} - {self.width}x{self.height} -> {self.thumb_width}x{self.thumb_height}"
        if regenerated is True:
            status += " (regenerated)"
        elif regenerated is False:
            status += " (up to date)"
        return status
