"""
Manifest - The gallery document describing every resolved photo.
"""

import json
import os
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .photo_record import ResolvedPhoto

THUMB_FORMAT = 'jpeg'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2026-01-01T12:00:00.000Z"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec='milliseconds')
    return text.replace('+00:00', 'Z')


@dataclass(frozen=True)
class ThumbPolicy:
    """
    Thumbnail policy applied to every photo.
    
    Attributes:
        width: Maximum thumbnail width
        quality: Encoder quality
        format: Output format, always 'jpeg'
    """
    width: int
    quality: int
    format: str = THUMB_FORMAT
    
    def to_dict(self) -> dict:
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: dict) -> 'ThumbPolicy':
        return cls(**data)


@dataclass
class Manifest:
    """
    Complete gallery manifest.
    
    Attributes:
        generated_at: ISO timestamp of the build that produced it
        thumb: Thumbnail policy
        photos: Resolved photos in descriptor order
    """
    generated_at: str
    thumb: ThumbPolicy
    photos: List[ResolvedPhoto] = field(default_factory=list)
    
    def add_photo(self, photo: ResolvedPhoto) -> None:
        """Append a resolved photo."""
        self.photos.append(photo)
    
    @property
    def total_photos(self) -> int:
        return len(self.photos)
    
    def photos_by_directory(self) -> Dict[str, List[ResolvedPhoto]]:
        """Group photos by the directory of their source URL."""
        groups: Dict[str, List[ResolvedPhoto]] = {}
        for photo in self.photos:
            directory = photo.src.rsplit('/', 1)[0] or '/'
            groups.setdefault(directory, []).append(photo)
        return groups
    
    def to_dict(self) -> dict:
        """Convert to the manifest document layout."""
        return {
            'generatedAt': self.generated_at,
            'thumb': self.thumb.to_dict(),
            'photos': [p.to_dict() for p in self.photos],
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'Manifest':
        """Create from the manifest document layout."""
        return cls(
            generated_at=data['generatedAt'],
            thumb=ThumbPolicy.from_dict(data['thumb']),
            photos=[ResolvedPhoto.from_dict(p) for p in data.get('photos', [])],
        )
    
    def to_json(self) -> str:
        """Pretty-printed JSON text with a trailing newline."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + '\n'
    
    def save(self, filepath: Union[str, Path]) -> None:
        """
        Write the manifest, replacing any previous file.
        
        The document is written to a temporary file next to the target and
        renamed into place, so readers never see a partial manifest. The file
        is created under the process umask.
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with open(tmp_path, 'x', encoding='utf-8') as f:
                f.write(self.to_json())
            os.replace(tmp_path, path)
        except BaseException:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
    
    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'Manifest':
        """Load manifest from JSON file."""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)
    
    @classmethod
    def create_new(
        cls,
        thumb: ThumbPolicy,
        clock: Optional[Callable[[], datetime]] = None
    ) -> 'Manifest':
        """Create a new empty manifest stamped with the current time."""
        now = (clock or utc_now)()
        return cls(generated_at=format_timestamp(now), thumb=thumb)
