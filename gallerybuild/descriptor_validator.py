"""
DescriptorValidator - Loads the descriptor document and validates its entries.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .errors import InvalidDescriptor, MalformedInputDocument, MissingSourceFile
from .paths import has_parent_segment, normalize_url_path, to_filesystem_path
from .photo_record import PhotoDescriptor, TEXT_FIELDS


def load_descriptors(path: Union[str, Path]) -> List:
    """
    Read the raw descriptor list from a JSON document.
    
    Raises:
        MalformedInputDocument: If the file is unreadable, not JSON, or not a list
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise MalformedInputDocument(str(path), f"cannot read file ({e.strerror or e})") from e
    except ValueError as e:
        raise MalformedInputDocument(str(path), f"invalid JSON ({e})") from e
    
    if not isinstance(data, list):
        raise MalformedInputDocument(
            str(path), f"expected an array, got {type(data).__name__}"
        )
    return data


def _coerce_text(value) -> str:
    """Trimmed string, or '' for missing and non-string values."""
    return value.strip() if isinstance(value, str) else ''


@dataclass(frozen=True)
class ValidatedDescriptor:
    """A descriptor that passed validation, with its resolved source file."""
    index: int
    descriptor: PhotoDescriptor
    source_path: Path


class DescriptorValidator:
    """
    Validates raw descriptor entries against the public root.
    """
    
    def __init__(
        self,
        public_root: Union[str, Path],
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize validator.
        
        Args:
            public_root: Directory that public URL paths resolve against
            logger: Optional logger instance
        """
        self.public_root = Path(public_root)
        self.logger = logger or logging.getLogger(__name__)
    
    def validate(self, raw, index: int) -> ValidatedDescriptor:
        """
        Validate one raw descriptor entry.
        
        Args:
            raw: Entry as parsed from the descriptor document
            index: Position of the entry in the document
            
        Returns:
            ValidatedDescriptor with trimmed fields and the source file path
            
        Raises:
            InvalidDescriptor: If the entry or its src is unusable
            MissingSourceFile: If no regular file exists for src
        """
        if not isinstance(raw, dict):
            raise InvalidDescriptor(index, f"expected an object, got {type(raw).__name__}")
        
        src = raw.get('src')
        if not isinstance(src, str) or not src.strip():
            raise InvalidDescriptor(index, "src must be a non-empty string")
        
        src = normalize_url_path(src.strip())
        if has_parent_segment(src):
            raise InvalidDescriptor(index, f"src must not contain '..' segments: {src}")
        
        source_path = to_filesystem_path(src, self.public_root)
        if not source_path.is_file():
            raise MissingSourceFile(index, str(source_path))
        
        text = {attr: _coerce_text(raw.get(key)) for attr, key in TEXT_FIELDS}
        self.logger.debug(f"Validated descriptors[{index}]: {src}")
        
        return ValidatedDescriptor(
            index=index,
            descriptor=PhotoDescriptor(src=src, **text),
            source_path=source_path,
        )
