"""
Pipeline - Builds thumbnails and the gallery manifest from a descriptor document.
"""

import enum
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .build_config import BuildConfig
from .build_progress import BuildProgress
from .build_stats import BuildStats
from .descriptor_validator import DescriptorValidator, load_descriptors
from .errors import DerivedPathCollision
from .identifiers import derive_id
from .manifest import Manifest, ThumbPolicy
from .paths import derive_thumbnail_url, to_filesystem_path
from .photo_record import PhotoDescriptor, ResolvedPhoto
from .staleness import ThumbnailCache
from .thumbnail_generator import ThumbnailGenerator, ThumbnailResult


class BuildState(enum.Enum):
    INIT = 'init'
    READING = 'reading'
    PROCESSING = 'processing'
    ASSEMBLING = 'assembling'
    WRITING = 'writing'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class PhotoJob:
    """
    A validated descriptor with everything derived from its src.
    
    Attributes:
        index: Position in the descriptor document
        descriptor: Validated descriptor
        source_path: Filesystem path of the original
        photo_id: Derived id
        thumb_src: Public URL of the thumbnail
        thumb_path: Filesystem path of the thumbnail
    """
    index: int
    descriptor: PhotoDescriptor
    source_path: Path
    photo_id: str
    thumb_src: str
    thumb_path: Path


class Pipeline:
    """
    Validates descriptors, refreshes stale thumbnails and writes the manifest.
    
    Any failure aborts the run before the manifest is written, leaving a
    previous manifest untouched.
    """
    
    def __init__(
        self,
        config: BuildConfig,
        thumbnail_generator: Optional[ThumbnailGenerator] = None,
        validator: Optional[DescriptorValidator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.
        
        Args:
            config: Build configuration
            thumbnail_generator: Thumbnail generator (default: Pillow-backed, from config)
            validator: Descriptor validator (default: bound to config.public_root)
            clock: Callable returning the build timestamp
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.thumb_gen = thumbnail_generator or ThumbnailGenerator(
            cache=ThumbnailCache(),
            max_width=config.thumb_width,
            quality=config.thumb_quality,
            dry_run=config.dry_run,
            logger=self.logger,
        )
        self.validator = validator or DescriptorValidator(config.public_root, logger=self.logger)
        self.clock = clock
        self.state = BuildState.INIT
        self.stats = BuildStats()
    
    def run(self, progress: Optional[BuildProgress] = None) -> Manifest:
        """
        Execute a full build: read, process, assemble and write.
        
        Returns:
            The manifest that was written (or, in dry-run, would be written)
        """
        try:
            self.state = BuildState.READING
            self.logger.info(f"Reading descriptors: {self.config.descriptors_path}")
            descriptors = load_descriptors(self.config.descriptors_path)
            
            manifest = self.build(descriptors, progress=progress)
            
            self.state = BuildState.WRITING
            if self.config.dry_run:
                self.logger.info(f"[DRY RUN] Would write manifest: {self.config.manifest_path}")
            else:
                manifest.save(self.config.manifest_path)
                self.logger.info(f"Manifest written: {self.config.manifest_path}")
            
            self.state = BuildState.DONE
            return manifest
        except BaseException:
            self.state = BuildState.FAILED
            raise
    
    def build(self, descriptors: Sequence, progress: Optional[BuildProgress] = None) -> Manifest:
        """
        Resolve every descriptor and assemble the manifest without writing it.
        
        Args:
            descriptors: Raw descriptor entries in document order
            progress: Optional progress tracker
        """
        try:
            self.state = BuildState.PROCESSING
            self.stats = BuildStats(total_photos=len(descriptors))
            
            mode_str = " [DRY RUN]" if self.config.dry_run else ""
            self.logger.info(f"Building gallery: {len(descriptors)} photos{mode_str}")
            
            jobs = self.plan(descriptors)
            photos = self._resolve_all(jobs, progress)
            
            self.state = BuildState.ASSEMBLING
            manifest = Manifest.create_new(
                ThumbPolicy(width=self.config.thumb_width, quality=self.config.thumb_quality),
                clock=self.clock,
            )
            for photo in photos:
                manifest.add_photo(photo)
            
            self.logger.info(
                f"Build complete: {self.stats.regenerated} regenerated, "
                f"{self.stats.cached} up to date ({self.stats.elapsed_seconds:.1f}s)"
            )
            return manifest
        except BaseException:
            self.state = BuildState.FAILED
            raise
    
    def plan(self, descriptors: Sequence) -> List[PhotoJob]:
        """
        Validate every descriptor in order and derive its id and paths.
        
        Raises:
            InvalidDescriptor, MissingSourceFile: From validation
            DerivedPathCollision: If two entries derive the same id or thumbnail
        """
        jobs = []
        seen: Dict[str, Dict[str, int]] = {'id': {}, 'thumbSrc': {}}
        
        for index, raw in enumerate(descriptors):
            validated = self.validator.validate(raw, index)
            src = validated.descriptor.src
            thumb_src = derive_thumbnail_url(src)
            job = PhotoJob(
                index=index,
                descriptor=validated.descriptor,
                source_path=validated.source_path,
                photo_id=derive_id(src),
                thumb_src=thumb_src,
                thumb_path=to_filesystem_path(thumb_src, self.config.public_root),
            )
            
            for field_name, value in (('id', job.photo_id), ('thumbSrc', job.thumb_src)):
                other = seen[field_name].get(value)
                if other is not None:
                    raise DerivedPathCollision(index, other, field_name, value)
                seen[field_name][value] = index
            
            jobs.append(job)
        
        return jobs
    
    def _resolve(self, job: PhotoJob) -> Tuple[ResolvedPhoto, ThumbnailResult]:
        """Measure one photo and refresh its thumbnail."""
        result = self.thumb_gen.process(job.source_path, job.thumb_path)
        photo = ResolvedPhoto.from_descriptor(
            job.descriptor,
            photo_id=job.photo_id,
            thumb_src=job.thumb_src,
            width=result.width,
            height=result.height,
            thumb_width=result.thumb_width,
            thumb_height=result.thumb_height,
        )
        return photo, result
    
    def _resolve_all(self, jobs: List[PhotoJob], progress: Optional[BuildProgress]) -> List[ResolvedPhoto]:
        """
        Resolve jobs, sequentially or on a bounded thread pool.
        
        Results land in slots indexed by position, so the output order is the
        job order whatever the completion order.
        """
        slots: List[Optional[ResolvedPhoto]] = [None] * len(jobs)
        
        if self.config.workers <= 1 or len(jobs) <= 1:
            for position, job in enumerate(jobs):
                photo, result = self._resolve(job)
                slots[position] = photo
                self._record(job, photo, result, progress)
            return slots
        
        executor = ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix='gallerybuild')
        try:
            futures = {executor.submit(self._resolve, job): position for position, job in enumerate(jobs)}
            for future in as_completed(futures):
                position = futures[future]
                photo, result = future.result()
                slots[position] = photo
                self._record(jobs[position], photo, result, progress)
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        
        return slots
    
    def _record(
        self,
        job: PhotoJob,
        photo: ResolvedPhoto,
        result: ThumbnailResult,
        progress: Optional[BuildProgress]
    ) -> None:
        """Update stats and progress for one resolved photo."""
        if result.regenerated:
            self.stats.regenerated += 1
            self.stats.bytes_generated += result.thumb_bytes
        else:
            self.stats.cached += 1
        
        if progress:
            progress.on_photo_resolved(job.index, photo, result.regenerated, dry_run=self.config.dry_run)
            progress.on_progress_update(self.stats)
        else:
            self.logger.debug(f"Resolved descriptors[{job.index}]: {photo.format_status(result.regenerated)}")
