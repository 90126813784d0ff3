"""
Command Line Interface for the gallery build.
"""

import argparse
import logging
from typing import List, Optional

from .build_config import BuildConfig
from .build_progress import BuildProgress
from .errors import GalleryBuildError
from .manifest import Manifest
from .pipeline import Pipeline
from .reporter import Reporter


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    logging.getLogger('PIL').setLevel(logging.WARNING)
    
    return logging.getLogger('gallerybuild')


def get_build_config(args: argparse.Namespace) -> BuildConfig:
    """Get build configuration from environment and CLI overrides."""
    config = BuildConfig.from_env(getattr(args, 'project_root', None))
    
    if getattr(args, 'public_root', None):
        config.public_root = args.public_root
    if getattr(args, 'descriptors', None):
        config.descriptors_path = args.descriptors
    if getattr(args, 'manifest', None):
        config.manifest_path = args.manifest
    if getattr(args, 'thumb_width', None) is not None:
        config.thumb_width = args.thumb_width
    if getattr(args, 'thumb_quality', None) is not None:
        config.thumb_quality = args.thumb_quality
    if getattr(args, 'workers', None) is not None:
        config.workers = args.workers
    config.dry_run = getattr(args, 'dry_run', False)
    
    return config


def cmd_build(args: argparse.Namespace) -> int:
    """Execute build command."""
    logger = setup_logging(args.verbose)
    
    config = get_build_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1
    
    logger.info(f"Public root: {config.public_root}")
    logger.info(f"Manifest: {config.manifest_path}")
    logger.info(f"Thumbnails: {config.thumb_width}px, quality {config.thumb_quality}")
    if config.workers > 1:
        logger.info(f"Workers: {config.workers}")
    
    progress = None
    if not args.quiet:
        progress = BuildProgress(show_files=args.show_files, logger=logger)
    
    pipeline = Pipeline(config, logger=logger)
    try:
        pipeline.run(progress=progress)
    except GalleryBuildError as e:
        logger.error(f"Gallery build failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Gallery build failed: {e}")
        return 1
    
    if not args.quiet:
        print()
        Reporter().report_build(pipeline.stats, dry_run=config.dry_run)
    
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Execute report command."""
    logger = setup_logging(args.verbose)
    
    try:
        manifest = Manifest.load(args.manifest)
    except FileNotFoundError:
        logger.error(f"Manifest not found: {args.manifest}")
        return 1
    except Exception as e:
        logger.error(f"Failed to load manifest: {e}")
        return 1
    
    reporter = Reporter()
    if args.type == 'summary':
        reporter.report_summary(manifest)
    elif args.type == 'photos':
        reporter.report_photos(manifest)
    
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='gallerybuild',
        description='Incremental thumbnail and manifest build for the photo gallery',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  Build:   python -m gallerybuild build --project-root .
  Report:  python -m gallerybuild report --manifest src/generated/gallery.manifest.json

Thumbnails are only regenerated when the source is newer than the existing one.
Environment: GALLERY_PUBLIC_ROOT, GALLERY_DESCRIPTORS, GALLERY_MANIFEST,
GALLERY_THUMB_WIDTH, GALLERY_THUMB_QUALITY, GALLERY_WORKERS
"""
    )
    
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    
    # Build command
    build_parser = subparsers.add_parser('build', help='Refresh thumbnails and write the manifest')
    build_parser.add_argument('--project-root', metavar='PATH',
                              help='Project root holding public/ and src/ (default: .)')
    build_parser.add_argument('--public-root', metavar='PATH', help='Override public asset directory')
    build_parser.add_argument('--descriptors', metavar='FILE', help='Override descriptor document')
    build_parser.add_argument('-m', '--manifest', metavar='FILE', help='Override manifest output path')
    build_parser.add_argument('-s', '--thumb-width', type=int, metavar='PX',
                              help='Maximum thumbnail width (default: 900)')
    build_parser.add_argument('--thumb-quality', type=int, metavar='Q',
                              help='JPEG quality (default: 78)')
    build_parser.add_argument('-j', '--workers', type=int, metavar='N',
                              help='Photos processed concurrently (default: 1)')
    build_parser.add_argument('-n', '--dry-run', action='store_true',
                              help='Show what would be done without writing anything')
    build_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    build_parser.add_argument('--show-files', action='store_true',
                              help='Print each photo as it is resolved')
    build_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                              help='Enable verbose logging')
    
    # Report command
    report_parser = subparsers.add_parser('report', help='Describe an existing manifest')
    report_parser.add_argument('-m', '--manifest', required=True, help='Input manifest file')
    report_parser.add_argument('-t', '--type', choices=['summary', 'photos'],
                               default='summary', help='Report type')
    report_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                              help='Enable verbose logging')
    
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    
    if not parsed_args.command:
        parser.print_help()
        return 1
    
    if parsed_args.command == 'build':
        return cmd_build(parsed_args)
    elif parsed_args.command == 'report':
        return cmd_report(parsed_args)
    
    return 1
