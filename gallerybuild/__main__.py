"""
Main entry point for running the package as a module.

Usage:
    python -m gallerybuild build --project-root .
    python -m gallerybuild report --manifest src/generated/gallery.manifest.json
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
