"""
Pytest fixtures for gallerybuild tests.
"""

import json
import os
from datetime import datetime, timezone

import pytest


def write_image(path, size=(100, 100), color='red', fmt='JPEG', mode='RGB', exif=None):
    """Write a solid-color test image to path and return the path."""
    from PIL import Image
    
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new(mode, size, color=color)
    if exif is not None:
        img.save(path, format=fmt, exif=exif)
    else:
        img.save(path, format=fmt)
    return path


def set_mtime(path, mtime_ns):
    """Set both atime and mtime of path in nanoseconds."""
    os.utime(path, ns=(mtime_ns, mtime_ns))


class FakeCodec:
    """In-memory ImageCodec for exercising control flow without Pillow."""
    
    def __init__(self, dimensions=None, default=(2000, 1000)):
        self.dimensions = dimensions or {}
        self.default = default
        self.rendered = []
    
    def read_dimensions(self, path):
        value = self.dimensions.get(os.path.basename(str(path)), self.default)
        if isinstance(value, Exception):
            raise value
        return value
    
    def render_thumbnail(self, path, size, quality):
        self.rendered.append((str(path), size, quality))
        return b'fake jpeg ' + str(size).encode()


@pytest.fixture
def project(tmp_path):
    """Fixture providing an empty project layout with public/ and src/data/."""
    (tmp_path / 'public').mkdir()
    (tmp_path / 'src' / 'data').mkdir(parents=True)
    return tmp_path


@pytest.fixture
def build_config(project):
    """Fixture providing a BuildConfig for the project layout."""
    from gallerybuild.build_config import BuildConfig
    
    return BuildConfig.for_project(project)


@pytest.fixture
def write_descriptors(build_config):
    """Fixture returning a helper that writes the descriptor document."""
    def _write(entries):
        with open(build_config.descriptors_path, 'w', encoding='utf-8') as f:
            json.dump(entries, f)
        return build_config.descriptors_path
    return _write


@pytest.fixture
def sample_photos(project):
    """Fixture providing three real source images under public/photos."""
    public = project / 'public'
    write_image(public / 'photos' / 'rome' / 'colosseum.jpg', size=(2000, 1000))
    write_image(public / 'photos' / 'paris' / 'tower.png', size=(400, 300), fmt='PNG', color='blue')
    write_image(public / 'photos' / 'portrait.jpg', size=(600, 900), color='green')
    return [
        {
            'src': '/photos/rome/colosseum.jpg',
            'title': '  Colosseum  ',
            'shotUsing': 'X100V',
            'location': 'Rome',
            'description': 'Evening light',
        },
        {'src': 'photos/paris/tower.png', 'title': 'Tower'},
        {'src': '/photos/portrait.jpg', 'title': 42, 'location': None},
    ]


@pytest.fixture
def fixed_clock():
    """Fixture providing a clock that always returns the same instant."""
    moment = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def fake_codec():
    """Fixture providing a FakeCodec."""
    return FakeCodec()


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')


@pytest.fixture
def umask_022():
    """Fixture running the test under umask 022, restoring the previous one."""
    previous = os.umask(0o022)
    yield 0o022
    os.umask(previous)
