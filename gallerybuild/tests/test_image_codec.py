"""Tests for the Pillow image codec."""

import io

import pytest
from PIL import Image
from gallerybuild.errors import UnreadableImage
from gallerybuild.image_codec import ImageCodec, PillowCodec

from conftest import write_image


def _exif_with_orientation(value):
    exif = Image.Exif()
    exif[0x0112] = value
    return exif.tobytes()


class TestPillowCodec:
    """Tests for PillowCodec."""
    
    @pytest.fixture
    def codec(self, logger):
        return PillowCodec(logger=logger)
    
    def test_base_codec_is_abstract(self, tmp_path):
        with pytest.raises(NotImplementedError):
            ImageCodec().read_dimensions(tmp_path / 'a.jpg')
    
    def test_read_dimensions(self, codec, tmp_path):
        path = write_image(tmp_path / 'a.jpg', size=(320, 200))
        
        assert codec.read_dimensions(path) == (320, 200)
    
    def test_read_dimensions_png(self, codec, tmp_path):
        path = write_image(tmp_path / 'a.png', size=(64, 48), fmt='PNG', mode='RGBA', color=(0, 0, 0, 0))
        
        assert codec.read_dimensions(path) == (64, 48)
    
    def test_read_dimensions_rotated(self, codec, tmp_path):
        """EXIF orientations that rotate by 90 degrees swap the reported dimensions."""
        path = write_image(tmp_path / 'a.jpg', size=(300, 200), exif=_exif_with_orientation(6))
        
        assert codec.read_dimensions(path) == (200, 300)
    
    def test_read_dimensions_corrupt(self, codec, tmp_path):
        path = tmp_path / 'broken.jpg'
        path.write_bytes(b'not an image')
        
        with pytest.raises(UnreadableImage) as exc_info:
            codec.read_dimensions(path)
        
        assert exc_info.value.path == str(path)
        assert str(path) in str(exc_info.value)
    
    def test_read_dimensions_missing(self, codec, tmp_path):
        with pytest.raises(UnreadableImage):
            codec.read_dimensions(tmp_path / 'missing.jpg')
    
    def test_render_exact_size(self, codec, tmp_path):
        path = write_image(tmp_path / 'a.jpg', size=(2000, 1000))
        
        data = codec.render_thumbnail(path, (900, 450), 78)
        
        result = Image.open(io.BytesIO(data))
        assert result.format == 'JPEG'
        assert result.size == (900, 450)
    
    def test_render_crops_to_cover(self, codec, tmp_path):
        """A box with a different aspect ratio is filled by cropping, not letterboxing."""
        path = write_image(tmp_path / 'a.jpg', size=(400, 200), color='blue')
        
        data = codec.render_thumbnail(path, (100, 100), 90)
        
        result = Image.open(io.BytesIO(data)).convert('RGB')
        assert result.size == (100, 100)
        r, g, b = result.getpixel((0, 0))
        assert b > 200 and r < 60 and g < 60
    
    def test_render_never_upscales(self, codec, tmp_path):
        path = write_image(tmp_path / 'a.jpg', size=(200, 100))
        
        data = codec.render_thumbnail(path, (800, 400), 80)
        
        assert Image.open(io.BytesIO(data)).size == (200, 100)
    
    def test_render_applies_orientation(self, codec, tmp_path):
        path = write_image(tmp_path / 'a.jpg', size=(300, 200), exif=_exif_with_orientation(6))
        
        data = codec.render_thumbnail(path, (100, 150), 80)
        
        assert Image.open(io.BytesIO(data)).size == (100, 150)
    
    def test_render_flattens_transparency(self, codec, tmp_path):
        path = write_image(tmp_path / 'a.png', size=(50, 50), fmt='PNG', mode='RGBA', color=(255, 0, 0, 0))
        
        data = codec.render_thumbnail(path, (50, 50), 80)
        
        result = Image.open(io.BytesIO(data))
        assert result.mode == 'RGB'
        r, g, b = result.getpixel((25, 25))
        assert min(r, g, b) > 230
    
    def test_render_corrupt(self, codec, tmp_path):
        path = tmp_path / 'broken.png'
        path.write_bytes(b'\x89PNG garbage')
        
        with pytest.raises(UnreadableImage):
            codec.render_thumbnail(path, (10, 10), 80)
