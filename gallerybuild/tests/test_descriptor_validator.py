"""Tests for descriptor loading and validation."""

import json

import pytest
from gallerybuild.descriptor_validator import DescriptorValidator, load_descriptors
from gallerybuild.errors import InvalidDescriptor, MalformedInputDocument, MissingSourceFile
from gallerybuild.photo_record import PhotoDescriptor

from conftest import write_image


class TestLoadDescriptors:
    """Tests for load_descriptors."""
    
    def test_loads_list(self, tmp_path):
        path = tmp_path / 'gallery.json'
        path.write_text(json.dumps([{'src': '/a.jpg'}]), encoding='utf-8')
        
        assert load_descriptors(path) == [{'src': '/a.jpg'}]
    
    def test_empty_list(self, tmp_path):
        path = tmp_path / 'gallery.json'
        path.write_text('[]', encoding='utf-8')
        
        assert load_descriptors(path) == []
    
    def test_not_a_list(self, tmp_path):
        path = tmp_path / 'gallery.json'
        path.write_text('{"photos": []}', encoding='utf-8')
        
        with pytest.raises(MalformedInputDocument) as exc_info:
            load_descriptors(path)
        
        assert 'expected an array' in str(exc_info.value)
    
    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'gallery.json'
        path.write_text('[{"src": ', encoding='utf-8')
        
        with pytest.raises(MalformedInputDocument) as exc_info:
            load_descriptors(path)
        
        assert 'invalid JSON' in str(exc_info.value)
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedInputDocument) as exc_info:
            load_descriptors(tmp_path / 'nope.json')
        
        assert exc_info.value.path.endswith('nope.json')


class TestDescriptorValidator:
    """Tests for DescriptorValidator."""
    
    @pytest.fixture
    def public_root(self, tmp_path):
        public = tmp_path / 'public'
        write_image(public / 'photos' / 'a.jpg')
        return public
    
    @pytest.fixture
    def validator(self, public_root, logger):
        return DescriptorValidator(public_root, logger=logger)
    
    def test_valid_descriptor(self, validator, public_root):
        raw = {
            'src': 'photos/a.jpg',
            'title': '  Sunset ',
            'shotUsing': 'X100V\n',
            'location': ' Rome',
            'description': 'Warm light',
        }
        
        result = validator.validate(raw, 0)
        
        assert result.index == 0
        assert result.source_path == public_root / 'photos' / 'a.jpg'
        assert result.descriptor == PhotoDescriptor(
            src='/photos/a.jpg',
            title='Sunset',
            shot_using='X100V',
            location='Rome',
            description='Warm light',
        )
    
    def test_optional_fields_default_to_empty(self, validator):
        result = validator.validate({'src': '/photos/a.jpg', 'title': 7, 'location': None}, 3)
        
        assert result.descriptor.title == ''
        assert result.descriptor.shot_using == ''
        assert result.descriptor.location == ''
        assert result.descriptor.description == ''
    
    def test_src_is_trimmed(self, validator):
        result = validator.validate({'src': '  /photos/a.jpg  '}, 0)
        
        assert result.descriptor.src == '/photos/a.jpg'
    
    @pytest.mark.parametrize('raw', [
        {},
        {'src': ''},
        {'src': '   '},
        {'src': None},
        {'src': 12},
        {'title': 'no src'},
    ])
    def test_invalid_src(self, validator, raw):
        with pytest.raises(InvalidDescriptor) as exc_info:
            validator.validate(raw, 4)
        
        assert exc_info.value.index == 4
        assert '[4]' in str(exc_info.value)
    
    @pytest.mark.parametrize('raw', ['photos/a.jpg', None, ['photos/a.jpg']])
    def test_entry_not_an_object(self, validator, raw):
        with pytest.raises(InvalidDescriptor) as exc_info:
            validator.validate(raw, 2)
        
        assert exc_info.value.index == 2
    
    def test_parent_segments_rejected(self, validator):
        with pytest.raises(InvalidDescriptor):
            validator.validate({'src': '/photos/../../etc/passwd'}, 0)
    
    def test_missing_file(self, validator, public_root):
        with pytest.raises(MissingSourceFile) as exc_info:
            validator.validate({'src': '/photos/missing.jpg'}, 5)
        
        expected = str(public_root / 'photos' / 'missing.jpg')
        assert exc_info.value.index == 5
        assert exc_info.value.path == expected
        assert '[5]' in str(exc_info.value)
        assert expected in str(exc_info.value)
    
    def test_directory_is_not_a_source(self, validator):
        with pytest.raises(MissingSourceFile):
            validator.validate({'src': '/photos'}, 0)
