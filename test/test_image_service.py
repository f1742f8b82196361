"""
Tests for Pillow image processing of uploads
"""

from io import BytesIO

import pytest
from PIL import Image

from app.exceptions import FileUploadError
from app.services.image_service import MAX_IMAGE_SIZE, TEAM_PHOTO_SIZE, optimize_image, process_team_photo


def encode(size, fmt, mode="RGB"):
    buffer = BytesIO()
    Image.new(mode, size, color="blue").save(buffer, format=fmt)
    return buffer.getvalue()


def decode(data):
    return Image.open(BytesIO(data))


class TestOptimizeImage:
    """Test image optimization"""

    def test_large_jpeg_fits_bounding_box(self):
        """Test that a large JPEG is scaled into the bounding box"""
        result = decode(optimize_image(encode((3200, 1600), "JPEG")))

        assert result.format == "JPEG"
        assert result.width <= MAX_IMAGE_SIZE[0]
        assert result.height <= MAX_IMAGE_SIZE[1]
        assert result.size == (1600, 800)

    def test_small_image_is_not_enlarged(self):
        """Test that a small image keeps its size"""
        result = decode(optimize_image(encode((200, 100), "PNG")))

        assert result.format == "PNG"
        assert result.size == (200, 100)

    def test_webp_keeps_format(self):
        """Test that WebP images stay WebP"""
        assert decode(optimize_image(encode((2000, 2000), "WEBP"))).format == "WEBP"

    def test_other_formats_pass_through(self):
        """Test that other formats are returned unchanged"""
        data = encode((50, 50), "GIF", mode="P")
        assert optimize_image(data) == data

    def test_unreadable_data_is_returned_unchanged(self):
        """Test that unreadable data is returned unchanged"""
        assert optimize_image(b"not an image") == b"not an image"


class TestProcessTeamPhoto:
    """Test team photo processing"""

    def test_crops_to_square_jpeg(self):
        """Test that a team photo is cropped to a square JPEG"""
        result = decode(process_team_photo(encode((1200, 800), "PNG", mode="RGBA")))

        assert result.format == "JPEG"
        assert result.size == TEAM_PHOTO_SIZE

    def test_rejects_invalid_image(self):
        """Test that invalid image data is rejected"""
        with pytest.raises(FileUploadError):
            process_team_photo(b"garbage")
