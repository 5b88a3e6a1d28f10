"""
Unit tests for the rotate + re-encode transform.
"""

import io

import pytest
from PIL import Image

from imagepdf_toolkit.builder.errors import AssemblyError, DecodeError
from imagepdf_toolkit.builder.images import rotate_and_encode, rotate_raster


def _marked_image():
    """200x100 white image with a red pixel in the top-left corner."""
    img = Image.new("RGB", (200, 100), "white")
    img.putpixel((0, 0), (255, 0, 0))
    return img


class TestRotateRaster:
    """Tests for rotate_raster()."""

    def test_rotate_raster_when_90_then_clockwise(self):
        """Top-left moves to top-right on a clockwise quarter turn."""
        # Arrange
        img = _marked_image()

        # Act
        rotated = rotate_raster(img, 90)

        # Assert
        assert rotated.size == (100, 200)
        assert rotated.getpixel((99, 0)) == (255, 0, 0)

    def test_rotate_raster_when_180_then_corner_opposite(self):
        rotated = rotate_raster(_marked_image(), 180)
        assert rotated.size == (200, 100)
        assert rotated.getpixel((199, 99)) == (255, 0, 0)

    def test_rotate_raster_when_270_then_bottom_left(self):
        rotated = rotate_raster(_marked_image(), 270)
        assert rotated.getpixel((0, 199)) == (255, 0, 0)

    def test_rotate_raster_when_zero_then_copy(self):
        img = _marked_image()
        rotated = rotate_raster(img, 0)
        assert rotated is not img
        assert rotated.tobytes() == img.tobytes()

    def test_rotate_raster_when_invalid_then_raises_error(self):
        with pytest.raises(ValueError):
            rotate_raster(_marked_image(), 45)


class TestRotateAndEncode:
    """Tests for rotate_and_encode()."""

    @pytest.mark.parametrize("rotation, expected", [(0, (300, 200)), (90, (200, 300)),
                                                    (180, (300, 200)), (270, (200, 300))])
    def test_rotate_and_encode_when_rotated_then_dimensions_follow(self, rotation, expected):
        encoded = rotate_and_encode(Image.new("RGB", (300, 200)), rotation, 0.92)
        assert (encoded.width, encoded.height) == expected
        with Image.open(io.BytesIO(encoded.data)) as decoded:
            assert decoded.format == "JPEG"
            assert decoded.size == expected

    def test_rotate_and_encode_when_rgba_then_flattened_on_white(self):
        # Arrange
        img = Image.new("RGBA", (20, 20), (0, 0, 0, 0))

        # Act
        encoded = rotate_and_encode(img, 0, 1.0)

        # Assert
        with Image.open(io.BytesIO(encoded.data)) as decoded:
            assert decoded.mode == "RGB"
            r, g, b = decoded.getpixel((10, 10))
            assert min(r, g, b) > 240

    def test_rotate_and_encode_when_palette_alpha_then_flattened_on_white(self):
        """Transparent PA pixels land on white, not on the palette colour."""
        # Arrange
        img = Image.new("PA", (20, 20), (0, 0))
        img.putpalette([0, 0, 0] * 256)

        # Act
        encoded = rotate_and_encode(img, 90, 1.0)

        # Assert
        with Image.open(io.BytesIO(encoded.data)) as decoded:
            assert decoded.mode == "RGB"
            r, g, b = decoded.getpixel((10, 10))
            assert min(r, g, b) > 240

    def test_rotate_and_encode_when_lower_quality_then_smaller(self):
        img = Image.frombytes("RGB", (128, 128), bytes(range(256)) * 192)
        high = rotate_and_encode(img, 0, 1.0)
        low = rotate_and_encode(img, 0, 0.1)
        assert low.byte_size < high.byte_size

    def test_rotate_and_encode_when_truncated_then_decode_error(self, corrupt_png_bytes):
        raster = Image.open(io.BytesIO(corrupt_png_bytes))
        with pytest.raises(DecodeError):
            rotate_and_encode(raster, 0, 0.92)

    def test_rotate_and_encode_when_invalid_rotation_then_assembly_error(self):
        with pytest.raises(AssemblyError):
            rotate_and_encode(Image.new("RGB", (10, 10)), 30, 0.92)
