"""
Unit tests for ingest.loader

Test Coverage:
- Extension and MIME helpers
- Single-file loading (raster + SVG)
- Zip archive expansion
- Skipping unreadable inputs
- Natural order of the returned batch
"""

import logging
import zipfile

import pytest

from imagepdf_toolkit.ingest import (
    IngestionError,
    is_archive_file,
    is_image_file,
    load_image_bytes,
    load_images,
    mime_type_for,
)

SVG_SOURCE = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="120" height="60">'
    b'<rect width="120" height="60" fill="red"/></svg>'
)


class TestHelpers:
    @pytest.mark.parametrize("name", ["a.JPG", "b.jpeg", "c.png", "d.gif", "e.bmp", "f.webp", "g.svg"])
    def test_is_image_file_when_known_extension_then_true(self, name):
        assert is_image_file(name) is True

    @pytest.mark.parametrize("name", ["notes.txt", "archive.zip", "README"])
    def test_is_image_file_when_other_then_false(self, name):
        assert is_image_file(name) is False

    def test_is_archive_file_when_zip_then_true(self):
        assert is_archive_file("Scans.ZIP") is True

    def test_mime_type_for_when_unknown_then_jpeg(self):
        assert mime_type_for("x.png") == "image/png"
        assert mime_type_for("x.tiff") == "image/jpeg"


class TestLoadImageBytes:
    """Tests for load_image_bytes()."""

    def test_load_image_bytes_when_png_then_asset_with_header_size(self, image_bytes):
        # Arrange
        data = image_bytes(size=(320, 240))

        # Act
        asset = load_image_bytes("photo.png", data)

        # Assert
        assert asset.display_name == "photo.png"
        assert (asset.original_width, asset.original_height) == (320, 240)
        assert asset.rotation == 0
        assert asset.source_byte_size == len(data)

    def test_load_image_bytes_when_called_twice_then_unique_ids(self, image_bytes):
        data = image_bytes()
        assert load_image_bytes("a.png", data).id != load_image_bytes("a.png", data).id

    def test_load_image_bytes_when_svg_then_rasterized(self):
        asset = load_image_bytes("logo.svg", SVG_SOURCE)
        assert asset.original_width >= 120
        assert asset.original_width == pytest.approx(2 * asset.original_height, abs=2)

    def test_load_image_bytes_when_garbage_then_raises_error(self):
        with pytest.raises(IngestionError, match="bad.png"):
            load_image_bytes("bad.png", b"definitely not an image")

    def test_load_image_bytes_when_empty_then_raises_error(self):
        with pytest.raises(IngestionError, match="empty"):
            load_image_bytes("empty.png", b"")


class TestLoadImages:
    """Tests for load_images()."""

    def test_load_images_when_files_then_natural_order(self, tmp_path, image_bytes):
        # Arrange
        paths = []
        for name in ("img10.png", "img2.png", "img1.jpg"):
            path = tmp_path / name
            path.write_bytes(image_bytes(fmt="JPEG" if name.endswith("jpg") else "PNG"))
            paths.append(path)

        # Act
        assets = load_images(paths)

        # Assert
        assert [a.display_name for a in assets] == ["img1.jpg", "img2.png", "img10.png"]

    def test_load_images_when_zip_then_members_expanded(self, tmp_path, image_bytes):
        # Arrange
        archive = tmp_path / "scans.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("scans/", b"")
            zf.writestr("scans/page10.png", image_bytes())
            zf.writestr("scans/page2.png", image_bytes())
            zf.writestr("scans/notes.txt", b"not an image")

        # Act
        assets = load_images([archive])

        # Assert
        assert [a.display_name for a in assets] == ["scans/page2.png", "scans/page10.png"]

    def test_load_images_when_unreadable_then_skipped_with_warning(self, tmp_path, image_bytes, caplog):
        # Arrange
        good = tmp_path / "good.png"
        good.write_bytes(image_bytes())
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"garbage")
        missing = tmp_path / "missing.png"
        broken_zip = tmp_path / "broken.zip"
        broken_zip.write_bytes(b"PK but not really")

        # Act
        with caplog.at_level(logging.WARNING):
            assets = load_images([good, bad, missing, broken_zip])

        # Assert
        assert [a.display_name for a in assets] == ["good.png"]
        assert "bad.png" in caplog.text
        assert "missing.png" in caplog.text
        assert "broken.zip" in caplog.text

    def test_load_images_when_zip_member_corrupt_then_others_kept(self, tmp_path, image_bytes):
        archive = tmp_path / "mixed.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("a.png", image_bytes())
            zf.writestr("b.png", b"garbage")
        assert [a.display_name for a in load_images([archive])] == ["a.png"]

    def test_load_images_when_non_image_then_ignored(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")
        assert load_images([notes]) == []
