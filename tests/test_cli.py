"""
Tests for the imagepdf command-line entry point.
"""

import zipfile

import pytest
from pypdf import PdfReader

from imagepdf_toolkit.builder.layout import Orientation, PageSize
from imagepdf_toolkit.cli import build_parser, main, settings_from_args


@pytest.fixture
def inputs(tmp_path, image_bytes):
    """Two loose images and a zip with one more."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "img2.png").write_bytes(image_bytes(size=(300, 200)))
    (src / "img10.png").write_bytes(image_bytes(size=(200, 300)))
    archive = src / "more.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("img1.png", image_bytes(size=(100, 100)))
    return [src / "img2.png", src / "img10.png", archive]


class TestSettingsFromArgs:
    def test_settings_from_args_when_defaults_then_preserve_size(self):
        args = build_parser().parse_args(["a.png"])
        settings = settings_from_args(args)
        assert settings.preserve_size is True
        assert settings.filename_base == "converted-images"

    def test_settings_from_args_when_standard_page_then_mapped(self):
        args = build_parser().parse_args(
            ["a.png", "--standard-page", "--page-size", "legal", "--orientation", "landscape", "--fit"]
        )
        settings = settings_from_args(args)
        assert settings.preserve_size is False
        assert settings.page_size is PageSize.LEGAL
        assert settings.orientation is Orientation.LANDSCAPE
        assert settings.fit_to_page is True


class TestMain:
    """Tests for main()."""

    def test_main_when_inputs_then_pdf_written(self, inputs, tmp_path):
        # Arrange
        out = tmp_path / "out"

        # Act
        code = main([str(p) for p in inputs] + ["-o", str(out), "-n", "bundle"])

        # Assert
        assert code == 0
        reader = PdfReader(str(out / "bundle.pdf"))
        assert len(reader.pages) == 3

    def test_main_when_estimate_then_prints_bytes_and_writes_nothing(self, inputs, tmp_path, capsys):
        out = tmp_path / "out"
        code = main([str(p) for p in inputs] + ["-o", str(out), "--estimate"])
        assert code == 0
        assert int(capsys.readouterr().out.strip()) > 2048
        assert not out.exists()

    def test_main_when_preview_then_thumbnail_only(self, inputs, tmp_path):
        out = tmp_path / "out"
        thumb = tmp_path / "thumb.png"
        code = main([str(p) for p in inputs] + ["-o", str(out), "--preview", "--thumbnail", str(thumb)])
        assert code == 0
        assert thumb.exists()
        assert not out.exists()

    def test_main_when_no_images_then_returns_1(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("x")
        assert main([str(notes)]) == 1

    def test_main_when_quality_invalid_then_exits(self, inputs):
        with pytest.raises(SystemExit):
            main([str(inputs[0]), "--quality", "2"])

    def test_main_when_corrupt_image_then_returns_1(self, tmp_path, corrupt_png_bytes, image_bytes):
        good = tmp_path / "a.png"
        good.write_bytes(image_bytes())
        bad = tmp_path / "b.png"
        bad.write_bytes(corrupt_png_bytes)
        out = tmp_path / "out"
        assert main([str(good), str(bad), "-o", str(out)]) == 1
        assert not out.exists() or list(out.iterdir()) == []
