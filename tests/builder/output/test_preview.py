"""
Unit tests for PreviewHandle and atomic persist.
"""

import io

import pytest
from pypdf import PdfReader

from imagepdf_toolkit.builder.config import LayoutSettings
from imagepdf_toolkit.builder.controller import OutputMode, assemble
from imagepdf_toolkit.builder.output import (
    PreviewHandle,
    PreviewRevokedError,
    write_document,
)


@pytest.fixture
def preview(make_asset):
    """Two-page preview handle."""
    assets = [make_asset(size=(120, 80)), make_asset(size=(80, 120))]
    return assemble(assets, LayoutSettings(dpi=72, filename_base="draft"), OutputMode.PREVIEW)


class TestPreviewHandle:
    """Tests for PreviewHandle."""

    def test_read_when_live_then_valid_pdf(self, preview):
        assert isinstance(preview, PreviewHandle)
        reader = PdfReader(preview.open_stream())
        assert len(reader.pages) == 2
        assert preview.byte_size == len(preview.read())

    def test_save_when_live_then_same_bytes_written(self, preview, tmp_path):
        # Act
        saved = preview.save(tmp_path)

        # Assert
        assert saved.path == tmp_path / "draft.pdf"
        assert saved.path.read_bytes() == preview.read()
        assert saved.page_count == 2

    def test_revoke_when_called_then_further_use_raises(self, preview, tmp_path):
        preview.revoke()
        preview.revoke()
        assert preview.revoked is True
        with pytest.raises(PreviewRevokedError):
            preview.read()
        with pytest.raises(PreviewRevokedError):
            preview.save(tmp_path)
        assert "revoked" in repr(preview)

    def test_context_manager_when_exited_then_revoked(self, preview):
        with preview as handle:
            assert handle.revoked is False
        assert preview.revoked is True

    def test_render_page_when_valid_index_then_rgb_image(self, preview):
        page = preview.render_page(1, dpi=36)
        assert page.mode == "RGB"
        assert page.width < page.height

    def test_render_page_when_out_of_range_then_raises_error(self, preview):
        with pytest.raises(IndexError):
            preview.render_page(2)


class TestWriteDocument:
    """Tests for write_document()."""

    def test_write_document_when_nested_dir_then_created(self, tmp_path):
        target = tmp_path / "a" / "b" / "doc.pdf"
        result = write_document(b"%PDF-1.4 test", target, 1)
        assert target.read_bytes() == b"%PDF-1.4 test"
        assert result.byte_size == 13
        assert result.filename == "doc.pdf"

    def test_write_document_when_done_then_no_temp_files_left(self, tmp_path):
        write_document(b"data", tmp_path / "doc.pdf", 1)
        assert [p.name for p in tmp_path.iterdir()] == ["doc.pdf"]

    def test_write_document_when_replace_fails_then_temp_removed(self, tmp_path, monkeypatch):
        # Arrange
        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("imagepdf_toolkit.builder.output.persist.os.replace", boom)

        # Act / Assert
        with pytest.raises(OSError, match="disk full"):
            write_document(b"data", tmp_path / "doc.pdf", 1)
        assert list(tmp_path.iterdir()) == []


def test_pdf_reader_when_preview_saved_then_pages_match(preview, tmp_path):
    saved = preview.save(tmp_path)
    with open(saved.path, "rb") as f:
        assert len(PdfReader(io.BytesIO(f.read())).pages) == saved.page_count
