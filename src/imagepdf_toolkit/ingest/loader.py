"""
Module: ingest.loader

Purpose:
    Turn user-supplied files into ImageAssets. Plain image files are
    opened directly; zip archives are expanded and their image members
    loaded. Only the image header is decoded here (size and format); the
    full pixel decode happens during assembly.

    Files that cannot be read are skipped with a warning and never abort
    the batch.

Key Functions:
    - load_images(): Load a batch of files/archives (natural order)
    - load_image_bytes(): Build one asset from encoded bytes
    - is_image_file(): Extension check

Key Classes:
    - IngestionError: Unreadable or corrupt input

Dependencies:
    - PIL: Raster header decoding
    - fitz (PyMuPDF): SVG rasterization
    - zipfile (std): Archive expansion
    - core.utils.natural_sort: Batch ordering

Used By:
    - cli: Command-line conversion
    - ordering.engine: add_batch() receives the loaded assets
"""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import fitz
from PIL import Image

from imagepdf_toolkit.core.models import ImageAsset, new_asset_id
from imagepdf_toolkit.core.utils.natural_sort import natural_sorted

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}
IMAGE_EXTENSIONS = frozenset(MIME_TYPES)
ARCHIVE_EXTENSIONS = frozenset({"zip"})
DEFAULT_MIME_TYPE = "image/jpeg"

# Resolution used to rasterize vector (SVG) sources
SVG_RENDER_DPI = 96


class IngestionError(Exception):
    """Input file could not be turned into an image asset."""
    pass


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def is_image_file(filename: str) -> bool:
    """True if ``filename`` has a recognized image extension."""
    return _extension(filename) in IMAGE_EXTENSIONS


def is_archive_file(filename: str) -> bool:
    """True if ``filename`` is a zip archive."""
    return _extension(filename) in ARCHIVE_EXTENSIONS


def mime_type_for(filename: str) -> str:
    """MIME type for an image filename (image/jpeg when unknown)."""
    return MIME_TYPES.get(_extension(filename), DEFAULT_MIME_TYPE)


def load_image_bytes(display_name: str, data: bytes) -> ImageAsset:
    """
    Create an asset from encoded image bytes.

    Args:
        display_name: Source filename
        data: Encoded image bytes

    Returns:
        New ImageAsset with rotation 0

    Raises:
        IngestionError: If the bytes are not a readable image

    Example:
        >>> asset = load_image_bytes("page1.png", Path("page1.png").read_bytes())
        >>> asset.display_name
        'page1.png'
    """
    if not data:
        raise IngestionError(f"{display_name} is empty")

    if _extension(display_name) == "svg":
        raster = _rasterize_svg(display_name, data)
    else:
        try:
            raster = Image.open(io.BytesIO(data))
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
            raise IngestionError(f"Cannot read {display_name}: {e}") from e

    width, height = raster.size
    if width <= 0 or height <= 0:
        raise IngestionError(f"{display_name} has no pixels ({width}x{height})")

    return ImageAsset(
        id=new_asset_id(),
        raster=raster,
        original_width=width,
        original_height=height,
        display_name=display_name,
        source_byte_size=len(data),
    )


def _rasterize_svg(display_name: str, data: bytes) -> Image.Image:
    """Render the first page of an SVG document to an RGBA/RGB image."""
    try:
        with fitz.open(stream=data, filetype="svg") as doc:
            pix = doc[0].get_pixmap(dpi=SVG_RENDER_DPI, alpha=True)
            mode = "RGBA" if pix.alpha else "RGB"
            return Image.frombytes(mode, (pix.width, pix.height), pix.samples)
    except (RuntimeError, ValueError, IndexError) as e:
        raise IngestionError(f"Cannot render {display_name}: {e}") from e


def iter_archive_images(path: Path) -> Iterator[Tuple[str, bytes]]:
    """
    Yield (member name, bytes) for every image member of a zip archive.

    Directories and non-image members are skipped.

    Raises:
        IngestionError: If the archive cannot be opened
    """
    try:
        with zipfile.ZipFile(path) as zf:
            for info in zf.infolist():
                if info.is_dir() or not is_image_file(info.filename):
                    continue
                try:
                    data = zf.read(info)
                except (zipfile.BadZipFile, OSError, zlib.error) as e:
                    logger.warning(f"Skipping {info.filename}: {e}")
                    continue
                yield info.filename, data
    except (zipfile.BadZipFile, OSError) as e:
        raise IngestionError(f"Cannot open archive {path.name}: {e}") from e


def load_images(paths: Iterable[Path]) -> List[ImageAsset]:
    """
    Load a batch of image files and zip archives.

    Process:
    1. Expand zip archives into their image members
    2. Load each image (header only)
    3. Skip anything unreadable, logging a warning
    4. Return the batch in natural filename order

    Args:
        paths: Image files and/or .zip archives

    Returns:
        Loaded assets, natural-sorted by display name

    Example:
        >>> assets = load_images([Path("scans.zip"), Path("cover.jpg")])
        >>> [a.display_name for a in assets]
        ['cover.jpg', 'scan1.png', 'scan2.png', 'scan10.png']
    """
    assets: List[ImageAsset] = []

    for path in paths:
        path = Path(path)
        if is_archive_file(path.name):
            logger.info(f"Extracting {path.name}...")
            try:
                for member_name, data in iter_archive_images(path):
                    try:
                        assets.append(load_image_bytes(member_name, data))
                    except IngestionError as e:
                        logger.warning(f"Skipping {member_name}: {e}")
            except IngestionError as e:
                logger.warning(f"Skipping {path.name}: {e}")
            continue

        if not is_image_file(path.name):
            logger.debug(f"Skipping {path.name}: not an image")
            continue

        try:
            assets.append(load_image_bytes(path.name, _read_file(path)))
        except IngestionError as e:
            logger.warning(f"Skipping {path.name}: {e}")

    logger.info(f"Loaded {len(assets)} images")
    return natural_sorted(assets, key=lambda a: a.display_name)


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise IngestionError(f"Cannot read {path}: {e}") from e
