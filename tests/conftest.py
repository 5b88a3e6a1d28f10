import io
import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import imagepdf_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from imagepdf_toolkit.core.models import ImageAsset  # noqa: E402


def encode_image(size=(200, 100), color="white", fmt="PNG", mode="RGB") -> bytes:
    """Encode a solid-colour test image."""
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def make_asset():
    """Factory for in-memory assets backed by a real raster."""
    counter = {"n": 0}

    def _make(name=None, size=(200, 100), rotation=0, color="white"):
        counter["n"] += 1
        name = name or f"img{counter['n']}.png"
        img = Image.new("RGB", size, color=color)
        return ImageAsset(
            id=f"asset-{counter['n']}",
            raster=img,
            original_width=size[0],
            original_height=size[1],
            display_name=name,
            source_byte_size=size[0] * size[1],
            rotation=rotation,
        )

    return _make


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def corrupt_png_bytes() -> bytes:
    """PNG whose header parses but whose pixel data is truncated."""
    noisy = Image.frombytes("RGB", (64, 64), os.urandom(64 * 64 * 3))
    buf = io.BytesIO()
    noisy.save(buf, format="PNG")
    data = buf.getvalue()
    return data[: len(data) // 2]


@pytest.fixture
def image_bytes():
    """Factory for encoded test images."""
    return encode_image
