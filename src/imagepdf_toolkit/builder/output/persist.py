"""
Module: builder.output.persist

Purpose:
    Write a finished PDF to disk atomically. The bytes go to a temporary
    file in the target directory and are moved into place only once fully
    written, so a failed write never leaves a partial document.

Key Functions:
    - write_document(): Atomic write

Key Classes:
    - PersistedDocument: Result of a persist run

Dependencies:
    - tempfile (std)
    - os (std)

Used By:
    - builder.controller: assemble(mode=PERSIST)
    - builder.output.preview: PreviewHandle.save()
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistedDocument:
    """
    A document written to disk (immutable).

    Attributes:
        filename: File name (filename_base + ".pdf")
        path: Full path of the written file
        page_count: Number of pages
        byte_size: File size in bytes
    """

    filename: str
    path: Path
    page_count: int
    byte_size: int


def write_document(data: bytes, path: Path, page_count: int) -> PersistedDocument:
    """
    Atomically write PDF bytes to ``path``.

    Args:
        data: Complete PDF bytes
        path: Destination file (parent directories are created)
        page_count: Number of pages in ``data``

    Returns:
        PersistedDocument describing the written file

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"Wrote {page_count} pages to {path}")
    return PersistedDocument(
        filename=path.name,
        path=path,
        page_count=page_count,
        byte_size=len(data),
    )
