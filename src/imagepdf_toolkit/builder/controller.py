"""
Module: builder.controller

Purpose:
    Orchestrate a complete assembly run.
    Snapshot → (Rotate + Encode → Resolve geometry → Append page) per
    asset → Persist or Preview

    Pages are appended strictly in document order, one asset at a time.
    The pipeline is a generator that yields a progress event after every
    page, so a caller can stay responsive between assets. A run is
    all-or-nothing: any failure raises and produces no output.

Key Functions:
    - assemble(): Main entry point for building a document
    - iter_assembly(): Underlying step-by-step pipeline

Key Classes:
    - OutputMode: PERSIST or PREVIEW
    - AssemblyProgress: Progress event (completed / total + label)
    - DocumentOutput: PersistedDocument or PreviewHandle

Dependencies:
    - builder.images: Rotation transform
    - builder.layout: Geometry resolver
    - builder.output: PDF writer, persisted file, preview handle

Used By:
    - cli: Command-line conversion
"""

from __future__ import annotations

import contextlib
import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Generator, Iterator, Optional, Sequence, Tuple, Union

from imagepdf_toolkit.core.models.assets import ImageAsset

from .config import LayoutSettings
from .errors import AssemblyError
from .images import rotate_and_encode
from .layout import resolve_page
from .output import PdfPageWriter, PersistedDocument, PreviewHandle, write_document

if TYPE_CHECKING:
    from imagepdf_toolkit.ordering.engine import DocumentSnapshot, OrderingEngine

logger = logging.getLogger(__name__)


class OutputMode(str, Enum):
    """What a run produces."""

    PERSIST = "persist"
    PREVIEW = "preview"


@dataclass(frozen=True)
class AssemblyProgress:
    """
    Progress event emitted during a run (immutable).

    Attributes:
        completed: Pages appended so far
        total: Pages in the run
        label: Human-readable phase label

    Example:
        >>> AssemblyProgress(3, 4, "Processing image 3 of 4...").percent
        75
    """

    completed: int
    total: int
    label: str

    @property
    def fraction(self) -> float:
        """Completion in [0, 1]."""
        if self.total == 0:
            return 1.0
        return self.completed / self.total

    @property
    def percent(self) -> int:
        """Completion as an integer percentage 0-100."""
        return int(round(self.fraction * 100))


DocumentOutput = Union[PersistedDocument, PreviewHandle]
ProgressCallback = Callable[[AssemblyProgress], None]
DocumentSource = Union["OrderingEngine", "DocumentSnapshot", Sequence[ImageAsset]]


def assemble(
    document: DocumentSource,
    settings: LayoutSettings,
    mode: OutputMode = OutputMode.PERSIST,
    *,
    output_dir: Optional[Path] = None,
    progress: Optional[ProgressCallback] = None,
) -> Optional[DocumentOutput]:
    """
    Build a PDF from the document, one page per asset.

    Pipeline:
    1. Snapshot the document order
    2. For each asset in order: rotate + re-encode, resolve geometry,
       append the page, report progress
    3. Persist the file or return a preview handle

    Args:
        document: OrderingEngine, DocumentSnapshot or sequence of assets
        settings: Layout settings for this run
        mode: PERSIST writes ``output_dir / settings.output_filename``;
            PREVIEW returns an in-memory handle and writes nothing
        output_dir: Target directory for PERSIST (default: current dir)
        progress: Optional callback receiving AssemblyProgress events

    Returns:
        PersistedDocument, PreviewHandle, or None for an empty document

    Raises:
        DecodeError: If an image cannot be decoded
        AssemblyError: If any transform, geometry or write step fails

    Example:
        >>> result = assemble(engine, LayoutSettings(), output_dir=Path("out"))
        >>> print(f"Wrote {result.page_count} pages to {result.path}")
    """
    start_time = time.perf_counter()
    mode = OutputMode(mode)

    # Reorder controls stay locked from the snapshot until the last page
    with _hold_document(document) as assets:
        if not assets:
            logger.info("Document is empty, nothing to assemble")
            return None

        logger.info(
            f"Assembling {len(assets)} pages ({mode.value}, "
            f"{'preserve size' if settings.preserve_size else settings.page_size.value})"
        )
        steps = iter_assembly(assets, settings)
        while True:
            try:
                event = next(steps)
            except StopIteration as done:
                pdf_bytes = done.value
                break
            _notify(progress, event)

    total = len(assets)
    if mode is OutputMode.PREVIEW:
        _notify(progress, AssemblyProgress(total, total, "Preparing preview..."))
        result: DocumentOutput = PreviewHandle(settings.output_filename, pdf_bytes, total)
    else:
        _notify(progress, AssemblyProgress(total, total, "Saving PDF..."))
        target_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        try:
            result = write_document(pdf_bytes, target_dir / settings.output_filename, total)
        except OSError as e:
            raise AssemblyError(f"Failed to write {settings.output_filename}: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Assembly completed in {elapsed:.2f}s ({len(pdf_bytes)} bytes)")
    return result


def iter_assembly(
    assets: Sequence[ImageAsset],
    settings: LayoutSettings,
) -> Generator[AssemblyProgress, None, bytes]:
    """
    Append one page per asset, yielding after each page.

    Args:
        assets: Immutable snapshot of the document, in page order
        settings: Layout settings for this run

    Yields:
        AssemblyProgress after each appended page

    Returns:
        Finished PDF bytes (as the generator's return value)

    Raises:
        DecodeError / AssemblyError: On the first failing asset; nothing
        appended so far is returned
    """
    total = len(assets)
    writer = PdfPageWriter(title=settings.filename_base)

    for index, asset in enumerate(assets):
        label = f"Processing image {index + 1} of {total}..."
        try:
            encoded = rotate_and_encode(asset.raster, asset.rotation, settings.quality)
            geometry = resolve_page(encoded.width, encoded.height, settings)
            writer.add_page(geometry, encoded)
        except AssemblyError as e:
            logger.error(f"Failed on {asset.display_name} (page {index + 1}): {e}")
            raise
        except Exception as e:
            logger.error(f"Failed on {asset.display_name} (page {index + 1}): {e}")
            raise AssemblyError(
                f"Failed to add {asset.display_name} as page {index + 1}: {e}"
            ) from e

        logger.debug(f"{label} {asset.display_name} done")
        yield AssemblyProgress(index + 1, total, label)

    try:
        return writer.finish()
    except Exception as e:
        raise AssemblyError(f"Failed to finalize document: {e}") from e


@contextlib.contextmanager
def _hold_document(document: DocumentSource) -> Iterator[Tuple[ImageAsset, ...]]:
    """
    Yield the assets to export, locking an OrderingEngine meanwhile.

    exporting() takes the engine's snapshot itself, so the exported order
    is the order at the moment the lock was taken.
    """
    exporting = getattr(document, "exporting", None)
    if callable(exporting):
        with exporting() as snapshot:
            yield snapshot.assets
        return
    # DocumentSnapshot exposes .assets; a plain sequence is used as-is
    yield tuple(getattr(document, "assets", document))


def _notify(progress: Optional[ProgressCallback], event: AssemblyProgress) -> None:
    if progress is not None:
        progress(event)
