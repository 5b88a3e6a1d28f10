"""
Module: cli

Purpose:
    Command-line entry point: convert images and zip archives into a
    single PDF, or preview/estimate the result without writing it.

Key Functions:
    - main(): Console script entry point (imagepdf)
    - build_parser(): Argument parser
    - settings_from_args(): LayoutSettings from parsed flags

Dependencies:
    - argparse (std)
    - builder: assemble(), LayoutSettings
    - ingest: load_images()
    - ordering: OrderingEngine
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from imagepdf_toolkit import __version__
from imagepdf_toolkit.builder import (
    AssemblyError,
    AssemblyProgress,
    LayoutSettings,
    Orientation,
    OutputMode,
    PageSize,
    assemble,
    format_size,
)
from imagepdf_toolkit.builder.config import DEFAULT_DPI, DEFAULT_FILENAME_BASE, DEFAULT_QUALITY
from imagepdf_toolkit.ingest import load_images
from imagepdf_toolkit.ordering import OrderingEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagepdf",
        description="Combine images (JPG, PNG, GIF, BMP, WebP, SVG) and ZIP archives into one PDF.",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Image files and/or .zip archives")
    parser.add_argument("--output-dir", "-o", type=Path, default=Path("."),
                        help="Directory for the PDF (default: current directory)")
    parser.add_argument("--name", "-n", default=DEFAULT_FILENAME_BASE,
                        help=f"Output file name without .pdf (default: {DEFAULT_FILENAME_BASE})")
    parser.add_argument("--standard-page", action="store_true",
                        help="Use a standard page size instead of each image's own size")
    parser.add_argument("--page-size", type=PageSize.parse, default=PageSize.A4,
                        help="A4, A3, Letter or Legal (with --standard-page)")
    parser.add_argument("--orientation", choices=[o.value for o in Orientation],
                        default=Orientation.PORTRAIT.value,
                        help="Page orientation (with --standard-page)")
    parser.add_argument("--fit", action="store_true",
                        help="Scale images to fit inside the margins, keeping aspect ratio "
                             "(with --standard-page; default stretches to the margins)")
    parser.add_argument("--quality", type=float, default=DEFAULT_QUALITY,
                        help=f"JPEG quality 0.1-1.0 (default: {DEFAULT_QUALITY})")
    parser.add_argument("--dpi", type=int, default=DEFAULT_DPI,
                        help=f"Pixels per inch for page sizing (default: {DEFAULT_DPI})")
    parser.add_argument("--estimate", action="store_true",
                        help="Print the estimated output size and exit")
    parser.add_argument("--preview", action="store_true",
                        help="Assemble in memory only and report the result")
    parser.add_argument("--thumbnail", type=Path,
                        help="With --preview, save page 1 as a PNG at this path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> LayoutSettings:
    """
    Build LayoutSettings from parsed arguments.

    Raises:
        ValueError: If a value is out of range
    """
    return LayoutSettings(
        preserve_size=not args.standard_page,
        quality=args.quality,
        dpi=args.dpi,
        page_size=args.page_size,
        orientation=Orientation(args.orientation),
        fit_to_page=args.fit,
        filename_base=args.name,
    )


def _print_progress(event: AssemblyProgress) -> None:
    logger.info(f"[{event.percent:3d}%] {event.label}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    engine = OrderingEngine()
    engine.add_batch(load_images(args.inputs))
    if len(engine) == 0:
        logger.error("No images found in the given inputs")
        return 1

    estimate = engine.estimated_size(settings.quality)
    logger.info(f"{len(engine)} images ready, estimated size {format_size(estimate)}")
    if args.estimate:
        print(estimate)
        return 0

    mode = OutputMode.PREVIEW if args.preview else OutputMode.PERSIST
    try:
        result = assemble(
            engine,
            settings,
            mode,
            output_dir=args.output_dir,
            progress=_print_progress,
        )
    except AssemblyError as e:
        logger.error(f"Error generating PDF: {e}")
        return 1

    if mode is OutputMode.PREVIEW:
        with result as preview:
            logger.info(
                f"Preview: {preview.page_count} pages, {format_size(preview.byte_size)}"
            )
            if args.thumbnail:
                args.thumbnail.parent.mkdir(parents=True, exist_ok=True)
                preview.render_page(0).save(args.thumbnail, format="PNG")
                logger.info(f"Saved thumbnail to {args.thumbnail}")
        return 0

    logger.info(f"Saved {result.path} ({format_size(result.byte_size)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
