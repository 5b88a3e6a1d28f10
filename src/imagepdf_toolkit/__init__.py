"""Top-level package for the Image to PDF toolkit.

Provides subpackages:
- imagepdf_toolkit.core – asset models and natural ordering
- imagepdf_toolkit.builder – geometry, rotation and PDF assembly
- imagepdf_toolkit.ordering – page order and selection engine
- imagepdf_toolkit.ingest – image and zip archive loading
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version, PackageNotFoundError
        return pkg_version("imagepdf-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
