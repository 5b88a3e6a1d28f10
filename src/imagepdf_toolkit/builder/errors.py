"""
Module: builder.errors

Purpose:
    Exceptions that abort an assembly run. A run is all-or-nothing:
    when one of these is raised no document is produced.

Key Classes:
    - AssemblyError: Geometry or encode failure during a run
    - DecodeError: Raster could not be materialized
"""


class AssemblyError(Exception):
    """Error during document assembly."""
    pass


class DecodeError(AssemblyError):
    """Decoded raster could not be loaded."""
    pass
