# flatmat/kernel - Layout strategies and error types
"""
KERNEL: THE LAYOUT-AGNOSTIC FOUNDATION
======================================

Everything the Matrix container needs that does not depend on element type:

- Layout strategies mapping (row, col) -> flat offset (RowMajor, ColMajor)
- The exception hierarchy shared by construction, indexing and ingestion

The Matrix itself (flatmat.matrix) never hardcodes an offset formula. It asks
its Layout, so adding storage orders never touches the container.
"""

from .layout import Layout, RowMajor, ColMajor, ROW_MAJOR, COL_MAJOR, layout_from_name
from .errors import (
    MatrixError,
    InvalidDimensionsError,
    LengthMismatchError,
    NotSquareError,
    OutOfBoundsError,
    UnsupportedOperationError,
    FieldParseError,
    RaggedRowError,
    ElementCastError,
)

__all__ = [
    'Layout', 'RowMajor', 'ColMajor', 'ROW_MAJOR', 'COL_MAJOR', 'layout_from_name',
    'MatrixError', 'InvalidDimensionsError', 'LengthMismatchError', 'NotSquareError',
    'OutOfBoundsError', 'UnsupportedOperationError', 'FieldParseError', 'RaggedRowError',
    'ElementCastError',
]
