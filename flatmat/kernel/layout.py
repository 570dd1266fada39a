# flatmat/kernel/layout.py
"""
LAYOUT: (row, col) -> Flat Offset Strategies
============================================

PURPOSE:
--------
A matrix stores its elements in ONE contiguous 1-D buffer. The layout decides
which slot of that buffer holds the logical cell (row, col):

    RowMajor:  offset = row * cols + col    (rows are contiguous, numpy "C")
    ColMajor:  offset = col * rows + row    (columns are contiguous, numpy "F")

Both are bijections from [0, rows) x [0, cols) onto [0, rows*cols).

This is the ONLY thing that differs between a row-major and a column-major
matrix. Indexing, construction and file ingestion all ask the layout for an
offset instead of hardcoding the formula.

The strategies are stateless frozen dataclasses. Use the module singletons:

USAGE:
------
    >>> ROW_MAJOR.offset(1, 2, rows=3, cols=4)
    6
    >>> COL_MAJOR.offset(1, 2, rows=3, cols=4)
    7

NOTE: offset() does NO bounds checking. Out-of-range coordinates silently
alias another cell's slot (e.g. RowMajor (0, cols) == (1, 0)), so callers
must validate coordinates first. Matrix.read/write do this.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


class Layout(ABC):
    """Mapping convention from a 2-D coordinate to a 1-D buffer offset."""

    name: str = ""
    numpy_order: str = ""

    @abstractmethod
    def offset(self, row: int, col: int, rows: int, cols: int) -> int:
        """
        Flat offset of cell (row, col) in a rows x cols matrix.

        Parameters:
        -----------
        row, col : int
            Logical coordinate, assumed in bounds
        rows, cols : int
            Matrix dimensions

        Returns:
        --------
        int
            Index into the flat buffer
        """

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RowMajor(Layout):
    """Consecutive buffer slots walk along a row."""

    name: str = "row_major"
    numpy_order: str = "C"

    def offset(self, row: int, col: int, rows: int, cols: int) -> int:
        return row * cols + col


@dataclass(frozen=True)
class ColMajor(Layout):
    """Consecutive buffer slots walk down a column."""

    name: str = "col_major"
    numpy_order: str = "F"

    def offset(self, row: int, col: int, rows: int, cols: int) -> int:
        return col * rows + row


ROW_MAJOR = RowMajor()
COL_MAJOR = ColMajor()

_ALIASES = {
    "row": ROW_MAJOR,
    "row_major": ROW_MAJOR,
    "rowmajor": ROW_MAJOR,
    "c": ROW_MAJOR,
    "col": COL_MAJOR,
    "col_major": COL_MAJOR,
    "colmajor": COL_MAJOR,
    "column_major": COL_MAJOR,
    "f": COL_MAJOR,
}


def layout_from_name(name: Union[str, Layout]) -> Layout:
    """
    Resolve a layout given by name (or pass a Layout instance through).

    Accepts "row", "row_major", "C", "col", "col_major", "column_major", "F"
    in any case, with '-' or ' ' in place of '_'.

    Raises:
        ValueError: If the name is not a known layout
    """
    if isinstance(name, Layout):
        return name
    if not isinstance(name, str):
        raise ValueError(f"Layout must be a name or Layout instance, got {name!r}")
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return _ALIASES[key]
    except KeyError:
        raise ValueError(
            f"Unknown layout {name!r}. Use one of: 'row_major', 'col_major'."
        ) from None
