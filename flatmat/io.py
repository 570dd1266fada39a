# flatmat/io.py
"""
FILE I/O: Delimited Text <-> Matrix
===================================

PURPOSE:
--------
Load a matrix from plain delimited text (no header, one record per line) and
write one back out.

    1,2,3
    4,5,6      ->  read_matrix(...)  ->  2 x 3 Matrix

ALGORITHM (read_matrix):
------------------------
1. Walk the records once with csv.reader (lazy, in file order)
2. Column count = field count of the first record
3. Row count   = number of records
4. Parse every field and append it to a working buffer, in record order.
   That order IS row-major, whatever layout was requested.
5. RowMajor target: the working buffer is the final buffer.
   ColMajor target: move value at i*cols + j to j*rows + i.

POLICIES:
---------
- Blank and whitespace-only lines are skipped. A line of empty fields
  such as ",," is still a record.
- Ragged input (a record with a different field count than the first) is
  rejected with RaggedRowError.
- The first unparseable field aborts the whole load (FieldParseError with
  line/column). No partial matrix is ever returned.
- An input with no records raises InvalidDimensionsError.
- OSError from opening or reading the file propagates unchanged.
"""

import csv
import logging
from pathlib import Path
from typing import List, Optional, TextIO, Union

import numpy as np

from .config import CONFIG
from .elements import ElementType
from .kernel.errors import FieldParseError, InvalidDimensionsError, RaggedRowError
from .kernel.layout import ColMajor, Layout
from .matrix import DTypeLike, LayoutLike, Matrix, _resolve_dtype, _resolve_layout

logger = logging.getLogger(__name__)

Source = Union[str, Path, TextIO]


def row_major_to_col_major(buffer: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """
    Reorder a row-major flat buffer into column-major order.

    For every (i, j): out[j * rows + i] = buffer[i * cols + j]

    Parameters:
    -----------
    buffer : np.ndarray
        1-D array of length rows * cols, in row-major order
    rows, cols : int
        Logical dimensions of the data

    Returns:
    --------
    np.ndarray
        New 1-D array of the same dtype, in column-major order
    """
    out = np.empty_like(buffer)
    for i in range(rows):
        for j in range(cols):
            out[j * rows + i] = buffer[i * cols + j]
    return out


def _parse_records(reader, etype: ElementType) -> tuple[List, int, int]:
    """Parse csv records into a row-major list. Returns (values, rows, cols)."""
    values: List = []
    rows = 0
    cols = 0
    for record in reader:
        line_no = reader.line_num
        # Blank or whitespace-only line
        if not record or (len(record) == 1 and not record[0].strip()):
            continue
        if rows == 0:
            cols = len(record)
        elif len(record) != cols:
            raise RaggedRowError(line_no, expected=cols, found=len(record))

        for col_no, field in enumerate(record, start=1):
            try:
                values.append(etype.parse(field))
            except FieldParseError as exc:
                raise FieldParseError(
                    f"Line {line_no}, column {col_no}: {exc}",
                    line=line_no,
                    column=col_no,
                    text=field,
                ) from exc
        rows += 1
    return values, rows, cols


def _read_stream(stream: TextIO, etype: ElementType, layout: Layout, delimiter: str) -> Matrix:
    values, rows, cols = _parse_records(csv.reader(stream, delimiter=delimiter), etype)
    if rows == 0:
        raise InvalidDimensionsError("Input holds no records: cannot infer matrix dimensions")

    buffer = np.array(values, dtype=etype.dtype)
    if isinstance(layout, ColMajor):
        logger.debug("Transposing %d x %d buffer into column-major order", rows, cols)
        buffer = row_major_to_col_major(buffer, rows, cols)

    return Matrix.from_flat(rows, cols, buffer, dtype=etype, layout=layout)


def read_matrix(
    source: Source,
    dtype: DTypeLike = None,
    layout: LayoutLike = None,
    delimiter: Optional[str] = None,
) -> Matrix:
    """
    Load a delimited text file (or open text stream) into a Matrix.

    Parameters:
    -----------
    source : str, Path or text stream
        File path, or an already-open file object
    dtype : dtype-like, optional
        Element type each field is parsed as (default: CONFIG.default_dtype)
    layout : Layout or str, optional
        Storage order of the result (default: CONFIG.default_layout)
    delimiter : str, optional
        Field separator (default: CONFIG.delimiter)

    Returns:
    --------
    Matrix
        dims() equal to (number of records, fields per record)

    Raises:
    -------
    FieldParseError
        A field is not a valid literal for dtype
    RaggedRowError
        Records have differing field counts
    InvalidDimensionsError
        The input holds no records
    """
    etype = _resolve_dtype(dtype)
    lay = _resolve_layout(layout)
    delimiter = CONFIG.delimiter if delimiter is None else delimiter

    if isinstance(source, (str, Path)):
        path = Path(source)
        logger.debug("Reading %s as %s (%s)", path, etype, lay)
        with path.open("r", newline="", encoding=CONFIG.encoding) as handle:
            matrix = _read_stream(handle, etype, lay, delimiter)
    else:
        matrix = _read_stream(source, etype, lay, delimiter)

    logger.debug("Loaded %d x %d matrix", matrix.rows, matrix.cols)
    return matrix


def write_matrix(matrix: Matrix, target: Source, delimiter: Optional[str] = None) -> int:
    """
    Write a Matrix as delimited text, one logical row per line, no header.

    Output is layout-independent: a ColMajor matrix writes the same text as
    the equivalent RowMajor one, so read_matrix round-trips either.

    Returns:
    --------
    int
        Number of records written
    """
    delimiter = CONFIG.delimiter if delimiter is None else delimiter

    if isinstance(target, (str, Path)):
        path = Path(target)
        with path.open("w", newline="", encoding=CONFIG.encoding) as handle:
            return write_matrix(matrix, handle, delimiter=delimiter)

    writer = csv.writer(target, delimiter=delimiter, lineterminator="\n")
    for i in range(matrix.rows):
        writer.writerow([matrix.read(i, j) for j in range(matrix.cols)])
    return matrix.rows
