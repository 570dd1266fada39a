# flatmat/matrix.py
"""
MATRIX: A 2-D Container Over One Flat Buffer
============================================

PURPOSE:
--------
Matrix owns a single contiguous 1-D numpy buffer of length rows * cols and a
Layout that maps (row, col) to a slot in that buffer. The layout is fixed for
the lifetime of the instance.

    m = Matrix.from_flat(2, 3, [1, 2, 3, 4, 5, 6], layout=ROW_MAJOR)
    m.read(1, 0)        # -> 4
    m[1, 0] = 40        # same as m.write(1, 0, 40)

Buffer for a 2 x 3 matrix, cell (r, c) shown as rc:

    RowMajor: [00 01 02 10 11 12]
    ColMajor: [00 10 01 11 02 12]

CONSTRUCTION:
-------------
Every factory goes through from_fn(rows, cols, producer), which:
1. Rejects degenerate dimensions (InvalidDimensionsError)
2. Calls producer() exactly rows * cols times, in flat buffer order
3. Stores the results as the buffer

    new / default     producer -> element zero
    random            producer -> one uniform sample per cell
    filled            producer -> the given value
    from_flat         producer -> next element of the given buffer
    square*           the above with rows == cols

from_flat consumes its buffer AS-IS: it must already be in the flat order of
the requested layout. Reordering is the caller's job (read_matrix does it when
loading into ColMajor).

CONCURRENCY:
------------
read() is safe from any number of threads. write() and set_identity() need
exclusive access to the matrix.
"""

import logging
import operator
from typing import Any, Callable, Iterable, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .config import CONFIG
from .elements import ElementType, element_type
from .kernel.errors import (
    InvalidDimensionsError,
    LengthMismatchError,
    NotSquareError,
    OutOfBoundsError,
    UnsupportedOperationError,
)
from .kernel.layout import Layout, layout_from_name

logger = logging.getLogger(__name__)

DTypeLike = Union[ElementType, np.dtype, type, str, None]
LayoutLike = Union[Layout, str, None]

# Largest buffer length numpy can index on this platform
_MAX_LENGTH = np.iinfo(np.intp).max


def _resolve_dtype(dtype: DTypeLike) -> ElementType:
    return element_type(CONFIG.default_dtype if dtype is None else dtype)


def _resolve_layout(layout: LayoutLike) -> Layout:
    return layout_from_name(CONFIG.default_layout if layout is None else layout)


def _validate_dims(rows: Any, cols: Any) -> Tuple[int, int]:
    """Return (rows, cols) as ints, or raise InvalidDimensionsError."""
    checked = []
    for label, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, (bool, np.bool_)):
            raise InvalidDimensionsError(f"{label} must be an integer, got {value!r}")
        try:
            n = operator.index(value)
        except TypeError:
            raise InvalidDimensionsError(
                f"{label} must be an integer, got {type(value).__name__}"
            ) from None
        checked.append(n)

    n_rows, n_cols = checked
    if n_rows <= 0 or n_cols <= 0:
        raise InvalidDimensionsError(
            f"Invalid dimensions {n_rows} x {n_cols}: rows and cols must both be > 0"
        )
    if n_rows * n_cols > _MAX_LENGTH:
        raise InvalidDimensionsError(
            f"Invalid dimensions {n_rows} x {n_cols}: buffer length exceeds {_MAX_LENGTH}"
        )
    return n_rows, n_cols


class Matrix:
    """
    Fixed-size 2-D matrix stored in one flat buffer with a chosen layout.

    Do not call the constructor with arbitrary arrays; use the factory class
    methods (new, random, filled, from_flat, square, ...), which validate.

    Attributes:
    -----------
    rows, cols : int
        Dimensions, both > 0
    layout : Layout
        ROW_MAJOR or COL_MAJOR
    element_type : ElementType
        Capabilities (zero/one/sample/parse) of the buffer dtype
    """

    __slots__ = ("_rows", "_cols", "_layout", "_etype", "_data")

    def __init__(self, rows: int, cols: int, data: np.ndarray, layout: Layout):
        rows, cols = _validate_dims(rows, cols)
        if data.ndim != 1:
            raise LengthMismatchError(f"Buffer must be 1-D, got shape {data.shape}")
        if data.shape[0] != rows * cols:
            raise LengthMismatchError(
                f"Buffer length {data.shape[0]} does not match {rows} x {cols} = {rows * cols}"
            )
        self._rows = rows
        self._cols = cols
        self._layout = layout
        self._etype = ElementType(data.dtype)
        self._data = data

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_fn(
        cls,
        rows: int,
        cols: int,
        producer: Callable[[], Any],
        dtype: DTypeLike = None,
        layout: LayoutLike = None,
    ) -> "Matrix":
        """
        The validating constructor every other factory routes through.

        Parameters:
        -----------
        rows, cols : int
            Dimensions; both must be > 0
        producer : Callable[[], Any]
            Zero-argument function yielding one element per call. Called
            exactly rows * cols times, in flat buffer order.
        dtype : dtype-like, optional
            Element type (default: CONFIG.default_dtype)
        layout : Layout or str, optional
            Storage order (default: CONFIG.default_layout)

        Raises:
        -------
        InvalidDimensionsError
            If rows or cols is zero, negative or not an integer
        ElementCastError
            If a produced value would change when stored in dtype
        """
        rows, cols = _validate_dims(rows, cols)
        etype = _resolve_dtype(dtype)
        lay = _resolve_layout(layout)
        n = rows * cols

        data = np.empty(n, dtype=etype.dtype)
        for i in range(n):
            data[i] = etype.cast(producer())

        logger.debug("Built %d x %d %s matrix (%s)", rows, cols, etype, lay)
        return cls(rows, cols, data, lay)

    @classmethod
    def new(cls, rows: int, cols: int, dtype: DTypeLike = None, layout: LayoutLike = None) -> "Matrix":
        """rows x cols matrix with every cell set to the element type's zero."""
        etype = _resolve_dtype(dtype)
        zero = etype.zero()
        return cls.from_fn(rows, cols, lambda: zero, dtype=etype, layout=layout)

    default = new

    @classmethod
    def random(
        cls,
        rows: int,
        cols: int,
        dtype: DTypeLike = None,
        layout: LayoutLike = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Matrix":
        """
        rows x cols matrix with one independent uniform sample per cell.

        Pass either seed (reproducible) or an existing rng. With neither,
        CONFIG.random_seed is used (None means fresh OS entropy).
        """
        etype = _resolve_dtype(dtype)
        if rng is None:
            rng = np.random.default_rng(CONFIG.random_seed if seed is None else seed)
        return cls.from_fn(rows, cols, lambda: etype.sample(rng), dtype=etype, layout=layout)

    @classmethod
    def filled(
        cls, rows: int, cols: int, value: Any, dtype: DTypeLike = None, layout: LayoutLike = None
    ) -> "Matrix":
        """
        rows x cols matrix with every cell set to value.

        Raises ElementCastError if value does not fit dtype exactly
        (e.g. 2.5 into an integer matrix).
        """
        etype = _resolve_dtype(dtype)
        fill = etype.cast(value)
        return cls.from_fn(rows, cols, lambda: fill, dtype=etype, layout=layout)

    @classmethod
    def from_flat(
        cls,
        rows: int,
        cols: int,
        buffer: Iterable[Any],
        dtype: DTypeLike = None,
        layout: LayoutLike = None,
    ) -> "Matrix":
        """
        Build a matrix from a flat buffer already in the layout's order.

        The buffer is copied, never aliased. Element i of the buffer becomes
        slot i of the matrix buffer, whatever the layout.

        Raises:
        -------
        InvalidDimensionsError
            If rows or cols is zero
        LengthMismatchError
            If len(buffer) != rows * cols
        ElementCastError
            If a buffer element would change when stored in dtype
        """
        rows, cols = _validate_dims(rows, cols)
        if dtype is None and isinstance(buffer, np.ndarray):
            dtype = buffer.dtype
        etype = _resolve_dtype(dtype)

        if isinstance(buffer, np.ndarray):
            if buffer.ndim != 1:
                raise LengthMismatchError(f"Buffer must be 1-D, got shape {buffer.shape}")
            values = buffer
        else:
            values = list(buffer)
        if len(values) != rows * cols:
            raise LengthMismatchError(
                f"Buffer length {len(values)} does not match {rows} x {cols} = {rows * cols}"
            )

        it = iter(values)
        return cls.from_fn(rows, cols, lambda: next(it), dtype=etype, layout=layout)

    @classmethod
    def square(cls, size: int, dtype: DTypeLike = None, layout: LayoutLike = None) -> "Matrix":
        """size x size zero matrix."""
        return cls.new(size, size, dtype=dtype, layout=layout)

    @classmethod
    def square_random(
        cls,
        size: int,
        dtype: DTypeLike = None,
        layout: LayoutLike = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Matrix":
        """size x size matrix of uniform samples."""
        return cls.random(size, size, dtype=dtype, layout=layout, seed=seed, rng=rng)

    @classmethod
    def square_filled(
        cls, size: int, value: Any, dtype: DTypeLike = None, layout: LayoutLike = None
    ) -> "Matrix":
        """size x size matrix with every cell set to value."""
        return cls.filled(size, size, value, dtype=dtype, layout=layout)

    # ------------------------------------------------------------------
    # Shape and metadata
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def element_type(self) -> ElementType:
        return self._etype

    @property
    def dtype(self) -> np.dtype:
        return self._etype.dtype

    @property
    def size(self) -> int:
        return self._rows * self._cols

    @property
    def is_square(self) -> bool:
        return self._rows == self._cols

    def dims(self) -> Tuple[int, int]:
        """(rows, cols)"""
        return self._rows, self._cols

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def _offset(self, row: Any, col: Any) -> int:
        # Bounds are checked here: the layout alone would alias
        # out-of-range coordinates onto other cells.
        try:
            r = operator.index(row)
            c = operator.index(col)
        except TypeError:
            raise OutOfBoundsError(
                f"Matrix indices must be integers, got ({row!r}, {col!r})"
            ) from None
        if not (0 <= r < self._rows and 0 <= c < self._cols):
            raise OutOfBoundsError(
                f"Index ({r}, {c}) out of bounds for {self._rows} x {self._cols} matrix"
            )
        return self._layout.offset(r, c, self._rows, self._cols)

    def read(self, row: int, col: int):
        """
        Value at logical cell (row, col).

        Raises:
        -------
        OutOfBoundsError
            If row >= rows, col >= cols, either is negative or not an integer
        """
        return self._data[self._offset(row, col)]

    def write(self, row: int, col: int, value: Any) -> None:
        """
        Store value at logical cell (row, col).

        Raises:
        -------
        OutOfBoundsError
            If the coordinate is outside the matrix
        ElementCastError
            If value would be truncated or wrapped by the element dtype
        """
        self._data[self._offset(row, col)] = self._etype.cast(value)

    def __getitem__(self, key: Tuple[int, int]):
        row, col = self._split_key(key)
        return self.read(row, col)

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        row, col = self._split_key(key)
        self.write(row, col, value)

    @staticmethod
    def _split_key(key) -> Tuple[Any, Any]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise OutOfBoundsError(f"Matrix index must be a (row, col) pair, got {key!r}")
        return key

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_identity(self) -> "Matrix":
        """
        Overwrite the main diagonal with the element type's one().

        Off-diagonal cells are left untouched, so this only yields an
        identity matrix when started from a zero matrix:

            >>> m = Matrix.square(3).set_identity()

        Idempotent. Returns self for chaining.

        Raises:
        -------
        NotSquareError
            If rows != cols
        """
        if not self.is_square:
            raise NotSquareError(
                f"set_identity needs a square matrix, got {self._rows} x {self._cols}"
            )
        one = self._etype.one()
        for i in range(self._rows):
            self._data[self._layout.offset(i, i, self._rows, self._cols)] = one
        return self

    def transpose(self) -> "Matrix":
        """Not supported: always raises UnsupportedOperationError."""
        raise UnsupportedOperationError("Matrix.transpose is not supported")

    # ------------------------------------------------------------------
    # Views and conversion
    # ------------------------------------------------------------------

    def flat(self) -> np.ndarray:
        """Read-only view of the buffer, in layout order."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def to_numpy(self) -> np.ndarray:
        """
        Read-only (rows, cols) view in logical orientation.

        No copy: the view's memory order is the matrix layout ("C" or "F").
        """
        view = self._data.reshape((self._rows, self._cols), order=self._layout.numpy_order)
        view.flags.writeable = False
        return view

    def to_dataframe(self) -> pd.DataFrame:
        """Logical contents as a DataFrame with integer row/column labels."""
        return pd.DataFrame(np.array(self.to_numpy()))

    def copy(self) -> "Matrix":
        """Independent matrix with the same dims, layout and contents."""
        return Matrix(self._rows, self._cols, self._data.copy(), self._layout)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self.dims() == other.dims()
            and self._layout == other._layout
            and bool(np.array_equal(self._data, other._data))
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Matrix(rows={self._rows}, cols={self._cols}, "
            f"dtype={self._etype}, layout={self._layout})"
        )
