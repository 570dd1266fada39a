# flatmat/kernel/errors.py
"""Exception types raised by matrix construction, indexing and ingestion."""


class MatrixError(Exception):
    """Base class for every failure raised by flatmat."""
    pass


class InvalidDimensionsError(MatrixError, ValueError):
    """Raised when rows or cols is zero (or otherwise not a usable size)."""
    pass


class LengthMismatchError(MatrixError, ValueError):
    """Raised when a flat buffer does not hold exactly rows * cols elements."""
    pass


class NotSquareError(MatrixError, ValueError):
    """Raised when a square-only operation is called on a rows != cols matrix."""
    pass


class OutOfBoundsError(MatrixError, IndexError):
    """Raised when a (row, col) coordinate falls outside the matrix."""
    pass


class UnsupportedOperationError(MatrixError, NotImplementedError):
    """Raised by operations that are deliberately not provided."""
    pass


class FieldParseError(MatrixError, ValueError):
    """
    Raised when a delimited-text field cannot be converted to the element type.

    Attributes:
        line: 1-based line number of the offending record (None if unknown)
        column: 1-based field position within the record (None if unknown)
        text: The raw field text
    """

    def __init__(self, message: str, line=None, column=None, text=None):
        super().__init__(message)
        self.line = line
        self.column = column
        self.text = text


class RaggedRowError(FieldParseError):
    """Raised when a record's field count differs from the first record's."""

    def __init__(self, line: int, expected: int, found: int):
        super().__init__(
            f"Line {line}: expected {expected} fields (from first record), found {found}",
            line=line,
        )
        self.expected = expected
        self.found = found


class ElementCastError(MatrixError, ValueError):
    """Raised when a value cannot be stored in the element dtype without loss."""
    pass
