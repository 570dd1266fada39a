# flatmat - Layout-aware 2-D matrices over a flat buffer
"""
FLATMAT: A Matrix With a Chosen Memory Layout
=============================================

This package provides:
- A 2-D Matrix stored in ONE contiguous numpy buffer
- Row-major or column-major storage, picked per matrix
- Validating factories (zero, random, constant, from a flat buffer, square)
- An in-place identity mutator for square matrices
- Delimited-text loading that reorders data for the requested layout

ARCHITECTURE:
-------------
    kernel/           Layout strategies + exception hierarchy
    elements.py       Element-type capabilities (zero/one/sample/parse)
    matrix.py         The Matrix container and its factories
    io.py             read_matrix / write_matrix (delimited text)
    config.py         Library defaults (dtype, layout, delimiter, seed)
    logging_config.py Console/file logging setup for applications
"""

from .kernel import (
    Layout,
    RowMajor,
    ColMajor,
    ROW_MAJOR,
    COL_MAJOR,
    layout_from_name,
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
from .elements import ElementType, element_type
from .matrix import Matrix
from .io import read_matrix, write_matrix
from .config import CONFIG, MatrixConfig, load_config

__version__ = "0.1.0"

__all__ = [
    'Matrix', 'read_matrix', 'write_matrix',
    'Layout', 'RowMajor', 'ColMajor', 'ROW_MAJOR', 'COL_MAJOR', 'layout_from_name',
    'ElementType', 'element_type',
    'CONFIG', 'MatrixConfig', 'load_config',
    'MatrixError', 'InvalidDimensionsError', 'LengthMismatchError', 'NotSquareError',
    'OutOfBoundsError', 'UnsupportedOperationError', 'FieldParseError', 'RaggedRowError',
    'ElementCastError',
]
