# File: tests/test_io.py
"""
Test read_matrix / write_matrix (delimited text ingestion and export).

The key property: the file is read row by row (row-major), so loading into a
ColMajor matrix must reorder the data. Both layouts must describe the SAME
logical matrix.
"""

import io

import numpy as np
import pytest

from flatmat import (
    Matrix, read_matrix, write_matrix, ROW_MAJOR, COL_MAJOR,
    FieldParseError, RaggedRowError, InvalidDimensionsError,
)
from flatmat.io import row_major_to_col_major


ROWS, COLS = 4, 5


@pytest.fixture
def grid_file(tmp_path):
    """4 x 5 file whose cell (i, j) holds 10*i + j."""
    path = tmp_path / "grid.csv"
    lines = [",".join(str(10 * i + j) for j in range(COLS)) for i in range(ROWS)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def file_order():
    """Values of grid_file read top-to-bottom, left-to-right."""
    return [10 * i + j for i in range(ROWS) for j in range(COLS)]


def test_row_major_load_matches_file_order(grid_file):
    m = read_matrix(grid_file, dtype=np.int64, layout=ROW_MAJOR)

    assert m.dims() == (ROWS, COLS)
    assert m.layout is ROW_MAJOR
    np.testing.assert_array_equal(m.flat(), file_order())


def test_col_major_load_is_transposed_buffer(grid_file):
    """
    colmajor_flat[j*rows + i] == rowmajor_flat[i*cols + j] for every cell.
    """
    row = read_matrix(grid_file, dtype=np.int64, layout=ROW_MAJOR)
    col = read_matrix(grid_file, dtype=np.int64, layout=COL_MAJOR)

    assert col.dims() == (ROWS, COLS)
    row_flat = row.flat()
    col_flat = col.flat()
    for i in range(ROWS):
        for j in range(COLS):
            assert col_flat[j * ROWS + i] == row_flat[i * COLS + j]

    # Same logical matrix either way
    np.testing.assert_array_equal(row.to_numpy(), col.to_numpy())
    print("✓ ColMajor ingestion transposes the buffer, not the matrix")


def test_read_from_stream():
    m = read_matrix(io.StringIO("1.5,2.5\n3.5,4.5\n"), layout="col_major")
    assert m.dims() == (2, 2)
    assert m.dtype == np.float64
    np.testing.assert_array_equal(m.flat(), [1.5, 3.5, 2.5, 4.5])


def test_custom_delimiter_and_whitespace():
    m = read_matrix(io.StringIO(" 1 ; 2 ; 3\n4;5;6\n"), dtype=np.int32, delimiter=";")
    assert m.dims() == (2, 3)
    assert m[1, 2] == 6
    assert m[0, 0] == 1


def test_blank_lines_skipped():
    m = read_matrix(io.StringIO("1,2\n\n3,4\n\n"), dtype=np.int64)
    assert m.dims() == (2, 2)


def test_whitespace_only_lines_skipped():
    m = read_matrix(io.StringIO("1,2\n   \n3,4\n\t\n"), dtype=np.int64)
    assert m.dims() == (2, 2)
    np.testing.assert_array_equal(m.flat(), [1, 2, 3, 4])


def test_line_of_empty_fields_is_a_record():
    """A line of empty fields still counts as a record, so it is parsed (and fails)."""
    with pytest.raises(FieldParseError) as excinfo:
        read_matrix(io.StringIO("1,2\n,\n"), dtype=np.int64)
    assert excinfo.value.line == 2


def test_single_column():
    m = read_matrix(io.StringIO("1\n2\n3\n"), dtype=np.int64, layout=COL_MAJOR)
    assert m.dims() == (3, 1)
    np.testing.assert_array_equal(m.flat(), [1, 2, 3])


def test_parse_failure_aborts_load():
    with pytest.raises(FieldParseError) as excinfo:
        read_matrix(io.StringIO("1,2,3\n4,x,6\n"), dtype=np.int64)

    err = excinfo.value
    assert err.line == 2
    assert err.column == 2
    assert err.text == "x"


def test_float_text_is_not_an_integer():
    with pytest.raises(FieldParseError):
        read_matrix(io.StringIO("1,2.5\n"), dtype=np.int64)


def test_integer_overflow_is_parse_failure():
    with pytest.raises(FieldParseError):
        read_matrix(io.StringIO("1,300\n"), dtype=np.uint8)
    with pytest.raises(FieldParseError):
        read_matrix(io.StringIO("-1\n"), dtype=np.uint8)


def test_ragged_input_rejected():
    with pytest.raises(RaggedRowError) as excinfo:
        read_matrix(io.StringIO("1,2,3\n4,5\n"), dtype=np.int64)

    assert excinfo.value.expected == 3
    assert excinfo.value.found == 2
    assert excinfo.value.line == 2


def test_ragged_is_a_parse_failure():
    with pytest.raises(FieldParseError):
        read_matrix(io.StringIO("1\n2,3\n"))


def test_empty_input_rejected():
    with pytest.raises(InvalidDimensionsError):
        read_matrix(io.StringIO(""))
    with pytest.raises(InvalidDimensionsError):
        read_matrix(io.StringIO("\n\n"))


def test_missing_file_propagates_os_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_matrix(tmp_path / "nope.csv")


def test_bool_fields():
    m = read_matrix(io.StringIO("true,False\n1,0\n"), dtype=np.bool_)
    np.testing.assert_array_equal(m.to_numpy(), [[True, False], [True, False]])


@pytest.mark.parametrize("layout", [ROW_MAJOR, COL_MAJOR])
def test_write_then_read_round_trip(tmp_path, layout):
    original = Matrix.random(3, 4, dtype=np.int32, layout=layout, seed=11)
    path = tmp_path / "out.csv"

    n = write_matrix(original, path)
    loaded = read_matrix(path, dtype=np.int32, layout=layout)

    assert n == 3
    assert loaded == original


def test_write_is_layout_independent():
    buf = io.StringIO()
    col = Matrix.from_flat(2, 2, [1, 3, 2, 4], dtype=np.int64, layout=COL_MAJOR)
    write_matrix(col, buf, delimiter=";")
    assert buf.getvalue() == "1;2\n3;4\n"


def test_row_major_to_col_major():
    buf = np.arange(6)
    out = row_major_to_col_major(buf, 2, 3)
    np.testing.assert_array_equal(out, [0, 3, 1, 4, 2, 5])
    # Input untouched
    np.testing.assert_array_equal(buf, np.arange(6))
