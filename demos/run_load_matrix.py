"""
LOAD A DELIMITED FILE INTO A MATRIX
===================================

Reads a headerless delimited file into the requested layout, prints its
dimensions and flat buffer, and optionally overwrites the diagonal with ones
and saves the result.

    python demos/run_load_matrix.py data.csv --layout col_major --dtype int32
    python demos/run_load_matrix.py data.csv --identity --out out.csv
"""

import argparse
import logging

from flatmat import read_matrix, write_matrix, NotSquareError
from flatmat.logging_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Load delimited text into a flatmat Matrix")
    parser.add_argument("path", help="Delimited text file (no header)")
    parser.add_argument("--layout", default="row_major", help="row_major or col_major")
    parser.add_argument("--dtype", default="float64", help="numpy dtype name")
    parser.add_argument("--delimiter", default=",", help="Field separator")
    parser.add_argument("--identity", action="store_true", help="Set the diagonal to one")
    parser.add_argument("--out", default=None, help="Write the (possibly modified) matrix here")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    matrix = read_matrix(args.path, dtype=args.dtype, layout=args.layout, delimiter=args.delimiter)
    logger.info("Loaded %s", matrix)

    print(f"dims:   {matrix.dims()}")
    print(f"layout: {matrix.layout}")
    print(f"flat:   {matrix.flat().tolist()}")

    if args.identity:
        try:
            matrix.set_identity()
        except NotSquareError as exc:
            logger.error("%s", exc)
            return 1
        print(f"after set_identity: {matrix.flat().tolist()}")

    if args.out:
        n = write_matrix(matrix, args.out, delimiter=args.delimiter)
        logger.info("Wrote %d rows to %s", n, args.out)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
