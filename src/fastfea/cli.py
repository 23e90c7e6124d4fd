"""
Command-line interface for fastfea.

Commands:
- demo: one-hot encode a tiny (firstname, lastname) dataset
- encode: one-hot encode the joint value of Parquet columns
"""

import argparse
import logging
import sys
from operator import itemgetter

import numpy as np
import pyarrow as pa

from fastfea import __version__
from fastfea.config import TransformerConfig
from fastfea.driver import fit_transform
from fastfea.exceptions import FastFeaError
from fastfea.sources import iter_records
from fastfea.transformers import LazyTransformer, OneHotEncoder, combine


logger = logging.getLogger(__name__)

DEMO_RECORDS = [
    {"firstname": "Mike", "lastname": "Jordan"},
    {"firstname": "Mike", "lastname": "James"},
    {"firstname": "Bill", "lastname": "Jordan"},
    {"firstname": "Bill", "lastname": "James"},
]


def build_column_encoder(columns):
    """Build ``(col1 | col2 | ...) + OneHotEncoder()`` over record fields."""
    extractors = [LazyTransformer(itemgetter(col), TransformerConfig(name=col)) for col in columns]
    return combine(*extractors) + OneHotEncoder(TransformerConfig(name="onehot"))


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="fastfea",
        description="fastfea: composable feature transformers",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("demo", help="Encode a built-in four-record dataset")

    encode_parser = subparsers.add_parser("encode", help="One-hot encode Parquet columns")
    encode_parser.add_argument("--input", type=str, nargs="+", required=True, help="Parquet file(s)")
    encode_parser.add_argument(
        "--columns",
        type=str,
        nargs="+",
        required=True,
        help="Columns whose joint value is encoded",
    )
    encode_parser.add_argument("--output", type=str, help="Optional .npy path for the encoded matrix")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "demo":
        return _run_demo()
    elif args.command == "encode":
        return _run_encode(args)

    return 0


def _print_rows(rows):
    for row in rows:
        print(" ".join(f"{value:g}" for value in row))


def _run_demo():
    _print_rows(fit_transform(build_column_encoder(["firstname", "lastname"]), DEMO_RECORDS))
    return 0


def _run_encode(args):
    try:
        records = iter_records(args.input, columns=args.columns)
        rows = fit_transform(build_column_encoder(args.columns), records)
    except (FastFeaError, OSError, pa.ArrowException, KeyError, TypeError, ValueError) as exc:
        logger.error(f"Encoding failed: {exc}")
        return 1

    if args.output:
        matrix = np.stack(rows) if rows else np.zeros((0, 0))
        np.save(args.output, matrix)
        print(f"Saved {matrix.shape[0]}x{matrix.shape[1]} matrix to {args.output}")
    else:
        _print_rows(rows)
    return 0


if __name__ == "__main__":
    sys.exit(main())
