"""
===========================================================
array-csv command line
===========================================================

Usage
-----
    array-csv info grid.csv [--dtype int32]
    array-csv convert grid.csv grid.npy [--shape 20 20]
    array-csv convert grid.npy grid.csv
"""

# --- Imports --------------------------------------------------------------

import argparse
import sys
from pathlib import Path

import numpy as np

from .errors import ArrayCsvError
from .io import read_csv, write_csv


# --- CLI Parsing ----------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="array-csv",
        description="Convert homogeneous CSV data to and from 2D NumPy arrays.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Infer and print the shape of a CSV file.")
    info.add_argument("csv", type=Path)

    conv = sub.add_parser("convert", help="Convert between .csv and .npy files.")
    conv.add_argument("src", type=Path)
    conv.add_argument("dst", type=Path)
    conv.add_argument("--shape", type=int, nargs=2, metavar=("ROWS", "COLS"),
                      help="Expected shape when reading CSV (inferred if omitted).")

    for cmd in (info, conv):
        cmd.add_argument("--dtype", default="float64")
        cmd.add_argument("--delimiter", default=",")
        cmd.add_argument("--skiprows", type=int, default=0,
                         help="Leading records to skip (e.g. a header line).")
    return p.parse_args(argv)


# --- Commands -------------------------------------------------------------

def _info(args) -> int:
    M = read_csv(args.csv, dtype=args.dtype, delimiter=args.delimiter, skiprows=args.skiprows)
    rows, cols = M.shape
    print(f"[info] {args.csv}: {rows} rows x {cols} columns, dtype={M.dtype}")
    return 0


def _convert(args) -> int:
    src, dst = args.src.suffix.lower(), args.dst.suffix.lower()
    if src == ".csv" and dst == ".npy":
        M = read_csv(args.src, shape=args.shape, dtype=args.dtype,
                     delimiter=args.delimiter, skiprows=args.skiprows)
        np.save(args.dst, M)
    elif src == ".npy" and dst == ".csv":
        M = np.load(args.src)
        write_csv(args.dst, M, delimiter=args.delimiter)
    else:
        print(f"[error] cannot convert {src or '?'} to {dst or '?'} (expected .csv <-> .npy)",
              file=sys.stderr)
        return 1
    print(f"[ok] {args.src} -> {args.dst} {M.shape}")
    return 0


# --- Main -----------------------------------------------------------------

def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        if args.command == "info":
            return _info(args)
        return _convert(args)
    except (ArrayCsvError, OSError, TypeError, ValueError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
