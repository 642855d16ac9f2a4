"""
===========================================================
CSV Matrix Demo (CLI version)
===========================================================

Loads a numeric CSV grid of unknown size, reports its shape, and writes
the transposed grid next to the current working directory.

Usage
-----
    python3 examples/demo_cli.py path/to/grid.csv

Outputs
-------
    transposed.csv
"""

# --- Imports --------------------------------------------------------------

import sys
from pathlib import Path
from array_csv import ArrayCsvError, read_csv, write_csv


# --- Main routine ---------------------------------------------------------

def main(argv=None):
    argv = argv or sys.argv[1:]
    if len(argv) != 1:
        print("Usage: demo_cli.py path/to/file.csv")
        return 1

    csv_path = Path(argv[0])
    try:
        M = read_csv(csv_path)
    except ArrayCsvError as e:
        print(f"[error] {e}")
        return 1
    print(f"[info] loaded {M.shape} from: {csv_path}")

    write_csv("transposed.csv", M.T)

    # Read it back with the now known shape
    T = read_csv("transposed.csv", shape=M.T.shape)
    print(f"[ok] exported 'transposed.csv' {T.shape}")
    return 0


# --- Entrypoint -----------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
