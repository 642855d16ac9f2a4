"""
===========================================================
array_csv.io — CSV files and strings <-> 2D arrays
===========================================================

Thin wrappers binding the codec to ``csv.reader`` / ``csv.writer``.
``path`` arguments accept a filesystem path or an already open text file;
files opened here use UTF-8 and ``newline=""`` as the csv module expects.
"""

import contextlib
import csv
import itertools
from io import StringIO
from pathlib import Path

import numpy as np

from .codec import decode, encode
from .errors import RowCountMismatch, SinkError


# --- Helpers --------------------------------------------------------------

@contextlib.contextmanager
def _opened(path, mode: str):
    if hasattr(path, "read" if mode == "r" else "write"):
        yield path
        return
    p = Path(path)
    if mode == "r" and not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    with p.open(mode, encoding="utf-8", newline="") as handle:
        yield handle


def _limit_rows(records, max_rows: int):
    for count, record in enumerate(records):
        if count >= max_rows:
            raise RowCountMismatch(max_rows, count + 1,
                                   f"Source has more than {max_rows} rows")
        yield record


# --- Reading --------------------------------------------------------------

def read_csv(path, shape=None, dtype=float, delimiter: str = ",",
             skiprows: int = 0, max_rows=None, **fmtparams) -> np.ndarray:
    """
    Load a homogeneous 2D matrix from a CSV file.

    Parameters
    ----------
    path : str, Path or text file
        CSV source.
    shape : (rows, cols), optional
        Expected shape. When omitted it is inferred from the file.
    dtype : dtype-like or ElementType
        Element type of every cell (default float64).
    delimiter : str
        Field delimiter (default ",").
    skiprows : int
        Number of leading records to skip (e.g. a header line). Row indices
        in errors count from the first record after the skipped ones.
    max_rows : int, optional
        Refuse sources with more records than this. Use it to bound memory
        when reading untrusted input without a shape.
    **fmtparams
        Extra ``csv`` dialect options (quotechar, skipinitialspace …).
    """
    with _opened(path, "r") as handle:
        records = itertools.islice(csv.reader(handle, delimiter=delimiter, **fmtparams),
                                   skiprows, None)
        if max_rows is not None:
            records = _limit_rows(records, max_rows)
        return decode(shape, records, dtype)


def loads(text: str, shape=None, dtype=float, **kwargs) -> np.ndarray:
    """Same as ``read_csv`` for CSV content held in a string."""
    return read_csv(StringIO(text), shape=shape, dtype=dtype, **kwargs)


# --- Writing --------------------------------------------------------------

def write_csv(path, array, delimiter: str = ",", element_type=None,
              lineterminator: str = "\n", **fmtparams) -> None:
    """
    Save a 2D array to a CSV file, one line per row, no header.

    Parameters
    ----------
    path : str, Path or text file
        Destination. Existing files are overwritten.
    array : array-like
        2D array to write.
    delimiter : str
        Field delimiter (default ",").
    element_type : ElementType, optional
        Override the formatting chosen from ``array.dtype``.
    lineterminator : str
        Record terminator (default "\\n").
    """
    array = np.asarray(array)
    with _opened(path, "w") as handle:
        writer = csv.writer(handle, delimiter=delimiter,
                            lineterminator=lineterminator, **fmtparams)
        encode(array, writer, element_type)
        try:
            handle.flush()
        except OSError as exc:
            raise SinkError(exc, len(array)) from exc


def dumps(array, **kwargs) -> str:
    """Same as ``write_csv`` but return the CSV content as a string."""
    buffer = StringIO()
    write_csv(buffer, array, **kwargs)
    return buffer.getvalue()
