"""
===========================================================
array_csv — homogeneous CSV data to and from 2D NumPy arrays
===========================================================

Reads rectangular CSV data of a single element type into a 2D
``numpy.ndarray`` and writes such arrays back as CSV, checking shape and
converting every cell on the way.

Main functions
--------------
- decode(shape, records, dtype)      : records -> array of a known shape
- decode_unshaped(records, dtype)    : records -> array, shape inferred
- encode(array, sink)                : array -> records
- read_csv(path, shape, dtype) / write_csv(path, array)
- loads(text, shape, dtype) / dumps(array)

Typical workflow
----------------
    import csv
    import numpy as np
    from array_csv import encode, decode

    array = np.arange(1, 7).reshape(2, 3)
    with open("test.csv", "w", newline="") as f:
        encode(array, csv.writer(f))
    with open("test.csv", newline="") as f:
        assert (decode((2, 3), csv.reader(f), dtype=int) == array).all()

Untrusted CSV of unbounded length should not be decoded without a shape or
a ``max_rows`` limit: the whole input is buffered before the array exists.
"""

# --- Public Imports -------------------------------------------------------

from .codec import decode, decode_unshaped, encode
from .elements import ElementType, element_type_for
from .errors import (
    ArrayCsvError,
    EmptySource,
    InconsistentRowWidth,
    ParseError,
    RowCountMismatch,
    RowWidthMismatch,
    ShapeError,
    SinkError,
    SourceError,
)
from .io import dumps, loads, read_csv, write_csv
from .shape import Shape

__all__ = [
    "decode",
    "decode_unshaped",
    "encode",
    "read_csv",
    "write_csv",
    "loads",
    "dumps",
    "Shape",
    "ElementType",
    "element_type_for",
    "ArrayCsvError",
    "ShapeError",
    "RowWidthMismatch",
    "InconsistentRowWidth",
    "RowCountMismatch",
    "EmptySource",
    "ParseError",
    "SourceError",
    "SinkError",
]
