"""
===========================================================
array_csv.codec — record stream <-> 2D array conversion
===========================================================

Implements the two directions of the conversion:
  - decode()          : records -> array, with a known (rows, cols)
  - decode_unshaped() : records -> array, shape inferred from the records
  - encode()          : array -> records, one record per row

A *record source* is any iterable of records (``csv.reader`` or a list of
lists). A *record sink* is any object with ``writerow(record)``
(``csv.writer``) or a callable taking one record. Tokenizing, quoting and
delimiters are the business of the reader/writer, not of this module.

Invariants
----------
- Elements are consumed and produced in row-major order.
- A decoded array always has exactly rows * cols elements; any mismatch,
  bad field or source failure aborts the whole call.
- Encode only pushes complete records.
"""

# --- Imports --------------------------------------------------------------

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from .elements import ElementType, element_type_for
from .errors import ArrayCsvError, ParseError, SinkError, SourceError
from .shape import Shape, ShapeResolver, resolve_for_encode

logger = logging.getLogger(__name__)


# --- Flat buffer ----------------------------------------------------------

class _FlatBuffer:
    """
    Row-major element storage for one decode.

    With a known capacity and a fixed-width dtype the storage is a
    preallocated 1D array; otherwise elements go to a list that is
    converted when frozen.
    """

    def __init__(self, dtype: np.dtype, capacity: Optional[int] = None):
        self.dtype = dtype
        if capacity is not None and dtype.kind != "U":
            self._data = np.empty(capacity, dtype=dtype)
        else:
            self._data = []
        self._length = 0

    @property
    def preallocated(self) -> bool:
        return isinstance(self._data, np.ndarray)

    def __len__(self) -> int:
        return self._length

    def append(self, value) -> None:
        if self.preallocated:
            self._data[self._length] = value
        else:
            self._data.append(value)
        self._length += 1

    def freeze(self, shape: Shape) -> np.ndarray:
        data, self._data = self._data, None
        if not isinstance(data, np.ndarray):
            data = np.array(data, dtype=self.dtype)
        return data.reshape(shape)


# --- Decode ---------------------------------------------------------------

_PARSE_FAILURES = (ValueError, TypeError, ArithmeticError)


def _decode(records: Iterable[Sequence[str]], resolver: ShapeResolver, kind: ElementType) -> np.ndarray:
    expected = resolver.expected
    buffer = _FlatBuffer(kind.dtype, None if expected is None else expected.size)
    logger.debug("decoding %s (expected shape %s, %s buffer)",
                 kind.dtype, expected, "preallocated" if buffer.preallocated else "growable")

    iterator = iter(records)
    row_index = 0
    while True:
        try:
            record = next(iterator)
        except StopIteration:
            break
        except ArrayCsvError:
            raise
        except Exception as exc:
            raise SourceError(exc, row_index) from exc

        resolver.observe(row_index, len(record))
        # Surplus rows are only counted so the error can report the real total.
        if expected is None or row_index < expected.rows:
            for col_index, text in enumerate(record):
                try:
                    value = kind.parse(text)
                except _PARSE_FAILURES as exc:
                    raise ParseError(row_index, col_index, text, exc) from exc
                buffer.append(value)
        row_index += 1

    shape = resolver.finish(row_index)
    logger.debug("decoded %d elements into shape %s", len(buffer), shape)
    return buffer.freeze(shape)


def decode(shape, source: Iterable[Sequence[str]], dtype=float) -> np.ndarray:
    """
    Read records from ``source`` into a new 2D array.

    Parameters
    ----------
    shape : (rows, cols) or None
        Shape of the result. None infers it (see ``decode_unshaped``).
    source : iterable of records
        Each record is a sequence of text fields, one record per row.
    dtype : dtype-like or ElementType
        Element type of every cell (default float64).

    Returns
    -------
    np.ndarray
        Array of the requested dtype with ``array.shape == shape``.

    Raises
    ------
    RowWidthMismatch
        A record does not have ``cols`` fields.
    RowCountMismatch
        The source yields a number of records other than ``rows``.
    ParseError
        A field cannot be converted to ``dtype``.
    SourceError
        The source raised while producing a record.
    """
    return _decode(source, ShapeResolver(shape), element_type_for(dtype))


def decode_unshaped(source: Iterable[Sequence[str]], dtype=float) -> np.ndarray:
    """
    Read records from ``source`` into a new 2D array of inferred shape.

    ``cols`` is the width of the first record and every record must match
    it (``InconsistentRowWidth`` otherwise). The whole source is buffered
    before the array exists, so bound the input size for untrusted data.
    An empty source raises ``EmptySource``.
    """
    return _decode(source, ShapeResolver(), element_type_for(dtype))


# --- Encode ---------------------------------------------------------------

def _sink_writer(sink):
    write = getattr(sink, "writerow", None)
    if write is not None:
        return write
    if callable(sink):
        return sink
    raise TypeError(f"record sink must have writerow() or be callable, got {type(sink).__name__}")


def encode(array, sink, element_type: Optional[ElementType] = None) -> None:
    """
    Write ``array`` to ``sink``, one record per row.

    Parameters
    ----------
    array : array-like
        2D array. Its dtype selects the element type unless
        ``element_type`` is given.
    sink : csv.writer or callable
        Receives each complete record (a list of str) in row order.
    element_type : ElementType, optional
        Override the formatting binding.

    Raises
    ------
    ValueError
        If ``array`` is not two-dimensional.
    SinkError
        The sink raised while accepting a record.
    """
    array = np.asarray(array)
    shape = resolve_for_encode(array)
    kind = element_type_for(array.dtype if element_type is None else element_type)
    write = _sink_writer(sink)

    for row_index, row in enumerate(array):
        record = [kind.format(value) for value in row]
        try:
            write(record)
        except Exception as exc:
            raise SinkError(exc, row_index) from exc
    logger.debug("encoded %s array of shape %s", array.dtype, shape)
