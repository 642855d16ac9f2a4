"""
===========================================================
array_csv.shape — shape resolution and consistency checks
===========================================================

A decode either trusts a caller-supplied ``(rows, cols)`` or infers it:
``cols`` from the first record, ``rows`` from the number of records once the
source is exhausted. ``ShapeResolver`` observes record widths as they are
consumed and produces the final ``Shape`` at end of input.
"""

# --- Imports --------------------------------------------------------------

import operator
from typing import Iterable, NamedTuple, Optional, Sequence

import numpy as np

from .errors import EmptySource, InconsistentRowWidth, RowCountMismatch, RowWidthMismatch


# --- Shape ----------------------------------------------------------------

class Shape(NamedTuple):
    rows: int
    cols: int

    @property
    def size(self) -> int:
        return self.rows * self.cols


def as_shape(value) -> Shape:
    """
    Validate ``value`` as a ``(rows, cols)`` pair of non-negative integers.

    Raises
    ------
    TypeError
        If either dimension is not an integer.
    ValueError
        If ``value`` is not a pair or a dimension is negative.
    """
    try:
        rows, cols = value
    except (TypeError, ValueError):
        raise ValueError(f"shape must be a (rows, cols) pair, got {value!r}") from None
    if isinstance(rows, bool) or isinstance(cols, bool):
        raise TypeError(f"shape dimensions must be integers, got {value!r}")
    rows, cols = operator.index(rows), operator.index(cols)
    if rows < 0 or cols < 0:
        raise ValueError(f"shape dimensions must be non-negative, got {value!r}")
    return Shape(rows, cols)


# --- Resolver -------------------------------------------------------------

class ShapeResolver:
    """
    Establish the definitive shape of a decode.

    Parameters
    ----------
    expected : (rows, cols) or None
        Shape asserted by the caller. When None the shape is inferred and
        the whole source has to be read before ``rows`` is known.
    """

    def __init__(self, expected=None):
        self.expected: Optional[Shape] = None if expected is None else as_shape(expected)
        self.cols: Optional[int] = None if self.expected is None else self.expected.cols

    @property
    def fixed(self) -> bool:
        return self.expected is not None

    def observe(self, row_index: int, width: int) -> None:
        """Check the field count of record ``row_index``."""
        if self.cols is None:
            self.cols = width
            return
        if width != self.cols:
            if self.fixed:
                raise RowWidthMismatch(self.cols, width, row_index)
            raise InconsistentRowWidth(self.cols, width, row_index)

    def finish(self, rows_consumed: int) -> Shape:
        """Return the final shape once the source is exhausted."""
        if self.fixed:
            if rows_consumed != self.expected.rows:
                raise RowCountMismatch(self.expected.rows, rows_consumed)
            return self.expected
        if self.cols is None:
            raise EmptySource()
        return Shape(rows_consumed, self.cols)


def resolve_for_decode(expected_shape, records: Iterable[Sequence[str]]) -> Shape:
    """
    Resolve the shape of ``records``.

    A given ``expected_shape`` is returned as-is without touching the
    records. Otherwise every record is consumed and checked for a constant
    width.
    """
    if expected_shape is not None:
        return as_shape(expected_shape)
    resolver = ShapeResolver()
    n_rows = 0
    for n_rows, record in enumerate(records, start=1):
        resolver.observe(n_rows - 1, len(record))
    return resolver.finish(n_rows)


def resolve_for_encode(array: np.ndarray) -> Shape:
    """Read ``(rows, cols)`` from a 2D array."""
    if array.ndim != 2:
        raise ValueError(f"expected a 2D array, got shape {array.shape}")
    return Shape(*array.shape)
