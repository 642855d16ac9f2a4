"""
===========================================================
array_csv.errors — error taxonomy for CSV <-> array conversion
===========================================================

Every failure of a decode or encode call is raised as a subclass of
``ArrayCsvError``. Structural problems are ``ShapeError``; a single cell that
cannot be converted is a ``ParseError``; failures of the record source or
sink are wrapped in ``SourceError`` / ``SinkError`` with the original
exception kept as ``cause``.

    ArrayCsvError
    ├── ShapeError
    │   ├── RowWidthMismatch
    │   │   └── InconsistentRowWidth
    │   ├── RowCountMismatch
    │   └── EmptySource
    ├── ParseError
    ├── SourceError
    └── SinkError
"""


class ArrayCsvError(Exception):
    """Base class for all conversion errors."""


# --- Shape errors ---------------------------------------------------------

class ShapeError(ArrayCsvError, ValueError):
    """Declared or inferred shape does not match the records."""


class RowWidthMismatch(ShapeError):
    """A record has a different number of fields than the established width."""

    def __init__(self, expected: int, actual: int, row_index: int):
        self.expected = expected
        self.actual = actual
        self.row_index = row_index
        super().__init__(
            f"On row {row_index}, expected {expected} columns but got {actual} columns"
        )


class InconsistentRowWidth(RowWidthMismatch):
    """
    Raised while inferring the shape: a record's width differs from the
    width of the first record.
    """


class RowCountMismatch(ShapeError):
    """The source yielded a different number of records than expected."""

    def __init__(self, expected: int, actual: int, message: str = ""):
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Expected {expected} rows but got {actual} rows")


class EmptySource(ShapeError):
    """No records were read and no shape was given, so cols is unknown."""

    def __init__(self, message: str = "Cannot infer the number of columns from an empty source"):
        super().__init__(message)


# --- Cell errors ----------------------------------------------------------

class ParseError(ArrayCsvError, ValueError):
    """One field could not be converted to the requested element type."""

    def __init__(self, row_index: int, col_index: int, raw_text: str, cause: Exception):
        self.row_index = row_index
        self.col_index = col_index
        self.raw_text = raw_text
        self.cause = cause
        super().__init__(
            f"On row {row_index}, column {col_index}: cannot parse {raw_text!r} ({cause})"
        )


# --- External collaborator errors -----------------------------------------

class SourceError(ArrayCsvError):
    """The record source failed while producing a record."""

    def __init__(self, cause: Exception, row_index: int):
        self.cause = cause
        self.row_index = row_index
        super().__init__(f"Reading row {row_index} failed: {cause}")


class SinkError(ArrayCsvError):
    """The record sink failed while accepting a record."""

    def __init__(self, cause: Exception, row_index: int):
        self.cause = cause
        self.row_index = row_index
        super().__init__(f"Writing row {row_index} failed: {cause}")
