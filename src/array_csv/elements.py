"""
===========================================================
array_csv.elements — per-dtype text <-> value bindings
===========================================================

Each conversion works on a single element type. An element type knows its
NumPy ``dtype``, how to parse one CSV field (``parse``, may raise) and how
to format one array element (``format``, never raises for values of its
dtype).

Supported families
------------------
- integers  : int8 … int64, uint8 … uint64 (range-checked)
- floats    : float16, float32, float64, longdouble (finite text that
              overflows the dtype is rejected)
- complex   : complex64, complex128 (clongdouble is rejected)
- booleans  : "true"/"false" (also "1"/"0" on input)
- text      : str

Custom bindings only need ``dtype``, ``parse`` and ``format`` and can be
passed anywhere a dtype is accepted.
"""

# --- Imports --------------------------------------------------------------

from typing import Any, Protocol, runtime_checkable

import numpy as np


# --- Interface ------------------------------------------------------------

@runtime_checkable
class ElementType(Protocol):
    dtype: np.dtype

    def parse(self, text: str) -> Any:
        ...

    def format(self, value: Any) -> str:
        ...


# --- Concrete bindings ----------------------------------------------------

class IntegerType:
    """Signed/unsigned integers; values outside the dtype range are rejected."""

    def __init__(self, dtype=np.int64):
        self.dtype = np.dtype(dtype)
        info = np.iinfo(self.dtype)
        self._lo, self._hi = int(info.min), int(info.max)

    def parse(self, text: str) -> int:
        value = int(text)
        if not self._lo <= value <= self._hi:
            raise OverflowError(f"{value} is out of range for {self.dtype}")
        return value

    def format(self, value) -> str:
        return str(int(value))


class FloatType:
    _INF = ("inf", "infinity")

    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)

    def parse(self, text: str):
        # numpy scalars parse "nan", "inf", "1e-3" like float() does
        with np.errstate(over="ignore"):
            value = self.dtype.type(text)
        if np.isinf(value) and text.strip().lstrip("+-").lower() not in self._INF:
            raise OverflowError(f"{text} is out of range for {self.dtype}")
        return value

    def format(self, value) -> str:
        # str() of a numpy float is the shortest text that round-trips at
        # that precision
        return str(self.dtype.type(value))


class ComplexType:
    def __init__(self, dtype=np.complex128):
        self.dtype = np.dtype(dtype)

    def parse(self, text: str) -> complex:
        return complex(text)

    def format(self, value) -> str:
        return str(complex(value)).strip("()")


class BoolType:
    _TRUE = ("true", "1")
    _FALSE = ("false", "0")

    def __init__(self):
        self.dtype = np.dtype(bool)

    def parse(self, text: str) -> bool:
        lowered = text.strip().lower()
        if lowered in self._TRUE:
            return True
        if lowered in self._FALSE:
            return False
        raise ValueError(f"invalid boolean literal: {text!r}")

    def format(self, value) -> str:
        return "true" if value else "false"


class TextType:
    """Fields are kept verbatim; the array width is set when it is built."""

    def __init__(self, dtype=str):
        self.dtype = np.dtype(dtype)
        self._width = self.dtype.itemsize // 4

    def parse(self, text: str) -> str:
        if self._width and len(text) > self._width:
            raise ValueError(f"{len(text)} characters do not fit in {self.dtype}")
        return text

    def format(self, value) -> str:
        return str(value)


# --- Lookup ---------------------------------------------------------------

_BY_KIND = {
    "i": IntegerType,
    "u": IntegerType,
    "f": FloatType,
    "c": ComplexType,
    "U": TextType,
}


def element_type_for(dtype) -> ElementType:
    """
    Return the element type binding for ``dtype``.

    Parameters
    ----------
    dtype : dtype-like or ElementType
        Anything ``numpy.dtype`` accepts (``float``, ``"int32"``,
        ``np.uint8`` …), or an object that already implements
        ``ElementType``, which is returned unchanged.

    Raises
    ------
    TypeError
        If the dtype has no text binding (object, bytes, datetime,
        structured dtypes, clongdouble).
    """
    if isinstance(dtype, ElementType):
        return dtype
    dt = np.dtype(dtype)
    if dt.kind == "b":
        return BoolType()
    if dt.kind == "c" and dt.itemsize > 16:
        # parts wider than float64 do not survive Python complex()
        raise TypeError(f"unsupported element dtype: {dt}")
    if dt.kind in _BY_KIND and dt.names is None:
        return _BY_KIND[dt.kind](dt)
    raise TypeError(f"unsupported element dtype: {dt}")
