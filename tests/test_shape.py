"""
===========================================================
Shape resolution tests
===========================================================
"""

import numpy as np
import pytest

from array_csv.errors import EmptySource, InconsistentRowWidth, RowCountMismatch, RowWidthMismatch
from array_csv.shape import Shape, ShapeResolver, as_shape, resolve_for_decode, resolve_for_encode


def test_as_shape_accepts_pairs():
    assert as_shape((2, 3)) == Shape(2, 3)
    assert as_shape([np.int64(0), 4]).size == 0


@pytest.mark.parametrize("bad", [(1,), (1, 2, 3), 5, (-1, 2)])
def test_as_shape_rejects_bad_values(bad):
    with pytest.raises(ValueError):
        as_shape(bad)


@pytest.mark.parametrize("bad", [(1.0, 2), (True, 2)])
def test_as_shape_rejects_non_integers(bad):
    with pytest.raises(TypeError):
        as_shape(bad)


def test_expected_shape_is_used_as_is():
    def never():
        raise AssertionError("source must not be read")
        yield

    assert resolve_for_decode((5, 7), never()) == (5, 7)


def test_inferred_shape():
    assert resolve_for_decode(None, [["1", "2"], ["3", "4"], ["5", "6"]]) == (3, 2)


def test_inferred_shape_inconsistent_width():
    with pytest.raises(InconsistentRowWidth) as info:
        resolve_for_decode(None, [["1", "2"], ["3"]])
    assert info.value.row_index == 1


def test_inferred_shape_empty():
    with pytest.raises(EmptySource):
        resolve_for_decode(None, [])


def test_resolver_fixed_shape_checks():
    r = ShapeResolver((2, 3))
    assert r.fixed
    r.observe(0, 3)
    with pytest.raises(RowWidthMismatch) as info:
        r.observe(1, 4)
    assert not isinstance(info.value, InconsistentRowWidth)
    with pytest.raises(RowCountMismatch):
        r.finish(3)
    assert r.finish(2) == (2, 3)


def test_resolver_zero_width_rows():
    r = ShapeResolver()
    r.observe(0, 0)
    r.observe(1, 0)
    assert r.finish(2) == (2, 0)


def test_resolve_for_encode():
    assert resolve_for_encode(np.zeros((4, 1))) == (4, 1)
    with pytest.raises(ValueError):
        resolve_for_encode(np.zeros((2, 2, 2)))
