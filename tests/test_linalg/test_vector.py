"""Tests for dense complex vectors."""

import numpy as np
import pytest

from shorsim.linalg import vector


def test_new_and_zero():
    v = vector.new(1, 2j)
    assert v.dtype == np.complex128
    assert np.allclose(v, [1, 2j])
    assert np.allclose(vector.zero(3), [0, 0, 0])


def test_new_requires_entries():
    with pytest.raises(ValueError, match="at least one entry"):
        vector.new()


def test_tensor_product_is_big_endian():
    zero = vector.new(1, 0)
    one = vector.new(0, 1)
    # |0> ⊗ |1> = |01>, index 1
    assert np.allclose(vector.tensor_product(zero, one), [0, 1, 0, 0])
    # |1> ⊗ |0> = |10>, index 2
    assert np.allclose(vector.tensor_product(one, zero), [0, 0, 1, 0])


def test_tensor_product_dimensions_multiply():
    v = vector.tensor_product(vector.zero(2), vector.zero(4), vector.zero(3))
    assert v.shape == (24,)


def test_tensor_product_n():
    plus = vector.new(1, 1) / np.sqrt(2)
    assert np.allclose(vector.tensor_product_n(plus, 3), np.full(8, 1 / np.sqrt(8)))


def test_inner_product_is_conjugate_linear_in_first_argument():
    v = vector.new(1j, 0)
    w = vector.new(1, 0)
    assert vector.inner_product(v, w) == pytest.approx(-1j)
    assert vector.inner_product(w, v) == pytest.approx(1j)


def test_inner_product_dimension_mismatch():
    with pytest.raises(ValueError, match="Dimension mismatch"):
        vector.inner_product(vector.zero(2), vector.zero(4))


def test_outer_product():
    v = vector.new(1, 1j)
    m = vector.outer_product(v, v)
    assert np.allclose(m, [[1, -1j], [1j, 1]])


def test_norm_and_is_unit():
    v = vector.new(3, 4j)
    assert vector.norm(v) == pytest.approx(5.0)
    assert not vector.is_unit(v)
    assert vector.is_unit(v / 5)


def test_is_orthogonal():
    assert vector.is_orthogonal(vector.new(1, 0), vector.new(0, 1))
    assert not vector.is_orthogonal(vector.new(1, 1), vector.new(1, 0))


def test_equals_uses_tolerance():
    v = vector.new(1, 0)
    assert vector.equals(v, v + 1e-14)
    assert not vector.equals(v, v + 1e-6)
    assert vector.equals(v, v + 1e-6, atol=1e-5)
    assert not vector.equals(v, vector.zero(3))


def test_apply_matrix():
    x = np.array([[0, 1], [1, 0]], dtype=complex)
    assert np.allclose(vector.apply(x, vector.new(1, 0)), [0, 1])


def test_apply_dimension_mismatch():
    with pytest.raises(ValueError, match="Cannot apply"):
        vector.apply(np.eye(4), vector.new(1, 0))
