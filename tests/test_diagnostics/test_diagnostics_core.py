"""Tests for core diagnostic functions."""

import numpy as np
import pytest

from shorsim.diagnostics import (
    assert_hermitian,
    assert_normalized,
    assert_unitary,
    fidelity,
    is_hermitian,
    state_norm,
    trace_distance,
)
from shorsim.gates import H, S, U


def test_state_norm_and_assert_normalized() -> None:
    """Test state_norm and assert_normalized on normalized states."""
    state = np.array([1.0, 0.0], dtype=complex)
    assert state_norm(state) == pytest.approx(1.0)

    # Should not raise
    assert_normalized(state, atol=1e-6)


def test_assert_normalized_raises_for_non_unit_state() -> None:
    """Test that assert_normalized raises for non-normalized states."""
    state = np.array([2.0, 0.0], dtype=complex)
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(state, atol=1e-6)


def test_assert_normalized_rejects_nan() -> None:
    with pytest.raises(ValueError, match="not finite"):
        assert_normalized(np.array([np.nan, 0.0]))


def test_state_norm_requires_vector() -> None:
    with pytest.raises(ValueError, match="one-dimensional"):
        state_norm(np.eye(2))


def test_is_hermitian_and_assert() -> None:
    """Test is_hermitian and assert_hermitian on Hermitian matrices."""
    mat = np.array([[1.0, 1.0j], [-1.0j, 2.0]], dtype=complex)
    assert is_hermitian(mat)
    assert_hermitian(mat)

    with pytest.raises(ValueError, match="not Hermitian"):
        assert_hermitian(S())


def test_assert_unitary() -> None:
    assert_unitary(U(1, 2, 3, 4))
    with pytest.raises(ValueError, match="not unitary"):
        assert_unitary(2 * H())


def test_fidelity_and_trace_distance() -> None:
    zero = np.array([1, 0], dtype=complex)
    plus = H() @ zero
    one = np.array([0, 1], dtype=complex)

    assert fidelity(zero, zero) == pytest.approx(1.0)
    assert fidelity(zero, plus) == pytest.approx(0.5)
    assert fidelity(zero, one) == pytest.approx(0.0)
    assert trace_distance(zero, zero) == pytest.approx(0.0)
    assert trace_distance(zero, one) == pytest.approx(1.0)
    assert trace_distance(zero, plus) == pytest.approx(np.sqrt(0.5))


def test_fidelity_shape_mismatch() -> None:
    with pytest.raises(ValueError, match="same shape"):
        fidelity(np.array([1, 0]), np.array([1, 0, 0, 0]))
