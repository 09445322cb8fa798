"""Tests for register allocation, gate application and measurement."""

import numpy as np
import pytest

from shorsim.diagnostics import debug_context
from shorsim.gates import CNOT, H, X, qft
from shorsim.linalg import matrix
from shorsim.rand import RandomSource
from shorsim.register import Qubit, Register, index_of


class FixedRand:
    """Random source returning a scripted sequence and counting calls."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.values.pop(0)


def test_allocation_grows_state_by_tensor_product():
    reg = Register(seed=0)
    q0 = reg.zero()
    q1 = reg.one()
    assert q0 == Qubit(0)
    assert q1 == Qubit(1)
    assert reg.n_qubits == 2
    assert np.allclose(reg.amplitudes(), [0, 1, 0, 0])


def test_allocate_custom_amplitudes():
    reg = Register(seed=0)
    reg.allocate(1 / np.sqrt(5), 2 / np.sqrt(5))
    assert np.allclose(reg.probabilities(), [0.2, 0.8])


def test_allocate_rejects_non_normalized_pair():
    reg = Register(seed=0)
    with pytest.raises(ValueError, match="normalized"):
        reg.allocate(1, 1)


def test_zero_with_one_with_and_zero_log2():
    reg = Register(seed=0)
    assert index_of(*reg.zero_with(2)) == [0, 1]
    assert index_of(*reg.one_with(1)) == [2]
    assert len(reg.zero_log2(15)) == 4
    assert len(reg.zero_log2(16)) == 5
    assert reg.n_qubits == 12


def test_empty_register_has_no_state():
    reg = Register(seed=0)
    assert reg.n_qubits == 0
    with pytest.raises(ValueError, match="no qubits"):
        reg.amplitudes()


def test_bell_state():
    reg = Register(seed=0)
    q0, q1 = reg.zero(), reg.zero()
    reg.h(q0).cnot(q0, q1)
    s = 1 / np.sqrt(2)
    assert np.allclose(reg.amplitudes(), [s, 0, 0, s])


def test_bell_state_measurements_agree():
    for seed in range(10):
        reg = Register(seed=seed)
        q0, q1 = reg.zero(), reg.zero()
        reg.h(q0).cnot(q0, q1)
        assert reg.measure(q0) == reg.measure(q1)


def test_apply_full_width_gate():
    reg = Register(seed=0)
    reg.zero_with(2)
    reg.apply(matrix.apply(matrix.tensor_product(H(), H()), CNOT()))
    assert np.allclose(reg.probabilities(), [0.25] * 4)


def test_apply_gate_on_selected_qubits():
    reg = Register(seed=0)
    q0, q1, q2 = reg.zero_with(3)
    reg.x(q0)
    reg.apply(CNOT(), q0, q2)
    assert np.allclose(reg.probabilities(), np.eye(8)[5])


def test_apply_dimension_mismatch():
    reg = Register(seed=0)
    q0, q1 = reg.zero_with(2)
    with pytest.raises(ValueError, match="incompatible"):
        reg.apply(CNOT(), q0)
    with pytest.raises(ValueError, match="incompatible"):
        reg.apply(X())


def test_apply_out_of_range_qubit():
    reg = Register(seed=0)
    reg.zero()
    with pytest.raises(ValueError, match="out of range"):
        reg.h(Qubit(1))
    with pytest.raises(ValueError, match="out of range"):
        reg.measure(Qubit(3))


def test_non_qubit_handle_is_type_error():
    reg = Register(seed=0)
    reg.zero()
    with pytest.raises(TypeError, match="Qubit"):
        reg.h(0)


def test_gate_shortcut_on_multiple_qubits():
    reg = Register(seed=0)
    q = reg.zero_with(3)
    reg.h(*q)
    assert np.allclose(reg.probabilities(), np.full(8, 0.125))


def test_shortcut_requires_qubits():
    reg = Register(seed=0)
    reg.zero()
    with pytest.raises(ValueError, match="At least one qubit"):
        reg.x()


def test_nan_gate_propagates():
    reg = Register(seed=0)
    q = reg.zero()
    reg.apply(np.full((2, 2), np.nan), q)
    assert np.all(np.isnan(reg.amplitudes()))


def test_measure_collapses_and_is_repeatable():
    reg = Register(seed=3)
    q = reg.zero_with(2)
    reg.h(*q)
    first = reg.measure(q[0])
    for _ in range(5):
        assert reg.measure(q[0]) == first
    assert abs(np.linalg.norm(reg.amplitudes()) ** 2 - 1) <= 1e-13


def test_measure_sequence_halves_support():
    reg = Register(seed=1)
    q = reg.zero_with(3)
    reg.h(*q)
    expected = [0.25, 0.5, 1.0]
    assert np.allclose(reg.probabilities().max(), 0.125)
    for qubit, p in zip(q, expected):
        reg.measure(qubit)
        probs = reg.probabilities()
        assert np.allclose(probs[probs > 0], p)
        assert abs(probs.sum() - 1) <= 1e-13


def test_measure_threshold_rule():
    reg = Register(rand=FixedRand(0.49))
    q = reg.allocate(np.sqrt(0.5), np.sqrt(0.5))
    assert reg.measure(q) == 0
    assert np.allclose(reg.amplitudes(), [1, 0])

    reg = Register(rand=FixedRand(0.51))
    q = reg.allocate(np.sqrt(0.5), np.sqrt(0.5))
    assert reg.measure(q) == 1
    assert np.allclose(reg.amplitudes(), [0, 1])


def test_collapse_keeps_unit_norm_for_uneven_superposition():
    reg = Register(seed=2)
    q = reg.zero_with(3)
    reg.h(q[0]).ry(0.7, q[1]).cnot(q[1], q[2]).rx(1.3, q[2])
    for qubit in q:
        reg.measure(qubit)
        assert abs(np.linalg.norm(reg.amplitudes()) ** 2 - 1) <= 1e-13


def test_certain_measurement_draws_no_randomness():
    rand = FixedRand()
    reg = Register(rand=rand)
    q0, q1 = reg.zero(), reg.one()
    assert reg.measure(q0) == 0
    assert reg.measure(q1) == 1
    assert rand.calls == 0


def test_measurement_frequencies_follow_born_rule():
    source = RandomSource(42)
    ones = 0
    trials = 2000
    for _ in range(trials):
        reg = Register(rand=source)
        q = reg.allocate(np.sqrt(0.2), np.sqrt(0.8))
        ones += reg.measure(q)
    assert abs(ones / trials - 0.8) < 0.05


def test_measure_as_int_and_binary_string():
    reg = Register(seed=0)
    q = reg.zero_with(4)
    reg.x(q[0], q[2])
    assert reg.binary_string(*q) == "1010"
    assert reg.measure_as_int(*q) == 10
    assert reg.measure_as_binary() == [1, 0, 1, 0]


def test_controlled_family():
    reg = Register(seed=0)
    q = reg.one_with(3)
    t = reg.zero()
    reg.cccnot(q[0], q[1], q[2], t)
    assert reg.measure(t) == 1

    reg = Register(seed=0)
    c0, c1, t = reg.one(), reg.zero(), reg.zero()
    reg.toffoli(c0, c1, t)
    assert reg.measure(t) == 0


def test_controlled_z_phase():
    reg = Register(seed=0)
    c, t = reg.one(), reg.one()
    reg.cz(c, t)
    assert np.allclose(reg.amplitudes(), [0, 0, 0, -1])
    reg.ccz(c, t, reg.one())
    # third qubit appended in |1>, phase flips back
    assert np.allclose(reg.amplitudes()[-1], 1)


def test_cr_and_inverse_cr_cancel():
    reg = Register(seed=0)
    q = reg.zero_with(2)
    reg.h(*q)
    before = reg.amplitudes()
    reg.cr(q[0], q[1], 3).inverse_cr(q[0], q[1], 3)
    assert np.allclose(reg.amplitudes(), before)


def test_condition_gates():
    reg = Register(seed=0)
    q = reg.zero()
    reg.condition_x(False, q)
    assert reg.measure(q) == 0
    reg.condition_x(True, q)
    assert reg.measure(q) == 1
    reg.condition_z(True, q)
    assert np.allclose(reg.amplitudes(), [0, -1])


def test_swap_reverses_qubits():
    reg = Register(seed=0)
    q = reg.zero_with(3)
    reg.x(q[0])
    reg.swap(*q)
    assert reg.binary_string(*q) == "001"


def test_register_qft_matches_bit_reversed_qft_matrix():
    reg = Register(seed=0)
    q = reg.zero_with(3)
    reg.x(q[1])
    expected = qft(3) @ reg.amplitudes()
    reg.qft(*q)
    assert np.allclose(reg.amplitudes(), expected)
    reg.inverse_qft(*q)
    assert np.allclose(reg.probabilities(), np.eye(8)[2])


def test_clone_is_independent():
    reg = Register(seed=5)
    q = reg.zero_with(2)
    reg.h(*q)
    other = reg.clone()
    other.x(q[0])
    other.measure(q[1])
    assert np.allclose(reg.probabilities(), [0.25] * 4)


def test_clone_copies_random_source():
    reg = Register(seed=11)
    q = reg.zero_with(6)
    reg.h(*q)
    a = reg.clone().measure_as_int(*q)
    b = reg.clone().measure_as_int(*q)
    assert a == b


def test_clone_with_replacement_source():
    rand = FixedRand(0.9)
    reg = Register(seed=0)
    q = reg.zero()
    reg.h(q)
    other = reg.clone(rand=rand)
    assert other.rand is rand
    assert other.measure(q) == 1
    assert rand.calls == 1


def test_debug_mode_checks_normalization():
    reg = Register(seed=0)
    q = reg.zero()
    with debug_context(True):
        reg.h(q)
        with pytest.raises(ValueError, match="after apply: State is not normalized"):
            reg.apply(2 * np.eye(2), q)
