"""Tests for Shor's factoring driver."""

import pytest

from shorsim.algorithms import ShorResult, factorize
from shorsim.algorithms.shor import _evaluate


def test_factorize_15_with_base_7():
    result = factorize(15, a=7, t=4, shots=10, seed=1)
    assert isinstance(result, ShorResult)
    assert result.reason is None
    assert result.success
    assert result.factors == (3, 5)
    assert len(result.shots) == 10
    assert len(result.control) == 4
    assert len(result.target) == 4


def test_shots_only_see_multiples_of_quarter_phase():
    result = factorize(15, a=7, t=4, shots=20, seed=3)
    for shot in result.shots:
        assert shot.phase in (0.0, 0.25, 0.5, 0.75)
        if shot.phase == 0.0:
            assert shot.rejected
            assert not shot.found
        else:
            assert shot.found


def test_factorize_is_reproducible():
    a = factorize(15, a=7, shots=5, seed=42)
    b = factorize(15, a=7, shots=5, seed=42)
    assert [s.bits for s in a.shots] == [s.bits for s in b.shots]


def test_shots_draw_independent_streams():
    result = factorize(15, a=7, t=4, shots=30, seed=0)
    assert len({tuple(s.bits) for s in result.shots}) > 1


def test_random_base_is_coprime():
    result = factorize(21, t=3, shots=3, seed=5)
    assert result.a is not None
    assert 1 < result.a < 21


def test_stages_are_snapshots():
    result = factorize(15, a=7, t=4, shots=1, seed=0)
    titles = [title for title, _ in result.stages]
    assert titles == [
        "initial state",
        "create superposition",
        "apply controlled-U",
        "apply inverse QFT",
        "measure target register",
    ]
    initial = result.stages[0][1]
    (state,) = initial.state(result.control, result.target)
    assert state.index == [0, 1]


@pytest.mark.parametrize("N", [-3, 0, 1])
def test_rejects_small_n(N):
    with pytest.raises(ValueError, match="greater than 1"):
        factorize(N)


def test_rejects_prime():
    with pytest.raises(ValueError, match="prime"):
        factorize(13)


def test_even_shortcut():
    result = factorize(22)
    assert result.reason == "even"
    assert result.factors == (2, 11)
    assert result.shots == []


def test_perfect_power_shortcut():
    result = factorize(27)
    assert result.reason == "power"
    assert result.factors == (3, 9)


@pytest.mark.parametrize("a", [0, 1, 15, 16])
def test_rejects_base_out_of_range(a):
    with pytest.raises(ValueError, match="1 < a < N"):
        factorize(15, a=a)


def test_common_factor_shortcut():
    result = factorize(15, a=6)
    assert result.reason == "gcd"
    assert result.factors == (3, 5)


def test_rejects_non_positive_t_and_shots():
    with pytest.raises(ValueError, match="t must be positive"):
        factorize(15, a=7, t=0)
    with pytest.raises(ValueError, match="shots must be positive"):
        factorize(15, a=7, shots=0)


@pytest.mark.parametrize(
    "bits, r, p, q, found",
    [
        ([0, 1, 0, 0], 4, 3, 5, True),
        ([1, 0, 0, 0], 2, 3, 1, True),
        ([1, 1, 0, 0], 4, 3, 5, True),
        ([0, 0, 0, 0], 1, None, None, False),
    ],
)
def test_evaluate_shot(bits, r, p, q, found):
    shot = _evaluate(bits, 7, 15)
    assert shot.r == r
    assert shot.p == p
    assert shot.q == q
    assert shot.found is found


def test_evaluate_rejects_minus_one_root():
    # 14^1 = -1 mod 15
    shot = _evaluate([1, 0, 0, 0], 14, 15)
    assert shot.r == 2
    assert shot.rejected
    assert not shot.found
