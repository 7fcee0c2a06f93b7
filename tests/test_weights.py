import pytest

from palletsim.chain import U32_MAX, DispatchError, Origin
from palletsim.weights import (
    CALL_WEIGHTS,
    Conditional,
    DispatchClass,
    Linear,
    Pays,
    Quadratic,
    WeightsPallet,
)

ORIGIN = Origin.signed(1)


def test_linear_identity_and_zero():
    assert Linear(1).weigh_data(7) == 7
    assert Linear(200).weigh_data(0) == 0


def test_linear_saturates():
    assert Linear(200).weigh_data(U32_MAX) == U32_MAX


def test_linear_is_monotonic():
    scale = Linear(200)
    weights = [scale.weigh_data(x) for x in range(50)]
    assert weights == sorted(weights)


def test_quadratic_constant_term():
    assert Quadratic(200, 30, 100).weigh_data(0, 0) == 100


def test_quadratic_linear_term_matches_linear_scale():
    assert Quadratic(0, 30, 0).weigh_data(5, 11) == Linear(30).weigh_data(11)


def test_quadratic_saturates():
    assert Quadratic(200, 30, 100).weigh_data(U32_MAX, U32_MAX) == U32_MAX


def test_conditional_branches():
    scale = Conditional(200)
    assert scale.weigh_data(False, 12345) == 200
    assert scale.weigh_data(True, 9) == Linear(200).weigh_data(9)
    assert scale.weigh_data(True, U32_MAX) == U32_MAX


@pytest.mark.parametrize("scale", [Linear(1), Quadratic(1, 2, 3), Conditional(4)])
def test_fee_and_class(scale):
    assert scale.pays_fee() is Pays.YES
    assert scale.classify_dispatch() is DispatchClass.NORMAL


def test_scale_rejects_out_of_range():
    with pytest.raises(ValueError):
        Linear(U32_MAX + 1)
    with pytest.raises(ValueError):
        Linear(1).weigh_data(-1)


def test_call_weights_table():
    assert CALL_WEIGHTS["store_value"] == 10_000
    assert CALL_WEIGHTS["add_n"] == Linear(200)
    assert CALL_WEIGHTS["complex_calculations"] == Quadratic(200, 30, 100)


def test_store_value():
    pallet = WeightsPallet()
    pallet.store_value(ORIGIN, 42)
    assert pallet.stored_value() == 42


def test_add_n_increments():
    pallet = WeightsPallet()
    pallet.store_value(ORIGIN, 5)
    pallet.add_n(ORIGIN, 3)
    assert pallet.stored_value() == 8


def test_add_n_overflow():
    pallet = WeightsPallet()
    pallet.store_value(ORIGIN, U32_MAX)
    with pytest.raises(OverflowError):
        pallet.add_n(ORIGIN, 1)
    assert pallet.stored_value() == U32_MAX


def test_double_checks_parameter():
    pallet = WeightsPallet()
    pallet.store_value(ORIGIN, 7)
    with pytest.raises(DispatchError) as info:
        pallet.double(ORIGIN, 6)
    assert info.value.error == "Storage value did not match parameter"
    assert pallet.stored_value() == 7


def test_double_doubles():
    pallet = WeightsPallet()
    pallet.store_value(ORIGIN, 7)
    pallet.double(ORIGIN, 7)
    assert pallet.stored_value() == 14


def test_complex_calculations_ends_with_part1():
    pallet = WeightsPallet()
    other = WeightsPallet()
    pallet.complex_calculations(ORIGIN, 3, 10)
    other.complex_calculations(ORIGIN, 0, 10)
    assert pallet.stored_value() == other.stored_value()
    assert pallet.stored_value() == 20


def test_add_or_set():
    pallet = WeightsPallet()
    pallet.store_value(ORIGIN, 11)
    pallet.add_or_set(ORIGIN, True, 99)
    assert pallet.stored_value() == 11
    pallet.add_or_set(ORIGIN, False, 99)
    assert pallet.stored_value() == 99