import pytest

from palletsim.chain import U32_MAX, BadOrigin, Chain, DispatchError, Origin
from palletsim.configurable_constant import (
    Added,
    Cleared,
    ConfigurableConstantPallet,
    ConstantError,
)

MAX_ADDEND = 1738
CLEAR_FREQUENCY = 10


@pytest.fixture
def chain():
    return Chain()


@pytest.fixture
def pallet(chain):
    return ConfigurableConstantPallet(chain, MAX_ADDEND, CLEAR_FREQUENCY)


def test_add_value_stores_and_emits(pallet, chain):
    pallet.add_value(Origin.signed(1), MAX_ADDEND)
    assert pallet.single_value() == MAX_ADDEND
    assert chain.last_event() == Added(0, MAX_ADDEND, MAX_ADDEND)


def test_add_value_above_max_fails(pallet):
    with pytest.raises(DispatchError) as exc:
        pallet.add_value(Origin.signed(1), MAX_ADDEND + 1)
    assert exc.value.error == "value must be <= maximum add amount constant"
    assert pallet.single_value() == 0


def test_add_value_overflow(chain):
    pallet = ConfigurableConstantPallet(chain, U32_MAX, CLEAR_FREQUENCY)
    pallet.add_value(Origin.signed(1), U32_MAX)
    with pytest.raises(DispatchError) as exc:
        pallet.add_value(Origin.signed(1), 1)
    assert exc.value.error is ConstantError.OVERFLOW
    assert pallet.single_value() == U32_MAX


def test_on_finalize_clears_on_multiple(pallet, chain):
    pallet.add_value(Origin.signed(1), 100)
    pallet.on_finalize(CLEAR_FREQUENCY * 2)
    assert pallet.single_value() == 0
    assert chain.last_event() == Cleared(100)


def test_on_finalize_keeps_value_otherwise(pallet, chain):
    pallet.add_value(Origin.signed(1), 100)
    pallet.on_finalize(CLEAR_FREQUENCY + 1)
    assert pallet.single_value() == 100
    assert chain.last_event() == Added(0, 100, 100)


def test_unsigned_add_rejected(pallet):
    with pytest.raises(BadOrigin):
        pallet.add_value(Origin.root(), 1)


def test_zero_clear_frequency_rejected(chain):
    with pytest.raises(ValueError):
        ConfigurableConstantPallet(chain, MAX_ADDEND, 0)