import pytest

from palletsim.chain import U32_MAX, BadOrigin, Chain, DispatchError, Origin
from palletsim.template import SomethingStored, TemplateError, TemplatePallet


@pytest.fixture
def env():
    chain = Chain()
    return chain, TemplatePallet(chain)


def dispatch_error(call, *args):
    with pytest.raises(DispatchError) as exc:
        call(*args)
    return exc.value.error


def test_it_works_for_default_value(env):
    chain, pallet = env
    pallet.do_something(Origin.signed(1), 42)
    assert pallet.something() == 42
    assert chain.last_event() == SomethingStored(42, 1)


def test_correct_error_for_none_value(env):
    chain, pallet = env
    assert dispatch_error(pallet.cause_error, Origin.signed(1)) is TemplateError.NONE_VALUE
    assert pallet.something() is None
    assert chain.events == []


@pytest.mark.parametrize(
    "start, error, after",
    [
        (42, None, 43),
        (U32_MAX, TemplateError.STORAGE_OVERFLOW, U32_MAX),
    ],
)
def test_cause_error_increments_or_overflows(env, start, error, after):
    _, pallet = env
    pallet.do_something(Origin.signed(1), start)
    if error is None:
        pallet.cause_error(Origin.signed(1))
    else:
        assert dispatch_error(pallet.cause_error, Origin.signed(1)) is error
    assert pallet.something() == after


def test_unsigned_origin_rejected(env):
    _, pallet = env
    with pytest.raises(BadOrigin):
        pallet.do_something(Origin.root(), 1)
    assert pallet.something() is None


def test_value_must_fit_u32(env):
    _, pallet = env
    with pytest.raises(ValueError):
        pallet.do_something(Origin.signed(1), U32_MAX + 1)