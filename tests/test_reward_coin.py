import pytest

from palletsim.chain import U128_MAX, BadOrigin, Chain, DispatchError, Origin
from palletsim.reward_coin import (
    Burned,
    Created,
    Killed,
    MetaData,
    Minted,
    RewardCoinError,
    RewardCoinPallet,
    Transfered,
)

MIN_BALANCE = 10
ADMIN = 1


@pytest.fixture
def env():
    chain = Chain()
    return chain, RewardCoinPallet(chain, MIN_BALANCE, admin=ADMIN)


@pytest.fixture
def minted(env):
    chain, coin = env
    coin.mint(Origin.signed(ADMIN), 2, 42)
    return chain, coin


def dispatch_error(call, *args):
    with pytest.raises(DispatchError) as exc:
        call(*args)
    return exc.value.error


def test_genesis_sets_admin_as_minter_and_burner(env):
    _, coin = env
    assert coin.meta == MetaData(issuance=0, minter=ADMIN, burner=ADMIN)


def test_minting_works(minted):
    chain, coin = minted
    assert coin.account(2) == 42
    assert coin.meta.issuance == 42
    assert chain.events == [Created(2), Minted(2, 42)]


def test_second_mint_does_not_emit_created(minted):
    chain, coin = minted
    coin.mint(Origin.signed(ADMIN), 2, 42)
    assert coin.account(2) == 84
    assert chain.events[-1] == Minted(2, 42)
    assert chain.events.count(Created(2)) == 1


def test_transfer_works(minted):
    chain, coin = minted
    failing = [
        (3, 50, RewardCoinError.INSUFFICIENT_BALANCE),
        (4, 41, RewardCoinError.BELOW_MIN_BALANCE),
        (4, 1, RewardCoinError.BELOW_MIN_BALANCE),
    ]
    for to, amount, error in failing:
        assert dispatch_error(coin.transfer, Origin.signed(2), to, amount) is error
    assert coin.account(2) == 42
    assert coin.account(4) == 0

    coin.transfer(Origin.signed(2), 3, 15)
    assert coin.account(2) == 42 - 15
    assert coin.account(3) == 15
    assert chain.last_event() == Transfered(2, 3, 15)
    assert coin.meta.issuance == coin.account(2) + coin.account(3)


@pytest.mark.parametrize(
    "caller, amount, issuance, error",
    [
        (ADMIN, MIN_BALANCE - 1, 0, RewardCoinError.BELOW_MIN_BALANCE),
        (5, 42, 0, RewardCoinError.NO_PERMISSION),
        (ADMIN, 42, U128_MAX, RewardCoinError.OVERFLOW),
    ],
)
def test_mint_errors(env, caller, amount, issuance, error):
    _, coin = env
    coin.meta = MetaData(issuance=issuance, minter=ADMIN, burner=ADMIN)
    assert dispatch_error(coin.mint, Origin.signed(caller), 2, amount) is error
    assert coin.account(2) == 0


def test_unsigned_origin_is_rejected(env):
    _, coin = env
    with pytest.raises(BadOrigin):
        coin.mint(Origin.root(), 2, 42)


def test_burn_partial(minted):
    chain, coin = minted
    coin.burn(Origin.signed(ADMIN), 2, 10, False)
    assert coin.account(2) == 42 - 10
    assert coin.meta.issuance == 42 - 10
    assert chain.last_event() == Burned(2, 10)


@pytest.mark.parametrize(
    "caller, target, amount, error",
    [
        (ADMIN, 2, 40, RewardCoinError.BELOW_MIN_BALANCE),
        (ADMIN, 7, 10, RewardCoinError.CANNOT_BURN_EMPTY),
        (2, 2, 10, RewardCoinError.NO_PERMISSION),
    ],
)
def test_burn_errors(minted, caller, target, amount, error):
    _, coin = minted
    assert dispatch_error(coin.burn, Origin.signed(caller), target, amount, False) is error
    assert coin.account(2) == 42


def test_burn_with_killing_removes_whole_balance(minted):
    chain, coin = minted
    coin.burn(Origin.signed(ADMIN), 2, 40, True)
    assert coin.account(2) == 0
    assert coin.meta.issuance == 0
    assert chain.events[-2:] == [Killed(2), Burned(2, 42)]


def test_on_initialize_credits_minter_only(env):
    _, coin = env
    assert coin.on_initialize(1) == 0
    assert coin.account(ADMIN) == 50
    assert coin.meta.issuance == 0


def test_burn_underflow_after_reward(env):
    _, coin = env
    coin.on_initialize(1)
    error = dispatch_error(coin.burn, Origin.signed(ADMIN), ADMIN, 20, False)
    assert error is RewardCoinError.UNDERFLOW
    assert coin.account(ADMIN) == 50