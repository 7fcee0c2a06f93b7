# palletsim

Small, in-memory models of blockchain runtime modules ("pallets"). Each
pallet keeps its storage in ordinary Python containers, checks its
preconditions, raises an exception when a call is rejected, and records the
events it emits on a shared `Chain`.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Building blocks

`palletsim.chain` provides what the pallets share:

- `Chain`: the current block number and the event log
  (`deposit_event`, `set_block_number`, `last_event`, and the `events` list).
- `Origin.signed(who)` and `Origin.root()`, plus `ensure_signed(origin)`,
  which returns the signing account or raises `BadOrigin`.
- `DispatchError`: raised when a call is rejected. Its `error` attribute
  holds the pallet's error enum member (for example
  `TemplateError.NONE_VALUE`) or a message string. `BadOrigin` is a subclass.
- `Balances`: a native currency with an existential deposit, total issuance,
  `deposit_creating`, `deposit_into_existing`, `withdraw`, `transfer`
  (honouring `ExistenceRequirement.KEEP_ALIVE` / `ALLOW_DEATH`) and named
  locks (`set_lock`, `extend_lock`, `remove_lock`, `locked`). A withdrawal
  that would leave less than the largest lock is rejected.
- `blake2_256(data)`: the 32-byte BLAKE2b digest used for identifiers.

Arguments outside the range of their numeric type (for example a negative
amount, or a value above the u32 or u128 maximum) raise `ValueError`.

## Pallets

| Module | Pallet | What it does |
| --- | --- | --- |
| `palletsim.template` | `TemplatePallet` | Stores one optional u32; `do_something` sets it, `cause_error` increments it or fails with `NONE_VALUE` / `STORAGE_OVERFLOW`. |
| `palletsim.proof_of_existence` | `ProofOfExistencePallet` | `create_claim` / `revoke_claim` on byte strings; `proof` returns `(owner, block_number)`. |
| `palletsim.configurable_constant` | `ConfigurableConstantPallet` | `add_value` up to `max_addend`; `on_finalize` clears the value every `clear_frequency` blocks. |
| `palletsim.mint_token` | `MintTokenPallet` | `mint` sets the caller's balance; `transfer` moves balance with saturating arithmetic. |
| `palletsim.kitties` | `KittiesPallet` | Collectible kitties with global and per-owner indices: `create_kitty`, `set_price`, `transfer`, `buy_kitty` (paid through `Balances`), `breed_kitty`. Optional genesis list of `(owner, hash, price)`. |
| `palletsim.reward_coin` | `RewardCoinPallet` | Coin whose minter and burner are the admin; `mint`, `burn`, `transfer`, a minimum balance, and `on_initialize` crediting the minter 50 per block. |
| `palletsim.simple_crowdfund` | `CrowdfundPallet` | `create`, `contribute`, `withdraw`, `dissolve`, `dispense`; each fund holds its money in a pot account from `fund_account_id`. |
| `palletsim.lockable_currency` | `LockableCurrencyPallet` | `lock_capital`, `extend_lock`, `unlock_all` on a `Balances` under the lock id `b"example "`. |
| `palletsim.weights` | `WeightsPallet` | Weight scales `Linear`, `Quadratic`, `Conditional` (saturating u32, `Pays.YES`, `DispatchClass.NORMAL`) and a pallet whose calls `CALL_WEIGHTS` prices. |

`KittiesPallet` derives new kitty ids from the BLAKE2b hash of a seed, the
caller and a nonce. The seed comes from the `randomness` callable passed to
the constructor; without one it is 32 zero bytes.

## Example

```python
from palletsim.chain import Chain, DispatchError, Origin
from palletsim.template import TemplateError, TemplatePallet

chain = Chain()
pallet = TemplatePallet(chain)

pallet.do_something(Origin.signed(1), 42)
assert pallet.something() == 42
print(chain.last_event())   # SomethingStored(something=42, who=1)

fresh = TemplatePallet(Chain())
try:
    fresh.cause_error(Origin.signed(1))
except DispatchError as err:
    assert err.error is TemplateError.NONE_VALUE
```

A call that is rejected raises before it writes to storage or emits an event.

## What this package does not do

It is a library of in-memory models only. There is no node, no network, no
block production or consensus, no transaction fees, and no persistent
storage: all state lives in the Python objects and is lost when they are.
There is no command-line program. Blocks advance only when you call
`Chain.set_block_number` and the pallets' hooks (`on_initialize`,
`on_finalize`) yourself.