"""In-memory models of blockchain runtime modules: a shared chain and currency,
and pallets for tokens, proof-of-existence claims, kitties, a reward coin,
crowdfunds, balance locks and call weights."""

__version__ = "0.1.0"