"""Deterministic wallet derivation from application user identifiers.

A wallet is derived as follows:

1. the seed phrase ``"<shard>-<user_id>"`` is hashed with keccak-256;
2. the 32-byte digest is used as BIP-39 entropy for a 24-word English
   mnemonic;
3. the mnemonic (empty passphrase) yields the account node
   ``m/44'/60'/0'/0/0``, from which the relative path ``44'/60'/0'/0/0`` is
   descended once more.

Anyone who knows the shard label and a user id can recompute the key, so the
entropy is only as secret as those two strings. This trades key secrecy for
reproducibility and must only be used where that trade-off is acceptable.
"""

from __future__ import annotations

import logging

from eth_account import Account
from eth_account.hdaccount import Language, Mnemonic
from web3 import Web3

from .constants import ACCOUNT_NODE_PATH, DEFAULT_SHARD, WALLET_PATH
from .exceptions import ValidationError
from .types import DerivedWallet

logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()

DERIVATION_PATH = f"{ACCOUNT_NODE_PATH}/{WALLET_PATH}"


def seed_mnemonic(user_id: str, shard: str = DEFAULT_SHARD) -> str:
    """Return the mnemonic backing the wallet of ``user_id`` within ``shard``."""
    if not isinstance(user_id, str) or not isinstance(shard, str):
        raise ValidationError("User id and shard must be strings", field="user_id", value=user_id)

    entropy = Web3.keccak(text=f"{shard}-{user_id}")
    return Mnemonic(Language.ENGLISH).to_mnemonic(bytes(entropy))


def derive_wallet(user_id: str, shard: str = DEFAULT_SHARD) -> DerivedWallet:
    """Derive the deterministic wallet for ``user_id`` within ``shard``."""
    mnemonic = seed_mnemonic(user_id, shard)
    account = Account.from_mnemonic(mnemonic, account_path=DERIVATION_PATH)
    logger.debug("Derived wallet %s for shard %s", account.address, shard)
    return DerivedWallet(private_key=account.key.to_0x_hex(), address=account.address)
