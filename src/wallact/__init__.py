"""Wallact - named signing entities for a single EVM smart contract.

This library wraps a contract deployed on an EVM-compatible chain, routes
reads through a provider-only handle, writes and signatures through named
signing entities, and derives deterministic wallets from user identifiers.
"""

from .abi import STORAGE_ABI, load_abi
from .client import Wallact
from .constants import DEFAULT_CONFIRMATIONS, DEFAULT_ENTITY, DEFAULT_SHARD, READ_ENTITY
from .evm.config import WallactConfig
from .exceptions import (
    ContractCallError,
    ConversionError,
    InvalidAddressError,
    InvalidKeyError,
    NetworkError,
    NoSignerAvailableError,
    ValidationError,
    WallactError,
)
from .types import (
    ContractHandle,
    DerivedWallet,
    ReadOnlyHandle,
    Resolution,
    SigningHandle,
    SigningIdentity,
    TransactionResult,
)
from .utils import (
    address_from_private_key,
    from_smallest_unit,
    is_valid_address,
    to_smallest_unit,
)
from .wallets import derive_wallet

__version__ = "0.1.0"

__all__ = [
    # Client
    "Wallact",
    "WallactConfig",
    # Types
    "ContractHandle",
    "DerivedWallet",
    "ReadOnlyHandle",
    "Resolution",
    "SigningHandle",
    "SigningIdentity",
    "TransactionResult",
    # Exceptions
    "WallactError",
    "ValidationError",
    "InvalidKeyError",
    "InvalidAddressError",
    "ConversionError",
    "NoSignerAvailableError",
    "ContractCallError",
    "NetworkError",
    # Constants
    "DEFAULT_CONFIRMATIONS",
    "DEFAULT_ENTITY",
    "DEFAULT_SHARD",
    "READ_ENTITY",
    # Utility functions
    "address_from_private_key",
    "derive_wallet",
    "from_smallest_unit",
    "is_valid_address",
    "load_abi",
    "to_smallest_unit",
    "STORAGE_ABI",
]
