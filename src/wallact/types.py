"""Type definitions and data models for Wallact."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from web3 import AsyncWeb3
from web3.contract import AsyncContract

T = TypeVar("T")


@dataclass(frozen=True)
class SigningIdentity:
    """A named signing account bound to its own chain connection."""

    entity_name: str
    account: LocalAccount = field(repr=False)
    web3: AsyncWeb3 = field(repr=False)

    @property
    def address(self) -> ChecksumAddress:
        return self.account.address


@dataclass(frozen=True)
class ReadOnlyHandle:
    """Contract handle bound to the bare provider; it can only be read."""

    entity_name: str
    contract: AsyncContract = field(repr=False)


@dataclass(frozen=True)
class SigningHandle:
    """Contract handle bound to a signing identity."""

    entity_name: str
    contract: AsyncContract = field(repr=False)
    identity: SigningIdentity

    @property
    def address(self) -> ChecksumAddress:
        return self.identity.address


ContractHandle = ReadOnlyHandle | SigningHandle


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Outcome of resolving an entity name to a signer-capable value."""

    value: T | None
    entity_name: str | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def resolved(cls, value: T, entity_name: str) -> Resolution[T]:
        return cls(value=value, entity_name=entity_name)

    @classmethod
    def unresolved(cls, reason: str) -> Resolution[T]:
        return cls(value=None, reason=reason)


@dataclass(frozen=True)
class DerivedWallet:
    """Deterministically derived key pair. Never retained by the library."""

    private_key: str = field(repr=False)
    address: ChecksumAddress


@dataclass(frozen=True)
class TransactionResult:
    """Result of submitting a contract transaction."""

    hash: str
    method: str
    entity_name: str
    sender: ChecksumAddress
    args: tuple[Any, ...] = ()

