"""Wallact façade: one contract, many named signers."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from eth_typing import ChecksumAddress
from web3.types import TxReceipt

from . import utils, wallets
from .constants import DEFAULT_CONFIRMATIONS, DEFAULT_SHARD, READ_ENTITY
from .evm.config import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    WallactConfig,
)
from .evm.connections import ChainClient
from .evm.contracts import ContractBinding
from .evm.registry import SignerRegistry
from .evm.transactions import CallDispatcher
from .exceptions import InvalidAddressError, NoSignerAvailableError
from .types import DerivedWallet, TransactionResult

logger = logging.getLogger(__name__)


class Wallact:
    """Interact with a single smart contract through named signing entities.

    A read-only handle is always available. When ``default_private_key`` is
    given it is registered as the default entity, used by writes and
    signatures that do not name a registered entity.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        contract_abi: Sequence[dict[str, Any]],
        default_private_key: str | None = None,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        config = WallactConfig(
            rpc_url=rpc_url,
            contract_address=contract_address,
            contract_abi=contract_abi,
            default_private_key=default_private_key,
            request_timeout=request_timeout,
            receipt_timeout=receipt_timeout,
            poll_interval=poll_interval,
        ).validated()

        self._config = config
        self._chain = ChainClient(
            config.rpc_url,
            request_timeout=config.request_timeout,
            receipt_timeout=config.receipt_timeout,
            poll_interval=config.poll_interval,
        )
        self._binding = ContractBinding(self._chain, config.contract_address, config.contract_abi)
        self._registry = SignerRegistry(self._chain, config.default_private_key)
        default = self._registry.default
        if default is not None:
            self._binding.bind(default.entity_name, default)
        self._dispatcher = CallDispatcher(self._registry, self._binding, self._chain)

        logger.info(
            "Wallact ready for contract %s at %s (default signer: %s)",
            config.contract_address,
            config.rpc_url,
            "yes" if default is not None else "no",
        )

    @classmethod
    def from_config(cls, config: WallactConfig) -> Wallact:
        return cls(
            config.rpc_url,
            config.contract_address,
            config.contract_abi,
            config.default_private_key,
            request_timeout=config.request_timeout,
            receipt_timeout=config.receipt_timeout,
            poll_interval=config.poll_interval,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def rpc_url(self) -> str:
        return self._config.rpc_url

    @property
    def contract_address(self) -> ChecksumAddress:
        return self._binding.address

    @property
    def entities(self) -> tuple[str, ...]:
        """Names of the registered signing entities."""
        return self._registry.names

    @property
    def read_entity(self) -> str:
        return READ_ENTITY

    async def is_connected(self) -> bool:
        return await self._chain.is_connected()

    async def close(self) -> None:
        """Release the HTTP sessions held by the query and signer providers."""
        await self._chain.close()

    async def __aenter__(self) -> Wallact:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------
    def add_entity_wallet(self, entity: str, private_key: str) -> None:
        """Register ``entity`` with ``private_key``, replacing any previous entry.

        The signer and its contract handle are both built before either is
        stored, so a failure leaves the previous registration in place.
        """

        identity = self._registry.create_identity(entity, private_key)
        handle = self._binding.create_handle(identity)
        self._registry.store(identity)
        self._binding.store(handle)

    def entity_address(self, entity: str | None = None) -> ChecksumAddress:
        """Address that would sign for ``entity`` (falling back to the default)."""

        resolution = self._dispatcher.resolve_identity(entity)
        if resolution.value is None:
            raise NoSignerAvailableError(resolution.reason, entity=entity)
        return resolution.value.address

    # ------------------------------------------------------------------
    # Contract calls
    # ------------------------------------------------------------------
    async def read(self, method: str, args: Sequence[Any] = ()) -> Any:
        return await self._dispatcher.read(method, args)

    async def write(
        self, method: str, args: Sequence[Any] = (), entity: str | None = None
    ) -> TransactionResult:
        return await self._dispatcher.write(method, args, entity)

    async def write_with_confirmations(
        self,
        method: str,
        args: Sequence[Any] = (),
        confirmations: int = DEFAULT_CONFIRMATIONS,
        entity: str | None = None,
    ) -> str:
        return await self._dispatcher.write_with_confirmations(method, args, confirmations, entity)

    async def sign_message(self, message: str | bytes, entity: str | None = None) -> str:
        return await self._dispatcher.sign_message(message, entity)

    # ------------------------------------------------------------------
    # Chain queries
    # ------------------------------------------------------------------
    async def fetch_wallet_balance(self, address: str) -> int:
        """Return the native balance of ``address`` in wei."""

        if not utils.is_valid_address(address):
            raise InvalidAddressError("Wallet address is not a valid EVM address", address=address)
        return await self._chain.get_balance(address)

    async def fetch_latest_block(self) -> int:
        return await self._chain.get_block_number()

    async def get_transaction_receipt(self, tx_hash: str) -> TxReceipt | None:
        return await self._chain.get_transaction_receipt(tx_hash)

    async def wait_for_transaction(
        self, tx_hash: str, confirmations: int = DEFAULT_CONFIRMATIONS
    ) -> TxReceipt | None:
        return await self._chain.wait_for_transaction(tx_hash, confirmations)

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def derive_wallet(user_id: str, shard: str = DEFAULT_SHARD) -> DerivedWallet:
        return wallets.derive_wallet(user_id, shard)

    @staticmethod
    def address_from_private_key(private_key: str) -> ChecksumAddress:
        return utils.address_from_private_key(private_key)

    @staticmethod
    def is_valid_address(address: Any) -> bool:
        return utils.is_valid_address(address)

    @staticmethod
    def to_smallest_unit(amount: int | float | str | Decimal) -> str:
        return utils.to_smallest_unit(amount)

    @staticmethod
    def from_smallest_unit(amount: int | str | Decimal) -> str:
        return utils.from_smallest_unit(amount)
