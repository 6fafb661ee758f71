"""Connection helpers for the Wallact EVM client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import TransactionNotFound
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import TxReceipt

from ..exceptions import NetworkError, ValidationError
from .config import DEFAULT_POLL_INTERVAL, DEFAULT_RECEIPT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class ChainClient:
    """Manage the provider used for queries and the per-signer Web3 instances."""

    def __init__(
        self,
        rpc_url: str,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.rpc_url = rpc_url
        self.request_timeout = request_timeout
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self._web3 = self._build_web3()
        self._signing_web3s: list[AsyncWeb3] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> AsyncWeb3:
        """Provider-only Web3 instance; it carries no signing middleware."""
        return self._web3

    def signing_web3(self, account: LocalAccount) -> AsyncWeb3:
        """Return a fresh Web3 instance that signs and sends as ``account``."""
        web3 = self._build_web3()
        self._apply_account_middleware(web3, account)
        self._signing_web3s.append(web3)
        return web3

    async def close(self) -> None:
        """Close the HTTP sessions of the query and signing providers."""
        for web3 in (self._web3, *self._signing_web3s):
            await web3.provider.disconnect()
        logger.debug(
            "Closed %s provider session(s) for %s", len(self._signing_web3s) + 1, self.rpc_url
        )
        self._signing_web3s.clear()

    async def is_connected(self) -> bool:
        try:
            return bool(await self._web3.is_connected())
        except Exception:  # pragma: no cover
            logger.debug("Connectivity check failed for %s", self.rpc_url, exc_info=True)
            return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def get_balance(self, address: str) -> int:
        try:
            return int(await self._web3.eth.get_balance(AsyncWeb3.to_checksum_address(address)))
        except Exception as exc:
            raise NetworkError(
                f"Error fetching wallet balance: {exc}",
                endpoint=self.rpc_url,
                details={"address": address, "error": str(exc)},
            ) from exc

    async def get_block_number(self) -> int:
        try:
            return int(await self._web3.eth.block_number)
        except Exception as exc:
            raise NetworkError(
                f"Error fetching latest block: {exc}",
                endpoint=self.rpc_url,
                details={"error": str(exc)},
            ) from exc

    async def get_transaction_receipt(self, tx_hash: str | bytes) -> TxReceipt | None:
        """Return the receipt for ``tx_hash`` or ``None`` when it is not mined yet."""
        try:
            return await self._web3.eth.get_transaction_receipt(HexBytes(tx_hash))
        except TransactionNotFound:
            return None
        except Exception as exc:
            raise NetworkError(
                f"Error fetching transaction receipt: {exc}",
                endpoint=self.rpc_url,
                details={"tx_hash": _hex(tx_hash), "error": str(exc)},
            ) from exc

    async def wait_for_transaction(
        self, tx_hash: str | bytes, confirmations: int
    ) -> TxReceipt | None:
        """Wait until ``tx_hash`` is buried under ``confirmations`` blocks.

        A transaction included in the latest block has one confirmation. With
        ``confirmations == 0`` the current receipt (possibly ``None``) is
        returned without waiting.
        """
        validate_confirmations(confirmations)

        if confirmations == 0:
            return await self.get_transaction_receipt(tx_hash)

        tx_hex = _hex(tx_hash)
        try:
            receipt = await self._web3.eth.wait_for_transaction_receipt(
                HexBytes(tx_hash),
                timeout=self.receipt_timeout,
                poll_latency=self.poll_interval,
            )
            target_block = int(receipt["blockNumber"]) + confirmations - 1
            latest = int(await self._web3.eth.block_number)
            while latest < target_block:
                logger.debug(
                    "Waiting for %s: block %s of %s", tx_hex, latest, target_block
                )
                await asyncio.sleep(self.poll_interval)
                latest = int(await self._web3.eth.block_number)
        except Exception as exc:
            raise NetworkError(
                f"Error waiting for transaction {tx_hex}: {exc}",
                endpoint=self.rpc_url,
                details={"tx_hash": tx_hex, "confirmations": confirmations, "error": str(exc)},
            ) from exc

        logger.info(
            "Transaction %s confirmed in block %s with %s confirmations",
            tx_hex,
            receipt["blockNumber"],
            confirmations,
        )
        return receipt

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _build_web3(self) -> AsyncWeb3:
        provider = AsyncHTTPProvider(
            self.rpc_url, request_kwargs={"timeout": self.request_timeout}
        )
        return AsyncWeb3(provider)

    def _apply_account_middleware(self, web3: AsyncWeb3, account: LocalAccount) -> None:
        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address


def _hex(value: Any) -> str:
    return HexBytes(value).to_0x_hex()


def validate_confirmations(confirmations: Any) -> int:
    """Return ``confirmations`` if it is a non-negative integer block depth."""
    if isinstance(confirmations, bool) or not isinstance(confirmations, int):
        raise ValidationError(
            "Confirmations must be an integer", field="confirmations", value=confirmations
        )
    if confirmations < 0:
        raise ValidationError(
            "Confirmations cannot be negative", field="confirmations", value=confirmations
        )
    return confirmations
