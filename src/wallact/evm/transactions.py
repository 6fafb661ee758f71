"""Call dispatch for contract reads, writes and message signing."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from eth_account.messages import encode_defunct
from hexbytes import HexBytes

from ..constants import DEFAULT_CONFIRMATIONS, DEFAULT_ENTITY, canonical_entity
from ..exceptions import ContractCallError, NoSignerAvailableError
from ..types import (
    ContractHandle,
    Resolution,
    SigningHandle,
    SigningIdentity,
    TransactionResult,
)
from .connections import ChainClient, validate_confirmations
from .contracts import ContractBinding
from .registry import SignerRegistry

logger = logging.getLogger(__name__)

NO_SIGNER_MESSAGE = "No entity provided and no default wallet set"


class CallDispatcher:
    """Route contract calls to the handle of the right entity.

    Reads always go through the read-only handle. Writes and signatures
    resolve an explicit, registered entity first, then the default entity,
    and fail with :class:`NoSignerAvailableError` when neither exists.
    """

    def __init__(
        self,
        registry: SignerRegistry,
        binding: ContractBinding,
        chain: ChainClient,
    ) -> None:
        self._registry = registry
        self._binding = binding
        self._chain = chain

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve_signing_handle(self, entity: str | None = None) -> Resolution[SigningHandle]:
        return self._resolve(entity, self._binding.get)

    def resolve_identity(self, entity: str | None = None) -> Resolution[SigningIdentity]:
        return self._resolve(entity, self._registry.get)

    def _resolve(
        self, entity: str | None, lookup: Callable[[str], Any]
    ) -> Resolution[Any]:
        name = canonical_entity(entity)
        if name is not None:
            candidate = lookup(name)
            if _can_sign(candidate):
                return Resolution.resolved(candidate, name)
            logger.debug("Entity %s is not a registered signer; trying default", name)

        candidate = lookup(DEFAULT_ENTITY)
        if _can_sign(candidate):
            return Resolution.resolved(candidate, DEFAULT_ENTITY)

        return Resolution.unresolved(NO_SIGNER_MESSAGE)

    def _require_signing_handle(self, entity: str | None) -> SigningHandle:
        resolution = self.resolve_signing_handle(entity)
        if not resolution.ok:
            raise NoSignerAvailableError(resolution.reason, entity=entity)
        return resolution.value  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    async def read(self, method: str, args: Sequence[Any] = ()) -> Any:
        handle = self._binding.read_handle
        logger.debug("Reading %s via %s", method, handle.entity_name)
        try:
            return await _function(handle, method, args).call()
        except Exception as exc:
            raise ContractCallError(
                f"Error reading from the contract: {exc}",
                method=method,
                entity=handle.entity_name,
                details={"args": list(args), "error": str(exc)},
            ) from exc

    async def write(
        self,
        method: str,
        args: Sequence[Any] = (),
        entity: str | None = None,
    ) -> TransactionResult:
        handle = self._require_signing_handle(entity)
        return await self._submit(handle, method, args)

    async def write_with_confirmations(
        self,
        method: str,
        args: Sequence[Any] = (),
        confirmations: int = DEFAULT_CONFIRMATIONS,
        entity: str | None = None,
    ) -> str:
        """Submit ``method`` and return its hash once ``confirmations`` blocks deep.

        Submission and confirmation failures are both reported as
        :class:`ContractCallError`. An invalid ``confirmations`` raises
        :class:`ValidationError` before anything is sent.
        """

        validate_confirmations(confirmations)
        handle = self._require_signing_handle(entity)
        result = await self._submit(handle, method, args)

        try:
            await self._chain.wait_for_transaction(result.hash, confirmations)
        except Exception as exc:
            raise ContractCallError(
                f"Error writing to the contract: {exc}",
                method=method,
                entity=handle.entity_name,
                details={
                    "args": list(args),
                    "tx_hash": result.hash,
                    "confirmations": confirmations,
                    "phase": "confirmation",
                    "error": str(exc),
                },
            ) from exc

        return result.hash

    async def sign_message(self, message: str | bytes, entity: str | None = None) -> str:
        resolution = self.resolve_identity(entity)
        if not resolution.ok:
            raise NoSignerAvailableError(resolution.reason, entity=entity)
        identity: SigningIdentity = resolution.value  # type: ignore[assignment]

        try:
            if isinstance(message, bytes):
                signable = encode_defunct(primitive=message)
            else:
                signable = encode_defunct(text=message)
            signed = identity.account.sign_message(signable)
        except Exception as exc:
            raise ContractCallError(
                f"Error signing message: {exc}",
                entity=identity.entity_name,
                details={"error": str(exc)},
            ) from exc

        return HexBytes(signed.signature).to_0x_hex()

    async def _submit(
        self, handle: SigningHandle, method: str, args: Sequence[Any]
    ) -> TransactionResult:
        logger.info("Dispatching %s as %s (%s)", method, handle.entity_name, handle.address)
        try:
            tx_hash = await _function(handle, method, args).transact()
        except Exception as exc:
            raise ContractCallError(
                f"Error writing to the contract: {exc}",
                method=method,
                entity=handle.entity_name,
                details={"args": list(args), "phase": "submission", "error": str(exc)},
            ) from exc

        tx_hex = HexBytes(tx_hash).to_0x_hex()
        logger.info("Transaction sent for method=%s hash=%s", method, tx_hex)
        return TransactionResult(
            hash=tx_hex,
            method=method,
            entity_name=handle.entity_name,
            sender=handle.address,
            args=tuple(args),
        )


def _can_sign(candidate: ContractHandle | SigningIdentity | None) -> bool:
    return isinstance(candidate, SigningHandle | SigningIdentity)


def _function(handle: ContractHandle, method: str, args: Sequence[Any]) -> Any:
    return getattr(handle.contract.functions, method)(*args)
