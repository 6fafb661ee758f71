"""Contract handles keyed by entity name."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

from eth_typing import ChecksumAddress
from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract

from ..constants import READ_ENTITY, canonical_entity
from ..exceptions import InvalidAddressError, ValidationError
from ..types import ContractHandle, ReadOnlyHandle, SigningHandle, SigningIdentity
from .connections import ChainClient

logger = logging.getLogger(__name__)


class ContractBinding:
    """Own the contract address, ABI and one handle per registered entity."""

    def __init__(
        self,
        chain: ChainClient,
        contract_address: str,
        contract_abi: Sequence[dict[str, Any]],
    ) -> None:
        if not isinstance(contract_address, str) or not Web3.is_address(contract_address):
            raise InvalidAddressError(
                "Contract address is not a valid EVM address", address=contract_address
            )

        self.address: ChecksumAddress = Web3.to_checksum_address(contract_address)
        self.abi = contract_abi
        self._handles: dict[str, ContractHandle] = {
            READ_ENTITY: ReadOnlyHandle(
                entity_name=READ_ENTITY, contract=self._contract_for(chain.web3)
            )
        }

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------
    def create_handle(self, identity: SigningIdentity) -> SigningHandle:
        """Build a signing handle for ``identity`` without storing it."""

        if identity.entity_name == READ_ENTITY:
            raise ValidationError(
                "The read-only handle cannot be bound to a signer",
                field="entity",
                value=identity.entity_name,
            )
        return SigningHandle(
            entity_name=identity.entity_name,
            contract=self._contract_for(identity.web3),
            identity=identity,
        )

    def store(self, handle: SigningHandle) -> None:
        if handle.entity_name == READ_ENTITY:
            raise ValidationError(
                "The read-only handle cannot be replaced", field="entity", value=READ_ENTITY
            )
        self._handles[handle.entity_name] = handle
        logger.debug("Bound contract %s for entity %s", self.address, handle.entity_name)

    def bind(self, entity: str, identity: SigningIdentity) -> SigningHandle:
        if canonical_entity(entity) != identity.entity_name:
            raise ValidationError(
                f"Identity '{identity.entity_name}' cannot be bound as '{entity}'",
                field="entity",
                value=entity,
            )
        handle = self.create_handle(identity)
        self.store(handle)
        return handle

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get(self, entity: str | None) -> ContractHandle | None:
        name = canonical_entity(entity)
        if name is None:
            return None
        return self._handles.get(name)

    @property
    def read_handle(self) -> ReadOnlyHandle:
        return cast(ReadOnlyHandle, self._handles[READ_ENTITY])

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._handles)

    def _contract_for(self, web3: AsyncWeb3) -> AsyncContract:
        try:
            return web3.eth.contract(address=self.address, abi=self.abi)
        except Exception as exc:
            raise ValidationError(
                "Contract ABI was rejected by web3",
                field="contract_abi",
                details={"error": str(exc)},
            ) from exc
