"""Registry of named signing identities."""

from __future__ import annotations

import logging
from typing import cast

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..constants import DEFAULT_ENTITY, READ_ENTITY, canonical_entity
from ..exceptions import InvalidKeyError, ValidationError
from ..types import SigningIdentity
from .connections import ChainClient

logger = logging.getLogger(__name__)


class SignerRegistry:
    """Map entity names to signing identities bound to the chain client.

    Identities are never removed; registering an existing name replaces it.
    """

    def __init__(self, chain: ChainClient, default_private_key: str | None = None) -> None:
        self._chain = chain
        self._identities: dict[str, SigningIdentity] = {}
        if default_private_key:
            self.register(DEFAULT_ENTITY, default_private_key)

    def create_identity(self, entity: str, private_key: str) -> SigningIdentity:
        """Build an identity for ``entity`` without registering it."""

        name = self._validate_name(entity)
        try:
            account = cast(LocalAccount, Account.from_key(private_key))  # type: ignore[arg-type]
        except Exception as exc:
            raise InvalidKeyError(
                f"Invalid private key for entity '{name}'",
                entity=name,
                details={"error": str(exc)},
            ) from exc

        return SigningIdentity(
            entity_name=name,
            account=account,
            web3=self._chain.signing_web3(account),
        )

    def store(self, identity: SigningIdentity) -> None:
        replaced = identity.entity_name in self._identities
        self._identities[identity.entity_name] = identity
        logger.info(
            "%s signing entity %s (%s)",
            "Replaced" if replaced else "Registered",
            identity.entity_name,
            identity.address,
        )

    def register(self, entity: str, private_key: str) -> SigningIdentity:
        identity = self.create_identity(entity, private_key)
        self.store(identity)
        return identity

    def get(self, entity: str | None) -> SigningIdentity | None:
        name = canonical_entity(entity)
        if name is None:
            return None
        return self._identities.get(name)

    @property
    def default(self) -> SigningIdentity | None:
        return self._identities.get(DEFAULT_ENTITY)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._identities)

    def __contains__(self, entity: object) -> bool:
        return isinstance(entity, str) and self.get(entity) is not None

    def __len__(self) -> int:
        return len(self._identities)

    @staticmethod
    def _validate_name(entity: str) -> str:
        name = canonical_entity(entity) if isinstance(entity, str) else None
        if name is None:
            raise ValidationError(
                "Entity name must be a non-empty string", field="entity", value=entity
            )
        if name == READ_ENTITY:
            raise ValidationError(
                f"'{READ_ENTITY}' is reserved for the read-only contract handle",
                field="entity",
                value=entity,
            )
        return name
