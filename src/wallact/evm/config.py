"""Configuration containers for the Wallact EVM client."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from web3 import Web3

from ..exceptions import InvalidAddressError, ValidationError

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 1.0


@dataclass(frozen=True)
class WallactConfig:
    """Aggregated configuration used to construct a :class:`~wallact.client.Wallact`."""

    rpc_url: str
    contract_address: str
    contract_abi: Sequence[dict[str, Any]] = field(repr=False)
    default_private_key: str | None = field(default=None, repr=False)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def validated(self) -> WallactConfig:
        """Return a copy with a checksummed contract address and trimmed RPC URL."""

        if not isinstance(self.rpc_url, str) or not self.rpc_url.strip():
            raise ValidationError(
                "RPC URL must be a non-empty string", field="rpc_url", value=self.rpc_url
            )
        if not isinstance(self.contract_address, str) or not Web3.is_address(
            self.contract_address
        ):
            raise InvalidAddressError(
                "Contract address is not a valid EVM address", address=self.contract_address
            )

        return replace(
            self,
            rpc_url=self.rpc_url.strip(),
            contract_address=Web3.to_checksum_address(self.contract_address),
        )
