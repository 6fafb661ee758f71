"""EVM building blocks behind the :class:`~wallact.client.Wallact` façade."""

from .config import WallactConfig
from .connections import ChainClient
from .contracts import ContractBinding
from .registry import SignerRegistry
from .transactions import CallDispatcher

__all__ = [
    "CallDispatcher",
    "ChainClient",
    "ContractBinding",
    "SignerRegistry",
    "WallactConfig",
]
