from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any

import pytest
from hexbytes import HexBytes

import wallact.client

# Well-known development keys (Hardhat/Anvil accounts #0 and #1).
KEY_A = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ADDRESS_A = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
KEY_B = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
ADDRESS_B = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

CONTRACT_ADDRESS = "0x2bF148eFDF0f428E8BAAE012911B918dcB357312"
RPC_URL = "https://rpc.example.invalid"


@dataclass
class Ledger:
    """Records every call made against dummy contracts."""

    results: dict[str, Any] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, str, tuple[Any, ...], str | None]] = field(default_factory=list)
    waits: list[tuple[str, int]] = field(default_factory=list)
    wait_failure: Exception | None = None
    _hashes: Any = field(default_factory=lambda: itertools.count(1))

    def next_hash(self) -> HexBytes:
        return HexBytes(next(self._hashes).to_bytes(32, "big"))


class DummyFunction:
    def __init__(self, contract: DummyContract, name: str, args: tuple[Any, ...]) -> None:
        self._contract = contract
        self._name = name
        self._args = args

    async def call(self) -> Any:
        ledger = self._contract.ledger
        ledger.calls.append(("call", self._name, self._args, self._contract.owner))
        if self._name in ledger.failures:
            raise ledger.failures[self._name]
        return ledger.results.get(self._name)

    async def transact(self) -> HexBytes:
        ledger = self._contract.ledger
        ledger.calls.append(("transact", self._name, self._args, self._contract.owner))
        if self._name in ledger.failures:
            raise ledger.failures[self._name]
        return ledger.next_hash()


class DummyFunctions:
    def __init__(self, contract: DummyContract) -> None:
        self._contract = contract

    def __getattr__(self, name: str) -> Any:
        if name not in self._contract.function_names:
            raise AttributeError(f"Function {name} not found in ABI")
        return lambda *args: DummyFunction(self._contract, name, args)


class DummyContract:
    def __init__(self, address: str, abi: Any, owner: str | None, ledger: Ledger) -> None:
        self.address = address
        self.abi = abi
        self.owner = owner
        self.ledger = ledger
        self.function_names = {entry["name"] for entry in abi if entry.get("type") == "function"}
        self.functions = DummyFunctions(self)


class DummyEth:
    def __init__(self, owner: str | None, ledger: Ledger) -> None:
        self._owner = owner
        self._ledger = ledger
        self.default_account = owner

    def contract(self, address: str, abi: Any) -> DummyContract:
        return DummyContract(address, abi, self._owner, self._ledger)


class DummyWeb3:
    def __init__(self, owner: str | None, ledger: Ledger) -> None:
        self.eth = DummyEth(owner, ledger)


class DummyChain:
    """Stand-in for ChainClient that never touches the network."""

    def __init__(
        self,
        rpc_url: str = RPC_URL,
        *,
        request_timeout: float = 1.0,
        receipt_timeout: float = 1.0,
        poll_interval: float = 0.0,
    ) -> None:
        self.rpc_url = rpc_url
        self.ledger = Ledger()
        self.web3 = DummyWeb3(None, self.ledger)
        self.balances: dict[str, int] = {}
        self.block_number = 100
        self.closed = False

    def signing_web3(self, account: Any) -> DummyWeb3:
        return DummyWeb3(account.address, self.ledger)

    async def is_connected(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True

    async def get_balance(self, address: str) -> int:
        return self.balances.get(address, 0)

    async def get_block_number(self) -> int:
        return self.block_number

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        return {"transactionHash": tx_hash, "blockNumber": self.block_number, "status": 1}

    async def wait_for_transaction(self, tx_hash: str, confirmations: int) -> dict[str, Any]:
        if self.ledger.wait_failure is not None:
            raise self.ledger.wait_failure
        self.ledger.waits.append((tx_hash, confirmations))
        return {"transactionHash": tx_hash, "blockNumber": self.block_number, "status": 1}


@pytest.fixture
def dummy_chain() -> DummyChain:
    return DummyChain()


@pytest.fixture
def patch_chain(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(wallact.client, "ChainClient", DummyChain)
