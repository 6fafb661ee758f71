"""End-to-end behaviour of the Wallact façade without network access."""

from __future__ import annotations

import pytest
from conftest import ADDRESS_A, ADDRESS_B, CONTRACT_ADDRESS, KEY_A, KEY_B, RPC_URL, DummyChain

from wallact import STORAGE_ABI, Wallact, WallactConfig
from wallact.constants import DEFAULT_ENTITY, READ_ENTITY
from wallact.evm.contracts import ContractBinding
from wallact.exceptions import (
    InvalidAddressError,
    InvalidKeyError,
    NoSignerAvailableError,
    ValidationError,
)
from wallact.types import ReadOnlyHandle, SigningHandle

# Unprefixed key, accepted the same as a 0x-prefixed one.
FIXTURE_KEY = "70ca8af919e7766904be9bd8ef35a5e0c7c3755f7ce0897a3568d1542442285a"


def _chain(client: Wallact) -> DummyChain:
    return client._chain  # type: ignore[return-value]


@pytest.mark.usefixtures("patch_chain")
class TestScenarios:
    @pytest.mark.asyncio
    async def test_write_with_default_key(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, FIXTURE_KEY)

        result = await client.write("store", [100])

        assert result.hash.startswith("0x")
        assert result.sender == Wallact.address_from_private_key(FIXTURE_KEY)
        assert _chain(client).ledger.calls[-1][:3] == ("transact", "store", (100,))

    @pytest.mark.asyncio
    async def test_write_without_default_key(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)

        with pytest.raises(NoSignerAvailableError):
            await client.write("store", [100])

    @pytest.mark.asyncio
    async def test_read_then_write(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, KEY_A)
        _chain(client).ledger.results["retrieve"] = 100

        await client.write("store", [100])

        assert await client.read("retrieve", []) == 100

    @pytest.mark.asyncio
    async def test_read_only_client_can_read(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        _chain(client).ledger.results["message"] = "Hello World!"

        assert await client.read("message", []) == "Hello World!"

    @pytest.mark.asyncio
    async def test_write_with_confirmations_returns_hash(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, KEY_A)

        tx_hash = await client.write_with_confirmations("store", [5], confirmations=3)

        assert isinstance(tx_hash, str)
        assert _chain(client).ledger.waits == [(tx_hash, 3)]

    @pytest.mark.asyncio
    async def test_sign_message_with_added_entity(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        client.add_entity_wallet("treasury", KEY_B)

        signature = await client.sign_message("payload", entity="treasury")

        assert signature.startswith("0x")
        with pytest.raises(NoSignerAvailableError):
            await client.sign_message("payload")


@pytest.mark.usefixtures("patch_chain")
class TestEntities:
    def test_entities_listing(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, KEY_A)
        client.add_entity_wallet("treasury", KEY_B)

        assert client.entities == (DEFAULT_ENTITY, "treasury")
        assert client.read_entity == READ_ENTITY
        assert client.entity_address() == ADDRESS_A
        assert client.entity_address("treasury") == ADDRESS_B
        assert client.entity_address("defaultContract") == ADDRESS_A

    def test_entity_address_without_signer(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        with pytest.raises(NoSignerAvailableError):
            client.entity_address("treasury")

    @pytest.mark.asyncio
    async def test_overwrite_entity_switches_signer(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        client.add_entity_wallet("ops", KEY_A)
        client.add_entity_wallet("ops", KEY_B)

        result = await client.write("store", [1], entity="ops")

        assert result.sender == ADDRESS_B

    @pytest.mark.asyncio
    async def test_failed_registration_keeps_previous_entity(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        client.add_entity_wallet("ops", KEY_A)

        with pytest.raises(InvalidKeyError):
            client.add_entity_wallet("ops", "0xbad")

        result = await client.write("store", [1], entity="ops")
        assert result.sender == ADDRESS_A

    @pytest.mark.asyncio
    async def test_failed_handle_build_leaves_registry_untouched(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)

        def refuse(self: ContractBinding, identity: object) -> SigningHandle:
            raise ValidationError("rejected", field="contract_abi")

        monkeypatch.setattr(ContractBinding, "create_handle", refuse)

        with pytest.raises(ValidationError):
            client.add_entity_wallet("ops", KEY_A)
        assert client.entities == ()

    def test_read_entity_cannot_be_registered(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        with pytest.raises(ValidationError):
            client.add_entity_wallet(READ_ENTITY, KEY_A)

    def test_replacing_default_via_alias(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, KEY_A)
        client.add_entity_wallet("defaultContract", KEY_B)
        assert client.entities == (DEFAULT_ENTITY,)
        assert client.entity_address() == ADDRESS_B


@pytest.mark.usefixtures("patch_chain")
class TestQueries:
    @pytest.mark.asyncio
    async def test_fetch_wallet_balance(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        _chain(client).balances[ADDRESS_A] = 10**18

        balance = await client.fetch_wallet_balance(ADDRESS_A)

        assert balance == 10**18
        assert Wallact.from_smallest_unit(balance) == "1.0"

    @pytest.mark.asyncio
    async def test_fetch_wallet_balance_invalid_address(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        with pytest.raises(InvalidAddressError):
            await client.fetch_wallet_balance("0x123")

    @pytest.mark.asyncio
    async def test_latest_block_and_receipts(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI)
        _chain(client).block_number = 1234

        assert await client.fetch_latest_block() == 1234
        receipt = await client.get_transaction_receipt("0x" + "01" * 32)
        assert receipt is not None and receipt["blockNumber"] == 1234

        await client.wait_for_transaction("0x" + "01" * 32)
        assert _chain(client).ledger.waits == [("0x" + "01" * 32, 5)]

    @pytest.mark.asyncio
    async def test_is_connected(self) -> None:
        assert await Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI).is_connected()

    @pytest.mark.asyncio
    async def test_async_context_closes_chain(self) -> None:
        async with Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, KEY_A) as client:
            assert not _chain(client).closed

        assert _chain(client).closed


class TestConstruction:
    def test_invalid_contract_address(self) -> None:
        with pytest.raises(InvalidAddressError):
            Wallact(RPC_URL, "0xnot-an-address", STORAGE_ABI)

    @pytest.mark.parametrize("rpc_url", [None, 8545, "   "])
    def test_invalid_rpc_url(self, rpc_url: object) -> None:
        with pytest.raises(ValidationError) as excinfo:
            Wallact(rpc_url, CONTRACT_ADDRESS, STORAGE_ABI)  # type: ignore[arg-type]
        assert excinfo.value.field == "rpc_url"

    def test_invalid_default_key(self) -> None:
        with pytest.raises(InvalidKeyError):
            Wallact(RPC_URL, CONTRACT_ADDRESS, STORAGE_ABI, "0x1234")

    def test_real_chain_client_builds_handles_offline(self) -> None:
        client = Wallact(RPC_URL, CONTRACT_ADDRESS.lower(), STORAGE_ABI, KEY_A)

        assert client.contract_address == CONTRACT_ADDRESS
        assert isinstance(client._binding.read_handle, ReadOnlyHandle)
        default_handle = client._binding.get(DEFAULT_ENTITY)
        assert isinstance(default_handle, SigningHandle)
        assert default_handle.identity.web3.eth.default_account == ADDRESS_A
        assert client._binding.get("defaultContract") is default_handle

    def test_from_config(self) -> None:
        config = WallactConfig(
            rpc_url=f" {RPC_URL} ",
            contract_address=CONTRACT_ADDRESS,
            contract_abi=STORAGE_ABI,
            default_private_key=KEY_A,
            poll_interval=0.5,
        )

        client = Wallact.from_config(config)

        assert client.rpc_url == RPC_URL
        assert client._chain.poll_interval == 0.5
        assert client.entities == (DEFAULT_ENTITY,)
        assert KEY_A[2:] not in repr(config)

    def test_static_helpers(self) -> None:
        assert Wallact.to_smallest_unit(1) == "1000000000000000000"
        assert Wallact.from_smallest_unit("1000000000000000000") == "1.0"
        assert Wallact.is_valid_address("0x49A6F7Ece315a56C097c4Fc72F5aA2886B9c260a")
        assert Wallact.address_from_private_key(KEY_A) == ADDRESS_A
