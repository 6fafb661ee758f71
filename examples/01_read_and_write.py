"""Example: read the stored value, write a new one and wait for confirmations."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from wallact import STORAGE_ABI, Wallact, WallactError, load_abi

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

STORE_VALUE = 100
CONFIRMATIONS = 2


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not found in environment variables")
    return value


async def main() -> None:
    """Store a value through the default signer and read it back."""

    rpc_url = os.getenv("RPC_URL", "https://rpc-amoy.polygon.technology/")
    contract_address = _require_env("CONTRACT_ADDRESS")
    abi_path = os.getenv("CONTRACT_ABI")
    abi = load_abi(abi_path) if abi_path else STORAGE_ABI

    client = Wallact(rpc_url, contract_address, abi, _require_env("PRIVATE_KEY"))
    logging.info("Default signer: %s", client.entity_address())

    try:
        before = await client.read("retrieve", [])
        logging.info("Stored value before write: %s", before)

        tx_hash = await client.write_with_confirmations(
            "store", [STORE_VALUE], confirmations=CONFIRMATIONS
        )
        logging.info(
            "store(%s) confirmed %s times; tx hash: %s", STORE_VALUE, CONFIRMATIONS, tx_hash
        )

        after = await client.read("retrieve", [])
        logging.info("Stored value after write: %s", after)
    except WallactError as exc:
        logging.error("%s failed: %s", type(exc).__name__, exc.message)
    finally:
        await client.close()


if __name__ == "__main__":
    asyncio.run(main())
