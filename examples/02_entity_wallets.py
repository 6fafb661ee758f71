"""Example: route writes and signatures through named entities."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from wallact import STORAGE_ABI, NoSignerAvailableError, Wallact

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not found in environment variables")
    return value


async def main() -> None:
    """Register a treasury entity on a client without a default signer."""

    rpc_url = os.getenv("RPC_URL", "https://rpc-amoy.polygon.technology/")
    async with Wallact(rpc_url, _require_env("CONTRACT_ADDRESS"), STORAGE_ABI) as client:
        try:
            await client.write("store", [1])
        except NoSignerAvailableError as exc:
            logging.info("Expected without a default signer: %s", exc.message)

        client.add_entity_wallet("treasury", _require_env("TREASURY_PRIVATE_KEY"))
        logging.info("Registered entities: %s", ", ".join(client.entities))

        signature = await client.sign_message("hello from treasury", entity="treasury")
        logging.info("Treasury signature: %s", signature)

        result = await client.write("store", [42], entity="treasury")
        logging.info(
            "Submitted %s from %s; tx hash: %s", result.method, result.sender, result.hash
        )

        receipt = await client.wait_for_transaction(result.hash, confirmations=1)
        if receipt is not None:
            logging.info("Included in block %s", receipt["blockNumber"])


if __name__ == "__main__":
    asyncio.run(main())
