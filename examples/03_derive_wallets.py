"""Example: derive per-user wallets and check their balances."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from wallact import STORAGE_ABI, Wallact, derive_wallet, from_smallest_unit

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

USER_IDS = ("userid-1", "userid-2", "userid-3")


async def main() -> None:
    """Print the deterministic address and balance of a few users."""

    shard = os.getenv("WALLET_SHARD", "anyShard")
    rpc_url = os.getenv("RPC_URL", "https://rpc-amoy.polygon.technology/")
    contract_address = os.getenv(
        "CONTRACT_ADDRESS", "0x2bF148eFDF0f428E8BAAE012911B918dcB357312"
    )
    async with Wallact(rpc_url, contract_address, STORAGE_ABI) as client:
        logging.info("Latest block: %s", await client.fetch_latest_block())
        for user_id in USER_IDS:
            wallet = derive_wallet(user_id, shard)
            balance = await client.fetch_wallet_balance(wallet.address)
            logging.info(
                "%s -> %s (%s)", user_id, wallet.address, from_smallest_unit(balance)
            )


if __name__ == "__main__":
    asyncio.run(main())
