"""Example of executing half of a signed HOT quote.

The solver signs a swap for the full requested amounts; the pool accepts
the same signature for smaller amounts, so the payload is rebuilt with
``amountIn`` and ``amountOutMin`` halved before submission.
"""

import asyncio
import logging
from valantis_hot import FillRatio, PriceOracle, swap_async
from examples.helpers import AMOUNT_IN, get_chain_config, get_client, get_wallet

async def fetch_quote_and_execute() -> None:
    """Fetch a quote and execute half of it."""
    chain = get_chain_config()
    client = get_client()
    oracle = PriceOracle()
    (w3, account) = get_wallet(chain, is_async=True)

    try:
        print(f"Fetching quote on {chain.key}...")
        result = await swap_async(
            client, oracle, w3, account, chain, AMOUNT_IN, fill_ratio=FillRatio.half()
        )
    finally:
        await client.aclose()
        await oracle.aclose()

    if result is None:
        print("Could not get signed payload")
        return

    print(result.quote.model_dump())
    print(f"Payload partial fill: {result.payload}")
    print(f"Transaction confirmed: {result.tx_hash}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(fetch_quote_and_execute())
