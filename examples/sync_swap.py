"""Example of executing a HOT quote synchronously."""

import logging
from valantis_hot import PriceOracle, swap_sync
from examples.helpers import AMOUNT_IN, get_chain_config, get_client, get_wallet

def fetch_quote_and_execute() -> None:
    """Fetch a quote and execute the trade."""
    chain = get_chain_config()
    client = get_client()
    oracle = PriceOracle()
    (w3, account) = get_wallet(chain, is_async=False)

    try:
        print(f"Fetching quote on {chain.key}...")
        result = swap_sync(client, oracle, w3, account, chain, AMOUNT_IN)
    finally:
        client.close()
        oracle.close()

    if result is None:
        print("Could not get signed payload")
        return

    print(result.quote.model_dump())
    print(f"Transaction confirmed: {result.tx_hash}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    fetch_quote_and_execute()
