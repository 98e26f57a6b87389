"""Example of swapping directly against a Sovereign Pool, without the solver.

WARNING: the minimum output is zero, only use this for mock testing.
"""

import asyncio
from web3 import Web3
from valantis_hot import SwapContext, SwapParams
from valantis_hot.abi import encode_swap_call
from valantis_hot.submit import submit_payload_async
from examples.helpers import AMOUNT_IN, get_chain_config, get_wallet

async def swap_against_pool() -> None:
    """Call SovereignPool.swap with an empty swap context."""
    chain = get_chain_config()
    if not chain.pool_address:
        raise ValueError(f"No sovereign pool configured on {chain.key}")

    (w3, account) = get_wallet(chain, is_async=True)
    latest = await w3.eth.get_block('latest')

    params = SwapParams(
        is_swap_callback=False,
        is_zero_to_one=True,
        amount_in=AMOUNT_IN,
        amount_out_min=0,
        deadline=latest.timestamp + 100,
        recipient=account.address,
        swap_token_out=chain.token_out,
        swap_context=SwapContext(),
    )

    print("Submitting swap...")
    receipt = await submit_payload_async(w3, account, chain.pool_address, encode_swap_call(params))
    print(f"Transaction confirmed: {Web3.to_hex(receipt['transactionHash'])}")

if __name__ == "__main__":
    asyncio.run(swap_against_pool())
