"""Pytest configuration and fixtures."""

import pytest
from eth_account import Account
from eth_utils import encode_hex

from valantis_hot.abi import SWAP_SELECTOR, encode_swap_params
from valantis_hot.types import SwapContext, SwapParams

RECIPIENT = "0x1111111111111111111111111111111111111111"
USDC_ARBITRUM = "0xaf88d065e77c8cc2239327c5edb3a432268e5831"
POOL_ADDRESS = "0x6d0ed01ef1d3200d0ce47e969e939be78e5defc1"
PRIVATE_KEY = "0x" + "11" * 32


@pytest.fixture
def swap_params() -> SwapParams:
    """Swap params as a solver would sign them for 0.0001 wETH."""
    return SwapParams(
        is_swap_callback=False,
        is_zero_to_one=True,
        amount_in=100_000_000_000_000,
        amount_out_min=290_000,
        deadline=1_700_000_030,
        recipient=RECIPIENT,
        swap_token_out=USDC_ARBITRUM,
        swap_context=SwapContext(
            external_context=b"",
            verifier_context=bytes(range(65)),
            swap_callback_context=b"\x01\x02\x03",
            swap_fee_module_context=b"",
        ),
    )


@pytest.fixture
def signed_payload(swap_params: SwapParams) -> str:
    """Selector plus encoded swap params, as returned by the solver."""
    return encode_hex(SWAP_SELECTOR + encode_swap_params(swap_params))


@pytest.fixture
def account():
    """Local signing account."""
    return Account.from_key(PRIVATE_KEY)
