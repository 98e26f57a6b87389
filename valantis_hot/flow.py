"""End-to-end swap against the HOT solver for a configured chain.

The flow is strictly sequential: price lookup, quote request, optional
partial-fill rebuild, then submission. A quote without a signed payload
ends the flow without submitting anything.
"""

from dataclasses import dataclass
from typing import Optional
import logging
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.types import TxReceipt
from .abi import FillRatio, reconstruct_payload
from .chains import ChainConfig
from .client import QuoteOptions, SolverClient, build_quote_request
from .price import PriceOracle
from .submit import DEFAULT_GAS_LIMIT, submit_payload_async, submit_payload_sync
from .types import QuoteResponse

logger = logging.getLogger(__name__)

NO_PAYLOAD_MESSAGE = "Could not get signed payload"

class MissingPoolAddressError(ValueError):
    """Raised when a quote carries a signed payload but no pool to send it to."""

@dataclass
class SwapResult:
    quote: QuoteResponse
    payload: str
    tx_hash: str
    receipt: TxReceipt

def _payload_for(quote: QuoteResponse, fill_ratio: Optional[FillRatio]) -> str:
    if not quote.pool_address:
        raise MissingPoolAddressError("quote has a signed payload but no pool_address")
    if fill_ratio is None:
        return quote.signed_payload
    payload = reconstruct_payload(quote.signed_payload, fill_ratio)
    logger.info(
        "rebuilt payload for a %d/%d fill: %s",
        fill_ratio.numerator, fill_ratio.denominator, payload,
    )
    return payload

async def swap_async(
    client: SolverClient,
    oracle: PriceOracle,
    w3: AsyncWeb3,
    account: LocalAccount,
    chain: ChainConfig,
    amount_in: int,
    fill_ratio: Optional[FillRatio] = None,
    options: Optional[QuoteOptions] = None,
    gas: int = DEFAULT_GAS_LIMIT,
) -> Optional[SwapResult]:
    """Quote and execute a swap of ``amount_in`` on ``chain``.

    Args:
        client: The solver client
        oracle: The price oracle used to set the requested output
        w3: The async web3 instance for ``chain``
        account: The trading account, used as sender and recipient
        chain: The chain configuration
        amount_in: The input amount, in the input token's smallest unit
        fill_ratio: Fraction of the quote to execute, ``None`` for a full fill
        options: Quote request options
        gas: The gas limit for the swap transaction

    Returns:
        The swap result, or ``None`` when the solver returned no payload
    """
    amount_out = await oracle.fetch_amount_out(amount_in)
    request = build_quote_request(chain, account.address, amount_in, amount_out, options)
    quote = await client.request_quote(request)
    logger.info("quote: %s", quote.model_dump())

    if not quote.has_payload:
        logger.info(NO_PAYLOAD_MESSAGE)
        return None

    payload = _payload_for(quote, fill_ratio)
    receipt = await submit_payload_async(w3, account, quote.pool_address, payload, gas)
    tx_hash = Web3.to_hex(receipt["transactionHash"])
    return SwapResult(quote=quote, payload=payload, tx_hash=tx_hash, receipt=receipt)

def swap_sync(
    client: SolverClient,
    oracle: PriceOracle,
    w3: Web3,
    account: LocalAccount,
    chain: ChainConfig,
    amount_in: int,
    fill_ratio: Optional[FillRatio] = None,
    options: Optional[QuoteOptions] = None,
    gas: int = DEFAULT_GAS_LIMIT,
) -> Optional[SwapResult]:
    """Quote and execute a swap of ``amount_in`` on ``chain`` synchronously.

    See :func:`swap_async`.
    """
    amount_out = oracle.fetch_amount_out_sync(amount_in)
    request = build_quote_request(chain, account.address, amount_in, amount_out, options)
    quote = client.request_quote_sync(request)
    logger.info("quote: %s", quote.model_dump())

    if not quote.has_payload:
        logger.info(NO_PAYLOAD_MESSAGE)
        return None

    payload = _payload_for(quote, fill_ratio)
    receipt = submit_payload_sync(w3, account, quote.pool_address, payload, gas)
    tx_hash = Web3.to_hex(receipt["transactionHash"])
    return SwapResult(quote=quote, payload=payload, tx_hash=tx_hash, receipt=receipt)
