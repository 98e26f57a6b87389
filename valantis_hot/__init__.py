from .abi import FillRatio, PayloadDecodingError, partial_fill_payload, reconstruct_payload
from .chains import ChainConfig, FieldNaming, UnknownChainError, get_chain
from .client import SolverClient, SolverClientError, QuoteOptions, build_quote_request
from .flow import MissingPoolAddressError, SwapResult, swap_async, swap_sync
from .http import SolverHttpClient
from .price import PriceOracle
from .submit import TransactionRevertedError
from .types import QuoteRequest, VolumeQuoteRequest, QuoteResponse, SwapParams, SwapContext

__all__ = [
    "FillRatio",
    "PayloadDecodingError",
    "partial_fill_payload",
    "reconstruct_payload",
    "ChainConfig",
    "FieldNaming",
    "UnknownChainError",
    "get_chain",
    "SolverClient",
    "SolverClientError",
    "QuoteOptions",
    "build_quote_request",
    "MissingPoolAddressError",
    "SwapResult",
    "swap_async",
    "swap_sync",
    "SolverHttpClient",
    "PriceOracle",
    "TransactionRevertedError",
    "QuoteRequest",
    "VolumeQuoteRequest",
    "QuoteResponse",
    "SwapParams",
    "SwapContext",
]
