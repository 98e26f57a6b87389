"""ABI codec for ``SovereignPool.swap`` calls and partial-fill payload rebuilding.

A signed solver payload is a 4-byte function selector followed by the ABI
encoding of a single ``SovereignPoolSwapParams`` tuple. A partial fill keeps
the selector and every field of the tuple except ``amountIn`` and
``amountOutMin``, which are scaled down by a :class:`FillRatio`.
"""

from dataclasses import dataclass
from typing import Tuple
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex, encode_hex, function_signature_to_4byte_selector, is_hex
from .types import SwapContext, SwapParams

SWAP_CONTEXT_ABI_TYPE = "(bytes,bytes,bytes,bytes)"
SWAP_PARAMS_ABI_TYPE = f"(bool,bool,uint256,uint256,uint256,address,address,{SWAP_CONTEXT_ABI_TYPE})"
SWAP_FUNCTION_SIGNATURE = f"swap({SWAP_PARAMS_ABI_TYPE})"
SWAP_SELECTOR = function_signature_to_4byte_selector(SWAP_FUNCTION_SIGNATURE)

SELECTOR_LENGTH = 4
# Offset word, 8 head words, 4 nested offsets and 4 zero-length words
MIN_ENCODED_PARAMS_LENGTH = 32 * (1 + 8 + 4 + 4)

class PayloadDecodingError(ValueError):
    """Raised when a payload cannot be decoded as a ``SovereignPool.swap`` call."""

@dataclass(frozen=True)
class FillRatio:
    """The fraction of a signed quote to execute, as ``numerator / denominator``."""
    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        if self.denominator == 0:
            raise ZeroDivisionError("fill ratio denominator must be non-zero")
        if self.denominator < 0 or self.numerator < 0:
            raise ValueError("fill ratio terms must be non-negative")
        if self.numerator > self.denominator:
            raise ValueError(
                f"fill ratio {self.numerator}/{self.denominator} would exceed the signed amounts"
            )

    @classmethod
    def half(cls) -> "FillRatio":
        return cls(1, 2)

    @classmethod
    def full(cls) -> "FillRatio":
        return cls(1, 1)

    def scale(self, amount: int) -> int:
        """Scale an amount by this ratio, rounding down."""
        return amount * self.numerator // self.denominator

def split_payload(payload: str) -> Tuple[bytes, bytes]:
    """Split a hex call payload into its selector and encoded arguments.

    Args:
        payload: The ``0x``-prefixed hex call data

    Returns:
        A tuple of (4-byte selector, encoded argument bytes)

    Raises:
        PayloadDecodingError: If the payload is not hex or is shorter than a selector
    """
    if not isinstance(payload, str) or not is_hex(payload):
        raise PayloadDecodingError(f"payload is not a hex string: {payload!r}")
    try:
        raw = decode_hex(payload)
    except ValueError as e:
        raise PayloadDecodingError(f"payload is not valid hex: {e}") from e

    if len(raw) < SELECTOR_LENGTH:
        raise PayloadDecodingError(f"payload of {len(raw)} bytes has no function selector")
    return raw[:SELECTOR_LENGTH], raw[SELECTOR_LENGTH:]

def decode_swap_params(data: bytes) -> SwapParams:
    """Decode the ABI-encoded swap params tuple.

    The data must be exactly the canonical encoding of one tuple: short data,
    trailing bytes and non-canonical or aliased offsets are all rejected.

    Args:
        data: The encoded arguments, without the selector

    Returns:
        The decoded swap params

    Raises:
        PayloadDecodingError: If the data does not match the swap params layout
    """
    if len(data) < MIN_ENCODED_PARAMS_LENGTH:
        raise PayloadDecodingError(
            f"encoded params are {len(data)} bytes, at least {MIN_ENCODED_PARAMS_LENGTH} expected"
        )
    try:
        (decoded,) = decode([SWAP_PARAMS_ABI_TYPE], data)
    except (DecodingError, OverflowError) as e:
        raise PayloadDecodingError(f"could not decode swap params: {e}") from e

    (
        is_swap_callback,
        is_zero_to_one,
        amount_in,
        amount_out_min,
        deadline,
        recipient,
        swap_token_out,
        context,
    ) = decoded
    params = SwapParams(
        is_swap_callback=is_swap_callback,
        is_zero_to_one=is_zero_to_one,
        amount_in=amount_in,
        amount_out_min=amount_out_min,
        deadline=deadline,
        recipient=recipient,
        swap_token_out=swap_token_out,
        swap_context=SwapContext(
            external_context=context[0],
            verifier_context=context[1],
            swap_callback_context=context[2],
            swap_fee_module_context=context[3],
        ),
    )

    canonical = encode_swap_params(params)
    if len(canonical) != len(data):
        raise PayloadDecodingError(
            f"encoded params are {len(data)} bytes, the decoded tuple encodes to {len(canonical)}"
        )
    if canonical != data:
        raise PayloadDecodingError("encoded params are not in canonical ABI layout")
    return params

def encode_swap_params(params: SwapParams) -> bytes:
    """ABI-encode a swap params tuple, without a selector."""
    return encode([SWAP_PARAMS_ABI_TYPE], [params.as_tuple()])

def encode_swap_call(params: SwapParams) -> str:
    """Build the full ``SovereignPool.swap`` call data for the given params."""
    return encode_hex(SWAP_SELECTOR + encode_swap_params(params))

def reconstruct_payload(signed_payload: str, ratio: FillRatio) -> str:
    """Rebuild a signed swap payload for a fraction of its amounts.

    ``amountIn`` and ``amountOutMin`` are scaled by ``ratio`` and rounded
    down. The selector and every other field, including the opaque swap
    context bytes, are carried over untouched.

    Args:
        signed_payload: The solver's ``0x``-prefixed signed call data
        ratio: The fraction of the quote to fill

    Returns:
        The new ``0x``-prefixed call data

    Raises:
        PayloadDecodingError: If the payload is malformed
    """
    selector, encoded = split_payload(signed_payload)
    params = decode_swap_params(encoded)

    scaled = params.model_copy(update={
        "amount_in": ratio.scale(params.amount_in),
        "amount_out_min": ratio.scale(params.amount_out_min),
    })
    return encode_hex(selector + encode_swap_params(scaled))

def partial_fill_payload(signed_payload: str) -> str:
    """Rebuild a signed swap payload for half of its amounts."""
    return reconstruct_payload(signed_payload, FillRatio.half())
