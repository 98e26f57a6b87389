from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from typing import Optional, Dict, Any, Union
from web3 import Web3
import time

UINT256_MAX = 2**256 - 1

class BaseModelWithConfig(BaseModel):
    """Base model with common configuration"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    def model_dump(self, **kwargs) -> Dict[str, Any]:
        data = super().model_dump(**kwargs)
        return self._remove_none_recursive(data)

    def _remove_none_recursive(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                k: self._remove_none_recursive(v)
                for k, v in data.items()
                if v is not None
            }
        elif isinstance(data, list):
            return [self._remove_none_recursive(item) for item in data]
        return data

def _check_uint256(value: int) -> int:
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{value} does not fit in a uint256")
    return value

class BaseQuoteRequest(BaseModelWithConfig):
    """Fields shared by every solver order request, whatever the chain."""
    authorized_recipient: str
    authorized_sender: str
    chain_id: int
    token_in: str
    token_out: str
    expected_gas_price: int = 0
    request_expiry: int

    def model_post_init(self, __context) -> None:
        self.authorized_recipient = Web3.to_checksum_address(self.authorized_recipient)
        self.authorized_sender = Web3.to_checksum_address(self.authorized_sender)
        self.token_in = Web3.to_checksum_address(self.token_in)
        self.token_out = Web3.to_checksum_address(self.token_out)

    @field_validator("expected_gas_price")
    @classmethod
    def validate_gas_price(cls, value: int) -> int:
        return _check_uint256(value)

    @field_serializer("expected_gas_price")
    def serialize_gas_price(self, value: int) -> str:
        return str(value)

    def ensure_not_expired(self, now: Optional[float] = None) -> None:
        """Raise if the request expiry is not strictly in the future.

        Args:
            now: The current unix time, defaults to ``time.time()``

        Raises:
            ValueError: If ``request_expiry`` has already passed
        """
        now = time.time() if now is None else now
        if self.request_expiry <= now:
            raise ValueError(
                f"request_expiry {self.request_expiry} is not in the future (now={int(now)})"
            )

class QuoteRequest(BaseQuoteRequest):
    """Order request using the ``amount_in`` / ``amount_out_requested`` naming."""
    amount_in: int
    amount_out_requested: int

    @field_validator("amount_in", "amount_out_requested")
    @classmethod
    def validate_amounts(cls, value: int) -> int:
        return _check_uint256(value)

    @field_serializer("amount_in", "amount_out_requested")
    def serialize_amounts(self, value: int) -> str:
        return str(value)

class VolumeQuoteRequest(BaseQuoteRequest):
    """Order request using the ``volume_token_in`` / ``volume_token_out_min`` naming."""
    expected_gas_units: int = 0
    volume_token_in: int
    volume_token_out_min: int
    quote_expiry: int

    @field_validator("expected_gas_units", "volume_token_in", "volume_token_out_min")
    @classmethod
    def validate_amounts(cls, value: int) -> int:
        return _check_uint256(value)

    @field_serializer("expected_gas_units", "volume_token_in", "volume_token_out_min")
    def serialize_amounts(self, value: int) -> str:
        return str(value)

class QuoteResponse(BaseModelWithConfig):
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="allow")

    pool_address: Optional[str] = None
    signed_payload: Optional[str] = None
    volume_token_out: Optional[Union[str, int]] = None
    amount_payload_offset: Optional[int] = None
    amount_out_min_payload_offset: Optional[int] = None
    gas_price: Optional[Union[int, float]] = None

    def model_post_init(self, __context) -> None:
        if self.pool_address:
            self.pool_address = Web3.to_checksum_address(self.pool_address)

    @property
    def has_payload(self) -> bool:
        # An empty or missing payload means the solver has no fill right now
        if not self.signed_payload:
            return False
        return self.signed_payload.lower() != "0x"

class SwapContext(BaseModelWithConfig):
    """Opaque context blobs forwarded to the pool's modules."""
    external_context: bytes = b""
    verifier_context: bytes = b""
    swap_callback_context: bytes = b""
    swap_fee_module_context: bytes = b""

    def as_tuple(self) -> tuple:
        return (
            self.external_context,
            self.verifier_context,
            self.swap_callback_context,
            self.swap_fee_module_context,
        )

class SwapParams(BaseModelWithConfig):
    """Arguments of ``SovereignPool.swap``, in ABI field order."""
    is_swap_callback: bool
    is_zero_to_one: bool
    amount_in: int
    amount_out_min: int
    deadline: int
    recipient: str
    swap_token_out: str
    swap_context: SwapContext

    def model_post_init(self, __context) -> None:
        self.recipient = Web3.to_checksum_address(self.recipient)
        self.swap_token_out = Web3.to_checksum_address(self.swap_token_out)

    @field_validator("amount_in", "amount_out_min", "deadline")
    @classmethod
    def validate_uints(cls, value: int) -> int:
        return _check_uint256(value)

    def as_tuple(self) -> tuple:
        return (
            self.is_swap_callback,
            self.is_zero_to_one,
            self.amount_in,
            self.amount_out_min,
            self.deadline,
            self.recipient,
            self.swap_token_out,
            self.swap_context.as_tuple(),
        )

class TickerPrice(BaseModelWithConfig):
    symbol: str
    price: str
