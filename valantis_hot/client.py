from dataclasses import dataclass
from typing import Optional, Union
import logging
import math
import time
from httpx import Response
from .chains import ChainConfig, FieldNaming
from .http import SolverHttpClient
from .types import QuoteRequest, QuoteResponse, VolumeQuoteRequest

logger = logging.getLogger(__name__)

HOT_SOLVER_URL = "https://hot.valantis.xyz"

SOLVER_ORDER_ROUTE = "/solver/order"

AnyQuoteRequest = Union[QuoteRequest, VolumeQuoteRequest]

class SolverClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

@dataclass
class QuoteOptions:
    request_expiry_seconds: int = 30
    quote_expiry_seconds: int = 120
    expected_gas_price: int = 0
    expected_gas_units: int = 0

    @classmethod
    def new(cls) -> "QuoteOptions":
        return cls()

    def with_request_expiry(self, seconds: int) -> "QuoteOptions":
        self.request_expiry_seconds = seconds
        return self

    def with_quote_expiry(self, seconds: int) -> "QuoteOptions":
        self.quote_expiry_seconds = seconds
        return self

    def with_expected_gas_price(self, expected_gas_price: int) -> "QuoteOptions":
        self.expected_gas_price = expected_gas_price
        return self

    def with_expected_gas_units(self, expected_gas_units: int) -> "QuoteOptions":
        self.expected_gas_units = expected_gas_units
        return self

def build_quote_request(
    chain: ChainConfig,
    sender: str,
    amount_in: int,
    amount_out: int,
    options: Optional[QuoteOptions] = None,
    recipient: Optional[str] = None,
    now: Optional[float] = None,
) -> AnyQuoteRequest:
    """Build an order request in the field naming the chain's solver expects.

    Args:
        chain: The chain to trade on
        sender: The address that will call the pool
        amount_in: The input amount, in the input token's smallest unit
        amount_out: The requested minimum output amount
        options: Expiry and gas hints, defaults to ``QuoteOptions()``
        recipient: The address receiving the output token, defaults to ``sender``
        now: The current unix time, defaults to ``time.time()``

    Returns:
        A ``QuoteRequest`` or ``VolumeQuoteRequest``
    """
    options = options or QuoteOptions()
    now_seconds = math.ceil(time.time() if now is None else now)
    common = dict(
        authorized_recipient=recipient or sender,
        authorized_sender=sender,
        chain_id=chain.chain_id,
        token_in=chain.token_in,
        token_out=chain.token_out,
        expected_gas_price=options.expected_gas_price,
        request_expiry=now_seconds + options.request_expiry_seconds,
    )

    if chain.naming == FieldNaming.VOLUME:
        return VolumeQuoteRequest(
            **common,
            expected_gas_units=options.expected_gas_units,
            volume_token_in=amount_in,
            volume_token_out_min=amount_out,
            quote_expiry=now_seconds + options.quote_expiry_seconds,
        )
    return QuoteRequest(**common, amount_in=amount_in, amount_out_requested=amount_out)

class SolverClient:
    """Client for requesting signed swap quotes from the HOT solver.

    A quote either carries a signed ``SovereignPool.swap`` payload ready to
    submit, or no payload at all when the solver has nothing to fill.
    """

    def __init__(self, api_key: str, base_url: str):
        """Initialize a new SolverClient.

        Args:
            api_key: The API key for authentication
            base_url: The base URL of the solver API
        """
        self.http_client = SolverHttpClient(base_url, api_key)

    @classmethod
    def new_client(cls, api_key: str) -> "SolverClient":
        """Create a new client for the hosted HOT solver.

        Args:
            api_key: The API key for authentication

        Returns:
            A new SolverClient
        """
        return cls(api_key, HOT_SOLVER_URL)

    async def request_quote(self, request: AnyQuoteRequest) -> QuoteResponse:
        """Request a signed quote for the given order.

        Args:
            request: The order request to send

        Returns:
            The solver's quote; check ``has_payload`` before submitting

        Raises:
            ValueError: If the request has already expired
            SolverClientError: If the solver rejects the request
        """
        request.ensure_not_expired()
        response = await self.http_client.post(SOLVER_ORDER_ROUTE, request.model_dump())
        return self._handle_quote_response(response)

    def request_quote_sync(self, request: AnyQuoteRequest) -> QuoteResponse:
        """Request a signed quote for the given order synchronously.

        Args:
            request: The order request to send

        Returns:
            The solver's quote; check ``has_payload`` before submitting

        Raises:
            ValueError: If the request has already expired
            SolverClientError: If the solver rejects the request
        """
        request.ensure_not_expired()
        response = self.http_client.post_sync(SOLVER_ORDER_ROUTE, request.model_dump())
        return self._handle_quote_response(response)

    async def aclose(self) -> None:
        await self.http_client.aclose()

    def close(self) -> None:
        self.http_client.close()

    def _handle_quote_response(self, response: Response) -> QuoteResponse:
        """Handle a solver response that may carry no quote.

        Args:
            response: The API response to handle

        Returns:
            The parsed quote, empty for 204 responses

        Raises:
            SolverClientError: If the response indicates an error
        """
        if response.status_code == 204:  # NO_CONTENT
            logger.info("solver returned no content")
            return QuoteResponse()
        elif response.status_code == 200:  # OK
            quote = QuoteResponse.model_validate(response.json())
            if not quote.has_payload:
                logger.info("solver returned a quote without a signed payload")
            return quote
        else:
            raise SolverClientError(
                response.text,
                status_code=response.status_code
            )
