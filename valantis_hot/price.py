import logging
from typing import Optional
from httpx import AsyncClient, Client, Response
from .types import TickerPrice

logger = logging.getLogger(__name__)

BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/price"
ETH_USDC_SYMBOL = "ETHUSDC"

# wETH has 18 decimals and USDC 6
WETH_USDC_DECIMALS_GAP = 12

def amount_out_from_price(price: str, amount_in: int, decimals_gap: int = WETH_USDC_DECIMALS_GAP) -> int:
    """Estimate an output amount from a decimal price string.

    The price is truncated to its integer part before scaling, so the
    estimate is always at or below the spot value.

    Args:
        price: The ticker price, e.g. ``"2900.51000000"``
        amount_in: The input amount in the input token's smallest unit
        decimals_gap: Input token decimals minus output token decimals

    Returns:
        The estimated output amount in the output token's smallest unit
    """
    integer_price = int(price.split(".")[0])
    return integer_price * amount_in // 10 ** decimals_gap

class PriceOracle:
    """Spot price lookups against a public ticker.

    Used only to keep requested minimum outputs close to the market; any
    failure is raised to the caller rather than replaced by a default.
    """

    def __init__(self, symbol: str = ETH_USDC_SYMBOL, url: str = BINANCE_TICKER_URL):
        self.symbol = symbol
        self.url = url
        self.async_client = AsyncClient()
        self.sync_client = Client()

    async def fetch_price(self) -> TickerPrice:
        """Fetch the current ticker price.

        Raises:
            httpx.HTTPError: If the request fails or returns a non-2xx status
            pydantic.ValidationError: If the response body is malformed
        """
        response = await self.async_client.get(self.url, params={"symbol": self.symbol})
        return self._parse(response)

    def fetch_price_sync(self) -> TickerPrice:
        """Fetch the current ticker price synchronously.

        Raises:
            httpx.HTTPError: If the request fails or returns a non-2xx status
            pydantic.ValidationError: If the response body is malformed
        """
        response = self.sync_client.get(self.url, params={"symbol": self.symbol})
        return self._parse(response)

    async def fetch_amount_out(self, amount_in: int, decimals_gap: Optional[int] = None) -> int:
        price = await self.fetch_price()
        return self._estimate(price, amount_in, decimals_gap)

    def fetch_amount_out_sync(self, amount_in: int, decimals_gap: Optional[int] = None) -> int:
        price = self.fetch_price_sync()
        return self._estimate(price, amount_in, decimals_gap)

    async def aclose(self) -> None:
        await self.async_client.aclose()

    def close(self) -> None:
        self.sync_client.close()

    def _estimate(self, price: TickerPrice, amount_in: int, decimals_gap: Optional[int]) -> int:
        gap = WETH_USDC_DECIMALS_GAP if decimals_gap is None else decimals_gap
        amount_out = amount_out_from_price(price.price, amount_in, gap)
        logger.debug("%s at %s: %d in -> %d out", price.symbol, price.price, amount_in, amount_out)
        return amount_out

    def _parse(self, response: Response) -> TickerPrice:
        response.raise_for_status()
        return TickerPrice.model_validate(response.json())
