"""Tests for the spot price oracle."""

import httpx
import pytest
from pydantic import ValidationError

from valantis_hot.price import BINANCE_TICKER_URL, PriceOracle, amount_out_from_price


def _oracle(handler) -> PriceOracle:
    oracle = PriceOracle()
    transport = httpx.MockTransport(handler)
    oracle.async_client = httpx.AsyncClient(transport=transport)
    oracle.sync_client = httpx.Client(transport=transport)
    return oracle


def _ticker(price: str):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["symbol"] == "ETHUSDC"
        assert str(request.url).startswith(BINANCE_TICKER_URL)
        return httpx.Response(200, json={"symbol": "ETHUSDC", "price": price})
    return handler


class TestAmountOutFromPrice:
    """Tests for the output estimate."""

    def test_truncates_price(self):
        """Test the fractional part of the price is dropped before scaling."""
        assert amount_out_from_price("2900.99000000", 100_000_000_000_000) == 290_000

    def test_integer_price(self):
        """Test a price without a fractional part."""
        assert amount_out_from_price("3000", 10**18) == 3_000_000_000

    def test_rounds_down(self):
        """Test the scaled result is floored."""
        assert amount_out_from_price("1", 999_999_999_999) == 0

    def test_custom_decimals(self):
        """Test a different decimals gap."""
        assert amount_out_from_price("2", 10**6, decimals_gap=0) == 2_000_000


class TestPriceOracle:
    """Tests for PriceOracle lookups."""

    @pytest.mark.asyncio
    async def test_fetch_amount_out(self):
        """Test the async estimate."""
        oracle = _oracle(_ticker("2900.51000000"))
        assert await oracle.fetch_amount_out(100_000_000_000_000) == 290_000

    def test_fetch_amount_out_sync(self):
        """Test the blocking estimate."""
        oracle = _oracle(_ticker("3100.00000000"))
        assert oracle.fetch_amount_out_sync(100_000_000_000_000) == 310_000

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        """Test a failed lookup is raised, not replaced by a default."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"msg": "rate limited"})

        with pytest.raises(httpx.HTTPStatusError):
            await _oracle(handler).fetch_amount_out(1)

    def test_malformed_body(self):
        """Test a body without a price is rejected."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"symbol": "ETHUSDC"})

        with pytest.raises(ValidationError):
            _oracle(handler).fetch_amount_out_sync(1)

    def test_malformed_price(self):
        """Test a non-numeric price is rejected."""
        with pytest.raises(ValueError):
            _oracle(_ticker("n/a")).fetch_amount_out_sync(1)


class TestClose:
    """Tests for releasing the oracle's connections."""

    @pytest.mark.asyncio
    async def test_aclose(self):
        """Test the async client is closed."""
        oracle = _oracle(_ticker("1"))
        await oracle.aclose()
        assert oracle.async_client.is_closed

    def test_close(self):
        """Test the blocking client is closed."""
        oracle = _oracle(_ticker("1"))
        oracle.close()
        assert oracle.sync_client.is_closed
