"""Tests for the end-to-end swap flow."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from eth_utils import decode_hex
from hexbytes import HexBytes
from web3 import Web3

from valantis_hot import flow
from valantis_hot.abi import FillRatio, decode_swap_params, reconstruct_payload
from valantis_hot.chains import get_chain
from valantis_hot.client import SolverClient, SolverClientError
from valantis_hot.flow import MissingPoolAddressError

POOL = "0x6d0ed01ef1d3200d0ce47e969e939be78e5defc1"
TX_HASH = HexBytes("0x" + "cd" * 32)
RECEIPT = {"status": 1, "transactionHash": TX_HASH, "blockNumber": 1}


def _client(body: dict, status: int = 200) -> SolverClient:
    client = SolverClient.new_client("test-key")
    transport = httpx.MockTransport(lambda request: httpx.Response(status, json=body))
    client.http_client.async_client = httpx.AsyncClient(transport=transport)
    client.http_client.sync_client = httpx.Client(transport=transport)
    return client


def _oracle(amount_out: int = 290_000) -> MagicMock:
    oracle = MagicMock()
    oracle.fetch_amount_out = AsyncMock(return_value=amount_out)
    oracle.fetch_amount_out_sync.return_value = amount_out
    return oracle


@pytest.fixture
def submit_async(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=RECEIPT)
    monkeypatch.setattr(flow, "submit_payload_async", mock)
    return mock


@pytest.fixture
def submit_sync(monkeypatch) -> MagicMock:
    mock = MagicMock(return_value=RECEIPT)
    monkeypatch.setattr(flow, "submit_payload_sync", mock)
    return mock


class TestSwapAsync:
    """Tests for swap_async."""

    @pytest.mark.asyncio
    async def test_full_fill(self, account, signed_payload, submit_async):
        """Test the signed payload is submitted unchanged."""
        client = _client({"pool_address": POOL, "signed_payload": signed_payload})
        w3 = MagicMock()

        result = await flow.swap_async(
            client, _oracle(), w3, account, get_chain("arbitrum"), 100_000_000_000_000
        )

        assert result.payload == signed_payload
        assert result.tx_hash == Web3.to_hex(TX_HASH)
        submit_async.assert_awaited_once_with(
            w3, account, Web3.to_checksum_address(POOL), signed_payload, flow.DEFAULT_GAS_LIMIT
        )

    @pytest.mark.asyncio
    async def test_partial_fill(self, account, signed_payload, submit_async):
        """Test half of the quote is submitted with the same selector."""
        client = _client({"pool_address": POOL, "signed_payload": signed_payload})

        result = await flow.swap_async(
            client, _oracle(), MagicMock(), account, get_chain("arbitrum"),
            100_000_000_000_000, fill_ratio=FillRatio.half(),
        )

        assert result.payload == reconstruct_payload(signed_payload, FillRatio.half())
        submitted = decode_hex(submit_async.await_args.args[3])
        assert submitted[:4] == decode_hex(signed_payload)[:4]
        params = decode_swap_params(submitted[4:])
        assert params.amount_in == 50_000_000_000_000
        assert params.amount_out_min == 145_000

    @pytest.mark.asyncio
    async def test_missing_payload_stops(self, account, submit_async, monkeypatch):
        """Test nothing is decoded or submitted without a signed payload."""
        reconstruct = MagicMock()
        monkeypatch.setattr(flow, "reconstruct_payload", reconstruct)
        client = _client({"signed_payload": None})

        result = await flow.swap_async(
            client, _oracle(), MagicMock(), account, get_chain("arbitrum"),
            100_000_000_000_000, fill_ratio=FillRatio.half(),
        )

        assert result is None
        reconstruct.assert_not_called()
        submit_async.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_hex_payload_stops(self, account, submit_async):
        """Test a bare 0x payload is treated as no fill."""
        client = _client({"pool_address": POOL, "signed_payload": "0x"})

        result = await flow.swap_async(client, _oracle(), MagicMock(), account, get_chain("arbitrum"), 1)

        assert result is None
        submit_async.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_pool_address(self, account, signed_payload, submit_async):
        """Test a payload without a pool to send it to is rejected before submission."""
        client = _client({"signed_payload": signed_payload})

        with pytest.raises(MissingPoolAddressError):
            await flow.swap_async(
                client, _oracle(), MagicMock(), account, get_chain("arbitrum"), 100_000_000_000_000
            )
        submit_async.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oracle_failure_aborts(self, account, submit_async):
        """Test a failed price lookup stops the flow before quoting."""
        oracle = _oracle()
        oracle.fetch_amount_out.side_effect = httpx.ConnectError("down")
        client = _client({})

        with pytest.raises(httpx.ConnectError):
            await flow.swap_async(client, oracle, MagicMock(), account, get_chain("arbitrum"), 1)
        submit_async.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_solver_error_aborts(self, account, submit_async):
        """Test a solver error propagates."""
        client = _client({"error": "bad request"}, status=400)

        with pytest.raises(SolverClientError):
            await flow.swap_async(client, _oracle(), MagicMock(), account, get_chain("gnosis"), 1)
        submit_async.assert_not_awaited()


class TestSwapSync:
    """Tests for swap_sync."""

    def test_partial_fill(self, account, signed_payload, submit_sync):
        """Test the blocking flow submits the rebuilt payload."""
        client = _client({"pool_address": POOL, "signed_payload": signed_payload})

        result = flow.swap_sync(
            client, _oracle(), MagicMock(), account, get_chain("arbitrum"),
            100_000_000_000_000, fill_ratio=FillRatio.half(),
        )

        assert result.receipt == RECEIPT
        submit_sync.assert_called_once()
        assert submit_sync.call_args.args[3] == result.payload

    def test_missing_payload_stops(self, account, submit_sync):
        """Test the blocking flow ends quietly without a payload."""
        client = _client({})

        assert flow.swap_sync(client, _oracle(), MagicMock(), account, get_chain("mainnet"), 1) is None
        submit_sync.assert_not_called()

    def test_missing_pool_address(self, account, signed_payload, submit_sync):
        """Test the blocking flow refuses a payload without a pool."""
        client = _client({"signed_payload": signed_payload, "pool_address": None})

        with pytest.raises(MissingPoolAddressError):
            flow.swap_sync(
                client, _oracle(), MagicMock(), account, get_chain("arbitrum"),
                100_000_000_000_000, fill_ratio=FillRatio.half(),
            )
        submit_sync.assert_not_called()
