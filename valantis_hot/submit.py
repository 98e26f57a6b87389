import logging
from typing import Any, Dict
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.types import TxParams, TxReceipt

logger = logging.getLogger(__name__)

# Fixed gas ceiling for pool swaps, no estimation is done
DEFAULT_GAS_LIMIT = 1_000_000

class TransactionRevertedError(Exception):
    """Raised when a submitted transaction is mined with a failed status."""

    def __init__(self, tx_hash: str, receipt: TxReceipt):
        super().__init__(f"transaction {tx_hash} reverted in block {receipt.get('blockNumber')}")
        self.tx_hash = tx_hash
        self.receipt = receipt

def build_transaction(
    account: LocalAccount,
    to: str,
    data: str,
    nonce: int,
    chain_id: int,
    base_fee_per_gas: int,
    max_priority_fee: int,
    gas: int = DEFAULT_GAS_LIMIT,
) -> TxParams:
    """Assemble an EIP-1559 call transaction with a fixed gas limit.

    The max fee is twice the latest base fee plus the priority fee.
    """
    tx: Dict[str, Any] = {
        "from": account.address,
        "to": Web3.to_checksum_address(to),
        "data": data,
        "value": 0,
        "gas": gas,
        "nonce": nonce,
        "chainId": chain_id,
        "maxFeePerGas": 2 * base_fee_per_gas + max_priority_fee,
        "maxPriorityFeePerGas": max_priority_fee,
    }
    return tx

def _check_receipt(tx_hash: str, receipt: TxReceipt) -> TxReceipt:
    if receipt["status"] == 0:
        raise TransactionRevertedError(tx_hash, receipt)
    return receipt

async def submit_payload_async(
    w3: AsyncWeb3,
    account: LocalAccount,
    to: str,
    data: str,
    gas: int = DEFAULT_GAS_LIMIT,
) -> TxReceipt:
    """Sign a call payload, broadcast it and wait for its receipt.

    Args:
        w3: The async web3 instance connected to the target chain
        account: The account signing and paying for the transaction
        to: The contract to call
        data: The ``0x``-prefixed call data
        gas: The gas limit

    Returns:
        The transaction receipt

    Raises:
        TransactionRevertedError: If the transaction is mined but reverts
    """
    nonce = await w3.eth.get_transaction_count(account.address)
    latest = await w3.eth.get_block('latest')
    max_priority_fee = await w3.eth.max_priority_fee
    chain_id = await w3.eth.chain_id
    tx = build_transaction(
        account, to, data, nonce, chain_id, latest.baseFeePerGas, max_priority_fee, gas
    )

    signed = account.sign_transaction(tx)
    tx_hash = Web3.to_hex(await w3.eth.send_raw_transaction(signed.raw_transaction))
    logger.info("submitted transaction %s to %s", tx_hash, tx["to"])

    receipt = await w3.eth.wait_for_transaction_receipt(tx_hash)
    return _check_receipt(tx_hash, receipt)

def submit_payload_sync(
    w3: Web3,
    account: LocalAccount,
    to: str,
    data: str,
    gas: int = DEFAULT_GAS_LIMIT,
) -> TxReceipt:
    """Sign a call payload, broadcast it and wait for its receipt synchronously.

    Args:
        w3: The web3 instance connected to the target chain
        account: The account signing and paying for the transaction
        to: The contract to call
        data: The ``0x``-prefixed call data
        gas: The gas limit

    Returns:
        The transaction receipt

    Raises:
        TransactionRevertedError: If the transaction is mined but reverts
    """
    nonce = w3.eth.get_transaction_count(account.address)
    latest = w3.eth.get_block('latest')
    max_priority_fee = w3.eth.max_priority_fee
    chain_id = w3.eth.chain_id
    tx = build_transaction(
        account, to, data, nonce, chain_id, latest.baseFeePerGas, max_priority_fee, gas
    )

    signed = account.sign_transaction(tx)
    tx_hash = Web3.to_hex(w3.eth.send_raw_transaction(signed.raw_transaction))
    logger.info("submitted transaction %s to %s", tx_hash, tx["to"])

    receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    return _check_receipt(tx_hash, receipt)
