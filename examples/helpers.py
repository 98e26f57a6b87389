import os
from typing import Tuple
from dotenv import load_dotenv
from web3 import Web3, AsyncWeb3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from valantis_hot import SolverClient, ChainConfig, get_chain

# 0.0001 wETH
AMOUNT_IN = 100_000_000_000_000

DEFAULT_CHAIN = "arbitrum"

def get_chain_config() -> ChainConfig:
    """Get the chain selected by the CHAIN environment variable.

    Returns:
        The chain configuration, Arbitrum when CHAIN is not set
    """
    load_dotenv(override=True)
    return get_chain(os.getenv("CHAIN", DEFAULT_CHAIN))

def get_account() -> LocalAccount:
    """Get the trading account from the PK environment variable.

    Raises:
        ValueError: If PK is not set
    """
    private_key = os.getenv("PK")
    if not private_key:
        raise ValueError("PK environment variable not set")
    if not private_key.startswith("0x"):
        private_key = f"0x{private_key}"
    return Account.from_key(private_key)

def get_wallet(chain: ChainConfig, is_async: bool = True) -> Tuple[Web3 | AsyncWeb3, LocalAccount]:
    """Get a Web3 instance and account from environment variables.

    Args:
        chain: The chain whose RPC variable to read
        is_async: Whether to return an async Web3 instance

    Returns:
        A tuple of (Web3 instance, LocalAccount)

    Raises:
        ValueError: If required environment variables are not set
    """
    load_dotenv(override=True)
    rpc_url = os.getenv(chain.rpc_env_var)
    if not rpc_url:
        raise ValueError(f"{chain.rpc_env_var} environment variable not set")

    w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url)) if is_async else Web3(Web3.HTTPProvider(rpc_url))
    account = get_account()
    w3.eth.default_account = account.address

    return w3, account

def get_client() -> SolverClient:
    """Get a SolverClient instance from environment variables.

    Returns:
        A SolverClient for the hosted HOT solver

    Raises:
        ValueError: If required environment variables are not set
    """
    load_dotenv(override=True)

    api_key = os.getenv("API_KEY")
    if not api_key:
        raise ValueError("API_KEY must be set")

    return SolverClient.new_client(api_key)
