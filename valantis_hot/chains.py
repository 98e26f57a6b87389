from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

class FieldNaming(str, Enum):
    """The amount field names a chain's solver expects in an order request."""
    # amount_in / amount_out_requested
    AMOUNT = "amount"
    # volume_token_in / volume_token_out_min
    VOLUME = "volume"

class UnknownChainError(KeyError):
    pass

@dataclass(frozen=True)
class ChainConfig:
    key: str
    chain_id: int
    token_in: str
    token_out: str
    rpc_env_var: str
    naming: FieldNaming
    # Sovereign pool for direct swaps; solver quotes carry their own pool address
    pool_address: Optional[str] = None

ARBITRUM = ChainConfig(
    key="arbitrum",
    chain_id=42161,
    token_in="0x82af49447d8a07e3bd95bd0d56f35241523fbab1",  # wETH
    token_out="0xaf88d065e77c8cc2239327c5edb3a432268e5831",  # USDC
    rpc_env_var="ARBITRUM_RPC",
    naming=FieldNaming.AMOUNT,
    pool_address="0x6d0ed01ef1d3200d0ce47e969e939be78e5defc1",
)

GNOSIS = ChainConfig(
    key="gnosis",
    chain_id=100,
    token_in="0x6A023CCd1ff6F2045C3309768eAd9E68F978f6e1",  # wETH
    token_out="0xDDAfbb505ad214D7b80b1f830fcCc89B60fb7A83",  # USDC
    rpc_env_var="GNOSIS_RPC",
    naming=FieldNaming.VOLUME,
)

MAINNET = ChainConfig(
    key="mainnet",
    chain_id=1,
    token_in="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",  # wETH
    token_out="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",  # USDC
    rpc_env_var="MAINNET_RPC",
    naming=FieldNaming.VOLUME,
)

CHAINS: Dict[str, ChainConfig] = {chain.key: chain for chain in (ARBITRUM, GNOSIS, MAINNET)}

def get_chain(key: str) -> ChainConfig:
    """Look up a chain configuration by key.

    Raises:
        UnknownChainError: If no chain is configured under ``key``
    """
    try:
        return CHAINS[key.lower()]
    except KeyError:
        raise UnknownChainError(f"unknown chain {key!r}, expected one of {sorted(CHAINS)}") from None
