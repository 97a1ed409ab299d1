"""
Chain-specific configuration for batchcall.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from web3 import Web3

from .base import BaseConfig, ConfigError

# Multicall3 is deployed at the same address on every chain listed here
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

MULTICALL_ADDRESSES: Dict[int, str] = {
    1: MULTICALL3_ADDRESS,  # ethereum
    10: MULTICALL3_ADDRESS,  # optimism
    56: MULTICALL3_ADDRESS,  # bsc
    100: MULTICALL3_ADDRESS,  # gnosis
    137: MULTICALL3_ADDRESS,  # polygon
    250: MULTICALL3_ADDRESS,  # fantom
    8453: MULTICALL3_ADDRESS,  # base
    42161: MULTICALL3_ADDRESS,  # arbitrum
    43114: MULTICALL3_ADDRESS,  # avalanche
    11155111: MULTICALL3_ADDRESS,  # sepolia
}


def multicall_address_for_chain(
    chain_id: int,
    override: Optional[str] = None,
    addresses: Optional[Dict[int, str]] = None,
) -> Optional[str]:
    """
    Resolve the multicall contract address for a chain ID.

    Reads MULTICALL_ADDRESS from the environment when no override is given.
    Does not build or validate the application configuration.

    Args:
        chain_id: Numeric chain ID reported by the node
        override: Address used for every chain
        addresses: Chain ID table (defaults to MULTICALL_ADDRESSES)

    Returns:
        Checksum address, or None if the chain is unknown

    Raises:
        ValueError: If the resolved address is not a valid address
    """
    if override is None:
        override = os.getenv("MULTICALL_ADDRESS") or None
    if addresses is None:
        addresses = MULTICALL_ADDRESSES

    address = override or addresses.get(chain_id)
    if address is None:
        return None
    return Web3.to_checksum_address(address)


@dataclass
class ChainConfig(BaseConfig):
    """Chain-specific configuration for different blockchains."""

    # Default chain settings
    DEFAULT_CHAIN: str = BaseConfig.get_env("DEFAULT_CHAIN", "ethereum")

    # Chain-specific RPC URLs
    ETHEREUM_RPC_URL: str = BaseConfig.get_env(
        "ETHEREUM_RPC_URL", "https://eth.llamarpc.com"
    )
    BASE_RPC_URL: str = BaseConfig.get_env("BASE_RPC_URL", "https://mainnet.base.org")
    ARBITRUM_RPC_URL: str = BaseConfig.get_env(
        "ARBITRUM_RPC_URL", "https://arb1.arbitrum.io/rpc"
    )
    SEPOLIA_RPC_URL: str = BaseConfig.get_env(
        "SEPOLIA_RPC_URL", "https://rpc.sepolia.org"
    )

    # Chain IDs
    ETHEREUM_CHAIN_ID: int = 1
    BASE_CHAIN_ID: int = 8453
    ARBITRUM_CHAIN_ID: int = 42161
    SEPOLIA_CHAIN_ID: int = 11155111

    # Seconds before an RPC request is abandoned
    REQUEST_TIMEOUT: float = BaseConfig.get_env_float("REQUEST_TIMEOUT", 30.0)

    # Overrides the per-chain table, read when the config is created
    MULTICALL_ADDRESS: Optional[str] = field(
        default_factory=lambda: BaseConfig.get_env("MULTICALL_ADDRESS") or None
    )

    MULTICALL_ADDRESSES: Dict[int, str] = field(
        default_factory=lambda: dict(MULTICALL_ADDRESSES)
    )

    def _validate_config(self):
        super()._validate_config()
        if self.MULTICALL_ADDRESS and not Web3.is_address(self.MULTICALL_ADDRESS):
            raise ConfigError(f"Invalid MULTICALL_ADDRESS: {self.MULTICALL_ADDRESS}")

    @property
    def supported_chains(self) -> Dict[str, Dict]:
        """Get configuration for all supported chains."""
        return {
            "ethereum": {
                "chain_id": self.ETHEREUM_CHAIN_ID,
                "rpc_url": self.ETHEREUM_RPC_URL,
                "native_token": "ETH",
            },
            "base": {
                "chain_id": self.BASE_CHAIN_ID,
                "rpc_url": self.BASE_RPC_URL,
                "native_token": "ETH",
            },
            "arbitrum": {
                "chain_id": self.ARBITRUM_CHAIN_ID,
                "rpc_url": self.ARBITRUM_RPC_URL,
                "native_token": "ETH",
            },
            "sepolia": {
                "chain_id": self.SEPOLIA_CHAIN_ID,
                "rpc_url": self.SEPOLIA_RPC_URL,
                "native_token": "SepoliaETH",
            },
        }

    def get_chain_config(self, chain_name: str) -> Dict:
        """Get configuration for a specific chain."""
        if chain_name not in self.supported_chains:
            raise ValueError(f"Unsupported chain: {chain_name}")
        return self.supported_chains[chain_name]

    def get_rpc_url(self, chain_name: str) -> str:
        """Get RPC URL for a specific chain."""
        return self.get_chain_config(chain_name)["rpc_url"]

    def get_chain_id(self, chain_name: str) -> int:
        """Get chain ID for a specific chain."""
        return self.get_chain_config(chain_name)["chain_id"]

    def get_native_token(self, chain_name: str) -> str:
        """Get the native token symbol of a chain."""
        return self.get_chain_config(chain_name)["native_token"]

    def get_multicall_address(self, chain_id: int) -> Optional[str]:
        """
        Get the multicall contract address for a chain ID.

        Args:
            chain_id: Numeric chain ID reported by the node

        Returns:
            Checksum address, or None if the chain is unknown
        """
        return multicall_address_for_chain(
            chain_id,
            override=self.MULTICALL_ADDRESS or "",
            addresses=self.MULTICALL_ADDRESSES,
        )
