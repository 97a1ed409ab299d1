"""
Configuration management for batchcall.

Use get_config() to access all configuration settings.

Example:
    from batchcall.config import get_config

    config = get_config()

    # Access chain settings
    ethereum_rpc = config.chains.get_rpc_url("ethereum")

    # Multicall contract for a chain ID
    multicall = config.chains.get_multicall_address(1)
"""

from .base import BaseConfig, ConfigError
from .chains import MULTICALL3_ADDRESS, MULTICALL_ADDRESSES, ChainConfig, multicall_address_for_chain
from .manager import ConfigManager, get_config, reload_config

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "MULTICALL3_ADDRESS",
    "MULTICALL_ADDRESSES",
    "multicall_address_for_chain",
    "ConfigManager",
    "get_config",
    "reload_config",
]
