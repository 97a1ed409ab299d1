"""
Helpers for building web3 connections from configuration.
"""

import logging
from typing import Optional

from web3 import AsyncHTTPProvider, AsyncWeb3

from ..config import ConfigManager, get_config

logger = logging.getLogger(__name__)


def get_async_web3(
    chain_name: Optional[str] = None,
    rpc_url: Optional[str] = None,
    config: Optional[ConfigManager] = None,
) -> AsyncWeb3:
    """
    Build an AsyncWeb3 instance for a chain.

    No request is sent until the connection is first used.

    Args:
        chain_name: Chain to connect to (defaults to DEFAULT_CHAIN)
        rpc_url: Use this endpoint instead of the configured one
        config: Configuration manager (defaults to get_config())

    Returns:
        AsyncWeb3 instance

    Raises:
        ValueError: If the chain is not supported
    """
    config = config or get_config()
    chains = config.chains

    if rpc_url is None:
        rpc_url = chains.get_rpc_url(chain_name or chains.DEFAULT_CHAIN)

    logger.debug(f"Connecting to {rpc_url}")
    return AsyncWeb3(
        AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": chains.REQUEST_TIMEOUT})
    )
