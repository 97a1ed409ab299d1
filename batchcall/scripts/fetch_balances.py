#!/usr/bin/env python3
"""
Fetch ERC-20 and native balances for a list of holders in one multicall.

Usage:
    python -m batchcall.scripts.fetch_balances <token> <holder> [<holder> ...]
"""

import asyncio
import logging
import sys

from web3 import Web3

from ..batchers import BatchCaller
from ..config import get_config
from ..utils import get_async_web3

logger = logging.getLogger(__name__)

ERC20_ABI = [
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "decimals",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "name": "symbol",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
]


async def main(argv):
    """Fetch balances for the holders given on the command line."""
    if len(argv) < 2:
        logger.error("Usage: fetch_balances <token> <holder> [<holder> ...]")
        return 2

    try:
        config = get_config()
        chain_name = config.chains.DEFAULT_CHAIN
        native_token = config.chains.get_native_token(chain_name)
        w3 = get_async_web3(chain_name, config=config)

        token = w3.eth.contract(address=Web3.to_checksum_address(argv[0]), abi=ERC20_ABI)
        holders = [Web3.to_checksum_address(holder) for holder in argv[1:]]

        caller = BatchCaller(token)
        calls = [caller.make_call("symbol", []), caller.make_call("decimals", [])]
        calls += [caller.make_call("balanceOf", [holder]) for holder in holders]
        calls += [await caller.eth_balance_call(holder) for holder in holders]

        results = await caller.execute_calls(calls)
        symbol, decimals = results[0], results[1]
        token_balances = results[2:2 + len(holders)]
        native_balances = results[2 + len(holders):]

        logger.info(f"{symbol} balances on {chain_name} (chain {caller.provider.chain_id})")
        for holder, balance, native in zip(holders, token_balances, native_balances):
            logger.info(
                f"{holder}: {balance / 10 ** decimals:.6f} {symbol} "
                f"({Web3.from_wei(native, 'ether')} {native_token})"
            )
        return 0

    except Exception as e:
        logger.exception(f"Balance fetch failed: {e}")
        return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main(sys.argv[1:]))
    sys.exit(exit_code)
