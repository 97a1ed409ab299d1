"""
Simple interface for multicalls (multiple queries in a single RPC call).

Example:
    caller = BatchCaller(staking)
    calls = [caller.make_call("settleRewards", [owner]) for owner in stakers]
    unclaimed_rewards = await caller.execute_calls(calls)
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence

from ..config import ChainConfig
from .base import ContractCall, to_call_params
from .contract import MulticallContract
from .provider import BlockIdentifier, MulticallProvider

logger = logging.getLogger(__name__)


class BatchCaller:
    """
    Batches read-only calls of one contract through the multicall contract.

    Args:
        contract: web3 contract bound to an AsyncWeb3 connection
        multicall_address: Use this multicall contract instead of the configured one
        chain_config: Chain configuration (defaults to the built-in chain table)

    Raises:
        ConfigurationError: If the contract ABI cannot be parsed
    """

    def __init__(
        self,
        contract: Any,
        multicall_address: Optional[str] = None,
        chain_config: Optional[ChainConfig] = None,
    ):
        self._provider = MulticallProvider(
            contract.w3, multicall_address=multicall_address, chain_config=chain_config
        )
        self._contract = MulticallContract.from_contract(contract)
        self._init_task: Optional[asyncio.Task] = None

    @property
    def contract(self) -> MulticallContract:
        return self._contract

    @property
    def provider(self) -> MulticallProvider:
        return self._provider

    async def _ensure_init(self) -> None:
        """Run the provider handshake once; concurrent callers share it."""
        if self._provider.is_initialized:
            return

        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._provider.init())

        task = self._init_task
        try:
            # shield: a cancelled caller must not cancel the shared handshake
            await asyncio.shield(task)
        except (Exception, asyncio.CancelledError):
            # A failed or cancelled handshake is not cached, the next batch tries again
            if self._init_task is task and task.done():
                self._init_task = None
            raise

    def make_call(self, function_name: str, params: Sequence[Any]) -> ContractCall:
        """
        Build a call descriptor for a function of the contract.

        Args:
            function_name: Function name, or full signature for overloaded functions
            params: Positional arguments, checked only when the batch is encoded

        Returns:
            ContractCall for this contract

        Raises:
            FunctionNotFoundError: If the contract has no such function
            AmbiguousFunctionError: If a bare name matches several overloads
        """
        entry = self._contract.get_function(function_name)
        return ContractCall(
            target=self._contract.address,
            name=entry["name"],
            inputs=entry.get("inputs") or (),
            outputs=entry.get("outputs") or (),
            params=to_call_params(params),
        )

    async def eth_balance_call(self, address: str) -> ContractCall:
        """Build a call returning the native balance of an address."""
        await self._ensure_init()
        return self._provider.get_eth_balance(address)

    async def execute_calls(
        self,
        calls: Sequence[ContractCall],
        block_identifier: BlockIdentifier = "latest",
    ) -> List[Any]:
        """
        Execute calls in a single multicall request.

        Args:
            calls: Call descriptors, possibly built for different contracts
            block_identifier: Block to call at

        Returns:
            Decoded results, result[i] belonging to calls[i]
        """
        await self._ensure_init()
        return await self._provider.all(calls, block_identifier)

    def __repr__(self) -> str:
        return f"BatchCaller(contract={self._contract.address})"
