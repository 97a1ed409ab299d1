"""
Multicall provider.

Wraps an AsyncWeb3 connection and submits lists of ContractCall descriptors to
the on-chain multicall contract as a single eth_call. Before the first batch,
init() discovers the chain ID and the multicall address for that chain.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple, Union

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector
from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3

from ..config import ChainConfig, multicall_address_for_chain
from .base import ContractCall
from .errors import BatchError, ConfigurationError, NotInitializedError, UnsupportedChainError

logger = logging.getLogger(__name__)

# aggregate((address,bytes)[]) returns (uint256 blockNumber, bytes[] returnData)
AGGREGATE_SIGNATURE = "aggregate((address,bytes)[])"
AGGREGATE_SELECTOR = function_signature_to_4byte_selector(AGGREGATE_SIGNATURE)

GET_ETH_BALANCE_ABI = {
    "name": "getEthBalance",
    "type": "function",
    "stateMutability": "view",
    "inputs": [{"name": "addr", "type": "address"}],
    "outputs": [{"name": "balance", "type": "uint256"}],
}

BlockIdentifier = Union[int, str]


class MulticallProvider:
    """
    Batching transport bound to one AsyncWeb3 connection.

    Args:
        w3: Connected AsyncWeb3 instance
        multicall_address: Use this multicall contract instead of the configured one
        chain_config: Chain configuration; without one the built-in chain table
            and the MULTICALL_ADDRESS environment variable are used
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        multicall_address: Optional[str] = None,
        chain_config: Optional[ChainConfig] = None,
    ):
        self.w3 = w3
        self._chain_config = chain_config
        self._chain_id: Optional[int] = None
        self._multicall_address: Optional[str] = None

        self._address_override = None
        if multicall_address is not None:
            try:
                self._address_override = Web3.to_checksum_address(multicall_address)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid multicall address {multicall_address!r}: {e}"
                ) from e

    @property
    def is_initialized(self) -> bool:
        return self._multicall_address is not None

    @property
    def chain_id(self) -> Optional[int]:
        return self._chain_id

    @property
    def multicall_address(self) -> Optional[str]:
        return self._multicall_address

    def _resolve_address(self, chain_id: int) -> Optional[str]:
        try:
            if self._chain_config is not None:
                return self._chain_config.get_multicall_address(chain_id)
            return multicall_address_for_chain(chain_id)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid multicall address for chain {chain_id}: {e}") from e

    async def init(self) -> None:
        """
        Discover the connected chain and its multicall contract.

        Raises:
            UnsupportedChainError: If no multicall address is known for the chain
            ConfigurationError: If the configured multicall address is invalid
        """
        chain_id = await self.w3.eth.chain_id

        address = self._address_override or self._resolve_address(chain_id)
        if address is None:
            raise UnsupportedChainError(chain_id)

        self._chain_id = chain_id
        self._multicall_address = address
        logger.info(f"Multicall initialized on chain {chain_id} at {address}")

    def _require_init(self) -> str:
        if self._multicall_address is None:
            raise NotInitializedError("Multicall provider not initialized. Call init() first.")
        return self._multicall_address

    def get_eth_balance(self, address: str) -> ContractCall:
        """
        Build a call returning the native balance of an address.

        The call targets the multicall contract itself, so init() must have run.
        """
        return ContractCall(
            target=self._require_init(),
            name=GET_ETH_BALANCE_ABI["name"],
            inputs=GET_ETH_BALANCE_ABI["inputs"],
            outputs=GET_ETH_BALANCE_ABI["outputs"],
            params=[Web3.to_checksum_address(address)],
        )

    async def aggregate(
        self,
        calls: Sequence[ContractCall],
        block_identifier: BlockIdentifier = "latest",
    ) -> Tuple[int, List[Any]]:
        """
        Execute calls through the multicall contract in one eth_call.

        Args:
            calls: Call descriptors, possibly for different contracts
            block_identifier: Block to call at

        Returns:
            Block number reported by the multicall contract and the decoded
            results, one per call in input order

        Raises:
            NotInitializedError: If init() has not completed
            BatchError: If the reply does not hold one result per call
        """
        multicall_address = self._require_init()
        calls = list(calls)

        call_structs = [
            (Web3.to_checksum_address(call.target), call.encode_call_data())
            for call in calls
        ]
        call_data = AGGREGATE_SELECTOR + encode(["(address,bytes)[]"], [call_structs])

        logger.debug(f"Submitting {len(calls)} calls to {multicall_address} at {block_identifier}")
        raw_response = await self.w3.eth.call(
            {"to": multicall_address, "data": HexBytes(call_data)},
            block_identifier,
        )

        block_number, return_data = decode(["uint256", "bytes[]"], bytes(raw_response))
        if len(return_data) != len(calls):
            raise BatchError(
                f"Multicall returned {len(return_data)} results for {len(calls)} calls"
            )

        return block_number, [
            call.decode_result(data) for call, data in zip(calls, return_data)
        ]

    async def all(
        self,
        calls: Sequence[ContractCall],
        block_identifier: BlockIdentifier = "latest",
    ) -> List[Any]:
        """
        Execute calls and return their decoded results in input order.

        An empty list returns immediately without a network request.
        """
        self._require_init()
        calls = list(calls)
        if not calls:
            return []
        _, results = await self.aggregate(calls, block_identifier)
        return results
