"""
Pytest configuration for batcher tests.

FakeEth stands in for AsyncWeb3.eth: it answers multicall aggregate requests by
decoding the real calldata with eth_abi and encoding real replies, so no RPC
node is needed.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector
from hexbytes import HexBytes
from web3 import Web3

from batchcall.batchers.provider import AGGREGATE_SELECTOR
from batchcall.config import MULTICALL3_ADDRESS

TOKEN_ADDRESS = Web3.to_checksum_address("0x6b175474e89094c44da98b954eedeac495271d0f")
PAIR_ADDRESS = Web3.to_checksum_address("0xa478c2975ab1ea89e8196811f51a7b7ade33eb11")
HOLDER_A = Web3.to_checksum_address("0x1111111111111111111111111111111111111111")
HOLDER_B = Web3.to_checksum_address("0x2222222222222222222222222222222222222222")

TOKEN_ABI = [
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "totalSupply",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "poke",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
    },
    {
        "name": "Transfer",
        "type": "event",
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "from", "type": "address"},
            {"indexed": True, "name": "to", "type": "address"},
            {"indexed": False, "name": "value", "type": "uint256"},
        ],
    },
]

PAIR_ABI = [
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "reserve0", "type": "uint112"},
            {"name": "reserve1", "type": "uint112"},
            {"name": "blockTimestampLast", "type": "uint32"},
        ],
    },
]


def _selector(signature):
    return function_signature_to_4byte_selector(signature)


class FakeEth:
    """In-memory replacement for AsyncWeb3.eth."""

    def __init__(self, chain_id=1, block_number=18_500_000):
        self._chain_id = chain_id
        self.block_number = block_number
        self.chain_id_requests = 0
        self.requests = []
        self.error = None
        self.balances = {HOLDER_A: 100 * 10**18, HOLDER_B: 250 * 10**18}
        self.eth_balances = {HOLDER_A: 3 * 10**18, HOLDER_B: 7}
        self.total_supply = 10**27
        self.reserves = (5_000, 7_000, 1_700_000_000)

    @property
    def chain_id(self):
        self.chain_id_requests += 1
        return self._fetch_chain_id()

    async def _fetch_chain_id(self):
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self._chain_id

    async def call(self, transaction, block_identifier="latest"):
        self.requests.append((transaction, block_identifier))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error

        data = bytes(transaction["data"])
        assert data[:4] == AGGREGATE_SELECTOR
        (call_structs,) = decode(["(address,bytes)[]"], data[4:])

        return_data = [
            self._dispatch(Web3.to_checksum_address(target), call_data)
            for target, call_data in call_structs
        ]
        return HexBytes(encode(["uint256", "bytes[]"], [self.block_number, return_data]))

    def _dispatch(self, target, call_data):
        selector, args = call_data[:4], call_data[4:]

        if (
            target == Web3.to_checksum_address(MULTICALL3_ADDRESS)
            and selector == _selector("getEthBalance(address)")
        ):
            (owner,) = decode(["address"], args)
            return encode(["uint256"], [self.eth_balances.get(Web3.to_checksum_address(owner), 0)])

        if target == TOKEN_ADDRESS:
            if selector == _selector("balanceOf(address)"):
                (owner,) = decode(["address"], args)
                return encode(["uint256"], [self.balances.get(Web3.to_checksum_address(owner), 0)])
            if selector == _selector("totalSupply()"):
                return encode(["uint256"], [self.total_supply])
            if selector == _selector("poke()"):
                return b""

        if target == PAIR_ADDRESS and selector == _selector("getReserves()"):
            return encode(["uint112", "uint112", "uint32"], list(self.reserves))

        raise AssertionError(f"Unexpected call to {target}: {call_data.hex()}")


@pytest.fixture
def fake_eth():
    return FakeEth()


@pytest.fixture
def fake_w3(fake_eth):
    return SimpleNamespace(eth=fake_eth)


@pytest.fixture
def token_contract(fake_w3):
    """Contract handle shaped like a web3 contract object."""
    return Mock(address=TOKEN_ADDRESS, abi=TOKEN_ABI, w3=fake_w3)


@pytest.fixture
def pair_contract(fake_w3):
    return Mock(address=PAIR_ADDRESS, abi=PAIR_ABI, w3=fake_w3)


@pytest.fixture
def chain_config():
    """Chain configuration without environment overrides."""
    mock_config = Mock()
    mock_config.get_multicall_address.side_effect = (
        lambda chain_id: MULTICALL3_ADDRESS if chain_id in (1, 8453) else None
    )
    return mock_config
