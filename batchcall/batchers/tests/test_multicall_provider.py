"""Tests for MulticallProvider."""
import pytest
from unittest.mock import AsyncMock
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError

from batchcall.batchers.base import ContractCall
from batchcall.batchers.errors import (
    BatchError,
    ConfigurationError,
    NotInitializedError,
    UnsupportedChainError,
)
from batchcall.batchers.provider import AGGREGATE_SELECTOR, MulticallProvider
from batchcall.config import MULTICALL3_ADDRESS

from .conftest import HOLDER_A, HOLDER_B, TOKEN_ADDRESS

CUSTOM_MULTICALL = "0x5BA1e12693Dc8F9c48aAD8770482f4739bEeD696"


def balance_call(owner):
    return ContractCall(
        target=TOKEN_ADDRESS,
        name="balanceOf",
        inputs=[{"name": "owner", "type": "address"}],
        outputs=[{"name": "", "type": "uint256"}],
        params=[owner],
    )


class TestMulticallProvider:
    """Test cases for MulticallProvider."""

    @pytest.fixture
    def provider(self, fake_w3, chain_config):
        return MulticallProvider(fake_w3, chain_config=chain_config)

    def test_initial_state(self, provider):
        assert provider.is_initialized is False
        assert provider.chain_id is None
        assert provider.multicall_address is None

    @pytest.mark.asyncio
    async def test_init_resolves_multicall_address(self, provider, fake_eth):
        await provider.init()

        assert provider.is_initialized is True
        assert provider.chain_id == 1
        assert provider.multicall_address == MULTICALL3_ADDRESS
        assert fake_eth.chain_id_requests == 1

    @pytest.mark.asyncio
    async def test_init_unsupported_chain(self, provider, fake_eth):
        fake_eth._chain_id = 999

        with pytest.raises(UnsupportedChainError) as exc_info:
            await provider.init()

        assert exc_info.value.chain_id == 999
        assert provider.is_initialized is False

    @pytest.mark.asyncio
    async def test_explicit_address_overrides_config(self, fake_w3, fake_eth, chain_config):
        fake_eth._chain_id = 999
        provider = MulticallProvider(
            fake_w3, multicall_address=CUSTOM_MULTICALL.lower(), chain_config=chain_config
        )

        await provider.init()

        assert provider.multicall_address == Web3.to_checksum_address(CUSTOM_MULTICALL)
        chain_config.get_multicall_address.assert_not_called()

    def test_invalid_explicit_address(self, fake_w3):
        with pytest.raises(ConfigurationError):
            MulticallProvider(fake_w3, multicall_address="0xnothex")

    @pytest.mark.asyncio
    async def test_all_before_init(self, provider):
        with pytest.raises(NotInitializedError):
            await provider.all([balance_call(HOLDER_A)])

    def test_get_eth_balance_before_init(self, provider):
        with pytest.raises(NotInitializedError):
            provider.get_eth_balance(HOLDER_A)

    @pytest.mark.asyncio
    async def test_all_empty_skips_network(self, provider, fake_eth):
        await provider.init()

        assert await provider.all([]) == []
        assert fake_eth.requests == []

    @pytest.mark.asyncio
    async def test_all_single_round_trip(self, provider, fake_eth):
        await provider.init()

        results = await provider.all([balance_call(HOLDER_B), balance_call(HOLDER_A)])

        assert results == [250 * 10**18, 100 * 10**18]
        assert len(fake_eth.requests) == 1
        transaction, block_identifier = fake_eth.requests[0]
        assert transaction["to"] == MULTICALL3_ADDRESS
        assert bytes(transaction["data"])[:4] == AGGREGATE_SELECTOR
        assert block_identifier == "latest"

    @pytest.mark.asyncio
    async def test_aggregate_returns_block_number(self, provider, fake_eth):
        await provider.init()

        block_number, results = await provider.aggregate(
            [balance_call(HOLDER_A)], block_identifier=18_000_000
        )

        assert block_number == fake_eth.block_number
        assert results == [100 * 10**18]
        assert fake_eth.requests[0][1] == 18_000_000

    @pytest.mark.asyncio
    async def test_eth_balance_call(self, provider):
        await provider.init()

        call = provider.get_eth_balance(HOLDER_B.lower())

        assert call.target == MULTICALL3_ADDRESS
        assert call.signature == "getEthBalance(address)"
        assert call.params == (HOLDER_B,)
        assert await provider.all([call]) == [7]

    @pytest.mark.asyncio
    async def test_revert_propagates_unchanged(self, provider, fake_eth):
        await provider.init()
        error = ContractLogicError("execution reverted")
        fake_eth.error = error

        with pytest.raises(ContractLogicError) as exc_info:
            await provider.all([balance_call(HOLDER_A)])

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_result_count_mismatch(self, provider, fake_eth):
        await provider.init()
        fake_eth.call = AsyncMock(
            return_value=HexBytes(encode(["uint256", "bytes[]"], [1, [encode(["uint256"], [5])]]))
        )

        with pytest.raises(BatchError, match="1 results for 2 calls"):
            await provider.all([balance_call(HOLDER_A), balance_call(HOLDER_B)])
