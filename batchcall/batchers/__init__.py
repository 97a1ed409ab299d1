"""
Multicall batching utilities.

This package batches read-only contract calls into a single eth_call through
the on-chain multicall contract, reducing RPC round trips.
"""

from .base import ContractCall
from .contract import MulticallContract
from .errors import (
    AmbiguousFunctionError,
    BatchError,
    ConfigurationError,
    FunctionNotFoundError,
    NotInitializedError,
    UnsupportedChainError,
    ValidationError,
)
from .multicall import BatchCaller
from .provider import MulticallProvider

__all__ = [
    'BatchCaller',
    'ContractCall',
    'MulticallContract',
    'MulticallProvider',
    'BatchError',
    'ConfigurationError',
    'ValidationError',
    'FunctionNotFoundError',
    'AmbiguousFunctionError',
    'UnsupportedChainError',
    'NotInitializedError',
]
