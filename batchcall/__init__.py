"""Batch read-only smart contract calls into a single RPC request."""

from .batchers import (
    AmbiguousFunctionError,
    BatchCaller,
    BatchError,
    ConfigurationError,
    ContractCall,
    FunctionNotFoundError,
    MulticallContract,
    MulticallProvider,
    NotInitializedError,
    UnsupportedChainError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "BatchCaller",
    "ContractCall",
    "MulticallContract",
    "MulticallProvider",
    "BatchError",
    "ConfigurationError",
    "ValidationError",
    "FunctionNotFoundError",
    "AmbiguousFunctionError",
    "UnsupportedChainError",
    "NotInitializedError",
]
