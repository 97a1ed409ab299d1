"""
Exception classes for multicall batching.

Every failure raised by this package derives from BatchError so callers can
tell configuration, lookup and handshake problems apart. Transport, revert and
decoding errors raised by web3 / eth_abi during a batch are not wrapped.
"""

from typing import List, Optional


class BatchError(Exception):
    """Base exception for batch operations."""
    pass


class ConfigurationError(BatchError):
    """Raised when a contract interface cannot be turned into a multicall proxy."""
    pass


class ValidationError(BatchError):
    """Raised when input validation fails."""
    pass


class FunctionNotFoundError(ValidationError):
    """Raised when a function name is not part of the contract ABI."""

    def __init__(self, function_name: str, address: Optional[str] = None):
        message = f"Function '{function_name}' not found in contract ABI"
        if address:
            message += f" ({address})"
        super().__init__(message)
        self.function_name = function_name
        self.address = address


class AmbiguousFunctionError(ValidationError):
    """Raised when a bare function name matches several overloads."""

    def __init__(self, function_name: str, candidates: List[str]):
        super().__init__(
            f"Function '{function_name}' is overloaded, use one of: "
            f"{', '.join(candidates)}"
        )
        self.function_name = function_name
        self.candidates = candidates


class UnsupportedChainError(BatchError):
    """Raised when no multicall contract is known for the connected chain."""

    def __init__(self, chain_id: int):
        super().__init__(f"Multicall is not available on chain {chain_id}")
        self.chain_id = chain_id


class NotInitializedError(BatchError):
    """Raised when the multicall provider is used before init()."""
    pass
