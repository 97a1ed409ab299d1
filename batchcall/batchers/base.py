"""
Call descriptors for multicall batching.

A ContractCall describes one pending read call: target contract, function
name, ABI input/output parameters and argument values. Encoding and decoding
are delegated to eth_abi.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence, Tuple

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector
from eth_utils.abi import collapse_if_tuple


AbiParam = Dict[str, Any]


def _freeze(value: Any) -> Any:
    """Read-only copy of nested ABI dicts and lists."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class ContractCall:
    """A single contract call waiting to be batched."""

    target: str
    name: str
    inputs: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    outputs: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    params: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Void functions may come without an "outputs" key at all
        object.__setattr__(self, "inputs", _freeze(tuple(self.inputs or ())))
        object.__setattr__(self, "outputs", _freeze(tuple(self.outputs or ())))
        object.__setattr__(self, "params", _freeze(tuple(self.params or ())))

    def __hash__(self):
        return hash((self.target, self.name, self.input_types, self.output_types, self.params))

    @property
    def input_types(self) -> Tuple[str, ...]:
        """Canonical ABI types of the inputs, e.g. ('address', '(uint256,bool)[]')."""
        return tuple(collapse_if_tuple(param) for param in self.inputs)

    @property
    def output_types(self) -> Tuple[str, ...]:
        """Canonical ABI types of the outputs."""
        return tuple(collapse_if_tuple(param) for param in self.outputs)

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    def encode_call_data(self) -> bytes:
        """
        Encode selector and arguments.

        Returns:
            Calldata for this call

        Raises:
            eth_abi encoding errors when params do not match the inputs
        """
        selector = function_signature_to_4byte_selector(self.signature)
        return selector + encode(list(self.input_types), list(self.params))

    def decode_result(self, data: bytes) -> Any:
        """
        Decode the return data of this call.

        A single output is returned as a bare value, no outputs as an empty
        tuple, several outputs as a tuple.
        """
        if not self.outputs:
            return ()
        decoded = decode(list(self.output_types), data)
        if len(decoded) == 1:
            return decoded[0]
        return decoded


def abi_signature(entry: AbiParam) -> str:
    """Build 'name(type,...)' for a function ABI entry."""
    types = ",".join(collapse_if_tuple(param) for param in entry.get("inputs") or [])
    return f"{entry['name']}({types})"


def to_call_params(params: Sequence[Any]) -> Tuple[Any, ...]:
    """Normalize positional call arguments to a tuple."""
    if params is None:
        return ()
    if isinstance(params, (str, bytes)):
        raise TypeError("params must be a sequence of arguments, not a single value")
    return tuple(params)
