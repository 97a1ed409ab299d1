"""
Batching-capable contract proxy.

Holds the address and parsed ABI of one target contract and resolves function
entries by name so call descriptors can be built without touching the network.
"""

import json
import logging
from typing import Any, Dict, List, Union

from web3 import Web3

from .base import AbiParam, abi_signature
from .errors import AmbiguousFunctionError, ConfigurationError, FunctionNotFoundError

logger = logging.getLogger(__name__)


class MulticallContract:
    """
    Address plus function signatures of a contract, as used by the batcher.

    Args:
        address: Contract address
        abi: ABI as a JSON string or a list of ABI entries

    Raises:
        ConfigurationError: If the address or ABI cannot be parsed
    """

    def __init__(self, address: str, abi: Union[str, List[Dict[str, Any]]]):
        try:
            self.address = Web3.to_checksum_address(address)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid contract address {address!r}: {e}") from e

        self._abi = self._parse_abi(abi)
        self._functions = [
            entry for entry in self._abi if entry.get("type", "function") == "function"
        ]
        logger.debug(
            f"Multicall contract {self.address} with {len(self._functions)} functions"
        )

    @classmethod
    def from_contract(cls, contract: Any) -> "MulticallContract":
        """
        Build a proxy from a web3 contract object.

        The ABI is serialized to JSON and parsed back so that only a portable
        description of the interface is kept.
        """
        try:
            abi_json = json.dumps(contract.abi)
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Contract ABI cannot be serialized: {e}") from e
        return cls(contract.address, abi_json)

    @staticmethod
    def _parse_abi(abi: Union[str, List[Dict[str, Any]]]) -> List[AbiParam]:
        if isinstance(abi, (str, bytes)):
            try:
                abi = json.loads(abi)
            except ValueError as e:
                raise ConfigurationError(f"Contract ABI is not valid JSON: {e}") from e

        if not isinstance(abi, list):
            raise ConfigurationError(
                f"Contract ABI must be a list of entries, got {type(abi).__name__}"
            )

        for index, entry in enumerate(abi):
            if not isinstance(entry, dict):
                raise ConfigurationError(f"ABI entry {index} is not an object")
            if entry.get("type", "function") != "function":
                continue
            if not entry.get("name"):
                raise ConfigurationError(f"ABI function entry {index} has no name")
            for key in ("inputs", "outputs"):
                params = entry.get(key) or []
                if not isinstance(params, list):
                    raise ConfigurationError(
                        f"ABI function '{entry['name']}' has malformed {key}"
                    )
                for param in params:
                    if not isinstance(param, dict) or "type" not in param:
                        raise ConfigurationError(
                            f"ABI function '{entry['name']}' has a {key[:-1]} without a type"
                        )
        return abi

    @property
    def abi(self) -> List[AbiParam]:
        return self._abi

    @property
    def functions(self) -> List[AbiParam]:
        """Function entries in ABI order."""
        return list(self._functions)

    def get_function(self, name: str) -> AbiParam:
        """
        Look up a function entry.

        Args:
            name: Bare function name, or full signature like 'transfer(address,uint256)'
                  to pick one of several overloads

        Returns:
            The ABI entry of the function

        Raises:
            FunctionNotFoundError: If nothing matches
            AmbiguousFunctionError: If a bare name matches several overloads
        """
        if "(" in name:
            signature = name.replace(" ", "")
            for entry in self._functions:
                if abi_signature(entry) == signature:
                    return entry
            raise FunctionNotFoundError(name, self.address)

        matches = [entry for entry in self._functions if entry["name"] == name]
        if not matches:
            raise FunctionNotFoundError(name, self.address)
        if len(matches) > 1:
            raise AmbiguousFunctionError(name, [abi_signature(entry) for entry in matches])
        return matches[0]

    def __repr__(self) -> str:
        return f"MulticallContract(address={self.address})"
