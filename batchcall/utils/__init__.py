from .web3_helper import get_async_web3

__all__ = ["get_async_web3"]
