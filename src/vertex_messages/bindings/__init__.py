"""Contract bindings for the endpoint and the off-chain order book."""

from . import endpoint, offchain_book
from .base import AbiStruct

__all__ = ["AbiStruct", "endpoint", "offchain_book"]
