"""Aptos fullnode gateway."""
from .client import AptosClient

__all__ = ["AptosClient"]
