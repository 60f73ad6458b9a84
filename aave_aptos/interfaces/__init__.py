"""Protocol interfaces for the aave-aptos client."""
from .gateway import ContractGateway

__all__ = ["ContractGateway"]
