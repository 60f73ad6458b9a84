from .base import BaseClient, ContractFunction
from .core import CoreClient
from .incentives import EmissionManagerClient, RewardsControllerClient, TransferStrategyClient
from .oracle import OracleClient
from .pool import PoolClient
from .rate import RateClient
from .tokens import ATokensClient, VariableTokensClient
from .ui_data import UiIncentiveDataProviderClient, UiPoolDataProviderClient
from .underlying_tokens import UnderlyingTokensClient

__all__ = [
    "ATokensClient",
    "BaseClient",
    "ContractFunction",
    "CoreClient",
    "EmissionManagerClient",
    "OracleClient",
    "PoolClient",
    "RateClient",
    "RewardsControllerClient",
    "TransferStrategyClient",
    "UiIncentiveDataProviderClient",
    "UiPoolDataProviderClient",
    "UnderlyingTokensClient",
    "VariableTokensClient",
]
