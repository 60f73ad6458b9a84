from . import operations
from .configurator import ProtocolConfigurator

__all__ = ["ProtocolConfigurator", "operations"]
