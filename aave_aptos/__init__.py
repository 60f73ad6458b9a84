"""Client SDK and operator tooling for Aave v3 on Aptos."""

__version__ = "0.1.0"
