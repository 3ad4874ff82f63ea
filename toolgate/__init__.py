"""Tool-call gateways for wallet automation and Splitwise expenses."""

__version__ = "1.0.0"
