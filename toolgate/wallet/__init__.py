"""Wallet gateway: smart-wallet tools backed by the wallet-automation SDK."""

from .service import WalletGateway
from .tools import wallet_registry

__all__ = ["WalletGateway", "wallet_registry"]
