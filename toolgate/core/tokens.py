"""
Token resolution for wallet tool parameters.

Turns a user-supplied symbol, name or address into the identifier the wallet
SDK expects on a given chain.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .address import ZERO_ADDRESS, is_evm_address, looks_like_address
from .chains import get_chain_config
from .errors import InvalidFormatError, UnsupportedChainError

logger = logging.getLogger(__name__)

# The wallet SDK's placeholder for a chain's native currency.
NATIVE_TOKEN = "eth"

_NATIVE_ALIASES = frozenset({"eth", "avax", "native"})


def is_native_token(value: Optional[str]) -> bool:
    return not value or value == NATIVE_TOKEN or value.lower() == ZERO_ADDRESS


def resolve_token(value: Any, chain_id: int, *, field: str = "token") -> str:
    """Resolve ``value`` to a contract address or the native sentinel.

    Unknown chains raise ``UnsupportedChainError``; the resolver never
    substitutes a default chain. Unknown symbols are passed through unchanged
    so the SDK can reject them with its own message.
    """

    if value is None or value == "":
        return NATIVE_TOKEN

    if not isinstance(value, str):
        raise InvalidFormatError(value, f"must be a string, got {type(value).__name__}", field=field)

    stripped = value.strip()
    if is_evm_address(stripped):
        return stripped

    lowered = stripped.lower()
    if not lowered:
        return NATIVE_TOKEN
    if lowered in _NATIVE_ALIASES:
        return NATIVE_TOKEN

    chain = get_chain_config(chain_id)
    if chain is None:
        raise UnsupportedChainError(chain_id)

    if lowered == chain.native_symbol.lower() or lowered in chain.native_aliases:
        return NATIVE_TOKEN

    address = chain.symbol_table.get(lowered)
    if address:
        logger.debug("Token symbol resolved: %s -> %s on chain %s", value, address, chain_id)
        return address

    if looks_like_address(lowered):
        raise InvalidFormatError(value, "must be a 42-character hex address", field=field)

    logger.warning("Token not found in symbol table for chain %s: %s", chain_id, value)
    return value


def token_info(address: Optional[str], chain_id: int) -> Dict[str, str]:
    """Display metadata for a resolved token identifier."""

    chain = get_chain_config(chain_id)
    if is_native_token(address):
        return {
            "symbol": chain.native_symbol if chain else "ETH",
            "name": chain.name if chain else "Native Token",
            "address": ZERO_ADDRESS,
        }

    token = chain.find_token(address) if chain else None
    if token:
        return {"symbol": token.symbol, "name": token.name, "address": token.address}
    return {"symbol": "UNKNOWN", "name": "Unknown Token", "address": address}


def token_symbol(address: Optional[str], chain_id: int) -> str:
    return token_info(address, chain_id)["symbol"]


__all__ = [
    "NATIVE_TOKEN",
    "is_native_token",
    "resolve_token",
    "token_info",
    "token_symbol",
]
