"""Helpers for validating EVM addresses and spotting transaction hashes in free text."""

from __future__ import annotations

import re
from typing import Optional

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_TX_HASH_RE = re.compile(r"(?<![0-9a-fA-Fx])0x[a-fA-F0-9]{64}(?![0-9a-fA-F])")

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_evm_address(value: object) -> bool:
    return isinstance(value, str) and bool(_EVM_ADDRESS_RE.fullmatch(value))


def looks_like_address(value: str) -> bool:
    """True for inputs that start like an address, whether or not they are well-formed."""

    return value.strip().lower().startswith("0x")


def find_transaction_hash(text: str) -> Optional[str]:
    """Return the first 32-byte hex transaction hash embedded in ``text``."""

    if not text:
        return None
    match = _TX_HASH_RE.search(text)
    return match.group(0) if match else None


__all__ = [
    "ZERO_ADDRESS",
    "is_evm_address",
    "looks_like_address",
    "find_transaction_hash",
]
