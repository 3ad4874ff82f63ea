"""Validation helpers shared by the per-tool parameter normalizers."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional

from .address import is_evm_address
from .errors import InvalidParameterError, MissingParameterError

logger = logging.getLogger(__name__)

# Fields the agent platform injects into every call body.
PLATFORM_METADATA_FIELDS = frozenset({"toolName", "userId", "executionId", "chatId", "timestamp", "requestId"})


def clean_parameters(args: Any, allowed: Iterable[str]) -> Dict[str, Any]:
    """Drop platform metadata and anything outside the tool's declared schema."""

    if not isinstance(args, Mapping):
        return {}
    allowed_set = set(allowed)
    cleaned = {k: v for k, v in args.items() if k in allowed_set}
    dropped = sorted(set(args) - allowed_set)
    if dropped:
        logger.debug("Dropped undeclared parameters: %s", dropped)
    return cleaned


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(args: Mapping[str, Any], field: str) -> Any:
    value = args.get(field)
    if is_blank(value):
        raise MissingParameterError(field)
    return value


def require_string(args: Mapping[str, Any], field: str) -> str:
    value = require(args, field)
    if not isinstance(value, str):
        raise InvalidParameterError(field, f"must be a string, got {type(value).__name__}")
    return value.strip()


def optional_string(args: Mapping[str, Any], field: str) -> Optional[str]:
    value = args.get(field)
    if is_blank(value):
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidParameterError(field, f"must be a string, got {type(value).__name__}")
    return str(value).strip()


def require_address(args: Mapping[str, Any], field: str) -> str:
    value = require_string(args, field)
    if not is_evm_address(value):
        raise InvalidParameterError(field, "must be a 42-character hex address starting with 0x")
    return value


def format_decimal(value: float) -> str:
    """Shortest plain decimal text for ``value``: ``1.0`` -> ``"1"``, ``5e-05`` -> ``"0.00005"``.

    Never uses exponent notation; the SDK's unit parser rejects it.
    """

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def canonical_amount(value: Any, field: str = "amount") -> str:
    """Parse a positive amount and re-serialize it as a decimal string.

    Parsing goes through ``float``, so amounts with more significant digits
    than a double can hold lose precision.
    """

    if isinstance(value, bool):
        raise InvalidParameterError(field, "must be a positive number")
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidParameterError(field, "must be a positive number") from None
    if math.isnan(number) or math.isinf(number) or number <= 0:
        raise InvalidParameterError(field, "must be a positive number")
    return format_decimal(number)


def require_amount(args: Mapping[str, Any], field: str = "amount") -> str:
    return canonical_amount(require(args, field), field)


def optional_int(
    args: Mapping[str, Any],
    field: str,
    *,
    default: int,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    value = args.get(field)
    if is_blank(value):
        return default
    if isinstance(value, bool):
        raise InvalidParameterError(field, "must be an integer")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(field, "must be an integer") from None
    if not number.is_integer():
        raise InvalidParameterError(field, "must be an integer")
    result = int(number)
    if minimum is not None and result < minimum:
        raise InvalidParameterError(field, f"must be at least {minimum}")
    if maximum is not None and result > maximum:
        raise InvalidParameterError(field, f"must be at most {maximum}")
    return result
