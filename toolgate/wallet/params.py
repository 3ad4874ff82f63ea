"""
Wallet parameter normalizers.

Each function takes the raw body the agent platform sent and returns the
payload the wallet SDK action expects, raising ``InvalidParameterError``
(or a subclass) when the input cannot be used.
"""

import logging
from typing import Any, Callable, Dict, Mapping

from ..core.chains import is_supported_chain
from ..core.credentials import RequestConfig
from ..core.errors import InvalidParameterError, UnsupportedChainError
from ..core.params import (
    canonical_amount,
    clean_parameters,
    format_decimal,
    is_blank,
    require,
    require_address,
    require_amount,
    require_string,
)
from ..core.tokens import NATIVE_TOKEN, resolve_token
from .tools import wallet_registry

logger = logging.getLogger(__name__)

SQL_MIN_LENGTH = 10
SQL_MAX_LENGTH = 2000
MAX_SLIPPAGE = 50.0


def _cleaned(tool_name: str, args: Any) -> Dict[str, Any]:
    return clean_parameters(args, wallet_registry.get(tool_name).parameter_names)


def _slippage(value: Any, default: str) -> str:
    if is_blank(value):
        value = default
    if isinstance(value, bool):
        raise InvalidParameterError("slippage", "must be a number between 0 and 50")
    try:
        number = float(str(value).strip().rstrip("%"))
    except ValueError:
        raise InvalidParameterError("slippage", "must be a number between 0 and 50") from None
    if not 0 <= number <= MAX_SLIPPAGE:
        raise InvalidParameterError("slippage", "must be a number between 0 and 50")
    return format_decimal(number)


def _chain_id(args: Mapping[str, Any], field: str) -> int:
    value = require(args, field)
    if isinstance(value, bool):
        raise InvalidParameterError(field, "must be a numeric chain id")
    try:
        chain_id = int(str(value).strip())
    except ValueError:
        raise InvalidParameterError(field, "must be a numeric chain id") from None
    if not is_supported_chain(chain_id):
        raise UnsupportedChainError(chain_id, field=field)
    return chain_id


def normalize_address(args: Any, config: RequestConfig) -> Dict[str, Any]:
    return {}


def normalize_balance(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("getWalletBalance", args)
    token = resolve_token(cleaned.get("tokenAddress"), config.chain_id, field="tokenAddress")
    if token == NATIVE_TOKEN:
        return {}
    return {"tokenAddress": token}


def normalize_transfer(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("transferTokens", args)
    destination = require_address(cleaned, "to")
    amount = require_amount(cleaned)
    token = resolve_token(cleaned.get("tokenAddress"), config.chain_id, field="tokenAddress")
    return {"destination": destination, "amount": amount, "tokenAddress": token}


def normalize_swap(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("swapTokens", args)
    token_in = resolve_token(require(cleaned, "fromToken"), config.chain_id, field="fromToken")
    token_out = resolve_token(require(cleaned, "toToken"), config.chain_id, field="toToken")
    if token_in == token_out:
        raise InvalidParameterError("toToken", "must differ from fromToken")
    return {
        "tokenIn": token_in,
        "tokenOut": token_out,
        "amount": require_amount(cleaned),
        "slippage": _slippage(cleaned.get("slippage"), config.default_slippage),
    }


def normalize_bridge(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("bridgeTokens", args)
    from_chain = _chain_id(cleaned, "fromChainId")
    to_chain = _chain_id(cleaned, "toChainId")
    if from_chain == to_chain:
        raise InvalidParameterError("toChainId", "must differ from fromChainId")

    payload: Dict[str, Any] = {
        "fromChainId": from_chain,
        "toChainId": to_chain,
        "tokenInAddress": resolve_token(require(cleaned, "tokenInAddress"), from_chain, field="tokenInAddress"),
        "tokenOutAddress": resolve_token(require(cleaned, "tokenOutAddress"), to_chain, field="tokenOutAddress"),
        "amount": canonical_amount(require(cleaned, "amount")),
    }
    if not is_blank(cleaned.get("recipientAddress")):
        payload["recipientAddress"] = require_address(cleaned, "recipientAddress")
    return payload


def normalize_sql(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("queryBlockchainData", args)
    query = require_string(cleaned, "query")
    if len(query) < SQL_MIN_LENGTH:
        raise InvalidParameterError("query", f"must be at least {SQL_MIN_LENGTH} characters")
    if len(query) > SQL_MAX_LENGTH:
        raise InvalidParameterError("query", f"must be at most {SQL_MAX_LENGTH} characters")
    return {"sqlText": query}


WALLET_NORMALIZERS: Dict[str, Callable[[Any, RequestConfig], Dict[str, Any]]] = {
    "getWalletAddress": normalize_address,
    "getWalletBalance": normalize_balance,
    "transferTokens": normalize_transfer,
    "swapTokens": normalize_swap,
    "bridgeTokens": normalize_bridge,
    "queryBlockchainData": normalize_sql,
}


def normalize_wallet_params(tool_name: str, args: Any, config: RequestConfig) -> Dict[str, Any]:
    """Dispatch to the normalizer registered for ``tool_name``."""
    normalizer = WALLET_NORMALIZERS.get(tool_name)
    if normalizer is None:
        raise KeyError(tool_name)
    params = normalizer(args, config)
    logger.debug("Normalized %s parameters: %s", tool_name, params)
    return params
