"""
Error Classification

Defines the gateway error taxonomy and the classifier that turns downstream
failures into user-actionable messages with remediation suggestions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Codes carried in ``ToolResult.error.code``."""

    AUTH_REQUIRED = "AUTH_REQUIRED"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    UNSUPPORTED_CHAIN = "UNSUPPORTED_CHAIN"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorCategory(str, Enum):
    """Categories used to pick a message and suggestions for downstream failures."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_ADDRESS = "invalid_address"
    TOKEN_NOT_FOUND = "token_not_found"
    ACCOUNT_CONFIG = "account_config"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    NETWORK = "network"
    UNKNOWN = "unknown"


class GatewayError(Exception):
    """Base class for errors surfaced in the response envelope."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}

    def to_error(self) -> Dict[str, Any]:
        return {"code": self.code.value, "message": self.message, **self.context}


class AuthRequiredError(GatewayError):
    """Credential header missing."""

    code = ErrorCode.AUTH_REQUIRED
    status_code = 401


class ToolNotFoundError(GatewayError):
    """Requested tool name did not resolve to a registered tool."""

    code = ErrorCode.TOOL_NOT_FOUND
    status_code = 404


class EndpointNotFoundError(GatewayError):
    code = ErrorCode.ENDPOINT_NOT_FOUND
    status_code = 404


class InvalidParameterError(GatewayError):
    """A caller-supplied parameter failed validation."""

    code = ErrorCode.INVALID_PARAMETER
    status_code = 400

    def __init__(self, field: str, reason: str, message: Optional[str] = None, **context: Any):
        super().__init__(message or f"Invalid parameter '{field}': {reason}", field=field, reason=reason, **context)
        self.field = field
        self.reason = reason


class MissingParameterError(InvalidParameterError):
    """A required parameter was absent or empty."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(field, "missing", message or f"Missing required parameter '{field}'")


class InvalidFormatError(InvalidParameterError):
    """An identifier does not have the expected shape (e.g. a malformed 0x address)."""

    def __init__(self, value: Any, reason: str, field: str = "token"):
        super().__init__(field, reason, f"Invalid format for {field} '{value}': {reason}")
        self.value = value


class UnsupportedChainError(InvalidParameterError):
    code = ErrorCode.UNSUPPORTED_CHAIN

    def __init__(self, chain_id: Any, field: str = "chainId"):
        super().__init__(field, "unsupported chain", f"Unsupported chain: {chain_id}", chainId=chain_id)
        self.chain_id = chain_id


class ExecutionError(GatewayError):
    """The downstream capability failed."""

    code = ErrorCode.EXECUTION_ERROR
    status_code = 200


class InternalError(GatewayError):
    code = ErrorCode.INTERNAL_ERROR
    status_code = 500


@dataclass
class ErrorContext:
    """Classification of a downstream failure."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    message: str = ""
    suggestions: List[str] = field(default_factory=list)
    status_code: Optional[int] = None


_FUNDS_PATTERNS = ("insufficient funds", "insufficient balance", "exceeds balance", "not enough")
_ADDRESS_PATTERNS = ("invalid address",)
_TOKEN_PATTERNS = ("token not found", "token address")
_TIMEOUT_PATTERNS = ("timeout", "timed out")
_NETWORK_PATTERNS = ("connection", "network", "unreachable", "refused", "dns")

_STATUS_CATEGORIES = {
    401: ErrorCategory.AUTHENTICATION,
    403: ErrorCategory.PERMISSION,
    404: ErrorCategory.NOT_FOUND,
    408: ErrorCategory.TIMEOUT,
    429: ErrorCategory.RATE_LIMIT,
}


def _category_for(message: str, status_code: Optional[int]) -> ErrorCategory:
    lowered = message.lower()
    if status_code in _STATUS_CATEGORIES:
        return _STATUS_CATEGORIES[status_code]
    if any(p in lowered for p in _FUNDS_PATTERNS):
        return ErrorCategory.INSUFFICIENT_FUNDS
    if any(p in lowered for p in _ADDRESS_PATTERNS):
        return ErrorCategory.INVALID_ADDRESS
    if "balanceof" in lowered and "returned no data" in lowered:
        return ErrorCategory.TOKEN_NOT_FOUND
    if any(p in lowered for p in _TOKEN_PATTERNS):
        return ErrorCategory.TOKEN_NOT_FOUND
    if "smart account is required" in lowered:
        return ErrorCategory.ACCOUNT_CONFIG
    if "rate limit" in lowered or "too many requests" in lowered:
        return ErrorCategory.RATE_LIMIT
    if any(p in lowered for p in _TIMEOUT_PATTERNS):
        return ErrorCategory.TIMEOUT
    if any(p in lowered for p in _NETWORK_PATTERNS):
        return ErrorCategory.NETWORK
    return ErrorCategory.UNKNOWN


def _message_for(category: ErrorCategory, raw: str, tool_name: str) -> str:
    if category is ErrorCategory.INSUFFICIENT_FUNDS:
        return f"Insufficient funds for {tool_name}. Please ensure you have enough balance and gas fees."
    if category is ErrorCategory.INVALID_ADDRESS:
        return f"Invalid address format for {tool_name}. Please provide a valid address (0x...)."
    if category is ErrorCategory.TOKEN_NOT_FOUND:
        return "Token contract not found. Please verify the token address exists on the selected network."
    if category is ErrorCategory.ACCOUNT_CONFIG:
        return "Smart account configuration issue. Please check your wallet credentials."
    if category is ErrorCategory.AUTHENTICATION:
        return "Invalid token or unauthorized access"
    if category is ErrorCategory.PERMISSION:
        return "Access forbidden - check token permissions"
    if category is ErrorCategory.NOT_FOUND:
        return "Resource not found - check group ID or endpoint"
    if category is ErrorCategory.RATE_LIMIT:
        return "Rate limited - too many requests"
    if category is ErrorCategory.TIMEOUT:
        return "Request timeout - downstream service not responding"
    return f"Error in {tool_name}: {raw}"


def _suggestions_for(category: ErrorCategory, tool_name: str, native_symbol: str) -> List[str]:
    suggestions: List[str] = []

    if category is ErrorCategory.INSUFFICIENT_FUNDS:
        suggestions += [
            "Check your wallet balance",
            f"Ensure you have enough {native_symbol} for gas fees",
            "Try a smaller amount",
        ]
    elif category is ErrorCategory.INVALID_ADDRESS:
        suggestions += [
            "Verify the address starts with 0x",
            "Check the address is 42 characters long",
            "Ensure no extra spaces or characters",
        ]
    elif category is ErrorCategory.TOKEN_NOT_FOUND:
        suggestions += [
            "Use supported tokens: USDT, USDC and the chain's native token",
            "Try using token symbol instead of address",
            "Verify token exists on the selected network",
        ]
    elif category is ErrorCategory.AUTHENTICATION:
        suggestions.append("Check the credential sent in the request headers")
    elif category is ErrorCategory.NOT_FOUND:
        suggestions.append("List your groups to find a valid group ID")
    elif category is ErrorCategory.RATE_LIMIT:
        suggestions.append("Wait a moment before trying again")

    if tool_name == "transferTokens":
        suggestions += [
            'Format: "transfer [amount] [token] to [address]"',
            'Example: "transfer 1 USDT to 0x..."',
        ]
    elif tool_name == "getWalletBalance":
        suggestions += [
            f"Try without token for {native_symbol} balance",
            "Use token symbols: USDT, USDC",
        ]

    return suggestions


def classify_error(
    error: Exception,
    tool_name: str,
    *,
    status_code: Optional[int] = None,
    native_symbol: str = "AVAX",
) -> ErrorContext:
    """
    Classify a downstream failure.

    The category is picked from the HTTP status code when one is known,
    otherwise from substrings of the error message.
    """
    raw = str(error) or error.__class__.__name__
    if status_code is None:
        status_code = getattr(error, "status_code", None)
    category = _category_for(raw, status_code)
    return ErrorContext(
        category=category,
        message=_message_for(category, raw, tool_name),
        suggestions=_suggestions_for(category, tool_name, native_symbol),
        status_code=status_code,
    )
