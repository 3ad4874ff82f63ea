"""
Gateway core

Pieces shared by both gateways: credentials, tool registry, token resolution,
error taxonomy and the response envelope.
"""

from .credentials import RequestConfig, extract_request_config
from .errors import (
    AuthRequiredError,
    EndpointNotFoundError,
    ErrorCode,
    ExecutionError,
    GatewayError,
    InternalError,
    InvalidFormatError,
    InvalidParameterError,
    MissingParameterError,
    ToolNotFoundError,
    UnsupportedChainError,
    classify_error,
)
from .registry import ToolDescriptor, ToolRegistry
from .results import ToolError, ToolResult
from .tokens import NATIVE_TOKEN, resolve_token

__all__ = [
    "RequestConfig",
    "extract_request_config",
    "AuthRequiredError",
    "EndpointNotFoundError",
    "ErrorCode",
    "ExecutionError",
    "GatewayError",
    "InternalError",
    "InvalidFormatError",
    "InvalidParameterError",
    "MissingParameterError",
    "ToolNotFoundError",
    "UnsupportedChainError",
    "classify_error",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolError",
    "ToolResult",
    "NATIVE_TOKEN",
    "resolve_token",
]
