from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ErrorCode, GatewayError


class ToolError(BaseModel):
    """Error half of the envelope; extra context keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable message")


class ToolResult(BaseModel):
    """Uniform response envelope for every tool invocation."""

    success: bool
    data: Optional[Dict[str, Any]] = Field(default=None, description="Tool result data")
    error: Optional[ToolError] = Field(default=None, description="Failure details")

    @classmethod
    def ok(cls, **data: Any) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: ErrorCode | str, message: str, **context: Any) -> "ToolResult":
        code_value = code.value if isinstance(code, ErrorCode) else code
        extra = {k: v for k, v in context.items() if v is not None}
        return cls(success=False, error=ToolError(code=code_value, message=message, **extra))

    @classmethod
    def from_exception(cls, exc: GatewayError, **context: Any) -> "ToolResult":
        return cls.fail(exc.code, exc.message, **{**context, **exc.context})

    @property
    def source(self) -> Optional[str]:
        return (self.data or {}).get("source")

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_body(exc: GatewayError, **context: Any) -> Dict[str, Any]:
    """JSON body for router-level errors (401/404/500)."""
    return ToolResult.from_exception(exc, timestamp=utc_timestamp(), **context).to_response()


__all__: List[str] = ["ToolError", "ToolResult", "utc_timestamp", "error_body"]
