"""
Gateway service base.

Both gateways share one execution path: normalize the parameters, find the
downstream capability, call it or fall back to demo data, and wrap whatever
happens in a ``ToolResult``. Subclasses supply the tool-specific parts.
"""

import logging
import secrets
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from .credentials import RequestConfig
from .errors import ErrorCode, ExecutionError, InvalidParameterError, classify_error
from .registry import ToolDescriptor, ToolRegistry
from .results import ToolResult, utc_timestamp


def new_execution_id() -> str:
    return secrets.token_hex(5)[:9]


class GatewayService(ABC):
    """Base class for a tool-call gateway."""

    name: str
    version: str = "1.0.0"
    description: str = ""
    registry: ToolRegistry

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__module__)

    @abstractmethod
    def normalize(self, tool: ToolDescriptor, raw_params: Any, config: RequestConfig) -> Dict[str, Any]:
        """Validate caller parameters and rename them for the downstream capability."""

    @abstractmethod
    async def connect(self, config: RequestConfig) -> Optional[Any]:
        """Return a live downstream handle, or None to run in demo mode."""

    @abstractmethod
    async def invoke(
        self,
        tool: ToolDescriptor,
        params: Dict[str, Any],
        config: RequestConfig,
        downstream: Any,
    ) -> Dict[str, Any]:
        """Call the downstream capability and return the ``data`` payload."""

    @abstractmethod
    def mock(self, tool: ToolDescriptor, params: Dict[str, Any], config: RequestConfig) -> ToolResult:
        """Canned demo result for ``tool``."""

    @abstractmethod
    def capabilities(self) -> Dict[str, Any]:
        """Static descriptive metadata for ``GET /capabilities``."""

    def health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "version": self.version,
            "agent": self.name,
            "timestamp": utc_timestamp(),
            "tools": {"total": len(self.registry), "categories": self.registry.categories},
        }

    def manifest(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "endpoint": f"/tools/{tool.name}",
                    "method": "POST",
                    "category": tool.category,
                    "type": tool.type,
                    "parameters": tool.parameters,
                }
                for tool in self.registry
            ],
            "endpoints": {
                "tools": "/tools",
                "actions": "/actions",
                "health": "/health",
                "capabilities": "/capabilities",
            },
        }

    def debug_tools(self) -> Dict[str, Any]:
        """Registry dump for ``GET /debug/tools``, including aliases and downstream names."""
        return {
            "available_tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "category": tool.category,
                    "type": tool.type,
                    "parameters": tool.parameters,
                    "aliases": sorted(tool.aliases),
                    "downstreamAction": tool.downstream_action,
                    "requiresConfirmation": tool.requires_confirmation,
                }
                for tool in self.registry
            ],
            "total_count": len(self.registry),
            "server_status": "running",
        }

    def endpoint_suggestions(self, path: str) -> List[str]:
        """Hints for an unknown path: tools whose keywords occur in it, else the basics."""
        lowered = path.lower()
        suggestions: List[str] = []
        for keyword, target in self.registry.keyword_rules:
            hint = f"Try: POST /tools/{target}"
            if keyword in lowered and hint not in suggestions:
                suggestions.append(hint)
        if suggestions:
            return suggestions

        defaults = ["GET /tools - List available tools", "GET /health - Check server status"]
        if self.registry.names:
            first = self.registry.names[0]
            defaults.append(f"POST /tools/{first} - {self.registry.get(first).display_name}")
        return defaults

    def resolve(self, requested_name: str) -> str:
        return self.registry.resolve(requested_name)

    def failure_context(self, config: RequestConfig) -> Dict[str, Any]:
        """Extra keys attached to every failure envelope."""
        return {}

    def suggestion_context(self, config: RequestConfig) -> Dict[str, Any]:
        return {}

    def on_failure(
        self,
        tool: ToolDescriptor,
        exc: Exception,
        params: Dict[str, Any],
        config: RequestConfig,
        raw_params: Any,
        execution_id: str,
    ) -> ToolResult:
        """Turn a downstream failure into an ``EXECUTION_ERROR`` envelope.

        ``ExecutionError`` messages are already user-facing and are kept as-is;
        anything else is classified into a message plus suggestions.
        """
        context: Dict[str, Any] = {}
        if isinstance(exc, ExecutionError):
            message = exc.message
            status_code = exc.context.get("statusCode")
            suggestions = classify_error(
                exc, tool.name, status_code=status_code or 0, **self.suggestion_context(config)
            ).suggestions
            context.update(exc.context)
        else:
            classified = classify_error(exc, tool.name, **self.suggestion_context(config))
            message, status_code, suggestions = classified.message, classified.status_code, classified.suggestions

        context.update(
            toolName=tool.name,
            originalArgs=raw_params,
            processedArgs=params,
            suggestions=suggestions,
            statusCode=status_code,
            timestamp=utc_timestamp(),
            executionId=execution_id,
            **self.failure_context(config),
        )
        return ToolResult.fail(ErrorCode.EXECUTION_ERROR, message, **context)

    async def execute(self, canonical_name: str, raw_params: Any, config: RequestConfig) -> ToolResult:
        """Run one tool call end to end. Never raises for tool-level failures."""
        execution_id = new_execution_id()
        tool = self.registry.get(canonical_name)
        if tool is None:
            return ToolResult.fail(
                ErrorCode.TOOL_NOT_FOUND,
                f"Tool '{canonical_name}' not found",
                available=self.registry.names,
            )

        self.logger.info("Executing tool %s [%s]", tool.name, execution_id)

        try:
            params = self.normalize(tool, raw_params, config)
        except InvalidParameterError as exc:
            self.logger.info("Parameter validation failed for %s [%s]: %s", tool.name, execution_id, exc.message)
            return ToolResult.from_exception(
                exc,
                toolName=tool.name,
                originalArgs=raw_params,
                executionId=execution_id,
                **self.failure_context(config),
            )

        downstream = await self.connect(config)
        if downstream is None:
            self.logger.info("Downstream unavailable for %s [%s]; returning demo data", tool.name, execution_id)
            return self.mock(tool, params, config)

        try:
            data = await self.invoke(tool, params, config, downstream)
        except Exception as exc:
            self.logger.warning("Tool %s failed [%s]: %s", tool.name, execution_id, exc)
            return self.on_failure(tool, exc, params, config, raw_params, execution_id)

        data.setdefault("toolName", tool.name)
        data.setdefault("executedAt", utc_timestamp())
        data.setdefault("executionId", execution_id)
        return ToolResult(success=True, data=data)

    def tool_names(self) -> List[str]:
        return self.registry.names

    def describe_params(self, tool_name: str, raw_params: Mapping[str, Any], config: RequestConfig) -> Dict[str, Any]:
        """Normalized downstream payload for ``tool_name``; raises on invalid input."""
        tool = self.registry.get(tool_name)
        if tool is None:
            raise KeyError(tool_name)
        return self.normalize(tool, raw_params, config)
