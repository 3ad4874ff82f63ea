"""
Routes shared by both gateways.

``build_gateway_router`` wires a ``GatewayService`` to the agent platform's
HTTP surface: discovery endpoints, tool execution under ``/tools`` and
``/actions``, and a catch-all ``POST /{name}``.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ..core.credentials import RequestConfig, extract_request_config
from ..core.errors import AuthRequiredError, EndpointNotFoundError, ToolNotFoundError
from ..core.gateway import GatewayService
from ..core.results import utc_timestamp

logger = logging.getLogger(__name__)

# Single-segment paths the catch-all must not treat as tool names.
RESERVED_PATHS = frozenset({
    "health",
    "tools",
    "actions",
    "capabilities",
    "chains",
    "debug",
    "manifest.json",
    "favicon.ico",
    "robots.txt",
})


def request_config(request: Request) -> RequestConfig:
    return extract_request_config(request.headers)


def require_api_key(request: Request, config: RequestConfig = Depends(request_config)) -> RequestConfig:
    """Reject the request unless it carries an ``x-api-key`` header."""
    if not config.api_key:
        raise AuthRequiredError("API key required in x-api-key header", endpoint=request.url.path)
    return config


async def read_body(request: Request) -> Any:
    """The JSON body, or an empty object when the body is missing or not JSON."""
    body = await request.body()
    if not body:
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.warning("Ignoring non-JSON body on %s", request.url.path)
        return {}


async def run_tool(
    service: GatewayService,
    requested_name: str,
    request: Request,
    config: RequestConfig,
) -> Dict[str, Any]:
    """Resolve ``requested_name`` and execute it with the request body."""
    canonical = service.resolve(requested_name)
    if canonical not in service.registry:
        raise ToolNotFoundError(f"Tool '{requested_name}' not found", available=service.tool_names())
    if canonical != requested_name:
        logger.info("Resolved tool %s -> %s", requested_name, canonical)

    result = await service.execute(canonical, await read_body(request), config)
    logger.info("Tool %s completed: %s", canonical, "success" if result.success else "failed")
    return result.to_response()


def build_gateway_router(service: GatewayService) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health() -> Dict[str, Any]:
        return service.health()

    @router.get("/capabilities")
    async def capabilities() -> Dict[str, Any]:
        return service.capabilities()

    @router.get("/manifest.json")
    async def manifest() -> Dict[str, Any]:
        return service.manifest()

    @router.get("/debug/tools")
    async def debug_tools() -> Dict[str, Any]:
        return service.debug_tools()

    @router.get("/tools")
    async def list_tools(config: RequestConfig = Depends(require_api_key)) -> Dict[str, Any]:
        return {
            "success": True,
            "agent": {"name": service.name, "version": service.version, "description": service.description},
            "tools": service.registry.to_tool_listings(),
            "metadata": {
                "totalTools": len(service.registry),
                "categories": service.registry.categories,
                "endpoint": "/tools/{toolName}",
                "authentication": "x-api-key header required",
                "timestamp": utc_timestamp(),
            },
        }

    @router.get("/actions")
    async def list_actions(config: RequestConfig = Depends(require_api_key)) -> Dict[str, Any]:
        return {
            "success": True,
            "actions": service.registry.to_action_listings(),
            "metadata": {
                "totalActions": len(service.registry),
                "endpoint": "/actions/{actionName}",
            },
        }

    @router.post("/tools/{tool_name}")
    async def execute_tool(
        tool_name: str,
        request: Request,
        config: RequestConfig = Depends(require_api_key),
    ) -> Dict[str, Any]:
        return await run_tool(service, tool_name, request, config)

    @router.post("/actions/{action_name}")
    async def execute_action(
        action_name: str,
        request: Request,
        config: RequestConfig = Depends(require_api_key),
    ) -> Dict[str, Any]:
        return await run_tool(service, action_name, request, config)

    return router


def build_catch_all_router(service: GatewayService) -> APIRouter:
    """``POST /{name}`` for any unreserved single path segment. Include it last."""
    router = APIRouter()

    @router.post("/{tool_name}")
    async def execute_direct(tool_name: str, request: Request) -> Dict[str, Any]:
        if tool_name in RESERVED_PATHS:
            raise EndpointNotFoundError(f"Endpoint POST /{tool_name} not found")
        config = require_api_key(request, request_config(request))
        return await run_tool(service, tool_name, request, config)

    return router
