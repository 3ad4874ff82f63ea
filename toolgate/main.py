from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import structlog

from .api.gateway import build_catch_all_router, build_gateway_router
from .api.wallet import build_wallet_router
from .config import settings
from .core.errors import EndpointNotFoundError, GatewayError, InternalError
from .core.gateway import GatewayService
from .core.results import error_body
from .expense.service import ExpenseGateway
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .wallet.service import WalletGateway

logger = structlog.stdlib.get_logger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /tools",
    "GET /actions",
    "GET /capabilities",
    "GET /manifest.json",
    "GET /debug/tools",
    "POST /tools/{toolName}",
    "POST /actions/{actionName}",
]


def create_app(service: GatewayService, extra_routers: Iterable = ()) -> FastAPI:
    """Build the FastAPI app for one gateway service."""

    app = FastAPI(
        title=service.name,
        description=service.description,
        version=service.version,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.service = service

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            error = EndpointNotFoundError(
                f"Endpoint {request.method} {request.url.path} not found",
                suggestions=service.endpoint_suggestions(request.url.path),
                availableEndpoints=AVAILABLE_ENDPOINTS,
            )
            return JSONResponse(status_code=404, content=error_body(error))
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, error=str(exc))
        error = InternalError("Internal server error", endpoint=request.url.path)
        return JSONResponse(status_code=500, content=error_body(error))

    app.include_router(build_gateway_router(service), tags=["Gateway"])
    for router in extra_routers:
        app.include_router(router, tags=[service.__class__.__name__])
    app.include_router(build_catch_all_router(service), tags=["Direct"])

    return app


def create_wallet_app(service: WalletGateway = None) -> FastAPI:
    service = service or WalletGateway()
    return create_app(service, [build_wallet_router(service)])


def create_expense_app(service: ExpenseGateway = None) -> FastAPI:
    return create_app(service or ExpenseGateway())


setup_logging()

wallet_app = create_wallet_app()
expense_app = create_expense_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "toolgate.main:wallet_app",
        host=settings.host,
        port=settings.wallet_port,
        reload=True,
        log_level=settings.log_level.lower()
    )
