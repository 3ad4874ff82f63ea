"""Wallet-only routes: chain listing and parameter-mapping diagnostics."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.credentials import (
    API_KEY_HEADERS,
    GASLESS_KEY_HEADERS,
    PRIVATE_KEY_HEADERS,
    RPC_URL_HEADERS,
    SXT_KEY_HEADERS,
    RequestConfig,
)
from ..core.errors import InvalidParameterError
from ..core.gateway import new_execution_id
from ..core.results import utc_timestamp
from ..core.tokens import resolve_token
from ..wallet.service import WalletGateway
from .gateway import read_body, require_api_key


def _debug_failure(exc: InvalidParameterError, body: Any) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": exc.to_error(), "input": body})


WALLET_CREDENTIAL_HEADERS = (
    *API_KEY_HEADERS,
    *PRIVATE_KEY_HEADERS,
    *RPC_URL_HEADERS,
    *GASLESS_KEY_HEADERS,
    *SXT_KEY_HEADERS,
)


def _credential_headers(request: Request) -> List[str]:
    """Names of the credential headers the request carried; never their values."""
    return sorted(name for name in WALLET_CREDENTIAL_HEADERS if request.headers.get(name))


def _credential_presence(config: RequestConfig) -> Dict[str, bool]:
    return {
        "apiKey": bool(config.api_key),
        "privateKey": bool(config.private_key),
        "rpcUrl": bool(config.rpc_url),
        "gaslessApiKey": bool(config.gasless_api_key),
        "sxtApiKey": bool(config.sxt_api_key),
    }


def build_wallet_router(service: WalletGateway) -> APIRouter:
    router = APIRouter()

    @router.get("/chains")
    async def list_chains() -> Dict[str, Any]:
        return service.chains()

    @router.post("/debug/transfer")
    async def debug_transfer(request: Request, config: RequestConfig = Depends(require_api_key)):
        """Trace a transfer request: what arrived, how the token resolved, what the SDK would get.

        Always 200; a validation failure is reported under ``processingError``.
        """
        body = await read_body(request)
        if not isinstance(body, dict):
            body = {}

        token_input = body.get("tokenAddress")
        token_resolution = {"input": token_input, "resolved": None, "error": None}
        try:
            token_resolution["resolved"] = resolve_token(token_input, config.chain_id, field="tokenAddress")
        except InvalidParameterError as exc:
            token_resolution["error"] = exc.message

        processed, processing_error = None, None
        try:
            processed = service.describe_params("transferTokens", body, config)
        except InvalidParameterError as exc:
            processing_error = exc.to_error()

        return {
            "success": True,
            "debug": True,
            "debugId": new_execution_id(),
            "request": {
                "method": request.method,
                "path": request.url.path,
                "credentials": _credential_headers(request),
                "body": body,
                "bodyKeys": sorted(body),
            },
            "config": {**_credential_presence(config), "chainId": config.chain_id, "sdkLoaded": service.sessions.available},
            "tokenResolution": token_resolution,
            "processedParams": processed,
            "processingError": processing_error,
            "timestamp": utc_timestamp(),
        }

    @router.post("/debug/transfer-params")
    async def debug_transfer_params(request: Request, config: RequestConfig = Depends(require_api_key)):
        body = await read_body(request)
        try:
            output = service.describe_params("transferTokens", body, config)
        except InvalidParameterError as exc:
            return _debug_failure(exc, body)
        return {
            "success": True,
            "debug": True,
            "input": body,
            "output": output,
            "mapping": {
                "to": body.get("to"),
                "destination": output["destination"],
                "mapped_correctly": body.get("to") == output["destination"],
            },
            "timestamp": utc_timestamp(),
        }

    @router.post("/debug/swap-params")
    async def debug_swap_params(request: Request, config: RequestConfig = Depends(require_api_key)):
        body = await read_body(request)
        try:
            output = service.describe_params("swapTokens", body, config)
        except InvalidParameterError as exc:
            return _debug_failure(exc, body)
        return {
            "success": True,
            "debug": True,
            "input": body,
            "output": output,
            "mapping": {
                "fromToken -> tokenIn": f"{body.get('fromToken')} -> {output['tokenIn']}",
                "toToken -> tokenOut": f"{body.get('toToken')} -> {output['tokenOut']}",
            },
            "timestamp": utc_timestamp(),
        }

    @router.post("/debug/sxt-params")
    async def debug_sxt_params(request: Request, config: RequestConfig = Depends(require_api_key)):
        body = await read_body(request)
        try:
            output = service.describe_params("queryBlockchainData", body, config)
        except InvalidParameterError as exc:
            return _debug_failure(exc, body)
        return {
            "success": True,
            "debug": True,
            "input": body,
            "output": output,
            "mapping": {"sxt_key_available": bool(config.sxt_api_key)},
            "timestamp": utc_timestamp(),
        }

    return router
