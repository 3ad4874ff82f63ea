"""Async client for the Splitwise REST API (v3.0)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    401: "Invalid Splitwise token or unauthorized access",
    403: "Access forbidden - check token permissions",
    404: "Resource not found - check group ID or endpoint",
    429: "Rate limited - too many requests",
}


class SplitwiseAPIError(Exception):
    """A Splitwise call failed; ``status_code`` is the HTTP status (408 for timeouts)."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def _error_from_response(response: httpx.Response) -> SplitwiseAPIError:
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None

    message = _STATUS_MESSAGES.get(status)
    if message is None:
        if isinstance(body, dict):
            message = body.get("error") or body.get("message") or body.get("errors")
        message = str(message) if message else f"Splitwise API returned HTTP {status}"
    return SplitwiseAPIError(message, status, body)


class SplitwiseProvider:
    """Thin wrapper around the Splitwise endpoints the expense gateway needs."""

    name = "splitwise"

    def __init__(
        self,
        token: str,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not token:
            raise ValueError("Splitwise token required")
        self.token = token
        self.base_url = (base_url or settings.splitwise_base_url).rstrip("/")
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "content-type": "application/json",
            "authorization": f"Bearer {self.token}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        logger.info("Calling Splitwise API: %s %s", method, path)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json, params=params, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise SplitwiseAPIError("Request timeout - Splitwise API not responding", 408) from exc
        except httpx.RequestError as exc:
            raise SplitwiseAPIError(f"Splitwise API connection error: {exc}", 502) from exc

        if response.is_error:
            error = _error_from_response(response)
            logger.warning("Splitwise API error %s on %s: %s", error.status_code, path, error.message)
            raise error

        return response.json()

    async def get_current_user(self) -> Dict[str, Any]:
        data = await self._request("GET", "/get_current_user")
        return data.get("user") or {}

    async def get_groups(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/get_groups")
        return data.get("groups") or []

    async def get_group(self, group_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/get_group/{group_id}")
        group = data.get("group")
        if not group:
            raise SplitwiseAPIError(f"Group {group_id} not found", 404, data)
        return group

    async def get_expenses(self, group_id: str, limit: int) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/get_expenses", params={"group_id": group_id, "limit": limit})
        return data.get("expenses") or []

    async def create_expense(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create an expense; returns the first expense Splitwise reports back."""
        data = await self._request("POST", "/create_expense", json=payload)
        errors = data.get("errors")
        if errors:
            raise SplitwiseAPIError(f"Splitwise rejected the expense: {errors}", 400, errors)
        expenses = data.get("expenses") or []
        if not expenses:
            raise SplitwiseAPIError("Failed to create expense in Splitwise", 500, data)
        return expenses[0]

    async def first_real_group(self) -> Optional[Dict[str, Any]]:
        """The caller's first group, skipping the pseudo-group with id 0."""
        for group in await self.get_groups():
            if group.get("id") not in (0, "0", None):
                return group
        return None
