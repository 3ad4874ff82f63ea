"""
Expense gateway service.

Runs Splitwise tools against the live REST API when the request carries a
Splitwise token, and against the demo group otherwise. Live failures are
reported as ``EXECUTION_ERROR``; they never fall back to demo data.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Settings, settings as default_settings
from ..core.credentials import RequestConfig
from ..core.errors import ExecutionError
from ..core.gateway import GatewayService
from ..core.registry import ToolDescriptor
from ..core.results import ToolResult
from ..providers.splitwise import SplitwiseAPIError, SplitwiseProvider
from .mock import DEMO_GROUP_ID, mock_expense_response
from .params import normalize_expense_params
from .summaries import (
    balance_text,
    expenses_text,
    find_member,
    groups_text,
    member_names,
    money,
    pending_payment_text,
)
from .tools import expense_registry

logger = logging.getLogger(__name__)

AUTO_GROUP_IDS = frozenset({"auto", DEMO_GROUP_ID})


class ExpenseGateway(GatewayService):
    """Tool gateway in front of the Splitwise REST API."""

    description = "Splitwise integration with expense reading and payment automation"
    registry = expense_registry

    def __init__(
        self,
        app_settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(logger)
        self.settings = app_settings or default_settings
        self.name = self.settings.expense_agent_name
        self.version = self.settings.version
        self.transport = transport
        self._handlers = {
            "getSplitwiseBalance": self._balance,
            "getSplitwiseExpenses": self._expenses,
            "getSplitwiseGroups": self._groups,
            "payFriendSplitwise": self._pay_friend,
            "createSplitwiseExpense": self._create_expense,
        }

    def normalize(self, tool: ToolDescriptor, raw_params: Any, config: RequestConfig) -> Dict[str, Any]:
        return normalize_expense_params(tool.name, raw_params, config)

    async def connect(self, config: RequestConfig) -> Optional[SplitwiseProvider]:
        if not config.has_splitwise_token:
            return None
        return SplitwiseProvider(
            config.splitwise_token,
            base_url=self.settings.splitwise_base_url,
            timeout_s=self.settings.request_timeout_seconds,
            transport=self.transport,
        )

    def mock(self, tool: ToolDescriptor, params: Dict[str, Any], config: RequestConfig) -> ToolResult:
        return mock_expense_response(tool.name, params, config)

    async def resolve_group_id(self, provider: SplitwiseProvider, group_id: str) -> str:
        """Replace ``auto`` and the demo group id with the caller's first real group."""
        if str(group_id) not in AUTO_GROUP_IDS:
            return str(group_id)
        group = await provider.first_real_group()
        if group is None:
            return str(group_id)
        self.logger.info("Using auto-detected group %s (ID: %s)", group.get("name"), group.get("id"))
        return str(group["id"])

    async def invoke(
        self,
        tool: ToolDescriptor,
        params: Dict[str, Any],
        config: RequestConfig,
        downstream: SplitwiseProvider,
    ) -> Dict[str, Any]:
        handler = self._handlers[tool.name]
        data = await handler(params, config, downstream)
        data["source"] = "splitwise-api"
        return data

    async def _balance(self, params, config, provider):
        group_id = await self.resolve_group_id(provider, params["group_id"])
        group = await provider.get_group(group_id)
        members = group.get("members") or []

        try:
            user_id = (await provider.get_current_user()).get("id")
        except SplitwiseAPIError as exc:
            self.logger.warning("Could not fetch current Splitwise user: %s", exc.message)
            user_id = None

        current_user = next((m for m in members if m.get("id") == user_id), None)
        if current_user is None:
            if not members:
                raise ExecutionError(f"Group {group.get('name')} has no members", statusCode=404)
            current_user = members[0]

        return {
            "text": balance_text(group, current_user, config.default_currency),
            "group": group,
            "currentUser": current_user,
        }

    async def _expenses(self, params, config, provider):
        group_id = await self.resolve_group_id(provider, params["group_id"])
        expenses = (await provider.get_expenses(group_id, params["limit"]))[: params["limit"]]
        return {"text": expenses_text(expenses), "expenses": expenses, "groupId": group_id}

    async def _groups(self, params, config, provider):
        groups = await provider.get_groups()
        return {"text": groups_text(groups), "groups": groups}

    async def _pay_friend(self, params, config, provider):
        group_id = await self.resolve_group_id(provider, params["group_id"])
        group = await provider.get_group(group_id)
        members = group.get("members") or []
        friend = find_member(members, params["friend_name"])
        if friend is None:
            raise ExecutionError(
                f"{params['friend_name']} not found in {group.get('name')}. "
                f"Available members: {', '.join(member_names(members))}",
                statusCode=404,
                availableMembers=member_names(members),
            )

        return {
            "text": pending_payment_text(params["friend_name"], params["amount"], config.default_currency, group.get("name")),
            "pendingPayment": {
                "friend": params["friend_name"],
                "friendId": friend.get("id"),
                "amount": params["amount"],
                "currency": config.default_currency,
                "groupId": group_id,
                "groupName": group.get("name"),
            },
        }

    async def _create_expense(self, params, config, provider):
        group_id = await self.resolve_group_id(provider, params["group_id"])
        payload = {**params, "group_id": int(group_id) if group_id.isdigit() else group_id}
        expense = await provider.create_expense(payload)
        self.logger.info("Created Splitwise expense %s", expense.get("id"))
        return {
            "text": (
                f'Expense "{params["description"]}" for {money(params["cost"], params["currency_code"])} '
                "created successfully in Splitwise"
            ),
            "expense": expense,
        }

    def health(self) -> Dict[str, Any]:
        payload = super().health()
        payload["splitwise"] = {"baseUrl": self.settings.splitwise_base_url}
        return payload

    def capabilities(self) -> Dict[str, Any]:
        return {
            "agent": {
                "name": self.name,
                "version": self.version,
                "description": self.description,
            },
            "capabilities": ["READ", "WRITE", "VOICE"],
            "read_capabilities": [
                "Get balance summaries",
                "Fetch expense history",
                "List groups",
            ],
            "write_capabilities": [
                "Create expenses",
                "Prepare payments to settle balances",
            ],
            "voice_support": True,
            "languages": ["Hindi", "English", "Bengali", "Tamil", "Telugu"],
            "authentication": {
                "required": ["x-api-key"],
                "optional": ["x-splitwise-key", "x-splitwise-token", "authorization", "x-sarvam-key"],
                "defaults": ["x-default-group-id", "x-default-currency", "x-language"],
            },
            "endpoints": {
                "health": "/health",
                "tools": "/tools",
                "actions": "/actions",
                "capabilities": "/capabilities",
            },
        }
