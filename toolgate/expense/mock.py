"""Demo responses for the expense gateway when no Splitwise token is present."""

import copy
import secrets
from typing import Any, Callable, Dict

from ..core.credentials import RequestConfig
from ..core.results import ToolResult, utc_timestamp
from .summaries import (
    balance_text,
    expenses_text,
    find_member,
    groups_text,
    member_names,
    money,
    pending_payment_text,
)

DEMO_GROUP_ID = "12345"
DEMO_SUFFIX = " (Demo data - configure a Splitwise token for real data)"

DEMO_CURRENT_USER = {
    "id": 1001,
    "first_name": "Rahul",
    "last_name": "You",
    "email": "rahul@example.com",
}

DEMO_GROUP: Dict[str, Any] = {
    "id": 12345,
    "name": "Goa Trip 2025",
    "group_type": "trip",
    "members": [
        {
            **DEMO_CURRENT_USER,
            "balance": [{"currency_code": "INR", "amount": "2100.00"}],
        },
        {
            "id": 1002,
            "first_name": "Sandeep",
            "last_name": "Kumar",
            "email": "sandeep@example.com",
            "balance": [{"currency_code": "INR", "amount": "-800.00"}],
        },
        {
            "id": 1003,
            "first_name": "Priya",
            "last_name": "Sharma",
            "email": "priya@example.com",
            "balance": [{"currency_code": "INR", "amount": "-650.00"}],
        },
    ],
    "expenses": [
        {
            "id": 5001,
            "description": "Hotel Stay - Goa",
            "cost": "4000.00",
            "currency_code": "INR",
            "date": "2025-06-15T12:00:00Z",
            "created_by": {"first_name": "Rahul", "last_name": "You"},
        },
        {
            "id": 5002,
            "description": "Dinner at Beach Resort",
            "cost": "2400.00",
            "currency_code": "INR",
            "date": "2025-06-16T19:30:00Z",
            "created_by": {"first_name": "Sandeep", "last_name": "Kumar"},
        },
    ],
}


def demo_group() -> Dict[str, Any]:
    return copy.deepcopy(DEMO_GROUP)


def _demo(text: str, **data: Any) -> ToolResult:
    return ToolResult.ok(text=text + DEMO_SUFFIX, **data, source="demo")


def mock_balance(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    group = demo_group()
    current_user = group["members"][0]
    return _demo(
        balance_text(group, current_user, config.default_currency),
        group=group,
        currentUser=current_user,
    )


def mock_expenses(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    group = demo_group()
    expenses = group["expenses"][: params["limit"]]
    return _demo(expenses_text(expenses, group["name"]), expenses=expenses, groupId=group["id"])


def mock_groups(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    groups = [demo_group()]
    return _demo(groups_text(groups), groups=groups)


def mock_pay_friend(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    group = demo_group()
    friend = find_member(group["members"], params["friend_name"])
    pending = {
        "friend": params["friend_name"],
        "friendId": friend["id"] if friend else None,
        "amount": params["amount"],
        "currency": config.default_currency,
        "groupId": params["group_id"],
        "groupName": group["name"],
    }
    extra: Dict[str, Any] = {}
    if friend is None:
        extra["note"] = (
            f"{params['friend_name']} is not in the demo group. "
            f"Available: {', '.join(member_names(group['members']))}"
        )
    return _demo(
        pending_payment_text(params["friend_name"], params["amount"], config.default_currency, group["name"]),
        pendingPayment=pending,
        **extra,
    )


def mock_create_expense(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    expense = {
        "id": secrets.randbelow(9000) + 1000,
        "description": params["description"],
        "cost": params["cost"],
        "currency_code": params["currency_code"],
        "group_id": params["group_id"],
        "date": utc_timestamp(),
        "created_by": {"first_name": "You", "last_name": ""},
    }
    return _demo(
        f'Expense "{params["description"]}" for {money(params["cost"], params["currency_code"])} would be created',
        expense=expense,
    )


EXPENSE_MOCKS: Dict[str, Callable[[Dict[str, Any], RequestConfig], ToolResult]] = {
    "getSplitwiseBalance": mock_balance,
    "getSplitwiseExpenses": mock_expenses,
    "getSplitwiseGroups": mock_groups,
    "payFriendSplitwise": mock_pay_friend,
    "createSplitwiseExpense": mock_create_expense,
}


def mock_expense_response(tool_name: str, params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    return EXPENSE_MOCKS[tool_name](params, config)
