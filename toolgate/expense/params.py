"""
Expense parameter normalizers.

Public camelCase fields become the snake_case names the Splitwise API uses.
``group_id`` falls back to the request's default group.
"""

from typing import Any, Callable, Dict

from ..core.credentials import RequestConfig
from ..core.params import clean_parameters, optional_int, optional_string, require_amount, require_string
from .tools import expense_registry

DEFAULT_EXPENSE_LIMIT = 10
MAX_EXPENSE_LIMIT = 100


def _cleaned(tool_name: str, args: Any) -> Dict[str, Any]:
    return clean_parameters(args, expense_registry.get(tool_name).parameter_names)


def _group_id(args: Dict[str, Any], config: RequestConfig) -> str:
    return optional_string(args, "groupId") or config.default_group_id


def normalize_balance(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("getSplitwiseBalance", args)
    return {"group_id": _group_id(cleaned, config)}


def normalize_expenses(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("getSplitwiseExpenses", args)
    return {
        "group_id": _group_id(cleaned, config),
        "limit": optional_int(cleaned, "limit", default=DEFAULT_EXPENSE_LIMIT, minimum=1, maximum=MAX_EXPENSE_LIMIT),
    }


def normalize_groups(args: Any, config: RequestConfig) -> Dict[str, Any]:
    return {}


def normalize_pay_friend(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("payFriendSplitwise", args)
    return {
        "friend_name": require_string(cleaned, "friendName"),
        "amount": require_amount(cleaned),
        "group_id": _group_id(cleaned, config),
    }


def normalize_create_expense(args: Any, config: RequestConfig) -> Dict[str, Any]:
    cleaned = _cleaned("createSplitwiseExpense", args)
    return {
        "group_id": _group_id(cleaned, config),
        "description": require_string(cleaned, "description"),
        "cost": require_amount(cleaned),
        "currency_code": config.default_currency,
        "split_equally": True,
    }


EXPENSE_NORMALIZERS: Dict[str, Callable[[Any, RequestConfig], Dict[str, Any]]] = {
    "getSplitwiseBalance": normalize_balance,
    "getSplitwiseExpenses": normalize_expenses,
    "getSplitwiseGroups": normalize_groups,
    "payFriendSplitwise": normalize_pay_friend,
    "createSplitwiseExpense": normalize_create_expense,
}


def normalize_expense_params(tool_name: str, args: Any, config: RequestConfig) -> Dict[str, Any]:
    normalizer = EXPENSE_NORMALIZERS.get(tool_name)
    if normalizer is None:
        raise KeyError(tool_name)
    return normalizer(args, config)
