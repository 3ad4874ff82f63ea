"""Expense gateway tool definitions."""

from typing import List, Tuple

from ..core.registry import ToolDescriptor, ToolRegistry

_GROUP_ID = {"type": "string", "description": "Splitwise group ID (optional, 'auto' picks your first group)"}


def _schema(properties=None, required=None):
    return {"type": "object", "properties": properties or {}, "required": required or []}


EXPENSE_TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name="getSplitwiseBalance",
        display_name="Get Splitwise Balance",
        description="READ: Get current balance summary from Splitwise group - shows who owes what to whom",
        category="balance",
        type="query",
        parameters=_schema({"groupId": _GROUP_ID}),
        downstream_action="get_group",
        aliases=frozenset({"getBalance", "checkBalance", "splitwiseBalance"}),
    ),
    ToolDescriptor(
        name="getSplitwiseExpenses",
        display_name="Get Splitwise Expenses",
        description="READ: Fetch recent expense history from Splitwise group with dates and amounts",
        category="expenses",
        type="query",
        parameters=_schema({
            "groupId": _GROUP_ID,
            "limit": {
                "type": "number",
                "description": "Number of expenses to show (1-100)",
                "default": 10,
                "minimum": 1,
                "maximum": 100,
            },
        }),
        downstream_action="get_expenses",
        aliases=frozenset({"getExpenses", "fetchUserExpenses", "listTransactions"}),
    ),
    ToolDescriptor(
        name="getSplitwiseGroups",
        display_name="Get Splitwise Groups",
        description="READ: Get list of all user's Splitwise groups with names and IDs",
        category="groups",
        type="query",
        parameters=_schema(),
        downstream_action="get_groups",
        aliases=frozenset({"getGroups", "listGroups"}),
    ),
    ToolDescriptor(
        name="payFriendSplitwise",
        display_name="Pay Friend",
        description="WRITE: Initiate payment to settle Splitwise balance with confirmation",
        category="payments",
        type="action",
        requires_confirmation=True,
        parameters=_schema(
            {
                "friendName": {"type": "string", "description": "Name of the friend to pay"},
                "amount": {"type": "number", "description": "Amount to pay"},
                "groupId": _GROUP_ID,
            },
            ["friendName", "amount"],
        ),
        downstream_action="get_group",
        aliases=frozenset({"payFriend", "settleUp", "settleBalance"}),
    ),
    ToolDescriptor(
        name="createSplitwiseExpense",
        display_name="Create Splitwise Expense",
        description="WRITE: Create a new expense in Splitwise, split equally, with confirmation",
        category="expenses",
        type="action",
        requires_confirmation=True,
        parameters=_schema(
            {
                "description": {"type": "string", "description": "Expense description"},
                "amount": {"type": "number", "description": "Total expense amount"},
                "groupId": _GROUP_ID,
            },
            ["description", "amount"],
        ),
        downstream_action="create_expense",
        aliases=frozenset({"createExpense", "addExpense"}),
    ),
]

EXPENSE_KEYWORD_RULES: Tuple[Tuple[str, str], ...] = (
    ("pay", "payFriendSplitwise"),
    ("settle", "payFriendSplitwise"),
    ("create", "createSplitwiseExpense"),
    ("add", "createSplitwiseExpense"),
    ("balance", "getSplitwiseBalance"),
    ("owe", "getSplitwiseBalance"),
    ("expense", "getSplitwiseExpenses"),
    ("transaction", "getSplitwiseExpenses"),
    ("group", "getSplitwiseGroups"),
)

expense_registry = ToolRegistry(EXPENSE_TOOLS, EXPENSE_KEYWORD_RULES)
