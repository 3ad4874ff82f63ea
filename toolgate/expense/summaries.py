"""Voice-friendly text summaries of Splitwise data."""

from typing import Any, Dict, Iterable, List, Optional

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}


def currency_symbol(code: Optional[str]) -> str:
    if not code:
        return CURRENCY_SYMBOLS["INR"]
    return CURRENCY_SYMBOLS.get(code.upper(), f"{code.upper()} ")


def money(amount: Any, currency: Optional[str]) -> str:
    return f"{currency_symbol(currency)}{float(amount):.2f}"


def member_balance(member: Dict[str, Any]) -> float:
    balances = member.get("balance") or []
    if not balances:
        return 0.0
    try:
        return float(balances[0].get("amount") or 0)
    except (TypeError, ValueError):
        return 0.0


def member_currency(member: Dict[str, Any], default: str) -> str:
    balances = member.get("balance") or []
    if balances and balances[0].get("currency_code"):
        return balances[0]["currency_code"]
    return default


def find_member(members: Iterable[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    """Match a member by first name, then by full name, case-insensitively."""
    wanted = name.strip().lower()
    members = list(members)
    for member in members:
        if (member.get("first_name") or "").lower() == wanted:
            return member
    for member in members:
        full = f"{member.get('first_name') or ''} {member.get('last_name') or ''}".strip().lower()
        if full == wanted:
            return member
    return None


def member_names(members: Iterable[Dict[str, Any]]) -> List[str]:
    return [member.get("first_name") or "" for member in members]


def balance_text(group: Dict[str, Any], current_user: Dict[str, Any], default_currency: str) -> str:
    currency = member_currency(current_user, default_currency)
    text = f"Here's your balance in {group.get('name')}: "
    balance = member_balance(current_user)

    if balance > 0:
        text += f"You are owed {money(balance, currency)}."
        for member in group.get("members") or []:
            owed = member_balance(member)
            if member.get("id") != current_user.get("id") and owed < 0:
                text += f" {member.get('first_name')} owes you {money(abs(owed), currency)}."
    elif balance < 0:
        text += f"You owe {money(abs(balance), currency)}."
    else:
        text += "You're all settled up!"
    return text


def expenses_text(expenses: List[Dict[str, Any]], group_name: Optional[str] = None) -> str:
    if not expenses:
        return "No expenses found in this group."

    entries = []
    for expense in expenses:
        paid_by = (expense.get("created_by") or {}).get("first_name") or "Unknown"
        date = (expense.get("date") or "")[:10]
        when = f"{date}, " if date else ""
        cost = money(expense.get("cost") or 0, expense.get("currency_code"))
        entries.append(f"{expense.get('description')}: {cost} ({when}paid by {paid_by})")

    prefix = f"Recent expenses in {group_name}: " if group_name else "Recent expenses: "
    return prefix + ", ".join(entries)


def groups_text(groups: List[Dict[str, Any]]) -> str:
    listing = ", ".join(f"{group.get('name')} (ID: {group.get('id')})" for group in groups)
    return f"Your groups: {listing}" if listing else "You are not a member of any groups."


def pending_payment_text(friend: str, amount: str, currency: str, group_name: Optional[str]) -> str:
    return f"Ready to settle {money(amount, currency)} with {friend} in {group_name}. Say 'confirm' to proceed."
