"""Expense gateway: Splitwise balance, expense and payment tools."""

from .service import ExpenseGateway
from .tools import expense_registry

__all__ = ["ExpenseGateway", "expense_registry"]
