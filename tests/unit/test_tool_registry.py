"""
Tests for tool-name resolution.

Covers:
- Canonical names and every declared alias for both gateways
- Keyword fallback and its priority order
- Unmatched names passing through unchanged
- Registry construction checks
"""

import pytest

from toolgate.core.registry import ToolDescriptor, ToolRegistry
from toolgate.expense.tools import EXPENSE_TOOLS, expense_registry
from toolgate.wallet.tools import WALLET_TOOLS, wallet_registry


WALLET_ALIAS_CASES = [(alias, tool.name) for tool in WALLET_TOOLS for alias in sorted(tool.aliases)]
EXPENSE_ALIAS_CASES = [(alias, tool.name) for tool in EXPENSE_TOOLS for alias in sorted(tool.aliases)]


def _tool(name, aliases=(), category="test"):
    return ToolDescriptor(
        name=name,
        display_name=name,
        description=f"{name} tool",
        category=category,
        aliases=frozenset(aliases),
    )


# =============================================================================
# Wallet registry
# =============================================================================

@pytest.mark.parametrize("name", [tool.name for tool in WALLET_TOOLS])
def test_wallet_canonical_names_resolve_to_themselves(name):
    assert wallet_registry.resolve(name) == name


@pytest.mark.parametrize("alias,expected", WALLET_ALIAS_CASES)
def test_wallet_aliases(alias, expected):
    assert wallet_registry.resolve(alias) == expected


@pytest.mark.parametrize(
    "requested,expected",
    [
        ("checkWalletBalance", "getWalletBalance"),
        ("sendUSDT", "transferTokens"),
        ("transferFunds", "transferTokens"),
        ("doSwap", "swapTokens"),
        ("bridgeToBase", "bridgeTokens"),
        ("runSqlReport", "queryBlockchainData"),
        ("myWalletInfo", "getWalletAddress"),
        ("getAccountDetails", "getWalletAddress"),
    ],
)
def test_wallet_keyword_fallback(requested, expected):
    assert wallet_registry.resolve(requested) == expected


def test_wallet_keyword_order_prefers_balance_over_wallet():
    # Balance keywords are checked before the address/wallet/account nouns, so a
    # name carrying both is a balance call. Gateways that check "wallet" first
    # would send "walletBalance" to getWalletAddress instead.
    assert wallet_registry.resolve("walletBalance") == "getWalletBalance"
    assert wallet_registry.resolve("walletBalanceNow") == "getWalletBalance"
    assert wallet_registry.resolve("accountBalance") == "getWalletBalance"


def test_wallet_unknown_name_is_unchanged():
    assert wallet_registry.resolve("fooBar") == "fooBar"


def test_wallet_registry_contents():
    assert len(wallet_registry) == 6
    assert "transferTokens" in wallet_registry
    assert wallet_registry.get("transferTokens").downstream_action == "smart_transfer"
    assert wallet_registry.get("queryBlockchainData").downstream_action == "execute_sxt_sql"


# =============================================================================
# Expense registry
# =============================================================================

@pytest.mark.parametrize("name", [tool.name for tool in EXPENSE_TOOLS])
def test_expense_canonical_names_resolve_to_themselves(name):
    assert expense_registry.resolve(name) == name


@pytest.mark.parametrize("alias,expected", EXPENSE_ALIAS_CASES)
def test_expense_aliases(alias, expected):
    assert expense_registry.resolve(alias) == expected


@pytest.mark.parametrize(
    "requested,expected",
    [
        ("payAndSettle", "payFriendSplitwise"),
        ("settleWithPriya", "payFriendSplitwise"),
        ("addDinner", "createSplitwiseExpense"),
        ("whoOwesWhom", "getSplitwiseBalance"),
        ("recentTransactions", "getSplitwiseExpenses"),
        ("myGroupsList", "getSplitwiseGroups"),
    ],
)
def test_expense_keyword_fallback(requested, expected):
    assert expense_registry.resolve(requested) == expected


def test_expense_unknown_name_is_unchanged():
    assert expense_registry.resolve("fooBar") == "fooBar"


def test_confirmation_flags():
    assert expense_registry.get("payFriendSplitwise").requires_confirmation is True
    assert expense_registry.get("createSplitwiseExpense").requires_confirmation is True
    assert expense_registry.get("getSplitwiseGroups").requires_confirmation is False


def test_listing_shapes():
    listing = expense_registry.get("payFriendSplitwise").to_tool_listing()
    assert listing["name"] == "payFriendSplitwise"
    assert listing["requiresConfirmation"] is True
    assert listing["aliases"] == sorted(listing["aliases"])

    action = expense_registry.get("payFriendSplitwise").to_action_listing()
    assert action["id"] == "payFriendSplitwise"
    assert action["type"] == "action"


# =============================================================================
# Construction checks
# =============================================================================

class TestRegistryConstruction:

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            ToolRegistry([_tool("a"), _tool("a")])

    def test_alias_shadowing_canonical_rejected(self):
        with pytest.raises(ValueError, match="shadows"):
            ToolRegistry([_tool("a", aliases=["b"]), _tool("b")])

    def test_alias_claimed_twice_rejected(self):
        with pytest.raises(ValueError, match="claimed by both"):
            ToolRegistry([_tool("a", aliases=["x"]), _tool("b", aliases=["x"])])

    def test_keyword_rule_to_unknown_tool_rejected(self):
        with pytest.raises(ValueError, match="unknown tool"):
            ToolRegistry([_tool("a")], keyword_rules=[("foo", "missing")])

    def test_keywords_are_matched_case_insensitively(self):
        registry = ToolRegistry([_tool("a"), _tool("b")], keyword_rules=[("FOO", "a"), ("bar", "b")])
        assert registry.resolve("xxFooBarxx") == "a"
        assert registry.resolve("BARE") == "b"
        assert registry.categories == ["test"]
