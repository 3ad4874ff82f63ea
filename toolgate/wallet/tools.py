"""Wallet gateway tool definitions."""

from typing import List, Tuple

from ..core.chains import SUPPORTED_CHAIN_IDS
from ..core.registry import ToolDescriptor, ToolRegistry

AMOUNT_PATTERN = r"^\d+(\.\d+)?$"
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


def _schema(properties=None, required=None):
    return {
        "type": "object",
        "properties": properties or {},
        "required": required or [],
        "additionalProperties": False,
    }


WALLET_TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name="getWalletAddress",
        display_name="Get Wallet Address",
        description="Retrieve your smart wallet address for DeFi operations",
        category="wallet",
        type="query",
        parameters=_schema(),
        downstream_action="get_address",
        aliases=frozenset({
            "getSmartAccountAddress", "getUserAccount", "getAccount", "getWallet",
            "getAddress", "myAddress", "walletAddress", "smartAccount",
        }),
    ),
    ToolDescriptor(
        name="getWalletBalance",
        display_name="Get Wallet Balance",
        description="Check your balance of the native token or a specific token contract",
        category="wallet",
        type="query",
        parameters=_schema({
            "tokenAddress": {
                "type": "string",
                "description": "Token symbol or contract address (optional, leave empty for the native token)",
            },
        }),
        downstream_action="get_balance",
        aliases=frozenset({
            "getBalance", "checkBalance", "myBalance", "balance", "getTokenBalance", "showBalance",
        }),
    ),
    ToolDescriptor(
        name="transferTokens",
        display_name="Transfer Tokens",
        description=(
            "Send tokens to another wallet address using gasless transactions. "
            "Supports USDT, USDC, the native token and contract addresses."
        ),
        category="defi",
        type="action",
        requires_confirmation=True,
        parameters=_schema(
            {
                "to": {
                    "type": "string",
                    "description": "Recipient wallet address (must start with 0x)",
                    "pattern": ADDRESS_PATTERN,
                },
                "tokenAddress": {
                    "type": "string",
                    "description": 'Token to transfer. Use symbols (USDT, USDC, AVAX) or contract addresses; "eth" means the native token.',
                },
                "amount": {
                    "type": "string",
                    "description": 'Amount to transfer (human readable, e.g. "1", "100.5")',
                    "pattern": AMOUNT_PATTERN,
                },
            },
            ["to", "tokenAddress", "amount"],
        ),
        downstream_action="smart_transfer",
        aliases=frozenset({"sendTokens", "send", "transfer", "sendMoney", "pay", "transferTo"}),
    ),
    ToolDescriptor(
        name="swapTokens",
        display_name="Swap Tokens",
        description="Exchange tokens using DEX aggregation",
        category="defi",
        type="action",
        requires_confirmation=True,
        parameters=_schema(
            {
                "fromToken": {"type": "string", "description": "Source token (symbol or address)"},
                "toToken": {"type": "string", "description": "Destination token (symbol or address)"},
                "amount": {"type": "string", "description": "Amount to swap", "pattern": AMOUNT_PATTERN},
                "slippage": {
                    "type": "string",
                    "description": "Slippage tolerance in percent (optional, default 0.5)",
                    "pattern": AMOUNT_PATTERN,
                },
            },
            ["fromToken", "toToken", "amount"],
        ),
        downstream_action="smart_swap",
        aliases=frozenset({"swap", "exchange", "trade", "convert", "swapFor"}),
    ),
    ToolDescriptor(
        name="bridgeTokens",
        display_name="Bridge Tokens",
        description="Transfer tokens across different blockchain networks",
        category="defi",
        type="action",
        requires_confirmation=True,
        parameters=_schema(
            {
                "fromChainId": {
                    "type": "number",
                    "description": "Source chain ID (43114=Avalanche, 56=BSC, 1=Ethereum)",
                    "enum": list(SUPPORTED_CHAIN_IDS),
                },
                "toChainId": {
                    "type": "number",
                    "description": "Destination chain ID",
                    "enum": list(SUPPORTED_CHAIN_IDS),
                },
                "tokenInAddress": {"type": "string", "description": "Token on the source chain (symbol or address)"},
                "tokenOutAddress": {"type": "string", "description": "Token on the destination chain (symbol or address)"},
                "amount": {"type": "string", "description": "Amount to bridge", "pattern": AMOUNT_PATTERN},
                "recipientAddress": {
                    "type": "string",
                    "description": "Recipient address on destination chain (optional)",
                    "pattern": ADDRESS_PATTERN,
                },
            },
            ["fromChainId", "toChainId", "tokenInAddress", "tokenOutAddress", "amount"],
        ),
        downstream_action="smart_bridge",
        aliases=frozenset({"bridge", "crossChain", "moveTokens", "bridgeTo"}),
    ),
    ToolDescriptor(
        name="queryBlockchainData",
        display_name="Query Blockchain Data",
        description=(
            "Execute SQL queries on blockchain data using the Space and Time network. "
            "Analyze transactions, contracts and on-chain activity."
        ),
        category="analytics",
        type="query",
        parameters=_schema(
            {
                "query": {
                    "type": "string",
                    "description": (
                        'SQL query to execute on blockchain data. Example: '
                        '"SELECT * FROM ethereum.transactions WHERE block_number > 18000000 LIMIT 10"'
                    ),
                    "minLength": 10,
                    "maxLength": 2000,
                },
            },
            ["query"],
        ),
        downstream_action="execute_sxt_sql",
        aliases=frozenset({"query", "sql", "analytics", "data", "sqlQuery", "blockchain_query", "sxt_query"}),
    ),
]

# Verbs come before the generic wallet/account nouns: "checkWalletBalance" is a balance call.
WALLET_KEYWORD_RULES: Tuple[Tuple[str, str], ...] = (
    ("balance", "getWalletBalance"),
    ("send", "transferTokens"),
    ("transfer", "transferTokens"),
    ("swap", "swapTokens"),
    ("trade", "swapTokens"),
    ("exchange", "swapTokens"),
    ("bridge", "bridgeTokens"),
    ("query", "queryBlockchainData"),
    ("sql", "queryBlockchainData"),
    ("address", "getWalletAddress"),
    ("wallet", "getWalletAddress"),
    ("account", "getWalletAddress"),
)

wallet_registry = ToolRegistry(WALLET_TOOLS, WALLET_KEYWORD_RULES)
