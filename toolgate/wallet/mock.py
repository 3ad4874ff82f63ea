"""Demo responses for the wallet gateway when no SDK session is available."""

import secrets
from typing import Any, Callable, Dict

from ..core.chains import DEFAULT_CHAIN_ID, chain_name, get_chain_config
from ..core.credentials import RequestConfig
from ..core.params import format_decimal
from ..core.results import ToolResult
from ..core.tokens import token_info

DEMO_WALLET_ADDRESS = "0x742d35Cc6639C0532fEb96c26c5CA44f39F5C9a6"
DEMO_NATIVE_BALANCE = "2.5"
DEMO_NATIVE_USD = "125.50"
DEMO_TOKEN_BALANCES = {
    "USDT": "1250.50",
    "USDC": "890.25",
    "WAVAX": "1.2",
}
DEMO_SQL_ROWS = [
    {"block_number": 18000001, "transaction_count": 245, "gas_used": "12500000"},
    {"block_number": 18000002, "transaction_count": 189, "gas_used": "11200000"},
    {"block_number": 18000003, "transaction_count": 298, "gas_used": "13800000"},
]
SWAP_DEMO_RATE = 0.98


def demo_transaction_hash() -> str:
    return "0x" + secrets.token_hex(32)


def _native_symbol(chain_id: int) -> str:
    chain = get_chain_config(chain_id) or get_chain_config(DEFAULT_CHAIN_ID)
    return chain.native_symbol


def _demo(**data: Any) -> ToolResult:
    return ToolResult.ok(**data, source="demo")


def mock_address(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    return _demo(
        address=DEMO_WALLET_ADDRESS,
        chain=chain_name(config.chain_id),
        chainId=config.chain_id,
        text=f"Your smart wallet address: {DEMO_WALLET_ADDRESS}",
    )


def mock_balance(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    token_address = params.get("tokenAddress")
    if token_address:
        info = token_info(token_address, config.chain_id)
        balance = DEMO_TOKEN_BALANCES.get(info["symbol"], "0")
        return _demo(
            balance=balance,
            symbol=info["symbol"],
            address=token_address,
            chainId=config.chain_id,
            text=f"{info['symbol']} balance: {balance}",
        )

    symbol = _native_symbol(config.chain_id)
    return _demo(
        balance=DEMO_NATIVE_BALANCE,
        symbol=symbol,
        chainId=config.chain_id,
        usdValue=DEMO_NATIVE_USD,
        text=f"{symbol} balance: {DEMO_NATIVE_BALANCE} (≈${DEMO_NATIVE_USD})",
    )


def mock_transfer(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    symbol = token_info(params["tokenAddress"], config.chain_id)["symbol"]
    return _demo(
        transactionId=demo_transaction_hash(),
        to=params["destination"],
        amount=params["amount"],
        token=symbol,
        tokenAddress=params["tokenAddress"],
        chainId=config.chain_id,
        status="simulated",
        text=(
            f"Demo: Would transfer {params['amount']} {symbol} to {params['destination']} "
            f"on {chain_name(config.chain_id)}"
        ),
        note="This is a demo transaction. Configure real credentials for actual transfers.",
    )


def mock_swap(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    symbol_in = token_info(params["tokenIn"], config.chain_id)["symbol"]
    symbol_out = token_info(params["tokenOut"], config.chain_id)["symbol"]
    return _demo(
        fromToken=params["tokenIn"],
        toToken=params["tokenOut"],
        amount=params["amount"],
        estimatedOutput=format_decimal(float(params["amount"]) * SWAP_DEMO_RATE),
        slippage=params["slippage"],
        chainId=config.chain_id,
        text=f"Demo: Would swap {params['amount']} {symbol_in} for {symbol_out}",
    )


def mock_bridge(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    from_chain = chain_name(params["fromChainId"])
    to_chain = chain_name(params["toChainId"])
    return _demo(
        transactionId=demo_transaction_hash(),
        fromChain=from_chain,
        toChain=to_chain,
        amount=params["amount"],
        estimatedTime="5-10 minutes",
        text=f"Demo: Would bridge {params['amount']} from {from_chain} to {to_chain}",
    )


def mock_sql(params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    query = params["sqlText"]
    preview = query if len(query) <= 50 else query[:50] + "..."
    return _demo(
        query=query,
        results={"rows": len(DEMO_SQL_ROWS), "data": DEMO_SQL_ROWS},
        text=f'Demo: SQL query executed successfully. Query: "{preview}"',
        note="Configure wallet credentials and an SxT API key for real blockchain data queries",
    )


WALLET_MOCKS: Dict[str, Callable[[Dict[str, Any], RequestConfig], ToolResult]] = {
    "getWalletAddress": mock_address,
    "getWalletBalance": mock_balance,
    "transferTokens": mock_transfer,
    "swapTokens": mock_swap,
    "bridgeTokens": mock_bridge,
    "queryBlockchainData": mock_sql,
}


def mock_wallet_response(tool_name: str, params: Dict[str, Any], config: RequestConfig) -> ToolResult:
    return WALLET_MOCKS[tool_name](params, config)
