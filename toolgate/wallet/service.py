"""
Wallet gateway service.

Runs wallet tools through the wallet-automation SDK, or through the demo
responder when no SDK session can be built for the request's credentials.
"""

import logging
from typing import Any, Dict, Optional

from ..config import Settings, settings as default_settings
from ..core.address import find_transaction_hash
from ..core.chains import CHAIN_CONFIGS, DEFAULT_CHAIN_ID, chain_name, explorer_tx_url, get_chain_config
from ..core.credentials import RequestConfig
from ..core.errors import ExecutionError
from ..core.gateway import GatewayService
from ..core.registry import ToolDescriptor
from ..core.results import ToolResult, utc_timestamp
from ..core.tokens import token_symbol
from .mock import mock_wallet_response
from .params import normalize_wallet_params
from .sdk import WalletSession, WalletSessionCache, load_wallet_sdk
from .tools import wallet_registry

logger = logging.getLogger(__name__)

# Tools whose SDK output may report a soft error after the transaction was mined.
TRANSACTION_TOOLS = frozenset({"transferTokens", "swapTokens"})
SOFT_ERROR_MARKERS = ("error", "failed", "bundler")
SUPERSEDED_NOTE = "Transaction successful despite SDK error message"


def _is_soft_error(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in SOFT_ERROR_MARKERS)


class WalletGateway(GatewayService):
    """Tool gateway in front of the wallet-automation SDK."""

    description = "Gasless DeFi automation with voice support and blockchain analytics"
    registry = wallet_registry

    def __init__(
        self,
        sessions: Optional[WalletSessionCache] = None,
        app_settings: Optional[Settings] = None,
    ):
        super().__init__(logger)
        self.settings = app_settings or default_settings
        self.name = self.settings.wallet_agent_name
        self.version = self.settings.version
        if sessions is None:
            sessions = WalletSessionCache(
                load_wallet_sdk(self.settings.wallet_sdk_module),
                max_size=self.settings.wallet_session_cache_size,
            )
        self.sessions = sessions

    def normalize(self, tool: ToolDescriptor, raw_params: Any, config: RequestConfig) -> Dict[str, Any]:
        return normalize_wallet_params(tool.name, raw_params, config)

    async def connect(self, config: RequestConfig) -> Optional[WalletSession]:
        return await self.sessions.get(config)

    def mock(self, tool: ToolDescriptor, params: Dict[str, Any], config: RequestConfig) -> ToolResult:
        return mock_wallet_response(tool.name, params, config)

    async def invoke(
        self,
        tool: ToolDescriptor,
        params: Dict[str, Any],
        config: RequestConfig,
        downstream: WalletSession,
    ) -> Dict[str, Any]:
        action = downstream.find_action(tool.downstream_action)
        if action is None:
            raise ExecutionError(
                f"Wallet SDK action {tool.downstream_action} not found",
                availableActions=downstream.action_names,
            )

        self.logger.info("Running SDK action %s for %s", tool.downstream_action, tool.name)
        result = await downstream.run(action, params)
        self.logger.debug("Raw SDK result for %s: %r", tool.name, result)

        if tool.name in TRANSACTION_TOOLS:
            confirmed = self.transaction_result(tool.name, str(result), params, config)
            if confirmed is not None:
                return confirmed

        return {
            "result": result,
            "toolName": tool.name,
            "processedArgs": params,
            "executedAt": utc_timestamp(),
            "chainId": config.chain_id,
            "source": "sdk",
        }

    def transaction_result(
        self,
        tool_name: str,
        text: str,
        params: Dict[str, Any],
        config: RequestConfig,
    ) -> Optional[Dict[str, Any]]:
        """
        Build a success payload when ``text`` carries a transaction hash.

        The SDK's bundler transport can report an error after the user
        operation has been mined, so a hash in the output counts as success
        whatever else the text says. This is a heuristic, not a receipt check.
        """
        tx_hash = find_transaction_hash(text)
        if tx_hash is None:
            return None

        explorer_url = explorer_tx_url(tx_hash, config.chain_id)
        if tool_name == "transferTokens":
            operation = "Transfer"
            details = f"{params['amount']} {token_symbol(params['tokenAddress'], config.chain_id)} to {params['destination']}"
        else:
            operation = "Swap"
            details = (
                f"{params['amount']} {token_symbol(params['tokenIn'], config.chain_id)} → "
                f"{token_symbol(params['tokenOut'], config.chain_id)}"
            )

        data: Dict[str, Any] = {
            "result": (
                f"{operation} completed successfully!\n\n"
                f"Transaction Hash: {tx_hash}\n\n"
                f"Details:\n• {operation}: {details}\n• Network: {chain_name(config.chain_id)}\n\n"
                f"View on Explorer: {explorer_url}"
            ),
            "transactionHash": tx_hash,
            "explorerUrl": explorer_url,
            "status": "success",
            "toolName": tool_name,
            "processedArgs": params,
            "executedAt": utc_timestamp(),
            "chainId": config.chain_id,
            "source": "sdk",
        }
        if _is_soft_error(text):
            self.logger.warning("SDK reported an error for %s but returned transaction %s", tool_name, tx_hash)
            data["note"] = SUPERSEDED_NOTE
        return data

    def on_failure(
        self,
        tool: ToolDescriptor,
        exc: Exception,
        params: Dict[str, Any],
        config: RequestConfig,
        raw_params: Any,
        execution_id: str,
    ) -> ToolResult:
        if tool.name in TRANSACTION_TOOLS:
            confirmed = self.transaction_result(tool.name, str(exc), params, config)
            if confirmed is not None:
                confirmed["executionId"] = execution_id
                confirmed.setdefault("note", SUPERSEDED_NOTE)
                return ToolResult(success=True, data=confirmed)
        return super().on_failure(tool, exc, params, config, raw_params, execution_id)

    def failure_context(self, config: RequestConfig) -> Dict[str, Any]:
        return {"chainId": config.chain_id}

    def suggestion_context(self, config: RequestConfig) -> Dict[str, Any]:
        chain = get_chain_config(config.chain_id) or CHAIN_CONFIGS[DEFAULT_CHAIN_ID]
        return {"native_symbol": chain.native_symbol}

    def health(self) -> Dict[str, Any]:
        payload = super().health()
        payload["sdk"] = {
            "loaded": self.sessions.available,
            "module": self.settings.wallet_sdk_module or None,
            "sessions": len(self.sessions),
        }
        payload["chains"] = {
            "default": self.settings.default_chain_id,
            "supported": list(CHAIN_CONFIGS),
        }
        return payload

    def chains(self) -> Dict[str, Any]:
        return {
            "default": self.settings.default_chain_id,
            "chains": [
                chain.to_dict(primary=chain_id == self.settings.default_chain_id)
                for chain_id, chain in CHAIN_CONFIGS.items()
            ],
        }

    def debug_tools(self) -> Dict[str, Any]:
        listing = super().debug_tools()
        listing["sdk"] = {
            "loaded": self.sessions.available,
            "module": self.settings.wallet_sdk_module,
            "sessions": len(self.sessions),
        }
        return listing

    def capabilities(self) -> Dict[str, Any]:
        return {
            "agent": {
                "name": self.name,
                "version": self.version,
                "description": "DeFi automation system with blockchain analytics capabilities",
            },
            "capabilities": {
                "voice": True,
                "multichain": True,
                "gasless": True,
                "defi": True,
                "analytics": True,
                "sxt_queries": True,
            },
            "supported": {
                "chains": self.chains()["chains"],
                "languages": ["Hindi", "English", "Bengali", "Tamil", "Telugu"],
                "operations": [
                    "Smart wallet address retrieval",
                    "Multi-token balance checking",
                    "Gasless token transfers with success detection",
                    "DEX token swaps",
                    "Cross-chain token bridging",
                    "SQL-based blockchain analytics via Space and Time",
                ],
            },
            "authentication": {
                "required": ["x-api-key"],
                "optional": ["x-private-key", "x-rpc-url", "x-gasless-api-key", "x-sxt-api-key"],
                "chainConfig": ["x-chain-id", "x-default-slippage"],
            },
            "endpoints": {
                "health": "/health",
                "tools": "/tools",
                "actions": "/actions",
                "capabilities": "/capabilities",
                "chains": "/chains",
            },
        }
