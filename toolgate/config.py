from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Normalize values that are compared textually downstream."""

        super().model_post_init(__context)

        if self.splitwise_base_url.endswith("/"):
            object.__setattr__(self, "splitwise_base_url", self.splitwise_base_url.rstrip("/"))

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    wallet_port: int = Field(default=3001, description="Wallet gateway port")
    expense_port: int = Field(default=3000, description="Expense gateway port")
    log_level: str = Field(default="INFO", description="Logging level")
    version: str = Field(default="1.0.0", description="Gateway version reported on /health")

    # Wallet Gateway
    wallet_agent_name: str = Field(
        default="0xGasless Avalanche DeFi Voice Agent",
        description="Agent name surfaced on wallet metadata endpoints",
    )
    default_chain_id: int = Field(default=43114, description="Chain used when x-chain-id is absent")
    default_slippage: str = Field(default="0.5", description="Swap slippage used when x-default-slippage is absent")
    default_rpc_url: str = Field(
        default="https://api.avax.network/ext/bc/C/rpc",
        description="RPC endpoint used when x-rpc-url is absent",
    )
    wallet_sdk_module: str = Field(
        default="",
        description="Import path of the wallet-automation SDK adapter; empty keeps the gateway in demo mode",
        validation_alias=AliasChoices("wallet_sdk_module", "WALLET_SDK_MODULE", "AGENTKIT_MODULE"),
    )
    wallet_session_cache_size: int = Field(
        default=64,
        ge=1,
        description="Maximum number of wallet SDK sessions kept, one per credential set",
    )

    # Expense Gateway
    expense_agent_name: str = Field(
        default="Splitwise Voice Payment Agent",
        description="Agent name surfaced on expense metadata endpoints",
    )
    splitwise_base_url: str = Field(
        default="https://secure.splitwise.com/api/v3.0",
        description="Splitwise REST API base URL",
    )
    default_group_id: str = Field(default="12345", description="Group used when x-default-group-id is absent")
    default_currency: str = Field(default="INR", description="Currency used when x-default-currency is absent")
    default_language: str = Field(default="en-IN", description="Language used when x-language is absent")

    # Downstream calls
    request_timeout_seconds: int = Field(default=15, ge=1, description="Downstream HTTP timeout")

    @property
    def has_wallet_sdk(self) -> bool:
        return bool(self.wallet_sdk_module)


# Global settings instance
settings = Settings()
