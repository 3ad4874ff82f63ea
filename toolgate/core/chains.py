"""
Static chain metadata for the wallet gateway.

Each chain carries its explorer, default RPC and the symbol table used by the
token resolver. Entries are process-wide constants and never mutated.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_CHAIN_ID = 43114


@dataclass(frozen=True)
class TokenInfo:
    """A token known on one chain."""

    symbol: str
    name: str
    address: str
    aliases: Tuple[str, ...] = ()
    decimals: int = 18


@dataclass(frozen=True)
class ChainConfig:
    """Chain configuration keyed by numeric chain id."""

    chain_id: int
    name: str
    native_symbol: str
    rpc_url: str
    explorer_url: str
    tokens: Tuple[TokenInfo, ...] = ()
    native_aliases: Tuple[str, ...] = ()
    symbol_table: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        table: Dict[str, str] = {}
        for token in self.tokens:
            for key in (token.symbol, token.name, *token.aliases):
                table.setdefault(key.lower(), token.address)
        object.__setattr__(self, "symbol_table", MappingProxyType(table))

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url}/tx/{tx_hash}"

    def find_token(self, address: str) -> Optional[TokenInfo]:
        lowered = address.lower()
        for token in self.tokens:
            if token.address.lower() == lowered:
                return token
        return None

    def to_dict(self, *, primary: bool = False) -> Dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "name": self.name,
            "symbol": self.native_symbol,
            "rpc": self.rpc_url,
            "explorer": self.explorer_url,
            "tokens": [
                {"symbol": t.symbol, "name": t.name, "address": t.address, "decimals": t.decimals}
                for t in self.tokens
            ],
            "primary": primary,
        }


CHAIN_CONFIGS: Mapping[int, ChainConfig] = MappingProxyType({
    43114: ChainConfig(
        chain_id=43114,
        name="Avalanche",
        native_symbol="AVAX",
        rpc_url="https://api.avax.network/ext/bc/C/rpc",
        explorer_url="https://snowtrace.io",
        native_aliases=("avalanche",),
        tokens=(
            TokenInfo("USDT", "Tether USD", "0x9702230A8Ea53601f5cD2dc00fDBc13d4dF4A8c7", ("usdt.e", "tether"), 6),
            TokenInfo("USDC", "USD Coin", "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E", ("usdc.e",), 6),
            TokenInfo("WAVAX", "Wrapped AVAX", "0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7"),
        ),
    ),
    56: ChainConfig(
        chain_id=56,
        name="BSC",
        native_symbol="BNB",
        rpc_url="https://bsc-dataseed.binance.org/",
        explorer_url="https://bscscan.com",
        native_aliases=("bnb", "binance"),
        tokens=(
            TokenInfo("USDT", "Tether USD", "0x55d398326f99059fF775485246999027B3197955", ("bsc-usd", "tether")),
            TokenInfo("USDC", "USD Coin", "0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d", ("usdc.e",)),
            TokenInfo("WBNB", "Wrapped BNB", "0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c"),
        ),
    ),
    1: ChainConfig(
        chain_id=1,
        name="Ethereum",
        native_symbol="ETH",
        rpc_url="https://eth.llamarpc.com",
        explorer_url="https://etherscan.io",
        native_aliases=("ethereum", "ether"),
        tokens=(
            TokenInfo("USDT", "Tether USD", "0xdAC17F958D2ee523a2206206994597C13D831ec7", ("tether",), 6),
            TokenInfo("USDC", "USD Coin", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", (), 6),
            TokenInfo("WETH", "Wrapped Ether", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"),
        ),
    ),
    137: ChainConfig(
        chain_id=137,
        name="Polygon",
        native_symbol="MATIC",
        rpc_url="https://polygon-rpc.com",
        explorer_url="https://polygonscan.com",
        native_aliases=("matic", "pol", "polygon"),
        tokens=(
            TokenInfo("USDT", "Tether USD", "0xc2132D05D31c914a87C6611C10748AEb04B58e8F", ("usdt0", "tether"), 6),
            TokenInfo("USDC", "USD Coin", "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359", (), 6),
            TokenInfo("WMATIC", "Wrapped Matic", "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270", ("wpol",)),
        ),
    ),
    8453: ChainConfig(
        chain_id=8453,
        name="Base",
        native_symbol="ETH",
        rpc_url="https://mainnet.base.org",
        explorer_url="https://basescan.org",
        native_aliases=("ether",),
        tokens=(
            TokenInfo("USDC", "USD Coin", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", ("usdbc",), 6),
            TokenInfo("USDT", "Tether USD", "0xfde4C96c8593536E31F229EA8f37b2ADa2699bb2", ("tether",), 6),
            TokenInfo("WETH", "Wrapped Ether", "0x4200000000000000000000000000000000000006"),
        ),
    ),
})

SUPPORTED_CHAIN_IDS: Tuple[int, ...] = tuple(CHAIN_CONFIGS)


def get_chain_config(chain_id: int) -> Optional[ChainConfig]:
    return CHAIN_CONFIGS.get(chain_id)


def is_supported_chain(chain_id: Any) -> bool:
    return chain_id in CHAIN_CONFIGS


def chain_name(chain_id: int) -> str:
    config = CHAIN_CONFIGS.get(chain_id)
    return config.name if config else f"Chain {chain_id}"


def explorer_tx_url(tx_hash: str, chain_id: int) -> str:
    """Explorer link for a transaction; unknown chains use the default chain's explorer."""
    config = CHAIN_CONFIGS.get(chain_id) or CHAIN_CONFIGS[DEFAULT_CHAIN_ID]
    return config.tx_url(tx_hash)


__all__ = [
    "DEFAULT_CHAIN_ID",
    "TokenInfo",
    "ChainConfig",
    "CHAIN_CONFIGS",
    "SUPPORTED_CHAIN_IDS",
    "get_chain_config",
    "is_supported_chain",
    "chain_name",
    "explorer_tx_url",
]
