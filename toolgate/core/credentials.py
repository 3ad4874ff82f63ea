"""
Per-request configuration built from agent-platform headers.

Every header is accepted in its hyphen and underscore spellings. Nothing read
here outlives the request.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def _spellings(*names: str) -> tuple[str, ...]:
    variants: list[str] = []
    for name in names:
        for candidate in (name, name.replace("-", "_"), name.replace("_", "-")):
            if candidate not in variants:
                variants.append(candidate)
    return tuple(variants)


API_KEY_HEADERS = _spellings("x-api-key", "x-apikey")
PRIVATE_KEY_HEADERS = _spellings("x-private-key")
RPC_URL_HEADERS = _spellings("x-rpc-url")
GASLESS_KEY_HEADERS = _spellings("x-gasless-api-key")
CHAIN_ID_HEADERS = _spellings("x-chain-id")
SLIPPAGE_HEADERS = _spellings("x-default-slippage")
SXT_KEY_HEADERS = _spellings("x-sxt-api-key")
SPLITWISE_TOKEN_HEADERS = _spellings("x-splitwise-key", "x-splitwise-token", "splitwise-key")
SARVAM_KEY_HEADERS = _spellings("x-sarvam-key", "sarvam-api-key")
GROUP_ID_HEADERS = _spellings("x-default-group-id")
CURRENCY_HEADERS = _spellings("x-default-currency")
LANGUAGE_HEADERS = _spellings("x-language")


def _first_header(headers: Mapping[str, str], names: Sequence[str]) -> Optional[str]:
    for name in names:
        value = headers.get(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def _bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    value = headers.get("authorization")
    if not value:
        return None
    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def _parse_chain_id(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        chain_id = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric chain id header: %s", raw)
        return default
    return chain_id or default


@dataclass(frozen=True)
class RequestConfig:
    """Credentials and defaults for one request."""

    api_key: Optional[str] = None
    private_key: Optional[str] = None
    rpc_url: Optional[str] = None
    gasless_api_key: Optional[str] = None
    chain_id: int = 43114
    default_slippage: str = "0.5"
    sxt_api_key: Optional[str] = None
    splitwise_token: Optional[str] = None
    sarvam_api_key: Optional[str] = None
    default_group_id: str = "12345"
    default_currency: str = "INR"
    language: str = "en-IN"
    user_agent: str = "bhindi-agent"

    @property
    def has_wallet_credentials(self) -> bool:
        return bool(self.private_key and self.rpc_url and self.gasless_api_key)

    @property
    def has_splitwise_token(self) -> bool:
        return bool(self.splitwise_token)

    def wallet_credential_key(self) -> str:
        """Stable digest identifying the wallet credential set."""
        material = "\x1f".join(
            [self.private_key or "", self.rpc_url or "", self.gasless_api_key or "", str(self.chain_id)]
        )
        return hashlib.sha256(material.encode("utf-8")).hexdigest()

    def presence(self) -> dict[str, object]:
        """Loggable summary; never includes secret values."""
        return {
            "hasApiKey": bool(self.api_key),
            "hasPrivateKey": bool(self.private_key),
            "hasGaslessKey": bool(self.gasless_api_key),
            "hasSxtKey": bool(self.sxt_api_key),
            "hasSplitwiseToken": bool(self.splitwise_token),
            "chainId": self.chain_id,
            "userAgent": self.user_agent,
        }


def extract_request_config(
    headers: Mapping[str, str],
    settings: Optional[Settings] = None,
) -> RequestConfig:
    """Read credential headers into a ``RequestConfig``.

    ``headers`` must be case-insensitive (Starlette ``Headers``) or already
    lower-cased.
    """
    cfg = settings or default_settings

    api_key = _first_header(headers, API_KEY_HEADERS)
    config = RequestConfig(
        api_key=api_key,
        private_key=_first_header(headers, PRIVATE_KEY_HEADERS),
        rpc_url=_first_header(headers, RPC_URL_HEADERS) or cfg.default_rpc_url,
        gasless_api_key=_first_header(headers, GASLESS_KEY_HEADERS) or api_key,
        chain_id=_parse_chain_id(_first_header(headers, CHAIN_ID_HEADERS), cfg.default_chain_id),
        default_slippage=_first_header(headers, SLIPPAGE_HEADERS) or cfg.default_slippage,
        sxt_api_key=_first_header(headers, SXT_KEY_HEADERS),
        splitwise_token=_first_header(headers, SPLITWISE_TOKEN_HEADERS) or _bearer_token(headers),
        sarvam_api_key=_first_header(headers, SARVAM_KEY_HEADERS),
        default_group_id=_first_header(headers, GROUP_ID_HEADERS) or cfg.default_group_id,
        default_currency=(_first_header(headers, CURRENCY_HEADERS) or cfg.default_currency).upper(),
        language=_first_header(headers, LANGUAGE_HEADERS) or cfg.default_language,
        user_agent=headers.get("user-agent") or "bhindi-agent",
    )

    logger.debug("Configuration extracted: %s", config.presence())
    return config
