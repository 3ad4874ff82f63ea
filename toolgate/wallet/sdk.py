"""
Wallet-automation SDK adapter and session cache.

The SDK is an importable module exposing ``configure_with_wallet(config)``
(returns a client with ``run(action, params)``) and ``list_actions()``
(returns objects with a ``name``). Either may be sync or async. The module
path comes from ``settings.wallet_sdk_module``; when it is empty or cannot be
imported, the wallet gateway serves demo data.
"""

from __future__ import annotations

import asyncio
import importlib
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..core.credentials import RequestConfig

logger = logging.getLogger(__name__)


class WalletAction(Protocol):
    name: str


class WalletClient(Protocol):
    def run(self, action: Any, params: Dict[str, Any]) -> Any: ...


class WalletSdk(Protocol):
    def configure_with_wallet(self, config: Dict[str, Any]) -> Any: ...

    def list_actions(self) -> Sequence[Any]: ...


async def resolve_maybe_awaitable(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def load_wallet_sdk(module_path: Optional[str]) -> Optional[WalletSdk]:
    """Import the SDK module named by ``module_path``; None when unavailable."""
    if not module_path:
        return None
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        logger.warning("Wallet SDK module %s could not be imported: %s", module_path, exc)
        return None

    missing = [attr for attr in ("configure_with_wallet", "list_actions") if not hasattr(module, attr)]
    if missing:
        logger.warning("Wallet SDK module %s is missing %s", module_path, ", ".join(missing))
        return None
    return module


def sdk_wallet_config(config: RequestConfig) -> Dict[str, Any]:
    """Credential payload handed to ``configure_with_wallet``."""
    return {
        "privateKey": config.private_key,
        "rpcUrl": config.rpc_url,
        "apiKey": config.gasless_api_key,
        "chainID": config.chain_id,
    }


@dataclass
class WalletSession:
    """A configured SDK client plus the actions it can run."""

    client: Any
    actions: List[Any] = field(default_factory=list)

    @property
    def action_names(self) -> List[str]:
        return [getattr(action, "name", str(action)) for action in self.actions]

    def find_action(self, name: Optional[str]) -> Optional[Any]:
        for action in self.actions:
            if getattr(action, "name", None) == name:
                return action
        return None

    async def run(self, action: Any, params: Dict[str, Any]) -> Any:
        return await resolve_maybe_awaitable(self.client.run(action, params))


class WalletSessionCache:
    """
    SDK sessions keyed by a digest of the credential set.

    Concurrent first use of one credential set awaits a single in-flight
    initialization. A failed initialization is not cached, so the next
    request tries again. At most ``max_size`` sessions are kept; the least
    recently used one is dropped first.
    """

    def __init__(self, sdk: Optional[WalletSdk], max_size: int = 64):
        self.sdk = sdk
        self.max_size = max_size
        self._sessions: Dict[str, WalletSession] = {}
        self._pending: Dict[str, asyncio.Task] = {}

    @property
    def available(self) -> bool:
        return self.sdk is not None

    def __len__(self) -> int:
        return len(self._sessions)

    async def _create(self, config: RequestConfig) -> WalletSession:
        client = await resolve_maybe_awaitable(self.sdk.configure_with_wallet(sdk_wallet_config(config)))
        actions = await resolve_maybe_awaitable(self.sdk.list_actions())
        session = WalletSession(client=client, actions=list(actions or []))
        logger.info("Wallet SDK initialized on chain %s: %d actions available", config.chain_id, len(session.actions))
        return session

    async def get(self, config: RequestConfig) -> Optional[WalletSession]:
        """Session for ``config``, or None when the SDK or credentials are unavailable."""
        if self.sdk is None:
            return None
        if not config.has_wallet_credentials:
            logger.info("Missing wallet credentials; running in demo mode")
            return None

        key = config.wallet_credential_key()
        session = self._sessions.pop(key, None)
        if session is not None:
            # Re-insert to mark as most recently used
            self._sessions[key] = session
            return session

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._create(config))
            self._pending[key] = task

        try:
            session = await asyncio.shield(task)
        except Exception as exc:
            logger.warning("Wallet SDK initialization failed: %s", exc)
            return None
        finally:
            if task.done() and self._pending.get(key) is task:
                del self._pending[key]

        self._sessions.pop(key, None)
        self._sessions[key] = session

        # Evict oldest if over max size
        while len(self._sessions) > self.max_size:
            oldest_key = next(iter(self._sessions))
            del self._sessions[oldest_key]
            logger.debug("Evicted wallet SDK session %s", oldest_key[:8])
        return session

    def clear(self) -> None:
        self._sessions.clear()
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()
