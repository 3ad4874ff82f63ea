"""
Tests for the wallet gateway execution path.

Covers:
- Demo responses for every tool when no SDK session is available
- Parameter failures never reaching the SDK
- Live SDK calls with normalized payloads
- Transaction hash detection overriding SDK error text
- Classified execution errors
"""

from types import SimpleNamespace

import pytest

from toolgate.core.credentials import RequestConfig
from toolgate.wallet.service import SUPERSEDED_NOTE, WalletGateway
from toolgate.wallet.sdk import WalletSessionCache
from toolgate.wallet.tools import wallet_registry


AVAX_USDT = "0x9702230A8Ea53601f5cD2dc00fDBc13d4dF4A8c7"
RECIPIENT = "0x" + "a" * 40
TX_HASH = "0x" + "ab" * 32

VALID_PARAMS = {
    "getWalletAddress": {},
    "getWalletBalance": {"tokenAddress": "USDT"},
    "transferTokens": {"to": RECIPIENT, "amount": "1", "tokenAddress": "USDT"},
    "swapTokens": {"fromToken": "AVAX", "toToken": "USDC", "amount": "2"},
    "bridgeTokens": {
        "fromChainId": 43114,
        "toChainId": 56,
        "tokenInAddress": "USDT",
        "tokenOutAddress": "USDT",
        "amount": "10",
    },
    "queryBlockchainData": {"query": "SELECT * FROM blocks LIMIT 5"},
}

DEFAULT_ACTIONS = ("get_address", "get_balance", "smart_transfer", "smart_swap", "smart_bridge", "execute_sxt_sql")


class FakeClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def run(self, action, params):
        self.calls.append((action.name, params))
        if self.error is not None:
            raise self.error
        return self.result


class FakeSdk:
    def __init__(self, client, actions=DEFAULT_ACTIONS):
        self.client = client
        self.actions = [SimpleNamespace(name=name) for name in actions]
        self.configured = 0

    def configure_with_wallet(self, config):
        self.configured += 1
        return self.client

    def list_actions(self):
        return self.actions


@pytest.fixture
def live_config():
    return RequestConfig(api_key="k", private_key="0xabc", rpc_url="https://rpc.test", gasless_api_key="g")


def _gateway(client=None, **sdk_kwargs):
    sdk = FakeSdk(client, **sdk_kwargs) if client is not None else None
    return WalletGateway(sessions=WalletSessionCache(sdk))


# =============================================================================
# Demo mode
# =============================================================================

def test_every_tool_has_demo_params():
    assert set(VALID_PARAMS) == set(wallet_registry.names)


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name", list(VALID_PARAMS))
async def test_demo_mode_without_sdk(tool_name):
    result = await _gateway().execute(tool_name, VALID_PARAMS[tool_name], RequestConfig(api_key="k"))

    assert result.success is True
    assert result.source == "demo"


@pytest.mark.asyncio
async def test_demo_mode_without_credentials(live_config):
    client = FakeClient(result="ok")
    gateway = _gateway(client)

    result = await gateway.execute("transferTokens", VALID_PARAMS["transferTokens"], RequestConfig(api_key="k"))

    assert result.source == "demo"
    assert result.data["status"] == "simulated"
    assert result.data["to"] == RECIPIENT
    assert result.data["token"] == "USDT"
    assert client.calls == []


@pytest.mark.asyncio
async def test_demo_bridge_has_estimate():
    result = await _gateway().execute("bridgeTokens", VALID_PARAMS["bridgeTokens"], RequestConfig(api_key="k"))

    assert result.data["estimatedTime"] == "5-10 minutes"
    assert result.data["fromChain"] == "Avalanche"
    assert result.data["toChain"] == "BSC"
    assert result.data["transactionId"].startswith("0x")


# =============================================================================
# Parameter failures
# =============================================================================

@pytest.mark.asyncio
async def test_invalid_params_never_reach_sdk(live_config):
    client = FakeClient(result="ok")
    raw = {"to": "nope", "amount": "1"}

    result = await _gateway(client).execute("transferTokens", raw, live_config)
    response = result.to_response()

    assert result.success is False
    assert response["error"]["code"] == "INVALID_PARAMETER"
    assert response["error"]["field"] == "to"
    assert response["error"]["toolName"] == "transferTokens"
    assert response["error"]["originalArgs"] == raw
    assert client.calls == []


@pytest.mark.asyncio
async def test_unsupported_chain_keeps_requested_chain_id(live_config):
    raw = {**VALID_PARAMS["bridgeTokens"], "toChainId": 999}

    result = await _gateway().execute("bridgeTokens", raw, live_config)
    error = result.to_response()["error"]

    assert error["code"] == "UNSUPPORTED_CHAIN"
    assert error["chainId"] == 999
    assert error["field"] == "toChainId"


@pytest.mark.asyncio
async def test_unknown_tool():
    result = await _gateway().execute("fooBar", {}, RequestConfig(api_key="k"))
    error = result.to_response()["error"]

    assert error["code"] == "TOOL_NOT_FOUND"
    assert "transferTokens" in error["available"]


# =============================================================================
# Live SDK
# =============================================================================

@pytest.mark.asyncio
async def test_live_balance(live_config):
    client = FakeClient(result="Balance: 2 AVAX")

    result = await _gateway(client).execute("getWalletBalance", {}, live_config)

    assert result.success is True
    assert result.data["result"] == "Balance: 2 AVAX"
    assert result.data["source"] == "sdk"
    assert result.data["processedArgs"] == {}
    assert result.data["chainId"] == 43114
    assert "executionId" in result.data
    assert client.calls == [("get_balance", {})]


@pytest.mark.asyncio
async def test_live_transfer_sends_normalized_payload(live_config):
    client = FakeClient(result=f"Transfer submitted: {TX_HASH}")

    result = await _gateway(client).execute("transferTokens", VALID_PARAMS["transferTokens"], live_config)

    assert client.calls == [
        ("smart_transfer", {"destination": RECIPIENT, "amount": "1", "tokenAddress": AVAX_USDT})
    ]
    assert result.success is True
    assert result.data["transactionHash"] == TX_HASH
    assert result.data["explorerUrl"] == f"https://snowtrace.io/tx/{TX_HASH}"
    assert result.data["status"] == "success"
    assert "note" not in result.data


@pytest.mark.asyncio
async def test_hash_overrides_error_text(live_config):
    client = FakeClient(result=f"Error: bundler timeout, but tx {TX_HASH} was mined")

    result = await _gateway(client).execute("transferTokens", VALID_PARAMS["transferTokens"], live_config)

    assert result.success is True
    assert result.data["transactionHash"] == TX_HASH
    assert result.data["note"] == SUPERSEDED_NOTE


@pytest.mark.asyncio
async def test_hash_in_exception_is_success(live_config):
    client = FakeClient(error=RuntimeError(f"bundler failed after submitting {TX_HASH}"))

    result = await _gateway(client).execute("swapTokens", VALID_PARAMS["swapTokens"], live_config)

    assert result.success is True
    assert result.data["transactionHash"] == TX_HASH
    assert result.data["note"] == SUPERSEDED_NOTE
    assert "Swap completed successfully!" in result.data["result"]


@pytest.mark.asyncio
async def test_hash_is_ignored_for_non_transaction_tools(live_config):
    client = FakeClient(result=f"block {TX_HASH}")

    result = await _gateway(client).execute("queryBlockchainData", VALID_PARAMS["queryBlockchainData"], live_config)

    assert "transactionHash" not in result.data
    assert result.data["result"] == f"block {TX_HASH}"


@pytest.mark.asyncio
async def test_sdk_failure_is_classified(live_config):
    client = FakeClient(error=RuntimeError("insufficient funds for gas"))
    raw = VALID_PARAMS["transferTokens"]

    result = await _gateway(client).execute("transferTokens", raw, live_config)
    error = result.to_response()["error"]

    assert result.success is False
    assert error["code"] == "EXECUTION_ERROR"
    assert error["message"].startswith("Insufficient funds for transferTokens")
    assert error["toolName"] == "transferTokens"
    assert error["originalArgs"] == raw
    assert error["processedArgs"]["destination"] == RECIPIENT
    assert error["chainId"] == 43114
    assert error["executionId"]
    assert "Check your wallet balance" in error["suggestions"]


@pytest.mark.asyncio
async def test_missing_sdk_action(live_config):
    client = FakeClient(result="ok")
    gateway = _gateway(client, actions=("get_balance",))

    result = await gateway.execute("getWalletAddress", {}, live_config)
    error = result.to_response()["error"]

    assert error["code"] == "EXECUTION_ERROR"
    assert "get_address" in error["message"]
    assert error["availableActions"] == ["get_balance"]


def test_health_reports_sdk_state():
    health = _gateway().health()

    assert health["status"] == "healthy"
    assert health["tools"]["total"] == 6
    assert health["sdk"]["loaded"] is False
    assert 43114 in health["chains"]["supported"]
