"""HTTP surface of the wallet gateway, served in demo mode."""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from toolgate.main import create_wallet_app
from toolgate.wallet.sdk import WalletSessionCache
from toolgate.wallet.service import WalletGateway


RECIPIENT = "0x" + "a" * 40
AUTH = {"x-api-key": "test-key"}

client = TestClient(create_wallet_app(WalletGateway(sessions=WalletSessionCache(None))))


def test_health_needs_no_auth():
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["tools"]["total"] == 6


def test_capabilities_and_manifest_need_no_auth():
    assert client.get("/capabilities").status_code == 200

    manifest = client.get("/manifest.json").json()
    assert {tool["name"] for tool in manifest["tools"]} >= {"transferTokens", "swapTokens"}


def test_list_tools_requires_api_key():
    response = client.get("/tools")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "AUTH_REQUIRED"


def test_list_tools():
    body = client.get("/tools", headers=AUTH).json()

    assert body["success"] is True
    assert body["metadata"]["totalTools"] == 6
    assert len(body["tools"]) == 6


def test_list_actions():
    body = client.get("/actions", headers=AUTH).json()

    assert {action["id"] for action in body["actions"]} >= {"bridgeTokens", "queryBlockchainData"}


def test_alias_resolves_to_transfer():
    response = client.post(
        "/tools/transfer",
        headers=AUTH,
        json={"to": RECIPIENT, "amount": "1", "tokenAddress": "USDT"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["source"] == "demo"
    assert body["data"]["to"] == RECIPIENT
    assert body["data"]["token"] == "USDT"
    assert body["data"]["status"] == "simulated"


def test_execute_requires_api_key():
    response = client.post("/tools/transferTokens", json={"to": RECIPIENT, "amount": "1"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_REQUIRED"


def test_actions_route_executes_tools():
    response = client.post(
        "/actions/swap",
        headers=AUTH,
        json={"fromToken": "AVAX", "toToken": "USDC", "amount": "2"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["estimatedOutput"] == "1.96"


def test_invalid_parameter_is_a_200_envelope():
    response = client.post("/tools/transferTokens", headers=AUTH, json={"to": "nope", "amount": "1"})

    assert response.status_code == 200
    error = response.json()["error"]
    assert error["code"] == "INVALID_PARAMETER"
    assert error["field"] == "to"


def test_non_json_body_is_treated_as_empty():
    response = client.post("/tools/getWalletAddress", headers=AUTH, content=b"not json")

    assert response.status_code == 200
    assert response.json()["data"]["address"].startswith("0x")


def test_unknown_tool():
    response = client.post("/tools/fooBar", headers=AUTH, json={})

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "TOOL_NOT_FOUND"
    assert "transferTokens" in error["available"]


def test_catch_all_executes_tools():
    response = client.post("/send", headers=AUTH, json={"to": RECIPIENT, "amount": "1"})

    assert response.status_code == 200
    assert response.json()["data"]["token"] == "AVAX"


def test_catch_all_requires_api_key():
    response = client.post("/send", json={"to": RECIPIENT, "amount": "1"})

    assert response.status_code == 401


def test_reserved_path_is_not_a_tool():
    response = client.post("/health", headers=AUTH, json={})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ENDPOINT_NOT_FOUND"


def test_unknown_endpoint():
    response = client.get("/definitely/not/here")

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "ENDPOINT_NOT_FOUND"
    assert "GET /health" in error["availableEndpoints"]
    assert error["suggestions"][0] == "GET /tools - List available tools"


def test_unknown_endpoint_suggests_matching_tools():
    response = client.get("/wallet/balance/now")

    assert response.status_code == 404
    suggestions = response.json()["error"]["suggestions"]
    assert suggestions[0] == "Try: POST /tools/getWalletBalance"
    assert "Try: POST /tools/getWalletAddress" in suggestions
    assert len(suggestions) == len(set(suggestions))


def test_debug_tools_needs_no_auth():
    response = client.get("/debug/tools")

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 6
    assert body["sdk"]["loaded"] is False
    assert body["sdk"]["sessions"] == 0
    transfer = next(tool for tool in body["available_tools"] if tool["name"] == "transferTokens")
    assert transfer["requiresConfirmation"] is True
    assert transfer["downstreamAction"] == "smart_transfer"


def test_chains():
    body = client.get("/chains").json()

    assert body["default"] == 43114
    assert {chain["chainId"] for chain in body["chains"]} == {43114, 56, 1, 137, 8453}


class TestDebugParams:

    def test_transfer_mapping(self):
        response = client.post(
            "/debug/transfer-params",
            headers=AUTH,
            json={"to": RECIPIENT, "amount": "1", "tokenAddress": "USDT"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["output"]["destination"] == RECIPIENT
        assert body["mapping"]["mapped_correctly"] is True

    def test_transfer_invalid(self):
        response = client.post("/debug/transfer-params", headers=AUTH, json={"to": "nope", "amount": "1"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["field"] == "to"

    def test_swap_mapping(self):
        body = client.post(
            "/debug/swap-params",
            headers=AUTH,
            json={"fromToken": "AVAX", "toToken": "USDT", "amount": "1"},
        ).json()

        assert body["output"]["tokenIn"] == "eth"

    def test_sxt_mapping(self):
        body = client.post(
            "/debug/sxt-params",
            headers={**AUTH, "x-sxt-api-key": "sxt"},
            json={"query": "SELECT * FROM blocks LIMIT 5"},
        ).json()

        assert body["output"] == {"sqlText": "SELECT * FROM blocks LIMIT 5"}
        assert body["mapping"]["sxt_key_available"] is True

    def test_debug_requires_api_key(self):
        assert client.post("/debug/sxt-params", json={}).status_code == 401
        assert client.post("/debug/transfer", json={}).status_code == 401


class TestDebugTransfer:

    def test_traces_a_valid_transfer(self):
        response = client.post(
            "/debug/transfer",
            headers={**AUTH, "x-private-key": "0xabc"},
            json={"to": RECIPIENT, "amount": "0.00005", "tokenAddress": "usdt"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["debug"] is True
        assert body["debugId"]
        assert body["request"]["path"] == "/debug/transfer"
        assert body["request"]["credentials"] == ["x-api-key", "x-private-key"]
        assert body["config"]["privateKey"] is True
        assert body["request"]["bodyKeys"] == ["amount", "to", "tokenAddress"]
        assert body["tokenResolution"]["resolved"] == "0x9702230A8Ea53601f5cD2dc00fDBc13d4dF4A8c7"
        assert body["processedParams"]["destination"] == RECIPIENT
        assert body["processedParams"]["amount"] == "0.00005"
        assert body["processingError"] is None

    def test_reports_validation_failure_without_failing(self):
        response = client.post(
            "/debug/transfer",
            headers=AUTH,
            json={"to": "nope", "amount": "1", "tokenAddress": "0x123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["processedParams"] is None
        assert body["processingError"]["code"] == "INVALID_PARAMETER"
        assert body["processingError"]["field"] == "to"
        assert body["tokenResolution"]["resolved"] is None
        assert "0x123" in body["tokenResolution"]["error"]


def test_unhandled_error_becomes_internal_error():
    service = WalletGateway(sessions=WalletSessionCache(None))
    service.execute = AsyncMock(side_effect=RuntimeError("boom"))
    failing = TestClient(create_wallet_app(service), raise_server_exceptions=False)

    response = failing.post("/tools/getWalletAddress", headers=AUTH, json={})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_ERROR"
