"""Tests for wallet parameter normalization."""

import pytest

from toolgate.core.credentials import RequestConfig
from toolgate.core.errors import InvalidParameterError, MissingParameterError, UnsupportedChainError
from toolgate.core.tokens import NATIVE_TOKEN
from toolgate.wallet.params import normalize_wallet_params


AVAX_USDT = "0x9702230A8Ea53601f5cD2dc00fDBc13d4dF4A8c7"
AVAX_USDC = "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E"
BSC_USDT = "0x55d398326f99059fF775485246999027B3197955"
RECIPIENT = "0x" + "a" * 40


@pytest.fixture
def config():
    return RequestConfig(api_key="test-key")


# =============================================================================
# transferTokens
# =============================================================================

class TestTransfer:

    def test_maps_to_destination(self, config):
        params = normalize_wallet_params(
            "transferTokens",
            {"to": RECIPIENT, "amount": "1", "tokenAddress": "USDT"},
            config,
        )
        assert params == {"destination": RECIPIENT, "amount": "1", "tokenAddress": AVAX_USDT}

    def test_platform_metadata_is_dropped(self, config):
        params = normalize_wallet_params(
            "transferTokens",
            {"to": RECIPIENT, "amount": 2, "toolName": "send", "userId": "u-1", "chatId": "c-9"},
            config,
        )
        assert set(params) == {"destination", "amount", "tokenAddress"}
        assert params["tokenAddress"] == NATIVE_TOKEN

    @pytest.mark.parametrize("raw,expected", [("100.50", "100.5"), ("1.0", "1"), (3, "3"), (" 0.25 ", "0.25")])
    def test_amount_is_canonicalized(self, config, raw, expected):
        params = normalize_wallet_params("transferTokens", {"to": RECIPIENT, "amount": raw}, config)
        assert params["amount"] == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("0.00005", "0.00005"),
            ("0.0000001", "0.0000001"),
            ("1e22", "10000000000000000000000"),
            ("25000000000000000000000", "25000000000000000000000"),
            (0.00001, "0.00001"),
        ],
    )
    def test_amount_never_uses_exponent_notation(self, config, raw, expected):
        params = normalize_wallet_params("transferTokens", {"to": RECIPIENT, "amount": raw}, config)
        assert params["amount"] == expected
        assert "e" not in params["amount"].lower()

    def test_bad_recipient(self, config):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params("transferTokens", {"to": "not-an-address", "amount": "1"}, config)
        assert exc_info.value.field == "to"

    def test_missing_recipient(self, config):
        with pytest.raises(MissingParameterError) as exc_info:
            normalize_wallet_params("transferTokens", {"amount": "1"}, config)
        assert exc_info.value.field == "to"
        assert exc_info.value.reason == "missing"

    @pytest.mark.parametrize("amount", ["-5", "0", "abc", True, "nan", "inf"])
    def test_bad_amount(self, config, amount):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params("transferTokens", {"to": RECIPIENT, "amount": amount}, config)
        assert exc_info.value.field == "amount"

    def test_padded_token_address_is_accepted(self, config):
        params = normalize_wallet_params(
            "transferTokens",
            {"to": f" {RECIPIENT} ", "amount": "1", "tokenAddress": f" {AVAX_USDT} "},
            config,
        )
        assert params["destination"] == RECIPIENT
        assert params["tokenAddress"] == AVAX_USDT

    def test_symbol_on_unknown_chain(self):
        with pytest.raises(UnsupportedChainError):
            normalize_wallet_params(
                "transferTokens",
                {"to": RECIPIENT, "amount": "1", "tokenAddress": "USDT"},
                RequestConfig(chain_id=999),
            )


# =============================================================================
# getWalletBalance / getWalletAddress
# =============================================================================

def test_balance_native_has_empty_payload(config):
    assert normalize_wallet_params("getWalletBalance", {}, config) == {}
    assert normalize_wallet_params("getWalletBalance", {"tokenAddress": "AVAX"}, config) == {}


def test_balance_token(config):
    assert normalize_wallet_params("getWalletBalance", {"tokenAddress": "usdc"}, config) == {"tokenAddress": AVAX_USDC}


def test_address_ignores_input(config):
    assert normalize_wallet_params("getWalletAddress", {"anything": 1}, config) == {}
    assert normalize_wallet_params("getWalletAddress", None, config) == {}


# =============================================================================
# swapTokens
# =============================================================================

class TestSwap:

    def test_maps_tokens_and_default_slippage(self, config):
        params = normalize_wallet_params("swapTokens", {"fromToken": "AVAX", "toToken": "USDC", "amount": "2"}, config)
        assert params == {"tokenIn": NATIVE_TOKEN, "tokenOut": AVAX_USDC, "amount": "2", "slippage": "0.5"}

    def test_slippage_header_default(self):
        params = normalize_wallet_params(
            "swapTokens",
            {"fromToken": "USDT", "toToken": "USDC", "amount": "10"},
            RequestConfig(default_slippage="1.5"),
        )
        assert params["slippage"] == "1.5"

    def test_explicit_slippage_with_percent(self, config):
        params = normalize_wallet_params(
            "swapTokens",
            {"fromToken": "USDT", "toToken": "USDC", "amount": "10", "slippage": "2%"},
            config,
        )
        assert params["slippage"] == "2"

    def test_tiny_swap_amount_is_plain_decimal(self, config):
        params = normalize_wallet_params(
            "swapTokens",
            {"fromToken": "USDT", "toToken": "USDC", "amount": "0.00001", "slippage": 0},
            config,
        )
        assert params["amount"] == "0.00001"
        assert params["slippage"] == "0"

    @pytest.mark.parametrize("slippage", ["abc", "-1", "51"])
    def test_bad_slippage(self, config, slippage):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params(
                "swapTokens",
                {"fromToken": "USDT", "toToken": "USDC", "amount": "10", "slippage": slippage},
                config,
            )
        assert exc_info.value.field == "slippage"

    def test_same_token_rejected(self, config):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params("swapTokens", {"fromToken": "usdt", "toToken": "USDT", "amount": "1"}, config)
        assert exc_info.value.field == "toToken"

    def test_missing_from_token(self, config):
        with pytest.raises(MissingParameterError) as exc_info:
            normalize_wallet_params("swapTokens", {"toToken": "USDT", "amount": "1"}, config)
        assert exc_info.value.field == "fromToken"


# =============================================================================
# bridgeTokens
# =============================================================================

class TestBridge:

    def test_tokens_resolve_on_their_own_chain(self, config):
        params = normalize_wallet_params(
            "bridgeTokens",
            {"fromChainId": 43114, "toChainId": "56", "tokenInAddress": "USDT", "tokenOutAddress": "usdt", "amount": "10"},
            config,
        )
        assert params == {
            "fromChainId": 43114,
            "toChainId": 56,
            "tokenInAddress": AVAX_USDT,
            "tokenOutAddress": BSC_USDT,
            "amount": "10",
        }

    def test_recipient_is_validated(self, config):
        base = {"fromChainId": 43114, "toChainId": 56, "tokenInAddress": "USDT", "tokenOutAddress": "USDT", "amount": "1"}
        params = normalize_wallet_params("bridgeTokens", {**base, "recipientAddress": RECIPIENT}, config)
        assert params["recipientAddress"] == RECIPIENT

        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params("bridgeTokens", {**base, "recipientAddress": "0x12"}, config)
        assert exc_info.value.field == "recipientAddress"

    def test_unsupported_destination_chain(self, config):
        with pytest.raises(UnsupportedChainError) as exc_info:
            normalize_wallet_params(
                "bridgeTokens",
                {"fromChainId": 43114, "toChainId": 999, "tokenInAddress": "USDT", "tokenOutAddress": "USDT", "amount": "1"},
                config,
            )
        assert exc_info.value.field == "toChainId"
        assert exc_info.value.context["chainId"] == 999

    def test_same_chain_rejected(self, config):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params(
                "bridgeTokens",
                {"fromChainId": 56, "toChainId": 56, "tokenInAddress": "USDT", "tokenOutAddress": "USDC", "amount": "1"},
                config,
            )
        assert exc_info.value.field == "toChainId"


# =============================================================================
# queryBlockchainData
# =============================================================================

class TestSql:

    def test_maps_query_to_sql_text(self, config):
        query = "SELECT * FROM blocks LIMIT 5"
        assert normalize_wallet_params("queryBlockchainData", {"query": query}, config) == {"sqlText": query}

    @pytest.mark.parametrize("query", ["SELECT 1", "S" * 2001])
    def test_length_bounds(self, config, query):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_wallet_params("queryBlockchainData", {"query": query}, config)
        assert exc_info.value.field == "query"


def test_unknown_tool_raises_key_error(config):
    with pytest.raises(KeyError):
        normalize_wallet_params("nope", {}, config)
