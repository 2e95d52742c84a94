"""
Unit Tests for the KuCoin Endpoint Table

These tests verify that:
- Path templates render required, optional and filtered placeholders
- Caller parameters are aliased, defaulted and removed from the query correctly
- Every registered endpoint maps to the expected verb, path and signing mode

Run with:
    pytest tests/unit/test_endpoints.py -v
"""

import pytest

from exchanges.kucoin.endpoints import (
    ENDPOINTS,
    PATH_FILTERS,
    EndpointDef,
    get_endpoint,
    render_path,
)


# ============================================
# Tests for Path Templates
# ============================================

class TestRenderPath:
    """Tests for render_path"""

    def test_plain_path_is_unchanged(self):
        assert render_path("/market/open/symbols", {}) == ("/market/open/symbols", set())

    def test_required_placeholder(self):
        path, consumed = render_path("/{pair}/open/tick", {"pair": "KCS-BTC"})
        assert path == "/KCS-BTC/open/tick"
        assert consumed == {"pair"}

    def test_missing_required_placeholder_raises(self):
        with pytest.raises(ValueError, match="pair"):
            render_path("/{pair}/open/tick", {})

    def test_empty_required_placeholder_raises(self):
        with pytest.raises(ValueError, match="symbol"):
            render_path("/account/{symbol}/wallet/address", {"symbol": ""})

    def test_optional_segment_present(self):
        path, consumed = render_path("/account[/{symbol}]/balance", {"symbol": "KCS"})
        assert path == "/account/KCS/balance"
        assert consumed == {"symbol"}

    def test_optional_segment_absent(self):
        path, consumed = render_path("/account[/{symbol}]/balance", {})
        assert path == "/account/balance"
        assert consumed == set()

    def test_optional_segment_none_is_absent(self):
        path, _ = render_path("/account[/{symbol}]/balance", {"symbol": None})
        assert path == "/account/balance"

    def test_lower_filter(self):
        path, consumed = render_path(
            "/{pair}/open/orders[-{type|lower}]", {"pair": "KCS-BTC", "type": "SELL"}
        )
        assert path == "/KCS-BTC/open/orders-sell"
        assert consumed == {"pair", "type"}


# ============================================
# Tests for EndpointDef
# ============================================

class TestEndpointDef:
    """Tests for EndpointDef validation and parameter mapping"""

    def test_rejects_unrooted_path(self):
        with pytest.raises(ValueError):
            EndpointDef(method="GET", path="market/open/symbols")

    def test_rejects_unknown_filter(self):
        with pytest.raises(ValueError):
            EndpointDef(method="GET", path="/{pair|reverse}/open/tick")

    def test_only_lower_filter_is_registered(self):
        assert set(PATH_FILTERS) == {"lower"}
        with pytest.raises(ValueError, match="upper"):
            EndpointDef(method="GET", path="/{pair|upper}/open/tick")

    def test_does_not_mutate_caller_params(self):
        params = {"pair": "KCS-BTC", "type": "BUY"}
        ENDPOINTS["create_order"].build_request(params)
        assert params == {"pair": "KCS-BTC", "type": "BUY"}

    def test_caller_value_overrides_default(self):
        request = ENDPOINTS["get_exchange_rates"].build_request({"symbols": ["KCS"]})
        assert request.params == {"coins": ["KCS"]}

    def test_unknown_params_pass_through(self):
        request = ENDPOINTS["get_trading_symbols"].build_request({"market": "BTC"})
        assert request.params == {"market": "BTC"}

    def test_get_endpoint_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown endpoint"):
            get_endpoint("getEverything")


# ============================================
# Tests for the Registered Table
# ============================================

TABLE_CASES = [
    # name, params, method, path, signed, query params
    ("get_exchange_rates", {"symbols": ["NEO", "GAS"]}, "GET", "/open/currencies", False, {"coins": ["NEO", "GAS"]}),
    ("get_exchange_rates", {}, "GET", "/open/currencies", False, {"coins": ""}),
    ("get_languages", {}, "GET", "/open/lang-list", False, {}),
    ("change_language", {"lang": "en_US"}, "POST", "/user/change-lang", True, {"lang": "en_US"}),
    ("get_user_info", {}, "GET", "/user/info", True, {}),
    ("get_invite_count", {}, "GET", "/referrer/descendant/count", True, {}),
    ("get_promotion_reward_info", {"symbol": "NEO"}, "GET", "/account/NEO/promotion/info", True, {"coin": "NEO"}),
    ("get_promotion_reward_info", {}, "GET", "/account/promotion/info", True, {"coin": ""}),
    ("get_promotion_reward_summary", {"symbol": "NEO"}, "GET", "/account/NEO/promotion/sum", True, {}),
    ("get_promotion_reward_summary", {}, "GET", "/account/promotion/sum", True, {}),
    ("get_deposit_address", {"symbol": "NEO"}, "GET", "/account/NEO/wallet/address", True, {}),
    ("create_withdrawal", {"symbol": "NEO", "amount": 5, "address": "AQV8"}, "POST",
     "/account/NEO/withdraw/apply", True, {"coin": "NEO", "amount": 5, "address": "AQV8"}),
    ("cancel_withdrawal", {"symbol": "NEO", "txOid": "59fa71673b7468701cd714a1"}, "POST",
     "/account/NEO/withdraw/cancel", True, {"txOid": "59fa71673b7468701cd714a1"}),
    ("get_deposit_and_withdrawal_records", {"symbol": "NEO", "type": "DEPOSIT", "status": "FINISHED", "page": 1},
     "GET", "/account/NEO/wallet/records", True, {"type": "DEPOSIT", "status": "FINISHED", "page": 1}),
    ("get_balance", {"symbol": "NEO"}, "GET", "/account/NEO/balance", True, {}),
    ("get_balance", {}, "GET", "/account/balance", True, {}),
    ("create_order", {"pair": "GAS-NEO", "type": "SELL", "price": 0.5, "amount": 5}, "POST", "/order", True,
     {"symbol": "GAS-NEO", "type": "SELL", "price": 0.5, "amount": 5}),
    ("get_active_orders", {"pair": "GAS-NEO"}, "GET", "/GAS-NEO/order/active", True, {"symbol": "GAS-NEO"}),
    ("cancel_order", {"pair": "GAS-NEO", "txOid": "abc", "type": "BUY"}, "POST", "/cancel-order", True,
     {"symbol": "GAS-NEO", "txOid": "abc", "type": "BUY"}),
    ("get_dealt_orders", {"pair": "GAS-NEO", "type": "BUY", "limit": 20, "page": 1}, "GET", "/GAS-NEO/deal-orders",
     True, {"symbol": "GAS-NEO", "type": "BUY", "limit": 20, "page": 1}),
    ("get_ticker", {"pair": "GAS-NEO"}, "GET", "/GAS-NEO/open/tick", False, {}),
    ("get_order_books", {"pair": "GAS-NEO", "type": "SELL", "limit": 10}, "GET", "/GAS-NEO/open/orders-sell",
     False, {"symbol": "GAS-NEO", "limit": 10}),
    ("get_order_books", {"pair": "GAS-NEO"}, "GET", "/GAS-NEO/open/orders", False, {"symbol": "GAS-NEO"}),
    ("get_recently_dealt_orders", {"pair": "GAS-NEO", "limit": 10}, "GET", "/GAS-NEO/open/deal-orders",
     False, {"limit": 10}),
    ("get_trading_symbols", {}, "GET", "/market/open/symbols", False, {}),
    ("get_trending", {}, "GET", "/market/open/coins-trending", False, {}),
    ("get_coins", {}, "GET", "/market/open/coins-list", False, {}),
]


class TestEndpointTable:
    """Tests for the ENDPOINTS registry"""

    def test_registry_has_all_endpoints(self):
        """Verify every endpoint of the v1 client is registered"""
        assert set(ENDPOINTS) == {case[0] for case in TABLE_CASES}
        assert len(ENDPOINTS) == 22

    @pytest.mark.parametrize("name, params, method, path, signed, query", TABLE_CASES)
    def test_build_request(self, name, params, method, path, signed, query):
        """Verify each endpoint maps caller params onto verb, path and query"""
        request = ENDPOINTS[name].build_request(params)

        assert request.method == method
        assert request.path == path
        assert request.signed is signed
        assert request.params == query

    @pytest.mark.parametrize("name", [
        "get_deposit_address", "create_withdrawal", "cancel_withdrawal",
        "get_deposit_and_withdrawal_records", "get_active_orders", "get_dealt_orders",
        "get_ticker", "get_order_books", "get_recently_dealt_orders",
    ])
    def test_required_path_params_enforced(self, name):
        """Verify endpoints with a required path parameter reject empty params"""
        with pytest.raises(ValueError, match="Missing required path parameter"):
            ENDPOINTS[name].build_request({})
