"""
KuCoin Endpoint Table

Every public method of KucoinAPIClient is one entry in ENDPOINTS. An entry
says which verb and path to use, whether the request is signed, and how the
caller's parameters map onto the path and the query string. The client
turns each entry into a coroutine method; there are no hand-written
per-endpoint bodies.

Path Templates:
    {name}          Required placeholder, filled from the caller's params
    {name|lower}    Same, lower-cased
    [...]           Optional segment, rendered only when every placeholder
                    inside it has a value

    Examples:
        "/account[/{symbol}]/balance"         {"symbol": "KCS"} → /account/KCS/balance
                                              {}                → /account/balance
        "/{pair}/open/orders[-{type|lower}]"  {"pair": "KCS-BTC", "type": "BUY"}
                                                                → /KCS-BTC/open/orders-buy

Parameter Mapping (applied in this order):
    1. Keys used by the path are removed from the query.
    2. aliases {query_key: source_key}: the caller's `source_key` is sent as
       `query_key`; `source_key` itself is not sent.
    3. defaults {query_key: value}: filled in when the caller left them out.
    Everything else the caller passes goes into the query unchanged.
"""

import re
from typing import Any, Dict, Literal, Mapping, Optional, Set, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.schemas import RequestDescriptor


_PLACEHOLDER = re.compile(r"\{(\w+)(?:\|(\w+))?\}")
_OPTIONAL_SEGMENT = re.compile(r"\[([^\[\]]*)\]")

PATH_FILTERS = {
    "lower": lambda value: value.lower(),
}


def _has_value(params: Mapping[str, Any], key: str) -> bool:
    value = params.get(key)
    return value is not None and value != ""


def _fill(template: str, params: Mapping[str, Any], consumed: Set[str]) -> str:
    """Substitute placeholders in a template with no optional segments."""

    def substitute(match: "re.Match") -> str:
        name, filter_name = match.group(1), match.group(2)
        if not _has_value(params, name):
            raise ValueError(f"Missing required path parameter '{name}'")
        consumed.add(name)
        value = str(params[name])
        if filter_name:
            value = PATH_FILTERS[filter_name](value)
        return value

    return _PLACEHOLDER.sub(substitute, template)


def render_path(template: str, params: Mapping[str, Any]) -> Tuple[str, Set[str]]:
    """
    Render a path template against caller parameters.

    Args:
        template: Path template (see module docstring)
        params: Caller parameters

    Returns:
        Tuple of (rendered path, names of parameters consumed by the path)

    Raises:
        ValueError: If a required placeholder has no value
    """
    consumed: Set[str] = set()

    def optional(match: "re.Match") -> str:
        segment = match.group(1)
        names = [m.group(1) for m in _PLACEHOLDER.finditer(segment)]
        if all(_has_value(params, name) for name in names):
            return _fill(segment, params, consumed)
        return ""

    path = _OPTIONAL_SEGMENT.sub(optional, template)
    return _fill(path, params, consumed), consumed


class EndpointDef(BaseModel):
    """
    One row of the endpoint table.

    Attributes:
        method: HTTP verb
        path: Path template below the version prefix
        signed: Whether the request carries authentication headers
        aliases: {query_key: source_key} renames applied to caller params
        defaults: Query values used when the caller supplies none
        description: One-line summary, used as the generated method's docstring
    """

    method: Literal["GET", "POST"]
    path: str
    signed: bool = False
    aliases: Dict[str, str] = Field(default_factory=dict)
    defaults: Dict[str, Any] = Field(default_factory=dict)
    description: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator('path')
    @classmethod
    def validate_template(cls, v: str) -> str:
        """Ensure the template is rooted and only uses known filters"""
        if not v.startswith("/"):
            raise ValueError(f"Endpoint path must start with '/': {v!r}")
        for match in _PLACEHOLDER.finditer(v):
            filter_name = match.group(2)
            if filter_name and filter_name not in PATH_FILTERS:
                raise ValueError(f"Unknown path filter '{filter_name}' in {v!r}")
        return v

    def build_request(self, params: Optional[Mapping[str, Any]] = None) -> RequestDescriptor:
        """
        Map caller parameters onto a RequestDescriptor.

        Args:
            params: Caller parameters (not mutated)

        Returns:
            RequestDescriptor ready for dispatch

        Raises:
            ValueError: If a required path parameter is missing
        """
        source = dict(params or {})
        path, consumed = render_path(self.path, source)

        alias_sources = set(self.aliases.values())
        query = {
            key: value for key, value in source.items()
            if key not in consumed and key not in alias_sources
        }

        for query_key, source_key in self.aliases.items():
            if source.get(source_key) is not None:
                query[query_key] = source[source_key]

        for key, value in self.defaults.items():
            if query.get(key) is None:
                query[key] = value

        return RequestDescriptor(
            method=self.method,
            path=path,
            signed=self.signed,
            params=query
        )


# ============================================
# Endpoint Registry
# ============================================

ENDPOINTS: Dict[str, EndpointDef] = {
    # Currencies & languages
    "get_exchange_rates": EndpointDef(
        method="GET", path="/open/currencies",
        aliases={"coins": "symbols"}, defaults={"coins": ""},
        description="Exchange rates for coins. Pass symbols=[...] to filter, or nothing for all."
    ),
    "get_languages": EndpointDef(
        method="GET", path="/open/lang-list",
        description="List of supported languages."
    ),
    "change_language": EndpointDef(
        method="POST", path="/user/change-lang", signed=True,
        description="Change the account language. Params: lang (a locale from get_languages)."
    ),

    # User & referral
    "get_user_info": EndpointDef(
        method="GET", path="/user/info", signed=True,
        description="Account information for the authenticated user."
    ),
    "get_invite_count": EndpointDef(
        method="GET", path="/referrer/descendant/count", signed=True,
        description="Number of users invited by the authenticated user."
    ),
    "get_promotion_reward_info": EndpointDef(
        method="GET", path="/account[/{symbol}]/promotion/info", signed=True,
        aliases={"coin": "symbol"}, defaults={"coin": ""},
        description="Promotion reward info. Params: symbol (optional, all coins if omitted)."
    ),
    "get_promotion_reward_summary": EndpointDef(
        method="GET", path="/account[/{symbol}]/promotion/sum", signed=True,
        description="Promotion reward summary. Params: symbol (optional, all coins if omitted)."
    ),

    # Deposits & withdrawals
    "get_deposit_address": EndpointDef(
        method="GET", path="/account/{symbol}/wallet/address", signed=True,
        description="Deposit address for a coin. Params: symbol."
    ),
    "create_withdrawal": EndpointDef(
        method="POST", path="/account/{symbol}/withdraw/apply", signed=True,
        aliases={"coin": "symbol"},
        description="Request a withdrawal. Params: symbol, amount, address."
    ),
    "cancel_withdrawal": EndpointDef(
        method="POST", path="/account/{symbol}/withdraw/cancel", signed=True,
        description="Cancel a pending withdrawal. Params: symbol, txOid."
    ),
    "get_deposit_and_withdrawal_records": EndpointDef(
        method="GET", path="/account/{symbol}/wallet/records", signed=True,
        description="Deposit and withdrawal history. Params: symbol, type, status, limit, page."
    ),
    "get_balance": EndpointDef(
        method="GET", path="/account[/{symbol}]/balance", signed=True,
        description="Account balance. Params: symbol (optional, all coins if omitted)."
    ),

    # Trading
    "create_order": EndpointDef(
        method="POST", path="/order", signed=True,
        aliases={"symbol": "pair"},
        description="Place an order. Params: pair, type (BUY/SELL), price, amount."
    ),
    "get_active_orders": EndpointDef(
        method="GET", path="/{pair}/order/active", signed=True,
        aliases={"symbol": "pair"},
        description="Open orders for a trading pair. Params: pair, type (optional)."
    ),
    "cancel_order": EndpointDef(
        method="POST", path="/cancel-order", signed=True,
        aliases={"symbol": "pair"},
        description="Cancel an order. Params: pair, txOid, type."
    ),
    "get_dealt_orders": EndpointDef(
        method="GET", path="/{pair}/deal-orders", signed=True,
        aliases={"symbol": "pair"},
        description="Your filled orders for a pair. Params: pair, type, limit, page, since, before."
    ),

    # Market data
    "get_ticker": EndpointDef(
        method="GET", path="/{pair}/open/tick",
        description="Price ticker for a trading pair. Params: pair."
    ),
    "get_order_books": EndpointDef(
        method="GET", path="/{pair}/open/orders[-{type|lower}]",
        aliases={"symbol": "pair"},
        description="Order book for a pair. Params: pair, type (BUY/SELL, optional), group, limit."
    ),
    "get_recently_dealt_orders": EndpointDef(
        method="GET", path="/{pair}/open/deal-orders",
        description="Recent public trades for a pair. Params: pair, limit, since."
    ),
    "get_trading_symbols": EndpointDef(
        method="GET", path="/market/open/symbols",
        description="Trading symbols with market statistics."
    ),
    "get_trending": EndpointDef(
        method="GET", path="/market/open/coins-trending",
        description="Trending coins."
    ),
    "get_coins": EndpointDef(
        method="GET", path="/market/open/coins-list",
        description="List of listed coins."
    ),
}


def get_endpoint(name: str) -> EndpointDef:
    """
    Look up an endpoint by method name.

    Raises:
        ValueError: If the name is not registered
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown endpoint '{name}'. Known endpoints: {', '.join(sorted(ENDPOINTS))}"
        ) from None
