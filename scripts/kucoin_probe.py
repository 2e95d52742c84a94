#!/usr/bin/env python3
"""
Command-line probe for the KuCoin client.

Calls one registered endpoint and prints the response envelope as JSON.
Signed endpoints use KUCOIN_API_KEY / KUCOIN_API_SECRET from the environment or .env.

Usage examples:
  python scripts/kucoin_probe.py --list
  python scripts/kucoin_probe.py get_trading_symbols
  python scripts/kucoin_probe.py get_order_books --param pair=KCS-BTC --param type=BUY --param limit=5
  python scripts/kucoin_probe.py get_balance --param symbol=KCS
"""

import asyncio
import argparse
import json
import sys
from typing import Dict, List, Optional

from core.config import settings, validate_configuration
from core.exceptions import APIError, KucoinError
from core.logging import setup_logging
from exchanges.kucoin import ENDPOINTS, KucoinAPIClient


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """
    Turn ["key=value", ...] into a dict.

    Raises:
        ValueError: If an entry has no '='
    """
    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --param '{pair}', expected key=value")
        params[key] = value
    return params


def list_endpoints() -> None:
    for name, endpoint in sorted(ENDPOINTS.items()):
        access = "signed" if endpoint.signed else "public"
        print(f"{name:38} {endpoint.method:4} {endpoint.path:42} {access}")


async def probe(endpoint: str, params: Dict[str, str]) -> int:
    async with KucoinAPIClient.from_settings() as client:
        try:
            envelope = await client.call_endpoint(endpoint, params)
        except APIError as e:
            print(json.dumps(e.envelope.model_dump(), indent=2))
            print(f"[Error] Rejected by exchange: {e.code} {e.message}", file=sys.stderr)
            return 1
        except KucoinError as e:
            print(f"[Error] {e}", file=sys.stderr)
            return 2

    print(json.dumps(envelope.model_dump(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Call a KuCoin REST endpoint and print the envelope")
    parser.add_argument("endpoint", nargs="?", help="Endpoint name (see --list)")
    parser.add_argument("--param", action="append", default=[], help="Request parameter as key=value (repeatable)")
    parser.add_argument("--list", action="store_true", help="List registered endpoints and exit")
    parser.add_argument("--debug", action="store_true", help="Log requests and responses")
    args = parser.parse_args(argv)

    if args.list:
        list_endpoints()
        return 0

    if not args.endpoint:
        parser.error("endpoint is required unless --list is given")
    if args.endpoint not in ENDPOINTS:
        parser.error(f"unknown endpoint '{args.endpoint}' (see --list)")

    try:
        params = parse_params(args.param)
    except ValueError as e:
        parser.error(str(e))

    setup_logging(log_level="DEBUG" if args.debug else settings.log_level)

    validate_configuration()
    if ENDPOINTS[args.endpoint].signed and not settings.has_credentials:
        print("[Error] This endpoint is signed; set KUCOIN_API_KEY and KUCOIN_API_SECRET", file=sys.stderr)
        return 2

    return asyncio.run(probe(args.endpoint, params))


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n[Info] Interrupted. Bye.")
        sys.exit(0)
