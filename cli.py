#!/usr/bin/env python3
"""Simple CLI for running and poking the tool gateways locally"""

import argparse
import asyncio
import json
import sys
from typing import Dict

from toolgate.config import settings
from toolgate.core.credentials import extract_request_config
from toolgate.core.errors import InvalidParameterError
from toolgate.core.gateway import GatewayService
from toolgate.expense import ExpenseGateway
from toolgate.wallet import WalletGateway

GATEWAYS = {
    "wallet": ("toolgate.main:wallet_app", "wallet_port"),
    "expense": ("toolgate.main:expense_app", "expense_port"),
}


def build_service(gateway: str) -> GatewayService:
    return WalletGateway() if gateway == "wallet" else ExpenseGateway()


def build_headers(args) -> Dict[str, str]:
    headers = {}
    for item in args.header or []:
        name, _, value = item.partition(":")
        headers[name.strip().lower()] = value.strip()
    if args.chain_id is not None:
        headers["x-chain-id"] = str(args.chain_id)
    return headers


def parse_params(raw: str) -> Dict:
    try:
        params = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"❌ --params must be JSON: {exc}")
    if not isinstance(params, dict):
        raise SystemExit("❌ --params must be a JSON object")
    return params


def cli_serve(gateway: str, host: str, port: int, reload: bool):
    import uvicorn

    app_path, port_setting = GATEWAYS[gateway]
    uvicorn.run(
        app_path,
        host=host or settings.host,
        port=port or getattr(settings, port_setting),
        reload=reload,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


def cli_resolve(gateway: str, name: str, params: Dict, headers: Dict[str, str]):
    """Print the canonical tool and the payload the downstream call would get"""
    service = build_service(gateway)
    canonical = service.resolve(name)

    if canonical not in service.registry:
        print(f"❌ '{name}' does not resolve to a {gateway} tool")
        print(f"Available: {', '.join(service.tool_names())}")
        sys.exit(1)

    print(f"🔄 {name} → {canonical}")
    config = extract_request_config(headers)
    try:
        payload = service.describe_params(canonical, params, config)
    except InvalidParameterError as exc:
        print(f"❌ {exc.message}")
        sys.exit(1)
    print(json.dumps(payload, indent=2))


async def cli_call(gateway: str, name: str, params: Dict, headers: Dict[str, str]):
    """Execute a tool in-process; without credentials this returns demo data"""
    service = build_service(gateway)
    canonical = service.resolve(name)
    result = await service.execute(canonical, params, extract_request_config(headers))
    print(json.dumps(result.to_response(), indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tool gateway CLI")
    subparsers = parser.add_subparsers(dest="command")

    for gateway in GATEWAYS:
        serve_parser = subparsers.add_parser(gateway, help=f"Run the {gateway} gateway with uvicorn")
        serve_parser.add_argument("--host", help="Bind host (default: settings.host)")
        serve_parser.add_argument("--port", type=int, help="Bind port (default: from settings)")
        serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    for command, help_text in (
        ("resolve", "Show the canonical tool and normalized parameters for a tool name"),
        ("call", "Execute a tool in-process"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("gateway", choices=sorted(GATEWAYS), help="Which gateway's tools to use")
        sub.add_argument("name", help="Requested tool name (canonical, alias or free-form)")
        sub.add_argument("--params", default="{}", help="Tool parameters as a JSON object")
        sub.add_argument("--chain-id", type=int, help="Value for x-chain-id")
        sub.add_argument("--header", action="append", help="Extra header as 'name: value' (repeatable)")

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    command = args.command.lower()

    if command in GATEWAYS:
        cli_serve(command, args.host, args.port, args.reload)

    elif command == "resolve":
        cli_resolve(args.gateway, args.name, parse_params(args.params), build_headers(args))

    elif command == "call":
        asyncio.run(cli_call(args.gateway, args.name, parse_params(args.params), build_headers(args)))

    else:
        print(f"❌ Unknown command: {command}")
        parser.print_help()


if __name__ == "__main__":
    main()
