#!/usr/bin/env python3
"""
Comfydeck CLI tool

Command line interface for inspecting the runtime catalog and serving it
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from comfydeck.catalog import WorkflowRegistry
from comfydeck.context import RuntimeContext
from comfydeck.exceptions import ComfydeckError
from comfydeck.logger import setup_logger
from comfydeck.network import resolve_local_ip


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_scan(context: RuntimeContext, models_only: bool = False) -> int:
    """
    Print the selection catalog (or just the model catalog) as JSON

    Args:
        context: Runtime context
        models_only: Skip selects.json and print the scanned model catalog

    Returns:
        Exit code
    """
    context.ensure_model_dirs()
    if models_only:
        _print_json(context.model_builder().build())
        return 0

    _print_json(context.refresh_selects())
    return 0


def run_workflows(context: RuntimeContext) -> int:
    """
    Ensure the workflow folder exists and print the workflows inside it

    Returns:
        Exit code (1 if the folder could not be read)
    """
    context.paths.home.mkdir(parents=True, exist_ok=True)
    workflows = WorkflowRegistry(context.paths.workflows_dir).ensure_and_list()
    if workflows is None:
        return 1
    for name in workflows:
        print(name)
    return 0


def run_health(context: RuntimeContext) -> int:
    """
    Probe ComfyUI once

    Returns:
        Exit code (0 if reachable, 1 otherwise)
    """
    status = context.refresh_health()
    return 0 if status.reachable else 1


def run_ip() -> int:
    """
    Print the local network address
    """
    print(resolve_local_ip())
    return 0


def run_serve(context: RuntimeContext, host: str | None = None, port: int | None = None) -> int:
    """
    Build the runtime catalog and serve it over HTTP

    Args:
        context: Runtime context
        host: Host name (default: from config.json)
        port: Port number (default: from config.json)
    """
    import uvicorn

    from comfydeck.server import create_app

    context.startup()

    host = host or context.config.host
    port = port or context.config.port

    print("Starting Comfydeck server...")
    print(f"Access http://{context.local_ip}:{port} in your browser!")
    print(f"Home directory: {context.paths.home}")
    print(f"ComfyUI URL: {context.config.comfyui_url}")

    uvicorn.run(create_app(context), host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Comfydeck runtime catalog tool")
    parser.add_argument("--home", default=None, help="Home directory (default: XDG-based ~/.config/comfydeck)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    scan_parser = subparsers.add_parser("scan", help="Print the selection catalog as JSON")
    scan_parser.add_argument("--models-only", action="store_true", help="Print only the scanned model catalog")

    subparsers.add_parser("workflows", help="List workflow files")
    subparsers.add_parser("health", help="Check whether ComfyUI is reachable")
    subparsers.add_parser("ip", help="Print the local network address")

    serve_parser = subparsers.add_parser("serve", help="Serve the runtime catalog over HTTP")
    serve_parser.add_argument("--host", default=None, help="Host name (default: from config.json)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port number (default: from config.json)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    CLI main entry point
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    # stdout carries command output only
    setup_logger(logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)

    if args.command == "ip":
        return run_ip()

    try:
        context = RuntimeContext.create(home=args.home)

        if args.command == "scan":
            return run_scan(context, models_only=args.models_only)
        elif args.command == "workflows":
            return run_workflows(context)
        elif args.command == "health":
            return run_health(context)
        elif args.command == "serve":
            return run_serve(context, host=args.host, port=args.port)
    except (ComfydeckError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
