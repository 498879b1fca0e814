# Orion Relay
# Copyright (C) 2025 Phoenix Link (Pty) Ltd. All Rights Reserved.
#
# This file is part of Orion Relay.
#
# Orion Relay is dual-licensed:
#
# 1. Open Source: GNU Affero General Public License v3.0 (AGPL-3.0)
#    You may use, modify, and distribute this file under AGPL-3.0.
#    See LICENSE for the full text.
#
# 2. Commercial: Available from Phoenix Link (Pty) Ltd
#    For proprietary use, SaaS deployment, or enterprise licensing.
#    See LICENSE-ENTERPRISE.md or contact info@phoenixlink.co.za
#
# Contributions require a signed CLA. See COPYRIGHT.md and CLA.md.
"""
Orion Relay CLI -- single-shot prompts from the terminal.

Usage:
    relay --version
    relay openai/gpt-4o-mini "What is Python?"
    relay claude-3-5-haiku-20241022 --system "Answer in one line" "What is Rust?"
    relay gemini-2.5-flash --json "List three primes as {\"primes\": [...]}"
"""

import argparse
import asyncio
import sys

from relay import __version__
from relay.client import RelayClient
from relay.config import RelaySettings
from relay.errors import RelayError
from relay.logging import configure_logging
from relay.models import Message, OutputFormat, Request


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="relay",
        description="Orion Relay -- send one prompt to any supported LLM provider",
    )
    parser.add_argument("--version", action="version", version=f"orion-relay {__version__}")
    parser.add_argument("model", help='Model string, e.g. "openai/gpt-4o-mini" or "claude-3-5-haiku-20241022"')
    parser.add_argument("prompt", nargs="+", help="Prompt text (joined with spaces)")
    parser.add_argument("--system", default=None, help="System prompt")
    parser.add_argument("--json", action="store_true", help="Ask for JSON output")
    parser.add_argument("--max-tokens", type=int, default=None, help="Output token budget (default: 1024)")
    parser.add_argument("--temperature", type=float, default=None, help="Sampling temperature, 0.0-2.0")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: RELAY_LOG_LEVEL or WARNING)",
    )
    return parser


async def _run(args: argparse.Namespace, settings: RelaySettings) -> str:
    client = RelayClient.from_model(args.model, interactive=True, settings=settings)
    request = Request(client.default_model or args.model).with_message(
        Message.user(" ".join(args.prompt))
    )
    if args.system:
        request = request.with_system_prompt(args.system)
    if args.max_tokens is not None:
        request = request.with_max_tokens(args.max_tokens)
    if args.temperature is not None:
        request = request.with_temperature(args.temperature)
    if args.json:
        request = request.with_output_format(OutputFormat.JSON)
    response = await client.send_request(request)
    return response.content


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    try:
        settings = RelaySettings.from_env()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    configure_logging(args.log_level or settings.log_level)

    try:
        content = asyncio.run(_run(args, settings))
    except RelayError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    print(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
