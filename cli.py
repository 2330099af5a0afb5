#!/usr/bin/env python3
"""CLI for debugging a Ronin wallet connection locally"""

import argparse
import asyncio
import shlex
import sys
from typing import List, Optional

from wallet_debugger import WalletDebugger
from wallet_debugger.chain_types import format_chain, parse_chain, toggle_chain
from wallet_debugger.config import Settings
from wallet_debugger.core.session import ProviderSession
from wallet_debugger.logging_config import setup_logging
from wallet_debugger.telemetry.diagnostic_log import DiagnosticLog, Severity


SEVERITY_ICONS = {
    Severity.INFO: "ℹ️ ",
    Severity.SUCCESS: "✅",
    Severity.ERROR: "❌",
}

COMMANDS_HELP = """Commands:
  connect                 Connect to Ronin Wallet (opens install page if missing)
  switch [mainnet|testnet|<id>]
                          Switch chain (toggles when no chain is given)
  signin                  Sign In With Ronin
  disconnect              Forget the connected wallet
  status                  Show the wallet connection panel
  logs [n]                Show the latest n debug log entries (default: all)
  clear                   Clear the debug log
  help                    Show this help
  exit                    Quit"""


def print_status(session: ProviderSession) -> None:
    """Pretty print the wallet connection panel"""
    print("\n🔌 Wallet Connection")
    print("=" * 50)

    if session.wallet_not_installed:
        print("❌ Ronin Wallet not found. Please install it first.")

    if not session.is_connected:
        print(f"Status: Not connected ({session.state.value})")
        return

    print("Status: Connected")
    print(f"Current Chain: {format_chain(session.active_chain)}")
    print(f"Current Address: {session.connected_account}")
    if session.known_accounts:
        print(f"All Addresses: {', '.join(session.known_accounts)}")
    if session.last_signature:
        print(f"Signature:\n    {session.last_signature}")


def print_logs(log: DiagnosticLog, limit: Optional[int] = None) -> None:
    """Print debug log entries, most recent first"""
    entries = log.entries()
    print("\n📜 Debug Logs")
    print("-" * 50)
    if not entries:
        print("No logs yet")
        return

    for entry in entries[:limit] if limit else entries:
        icon = SEVERITY_ICONS[entry.severity]
        rendered = entry.render()
        print(f"{icon} {rendered}")


async def run_command(debugger: WalletDebugger, line: str) -> bool:
    """Run one command line; returns False when the user asked to quit"""
    try:
        parts = shlex.split(line)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]

    if command in ("exit", "quit"):
        return False
    if command == "help":
        print(COMMANDS_HELP)
    elif command == "connect":
        if debugger.session.is_connected:
            print("⚠️  Already connected; disconnect first")
        else:
            await debugger.connect()
            print_status(debugger.session)
    elif command == "switch":
        if args:
            try:
                target = parse_chain(args[0])
            except ValueError as e:
                print(f"❌ Error: {e}")
                return True
        else:
            target = toggle_chain(debugger.session.active_chain)
        await debugger.switch_chain(target)
        print_status(debugger.session)
    elif command == "signin":
        await debugger.sign_in()
        print_status(debugger.session)
    elif command == "disconnect":
        debugger.disconnect()
        print_status(debugger.session)
    elif command == "status":
        print_status(debugger.session)
    elif command == "logs":
        limit = int(args[0]) if args and args[0].isdigit() else None
        print_logs(debugger.log, limit)
    elif command == "clear":
        debugger.clear_log()
        print("🧹 Logs cleared")
    else:
        print(f"❌ Unknown command: {command}")
        print(COMMANDS_HELP)
    return True


async def cli_interactive(debugger: WalletDebugger) -> None:
    """Interactive debugging mode"""
    print("🛠  Ronin Wallet Debugger")
    print("Type 'exit' to quit, 'help' for commands")
    print("-" * 40)
    print_status(debugger.session)

    while True:
        try:
            line = (await asyncio.to_thread(input, "\n🔧 > ")).strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye! 👋")
            break
        if not await run_command(debugger, line):
            print("Goodbye! 👋")
            break


async def cli_run(debugger: WalletDebugger, steps: List[str]) -> None:
    """Run a scripted sequence of commands, then print the log"""
    for step in steps:
        print(f"\n▶ {step}")
        if not await run_command(debugger, step):
            break
    print_logs(debugger.log)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ronin Wallet Debugger")
    parser.add_argument("--rpc-url", help="Wallet provider JSON-RPC endpoint")
    parser.add_argument("--log-level", help="Logging level (default: from settings)")
    parser.add_argument(
        "--run",
        metavar="STEPS",
        help="Comma-separated commands to run non-interactively, e.g. 'connect,signin'",
    )
    return parser


async def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.rpc_url is not None:
        overrides["rpc_url"] = args.rpc_url
    if args.log_level:
        overrides["log_level"] = args.log_level
    config = Settings(**overrides)

    setup_logging(config.log_level, config.console_log_level)

    async with WalletDebugger(config=config) as debugger:
        if args.run:
            steps = [step.strip() for step in args.run.split(",") if step.strip()]
            await cli_run(debugger, steps)
        else:
            await cli_interactive(debugger)


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
