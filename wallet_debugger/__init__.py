"""
Ronin wallet debugger.

Connects to an injected Ronin wallet, switches chains, runs a Sign-In with
Ronin handshake and records every step in a diagnostic log.

Usage:
    from wallet_debugger import WalletDebugger

    async with WalletDebugger() as debugger:
        await debugger.connect()
        await debugger.sign_in()
"""

from .chain_types import ChainIds
from .core.outcome import Outcome, OutcomeKind
from .core.session import ConnectionState, ProviderSession
from .debugger import Operation, WalletDebugger
from .telemetry.diagnostic_log import DiagnosticLog, LogEntry, Severity

__all__ = [
    "ChainIds",
    "ConnectionState",
    "DiagnosticLog",
    "LogEntry",
    "Operation",
    "Outcome",
    "OutcomeKind",
    "ProviderSession",
    "Severity",
    "WalletDebugger",
]
