from .connection import ConnectionManager
from .outcome import Outcome, OutcomeKind, attempt, capture
from .session import ConnectionState, ProviderSession

__all__ = [
    "ConnectionManager",
    "Outcome",
    "OutcomeKind",
    "attempt",
    "capture",
    "ConnectionState",
    "ProviderSession",
]
