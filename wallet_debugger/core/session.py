"""
Provider session state.

Holds the connector handle and everything learned from the wallet. Only the
connection manager and the sign-in handshake mutate it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from wallet_debugger.providers.base import Connector, ConnectorErrorType


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    DISCOVERING = "discovering"
    READY = "ready"
    UNAVAILABLE = "unavailable"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"
    DISCONNECTED = "disconnected"


@dataclass
class ProviderSession:
    connector: Optional[Connector] = None
    connected_account: Optional[str] = None
    known_accounts: List[str] = field(default_factory=list)
    active_chain: Optional[int] = None
    last_error: Optional[ConnectorErrorType] = None
    last_signature: Optional[str] = None
    state: ConnectionState = ConnectionState.UNINITIALIZED

    @property
    def is_connected(self) -> bool:
        return self.connected_account is not None

    @property
    def wallet_not_installed(self) -> bool:
        """True when discovery established that no wallet provider exists."""
        return self.connector is None and self.last_error == ConnectorErrorType.PROVIDER_NOT_FOUND

    def reset(self) -> None:
        """Forget the connected wallet; the connector handle is kept."""
        self.connected_account = None
        self.known_accounts = []
        self.active_chain = None
        self.last_signature = None
        self.state = ConnectionState.DISCONNECTED
