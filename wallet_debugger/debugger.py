"""
Wallet debugger session.

``WalletDebugger`` owns one diagnostic log, one provider session and the
two services that act on them. It is constructed explicitly and handed to
whatever presents it (the CLI, a test):

    async with WalletDebugger() as debugger:   # discovers the connector
        await debugger.connect()
        await debugger.switch_chain(ChainIds.RONIN_TESTNET)
        await debugger.sign_in()
        debugger.disconnect()
        for entry in debugger.log.entries():
            print(entry.render())

Operations never raise. Their outcome is returned for convenience, but the
session and the log are the record of what happened.
"""

import logging
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable, Optional, Set

from .auth.challenge import ChallengeFormatter
from .auth.service import SignInHandshake
from .config import Settings, settings
from .core.connection import ConnectionManager, ConnectorFactory, Navigator
from .core.outcome import Outcome, capture
from .core.session import ConnectionState, ProviderSession
from .providers.ronin import request_ronin_wallet_connector
from .telemetry.diagnostic_log import Clock, DiagnosticLog, utc_now


logger = logging.getLogger(__name__)


class Operation(str, Enum):
    DISCOVER = "discover"
    CONNECT = "connect"
    SWITCH_CHAIN = "switch_chain"
    SIGN_IN = "sign_in"


OPERATION_LABELS = {
    Operation.DISCOVER: "Connector discovery",
    Operation.CONNECT: "Connect",
    Operation.SWITCH_CHAIN: "Chain switch",
    Operation.SIGN_IN: "Sign-in",
}


class WalletDebugger:
    def __init__(
        self,
        connector_factory: Optional[ConnectorFactory] = None,
        *,
        config: Optional[Settings] = None,
        navigator: Optional[Navigator] = None,
        formatter: Optional[ChallengeFormatter] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config or settings
        clock = clock or utc_now

        self.log = DiagnosticLog(clock=clock, mirror=self.config.mirror_to_console)
        self.session = ProviderSession()

        factory = connector_factory or partial(request_ronin_wallet_connector, self.config)
        self.connections = ConnectionManager(
            self.session,
            self.log,
            factory,
            config=self.config,
            navigator=navigator,
        )
        self.handshake = SignInHandshake(
            self.session,
            self.log,
            config=self.config,
            formatter=formatter,
            clock=clock,
        )
        self._in_flight: Set[Operation] = set()

    async def __aenter__(self) -> "WalletDebugger":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> Outcome[Any]:
        """Discover the wallet connector. Call once before anything else."""
        return await self._run(Operation.DISCOVER, self.connections.discover_connector)

    async def connect(self) -> Outcome[Any]:
        return await self._run(Operation.CONNECT, self.connections.connect)

    async def switch_chain(self, chain_id: int) -> Outcome[Any]:
        return await self._run(Operation.SWITCH_CHAIN, lambda: self.connections.switch_chain(chain_id))

    async def sign_in(self) -> Outcome[Any]:
        return await self._run(Operation.SIGN_IN, self.handshake.sign_in)

    def disconnect(self) -> Outcome[None]:
        return self.connections.disconnect()

    def clear_log(self) -> None:
        self.log.clear()

    def is_busy(self, operation: Operation) -> bool:
        """Whether an operation of this kind is still awaiting the wallet."""
        return operation in self._in_flight

    async def close(self) -> None:
        """Release the connector and return the session to its initial state."""
        connector = self.session.connector
        aclose = getattr(connector, "aclose", None)
        if aclose is not None:
            closed = await capture(aclose, require_value=False)
            if closed.is_hard_failure:
                logger.warning("failed to close connector: %s", closed.error)
        self.session.reset()
        self.session.connector = None
        self.session.last_error = None
        self.session.state = ConnectionState.UNINITIALIZED

    async def _run(self, operation: Operation, call: Callable[[], Awaitable[Outcome[Any]]]) -> Outcome[Any]:
        if self.config.guard_concurrent_operations and operation in self._in_flight:
            self.log.info(f"{OPERATION_LABELS[operation]} already in progress")
            return Outcome.soft_failure()

        self._in_flight.add(operation)
        try:
            return await call()
        finally:
            self._in_flight.discard(operation)
