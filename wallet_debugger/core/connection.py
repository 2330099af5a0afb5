"""
Connection manager for the injected Ronin wallet.

Drives provider discovery, connect, chain switching and disconnect against
a ProviderSession. Every operation reports what happened to the diagnostic
log and returns an Outcome; none of them raises.
"""

import logging
import webbrowser
from typing import Any, Awaitable, Callable, Optional

from wallet_debugger.config import Settings, settings
from wallet_debugger.core.outcome import Outcome, attempt, capture
from wallet_debugger.core.session import ConnectionState, ProviderSession
from wallet_debugger.providers.base import ConnectResult, Connector, ConnectorError
from wallet_debugger.telemetry.diagnostic_log import DiagnosticLog


logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[], Awaitable[Connector]]
Navigator = Callable[[str], Any]


def open_in_browser(url: str) -> bool:
    return webbrowser.open(url, new=2)


def _as_connect_result(value: Any) -> ConnectResult:
    if isinstance(value, ConnectResult):
        return value
    return ConnectResult.model_validate(value)


class ConnectionManager:
    """
    State machine over the provider session.

    UNINITIALIZED -> DISCOVERING -> READY | UNAVAILABLE
    READY -> CONNECTING -> CONNECTED | FAILED
    any -> DISCONNECTED (local disconnect)
    """

    def __init__(
        self,
        session: ProviderSession,
        log: DiagnosticLog,
        connector_factory: ConnectorFactory,
        *,
        config: Optional[Settings] = None,
        navigator: Optional[Navigator] = None,
    ):
        self.session = session
        self.log = log
        self.config = config or settings
        self._connector_factory = connector_factory
        self._navigator = navigator or open_in_browser

    @property
    def timeout(self) -> Optional[float]:
        return self.config.operation_timeout_seconds

    async def discover_connector(self) -> Outcome[Connector]:
        """Ask the wallet library for a connector; run once at startup."""
        self.log.info("Initializing connector")
        self.session.state = ConnectionState.DISCOVERING

        self.log.info("Requesting Ronin wallet connector")
        outcome = await capture(self._connector_factory, timeout=self.timeout)

        if outcome.ok:
            self.session.connector = outcome.value
            self.session.last_error = None
            self.session.state = ConnectionState.READY
            self.log.success("Connector initialized successfully", outcome.value)
            return outcome

        self.session.connector = None
        self.session.state = ConnectionState.UNAVAILABLE
        error = outcome.error
        if isinstance(error, ConnectorError):
            self.session.last_error = error.error_type
            self.log.error(f"Connector error: {error.name}", error)
        elif error is not None:
            self.log.error("Unknown error while requesting connector", error)
        else:
            self.log.error("Failed to initialize connector")
        logger.debug("connector discovery failed: %s", outcome.kind.value)
        return outcome

    async def connect(self) -> Outcome[ConnectResult]:
        """Connect to the wallet, then enumerate its accounts.

        When discovery found no wallet provider at all, open the install
        page instead of connecting.
        """
        self.log.info("Connecting to Ronin Wallet")

        if self.session.wallet_not_installed:
            self.log.info("Ronin Wallet not found, redirecting to download page", self.config.install_url)
            opened = attempt(lambda: self._navigator(self.config.install_url))
            if opened.is_hard_failure:
                self.log.error("Could not open the install page", opened.error)
            return Outcome.soft_failure()

        connector = self.session.connector
        self.session.state = ConnectionState.CONNECTING

        self.log.info("Requesting connection to Ronin Wallet")
        result = await self._call(connector, lambda c: c.connect())
        if result.is_hard_failure:
            return self._connect_failed(result)

        if result.ok:
            parsed = attempt(lambda: _as_connect_result(result.value))
            if parsed.is_hard_failure:
                return self._connect_failed(parsed)
            result = Outcome.success(parsed.value)
            self.session.connected_account = parsed.value.account
            self.session.active_chain = parsed.value.chain_id
            self.log.success("Connected to Ronin Wallet", parsed.value)
        else:
            self.log.error("Connection result was undefined")

        self.log.info("Getting user accounts")
        accounts = await self._call(connector, lambda c: c.get_accounts())
        if accounts.is_hard_failure:
            return self._connect_failed(accounts)

        if accounts.ok:
            self.session.known_accounts = list(accounts.value)
            self.log.success("Retrieved user accounts", self.session.known_accounts)
        else:
            self.log.error("No accounts found or accounts is undefined")

        self._settle_connect_state()
        return result

    async def switch_chain(self, chain_id: int) -> Outcome[None]:
        coerced = attempt(lambda: int(chain_id))
        if coerced.is_hard_failure:
            self.log.info(f"Switching chain to {chain_id}")
            self.log.error("Error switching chain", coerced.error)
            return coerced

        target = coerced.value
        self.log.info(f"Switching chain to {target}")

        connector = self.session.connector
        if connector is None:
            self.log.error("Error switching chain", "Connector not available")
            return Outcome.soft_failure()

        outcome = await capture(
            lambda: connector.switch_chain(target),
            timeout=self.timeout,
            require_value=False,
        )
        if outcome.ok:
            self.session.active_chain = target
            self.log.success(f"Switched chain to {target}")
        else:
            self.log.error("Error switching chain", outcome.error)
        return outcome

    def disconnect(self) -> Outcome[None]:
        """Forget the connected wallet locally; the wallet itself is not told."""
        self.session.reset()
        self.log.info("Wallet disconnected manually")
        return Outcome.success()

    async def _call(
        self,
        connector: Optional[Connector],
        call: Callable[[Connector], Awaitable[Any]],
    ) -> Outcome[Any]:
        # A missing connector behaves like a call that returned nothing
        if connector is None:
            return Outcome.soft_failure()
        return await capture(lambda: call(connector), timeout=self.timeout)

    def _connect_failed(self, outcome: Outcome[Any]) -> Outcome[Any]:
        self.log.error("Error connecting to Ronin Wallet", outcome.error)
        self._settle_connect_state()
        return outcome

    def _settle_connect_state(self) -> None:
        if self.session.is_connected:
            self.session.state = ConnectionState.CONNECTED
        else:
            self.session.state = ConnectionState.FAILED
