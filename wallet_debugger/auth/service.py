"""
Sign-In with Ronin handshake.

Flow:
1. Require a discovered connector
2. Request accounts from the wallet and pick the first one
3. Build a fresh challenge (new nonce, one day expiry) and format it
4. Get the connector's request provider
5. Ask the wallet to ``personal_sign`` the challenge text
6. Keep the returned signature on the session

Every failure ends the attempt with an error log entry; nothing is kept
from a failed attempt and the next call starts over with a new challenge.
The signature is not verified here.
"""

import logging
from collections import deque
from datetime import timedelta
from typing import Any, Deque, Optional, Set

from wallet_debugger.config import Settings, settings
from wallet_debugger.core.outcome import Outcome, attempt, capture
from wallet_debugger.core.session import ProviderSession
from wallet_debugger.telemetry.diagnostic_log import Clock, DiagnosticLog, utc_now

from .challenge import ChallengeFormatter, build_challenge, format_challenge, generate_nonce
from .models import (
    ConnectorUnavailableError,
    HandshakeError,
    MissingSignatureError,
    NoAccountsError,
    ProviderUnsupportedError,
    SignInChallenge,
)


logger = logging.getLogger(__name__)

SIGN_IN_ERROR = "Error during sign-in"

# Redraws before accepting a repeated nonce
MAX_NONCE_DRAWS = 16

# Nonces remembered for the uniqueness check; older ones are forgotten
ISSUED_NONCE_HISTORY = 256


class SignInHandshake:
    def __init__(
        self,
        session: ProviderSession,
        log: DiagnosticLog,
        *,
        config: Optional[Settings] = None,
        formatter: Optional[ChallengeFormatter] = None,
        clock: Optional[Clock] = None,
    ):
        self.session = session
        self.log = log
        self.config = config or settings
        self.formatter = formatter or format_challenge
        self.clock = clock or utc_now
        self._issued_nonces: Set[str] = set()
        self._nonce_history: Deque[str] = deque()

    @property
    def timeout(self) -> Optional[float]:
        return self.config.operation_timeout_seconds

    async def sign_in(self) -> Outcome[str]:
        self.log.info("Initiating Sign-In with Ronin")

        connector = self.session.connector
        if connector is None:
            return self._fail("Connector not available", ConnectorUnavailableError("Connector not available"))

        self.log.info("Requesting accounts")
        accounts = await capture(connector.request_accounts, timeout=self.timeout)
        if accounts.is_hard_failure:
            return self._fail(SIGN_IN_ERROR, accounts.error)
        if not accounts.ok:
            return self._fail("No accounts available", NoAccountsError("Wallet returned no accounts"))

        first = attempt(lambda: accounts.value[0])
        if first.is_hard_failure:
            return self._fail(SIGN_IN_ERROR, first.error)
        account = first.value
        self.log.info(f"Using account: {account}")

        built = attempt(lambda: self.build_challenge(account))
        if built.is_hard_failure:
            return self._fail(SIGN_IN_ERROR, built.error)
        challenge = built.value
        self.log.info(f"Generated nonce: {challenge.nonce}")
        self.log.info("Created SIWE message", challenge)

        formatted = attempt(lambda: self.formatter(challenge))
        if formatted.is_hard_failure:
            return self._fail(SIGN_IN_ERROR, formatted.error)
        message = formatted.value
        self.log.info("Message to sign", message)

        self.log.info("Requesting signature")
        get_provider = getattr(connector, "get_provider", None)
        if get_provider is None:
            return self._fail(
                "Connector does not have get_provider method",
                ProviderUnsupportedError(type(connector).__name__),
            )

        provider = await capture(get_provider, timeout=self.timeout)
        if provider.is_hard_failure:
            return self._fail(SIGN_IN_ERROR, provider.error)
        if not provider.ok:
            return self._fail("Connector returned no provider", ProviderUnsupportedError("get_provider returned None"))

        handle: Any = provider.value
        signature = await capture(
            lambda: handle.request({
                "method": "personal_sign",
                "params": [message, account],
            }),
            timeout=self.timeout,
        )
        if signature.is_hard_failure:
            return self._fail(SIGN_IN_ERROR, signature.error)
        if not signature.ok:
            return self._fail(SIGN_IN_ERROR, MissingSignatureError("Wallet returned no signature"))

        self.session.last_signature = signature.value
        self.log.success("Signature received", signature.value)
        return signature

    def build_challenge(self, account: str) -> SignInChallenge:
        return build_challenge(
            account,
            self.session.active_chain,
            domain=self.config.challenge_domain,
            uri=self.config.challenge_uri,
            statement=self.config.signin_statement,
            nonce=self._fresh_nonce(),
            issued_at=self.clock(),
            ttl=timedelta(days=self.config.challenge_ttl_days),
        )

    def _fresh_nonce(self) -> str:
        nonce = ""
        for _ in range(MAX_NONCE_DRAWS):
            nonce = generate_nonce(self.config.nonce_upper_bound, secure=self.config.secure_nonce)
            if nonce not in self._issued_nonces:
                break
        self._remember_nonce(nonce)
        return nonce

    def _remember_nonce(self, nonce: str) -> None:
        if nonce in self._issued_nonces:
            return
        if len(self._nonce_history) >= ISSUED_NONCE_HISTORY:
            self._issued_nonces.discard(self._nonce_history.popleft())
        self._nonce_history.append(nonce)
        self._issued_nonces.add(nonce)

    def _fail(self, message: str, error: Exception) -> Outcome[str]:
        self.log.error(message, error)
        if not isinstance(error, HandshakeError):
            logger.debug("sign-in attempt failed", exc_info=error)
        return Outcome.hard_failure(error)
