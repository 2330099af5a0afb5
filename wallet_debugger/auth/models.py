"""
Sign-in models and exceptions.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator


class HandshakeError(Exception):
    """Base sign-in handshake error."""
    pass


class ConnectorUnavailableError(HandshakeError):
    """No connector has been discovered."""
    pass


class NoAccountsError(HandshakeError):
    """The wallet exposed no account to sign with."""
    pass


class ProviderUnsupportedError(HandshakeError):
    """The connector cannot hand out a request provider."""
    pass


class MissingSignatureError(HandshakeError):
    """The signing request completed without a signature."""
    pass


class SignInChallenge(BaseModel):
    """Sign-in challenge bound to one account, domain and nonce."""
    model_config = ConfigDict(frozen=True)

    domain: str
    address: str
    uri: str
    version: str = "1"
    chain_id: int
    nonce: str
    statement: str
    issued_at: datetime
    expiration_time: datetime

    @model_validator(mode="after")
    def _expires_after_issue(self) -> "SignInChallenge":
        if self.expiration_time <= self.issued_at:
            raise ValueError("expiration_time must be after issued_at")
        return self
