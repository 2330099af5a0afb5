from .service import SignInHandshake
from .challenge import build_challenge, format_challenge, generate_nonce
from .models import (
    SignInChallenge,
    HandshakeError,
    ConnectorUnavailableError,
    NoAccountsError,
    ProviderUnsupportedError,
    MissingSignatureError,
)

__all__ = [
    "SignInHandshake",
    "build_challenge",
    "format_challenge",
    "generate_nonce",
    "SignInChallenge",
    "HandshakeError",
    "ConnectorUnavailableError",
    "NoAccountsError",
    "ProviderUnsupportedError",
    "MissingSignatureError",
]
