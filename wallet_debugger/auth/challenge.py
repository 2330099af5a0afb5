"""
Sign-in challenge construction and formatting.

The canonical text form is produced by the ``siwe`` library (EIP-4361).
"""

import random
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from eth_utils import is_hex_address, to_checksum_address
from siwe import SiweMessage

from wallet_debugger.chain_types import signin_chain_id

from .models import SignInChallenge


ChallengeFormatter = Callable[[SignInChallenge], str]

# EIP-4361 requires at least eight alphanumeric characters
MIN_NONCE_LENGTH = 8


def generate_nonce(upper_bound: int = 1_000_000, secure: bool = False) -> str:
    """
    Draw a nonce in [0, upper_bound) and render it as a decimal string.

    The default source is ``random``, which is predictable; pass
    ``secure=True`` to draw from ``secrets`` instead. The string is
    zero-padded so the formatter accepts it.
    """
    value = secrets.randbelow(upper_bound) if secure else random.randrange(upper_bound)
    width = max(MIN_NONCE_LENGTH, len(str(upper_bound - 1)))
    return f"{value:0{width}d}"


def build_challenge(
    address: str,
    active_chain: Optional[int],
    *,
    domain: str,
    uri: str,
    statement: str,
    nonce: str,
    issued_at: datetime,
    ttl: timedelta = timedelta(days=1),
) -> SignInChallenge:
    return SignInChallenge(
        domain=domain,
        address=address,
        uri=uri,
        version="1",
        chain_id=signin_chain_id(active_chain),
        nonce=nonce,
        statement=statement,
        issued_at=issued_at,
        expiration_time=issued_at + ttl,
    )


def _iso8601(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_challenge(challenge: SignInChallenge) -> str:
    """Render a challenge to its EIP-4361 text form."""
    address = challenge.address
    # SIWE messages carry the EIP-55 checksummed form
    if is_hex_address(address):
        address = to_checksum_address(address)

    message = SiweMessage(
        domain=challenge.domain,
        address=address,
        uri=challenge.uri,
        version=challenge.version,
        chain_id=challenge.chain_id,
        nonce=challenge.nonce,
        statement=challenge.statement,
        issued_at=_iso8601(challenge.issued_at),
        expiration_time=_iso8601(challenge.expiration_time),
    )
    return message.prepare_message()
