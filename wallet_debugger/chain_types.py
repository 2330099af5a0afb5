"""
Ronin chain identification types and utilities.

Chains are identified by their EVM integer chain ids. Only the two Ronin
networks are known by name; any other id is carried through untouched and
rendered as an unknown chain.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ChainIds(IntEnum):
    """Ronin networks the wallet can be switched between."""
    RONIN_MAINNET = 2020
    RONIN_TESTNET = 2021


# Chain code written into sign-in challenges when the active chain is unknown
DEFAULT_SIGNIN_CHAIN_ID: int = ChainIds.RONIN_MAINNET

CHAIN_ALIASES = {
    "mainnet": ChainIds.RONIN_MAINNET,
    "ronin": ChainIds.RONIN_MAINNET,
    "testnet": ChainIds.RONIN_TESTNET,
    "saigon": ChainIds.RONIN_TESTNET,
}


def signin_chain_id(active_chain: Optional[int]) -> int:
    """Chain code bound into a sign-in challenge for the active chain."""
    if active_chain == ChainIds.RONIN_TESTNET:
        return int(ChainIds.RONIN_TESTNET)
    return int(DEFAULT_SIGNIN_CHAIN_ID)


def toggle_chain(active_chain: Optional[int]) -> ChainIds:
    """The chain a "switch chain" action targets from the active chain."""
    if active_chain == ChainIds.RONIN_MAINNET:
        return ChainIds.RONIN_TESTNET
    return ChainIds.RONIN_MAINNET


def format_chain(active_chain: Optional[int]) -> str:
    """Human-readable label for a chain id."""
    if not active_chain:
        return "Unknown Chain"
    if active_chain == ChainIds.RONIN_MAINNET:
        return f"Ronin Mainnet - {int(active_chain)}"
    if active_chain == ChainIds.RONIN_TESTNET:
        return f"Saigon Testnet - {int(active_chain)}"
    return f"Unknown Chain - {active_chain}"


def parse_chain(value: str | int) -> int:
    """
    Convert user input to a chain id.

    Accepts a known alias ("mainnet", "saigon", ...), a decimal id or a
    0x-prefixed hex id.

    Raises:
        ValueError: If the value is not recognized.
    """
    if isinstance(value, int):
        return value

    text = value.lower().strip()
    if text in CHAIN_ALIASES:
        return int(CHAIN_ALIASES[text])

    try:
        return int(text, 16) if text.startswith("0x") else int(text)
    except ValueError:
        raise ValueError(f"Unknown chain identifier: {value!r}") from None
