from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from wallet_debugger.chain_types import ChainIds
from wallet_debugger.config import Settings
from wallet_debugger.providers.base import ConnectResult, ProviderConnector, ProviderHandle


FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    """Settings isolated from the environment, without console mirroring."""
    return Settings(
        _env_file=None,
        rpc_url="http://wallet.test",
        mirror_to_console=False,
        site_hostname="",
        site_origin="",
    )


@pytest.fixture
def fixed_clock():
    """Clock that advances one second per reading, starting at FIXED_NOW."""
    state = {"now": FIXED_NOW - timedelta(seconds=1)}

    def clock():
        state["now"] = state["now"] + timedelta(seconds=1)
        return state["now"]

    return clock


@pytest.fixture
def make_connector():
    """Build a mocked connector that behaves like a healthy wallet."""

    def _make(
        account: str = "0xABC",
        chain_id: int = ChainIds.RONIN_MAINNET,
        signature: str = "0xSIG",
    ):
        connector = AsyncMock(spec=ProviderConnector)
        connector.connect.return_value = ConnectResult(account=account, chain_id=chain_id)
        connector.get_accounts.return_value = [account]
        connector.request_accounts.return_value = [account]
        connector.switch_chain.return_value = None

        provider = AsyncMock(spec=ProviderHandle)
        provider.request.return_value = signature
        connector.get_provider.return_value = provider
        return connector

    return _make
