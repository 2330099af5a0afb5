from unittest.mock import AsyncMock, MagicMock

import pytest

from cli import build_parser, print_logs, print_status, run_command
from wallet_debugger import WalletDebugger
from wallet_debugger.providers.base import ConnectorError, ConnectorErrorType
from wallet_debugger.telemetry.diagnostic_log import DiagnosticLog


@pytest.fixture
def connector(make_connector):
    return make_connector()


@pytest.fixture
def debugger(connector, config):
    return WalletDebugger(
        AsyncMock(return_value=connector),
        config=config,
        navigator=MagicMock(),
        formatter=lambda challenge: f"sign in {challenge.nonce}",
    )


def test_print_logs_empty(capsys):
    print_logs(DiagnosticLog(mirror=False))

    assert "No logs yet" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_connect_and_status(debugger, capsys):
    await debugger.start()

    assert await run_command(debugger, "connect")

    out = capsys.readouterr().out
    assert "Status: Connected" in out
    assert "Current Chain: Ronin Mainnet - 2020" in out
    assert "Current Address: 0xABC" in out


@pytest.mark.asyncio
async def test_switch_without_argument_toggles_chain(debugger, connector, capsys):
    await debugger.start()
    await run_command(debugger, "connect")

    await run_command(debugger, "switch")

    connector.switch_chain.assert_awaited_once_with(2021)
    assert "Saigon Testnet - 2021" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_switch_rejects_unknown_chain(debugger, connector, capsys):
    await debugger.start()

    await run_command(debugger, "switch polygon")

    connector.switch_chain.assert_not_awaited()
    assert "Unknown chain identifier" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_signin_shows_signature(debugger, capsys):
    await debugger.start()
    await run_command(debugger, "connect")

    await run_command(debugger, "signin")

    assert "0xSIG" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_exit_stops_loop(debugger):
    assert await run_command(debugger, "exit") is False
    assert await run_command(debugger, "") is True


@pytest.mark.asyncio
async def test_not_installed_notice(config, capsys):
    debugger = WalletDebugger(
        AsyncMock(side_effect=ConnectorError(ConnectorErrorType.PROVIDER_NOT_FOUND)),
        config=config,
        navigator=MagicMock(),
    )
    await debugger.start()

    print_status(debugger.session)

    assert "Ronin Wallet not found. Please install it first." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_logs_and_clear(debugger, capsys):
    await debugger.start()
    await run_command(debugger, "clear")
    capsys.readouterr()

    await run_command(debugger, "logs")

    out = capsys.readouterr().out
    assert "Logs cleared" in out
    assert "Connector initialized successfully" not in out


def test_parser_options():
    args = build_parser().parse_args(["--rpc-url", "http://wallet.test", "--run", "connect,signin"])

    assert args.rpc_url == "http://wallet.test"
    assert args.run == "connect,signin"
