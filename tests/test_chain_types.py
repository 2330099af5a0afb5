import pytest

from wallet_debugger.chain_types import ChainIds, format_chain, parse_chain, signin_chain_id, toggle_chain


def test_format_chain_labels():
    assert format_chain(None) == "Unknown Chain"
    assert format_chain(ChainIds.RONIN_MAINNET) == "Ronin Mainnet - 2020"
    assert format_chain(2021) == "Saigon Testnet - 2021"
    assert format_chain(1) == "Unknown Chain - 1"


def test_toggle_chain():
    assert toggle_chain(ChainIds.RONIN_MAINNET) is ChainIds.RONIN_TESTNET
    assert toggle_chain(ChainIds.RONIN_TESTNET) is ChainIds.RONIN_MAINNET
    assert toggle_chain(None) is ChainIds.RONIN_MAINNET


def test_signin_chain_id_defaults_to_mainnet():
    assert signin_chain_id(2021) == 2021
    assert signin_chain_id(2020) == 2020
    assert signin_chain_id(137) == 2020
    assert signin_chain_id(None) == 2020


@pytest.mark.parametrize(
    "value, expected",
    [
        ("mainnet", 2020),
        ("Saigon", 2021),
        ("2021", 2021),
        ("0x7e4", 2020),
        (2021, 2021),
    ],
)
def test_parse_chain(value, expected):
    assert parse_chain(value) == expected


def test_parse_chain_rejects_unknown_names():
    with pytest.raises(ValueError):
        parse_chain("polygon")
