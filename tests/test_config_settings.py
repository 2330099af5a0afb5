import pytest
from pydantic import ValidationError

from wallet_debugger.config import Settings


def test_defaults():
    """Defaults match the injected Ronin wallet setup."""

    settings = Settings(_env_file=None)

    assert settings.install_url == "https://wallet.roninchain.com"
    assert settings.challenge_ttl_days == 1
    assert settings.nonce_upper_bound == 1_000_000
    assert settings.secure_nonce is False
    assert settings.operation_timeout_seconds is None


def test_env_prefix(monkeypatch):
    """Settings load from WALLET_DEBUGGER_* environment variables."""

    monkeypatch.setenv("WALLET_DEBUGGER_RPC_URL", "http://127.0.0.1:9545")
    monkeypatch.setenv("WALLET_DEBUGGER_SECURE_NONCE", "true")

    settings = Settings(_env_file=None)

    assert settings.rpc_url == "http://127.0.0.1:9545"
    assert settings.secure_nonce is True


def test_challenge_site_fallbacks():
    """Hostname and origin fall back to the local development site."""

    settings = Settings(_env_file=None, site_hostname="", site_origin="")

    assert settings.challenge_domain == "localhost"
    assert settings.challenge_uri == "http://localhost:3000"


def test_empty_rpc_url_means_no_provider():
    settings = Settings(_env_file=None, rpc_url="")

    assert not settings.has_rpc_url


def test_operation_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, operation_timeout_seconds=0)
