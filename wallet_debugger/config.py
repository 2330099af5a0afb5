from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

DEFAULT_HOSTNAME = "localhost"
DEFAULT_ORIGIN = "http://localhost:3000"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WALLET_DEBUGGER_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    console_log_level: str = Field(
        default="INFO",
        description="Level of the diagnostic log mirror, independent of log_level",
    )
    mirror_to_console: bool = Field(
        default=True,
        description="Mirror every diagnostic log entry to the console logger",
    )

    # Wallet provider
    rpc_url: str = Field(
        default="http://127.0.0.1:8545",
        description="JSON-RPC endpoint of the wallet provider (empty = not installed)",
    )
    request_timeout_seconds: float = Field(default=30.0, description="HTTP request timeout")
    install_url: str = Field(
        default="https://wallet.roninchain.com",
        description="Page opened when the wallet provider is not installed",
    )

    # Sign-in challenge
    site_hostname: str = Field(default="", description="Domain bound into the sign-in challenge")
    site_origin: str = Field(default="", description="URI bound into the sign-in challenge")
    signin_statement: str = Field(
        default="I am signing in to debug Ronin Wallet integration",
        description="Human-readable statement embedded in the challenge",
    )
    challenge_ttl_days: int = Field(default=1, ge=1, description="Challenge validity in days")
    nonce_upper_bound: int = Field(
        default=1_000_000,
        ge=1,
        description="Nonces are drawn from [0, nonce_upper_bound)",
    )
    secure_nonce: bool = Field(
        default=False,
        description="Draw nonces from the secrets module instead of random",
    )

    # Operation control
    operation_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Bound on each external wallet call (None waits forever)",
    )
    guard_concurrent_operations: bool = Field(
        default=True,
        description="Ignore a repeated operation while one of the same kind is in flight",
    )

    @property
    def has_rpc_url(self) -> bool:
        return bool(self.rpc_url)

    @property
    def challenge_domain(self) -> str:
        return self.site_hostname or DEFAULT_HOSTNAME

    @property
    def challenge_uri(self) -> str:
        return self.site_origin or DEFAULT_ORIGIN


# Global settings instance
settings = Settings()
