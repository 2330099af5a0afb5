from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class ConnectorErrorType(str, Enum):
    """Classified failures raised by the wallet connector library."""
    PROVIDER_NOT_FOUND = "ProviderNotFound"
    CONNECT_FAILED = "ConnectFailed"
    SWITCH_CHAIN_NOT_SUPPORTED = "SwitchChainNotSupported"
    REQUEST_FAILED = "RequestFailed"


class ConnectorError(Exception):
    """Error raised by a connector with a recognized kind."""

    def __init__(self, error_type: ConnectorErrorType, message: Optional[str] = None):
        self.error_type = error_type
        super().__init__(message or error_type.value)

    @property
    def name(self) -> str:
        return self.error_type.value


class ConnectResult(BaseModel):
    """Account and chain reported by a successful connect."""
    account: str
    chain_id: int = Field(validation_alias=AliasChoices("chain_id", "chainId"))


class ProviderHandle(ABC):
    """EIP-1193 style request interface exposed by a connector"""

    @abstractmethod
    async def request(self, args: Dict[str, Any]) -> Any:
        """Send a {"method": ..., "params": [...]} request to the wallet"""
        pass


class Connector(ABC):
    """Handle to the injected wallet, used for all wallet interactions"""

    @abstractmethod
    async def connect(self) -> Optional[ConnectResult]:
        """Ask the wallet to connect; None when it yields no usable result"""
        pass

    @abstractmethod
    async def get_accounts(self) -> List[str]:
        """Accounts already exposed to this site"""
        pass

    @abstractmethod
    async def request_accounts(self) -> List[str]:
        """Ask the wallet to expose its accounts (may prompt the user)"""
        pass

    @abstractmethod
    async def switch_chain(self, chain_id: int) -> None:
        """Switch the wallet to another chain"""
        pass


class ProviderConnector(Connector):
    """Connector that also hands out a raw request provider.

    Not every connector supports this, so callers must check for
    ``get_provider`` rather than assume it.
    """

    @abstractmethod
    async def get_provider(self) -> Optional[ProviderHandle]:
        pass
