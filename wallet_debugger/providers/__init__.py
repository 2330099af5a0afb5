from .base import (
    Connector,
    ConnectorError,
    ConnectorErrorType,
    ConnectResult,
    ProviderConnector,
    ProviderHandle,
)
from .ronin import RoninRpcConnector, RoninRpcProvider, request_ronin_wallet_connector

__all__ = [
    "Connector",
    "ConnectorError",
    "ConnectorErrorType",
    "ConnectResult",
    "ProviderConnector",
    "ProviderHandle",
    "RoninRpcConnector",
    "RoninRpcProvider",
    "request_ronin_wallet_connector",
]
