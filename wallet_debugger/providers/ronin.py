import itertools
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings, settings
from .base import (
    ConnectResult,
    ConnectorError,
    ConnectorErrorType,
    ProviderConnector,
    ProviderHandle,
)


class RoninRpcProvider(ProviderHandle):
    """Forwards EIP-1193 requests to a wallet JSON-RPC endpoint"""

    def __init__(self, client: httpx.AsyncClient, url: str, timeout_s: float = 30.0):
        self.client = client
        self.url = url
        self.timeout_s = timeout_s
        self._ids = itertools.count(1)

    async def request(self, args: Dict[str, Any]) -> Any:
        method = args["method"]
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": list(args.get("params") or []),
            "id": next(self._ids),
        }

        response = await self.client.post(
            self.url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout_s,
        )
        response.raise_for_status()
        data = response.json()

        if data.get("error"):
            raise ConnectorError(
                ConnectorErrorType.REQUEST_FAILED,
                f"{method} failed: {data['error']}",
            )
        return data.get("result")


class RoninRpcConnector(ProviderConnector):
    """Ronin wallet connector speaking JSON-RPC over HTTP"""

    def __init__(
        self,
        url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout_s: float = 30.0,
    ):
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self._provider = RoninRpcProvider(self._client, url, timeout_s)

    def __repr__(self) -> str:
        return f"RoninRpcConnector(url={self.url!r})"

    async def connect(self) -> Optional[ConnectResult]:
        accounts = await self.request_accounts()
        if not accounts:
            return None
        chain_id = await self.get_chain_id()
        return ConnectResult(account=accounts[0], chain_id=chain_id)

    async def get_chain_id(self) -> int:
        result = await self._provider.request({"method": "eth_chainId"})
        if isinstance(result, str) and result.lower().startswith("0x"):
            return int(result, 16)
        return int(result)

    async def get_accounts(self) -> List[str]:
        return list(await self._provider.request({"method": "eth_accounts"}) or [])

    async def request_accounts(self) -> List[str]:
        return list(await self._provider.request({"method": "eth_requestAccounts"}) or [])

    async def switch_chain(self, chain_id: int) -> None:
        await self._provider.request({
            "method": "wallet_switchEthereumChain",
            "params": [{"chainId": hex(chain_id)}],
        })

    async def get_provider(self) -> RoninRpcProvider:
        return self._provider

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


async def request_ronin_wallet_connector(
    config: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> RoninRpcConnector:
    """
    Discover the wallet provider and return a connector for it.

    Raises:
        ConnectorError: PROVIDER_NOT_FOUND when no endpoint is configured or
            the endpoint cannot be reached. Other failures propagate as-is.
    """
    config = config or settings
    if not config.has_rpc_url:
        raise ConnectorError(
            ConnectorErrorType.PROVIDER_NOT_FOUND,
            "No wallet provider endpoint configured",
        )

    connector = RoninRpcConnector(config.rpc_url, client=client, timeout_s=config.request_timeout_seconds)
    try:
        await connector.get_chain_id()
    except httpx.TransportError as e:
        await connector.aclose()
        raise ConnectorError(
            ConnectorErrorType.PROVIDER_NOT_FOUND,
            f"Wallet provider unreachable at {config.rpc_url}: {e}",
        ) from e
    except Exception:
        await connector.aclose()
        raise
    return connector
