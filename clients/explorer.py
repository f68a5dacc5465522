import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import TypeAdapter, ValidationError
from web3 import Web3

from chains.dto import ChainConfig
from clients.dto import ExplorerEnvelope, RawToken, RawTokenTransfer, RawTx
from clients.errors import (
    ExplorerError,
    InvalidAddressError,
    MalformedResponseError,
    TransportError,
)
from config import settings

module_logger = logging.getLogger(__name__)


class ExplorerClient:
    """Read-only client for the Blockscout ``module=account`` API.

    One instance can serve every supported chain: each call takes the
    ``ChainConfig`` that selects the explorer path. Pass ``session`` to share
    an existing ``aiohttp.ClientSession``; otherwise the client opens and
    closes its own inside ``async with``.
    """

    HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    _tokens_adapter = TypeAdapter(list[RawToken])
    _txs_adapter = TypeAdapter(list[RawTx])
    _token_txs_adapter = TypeAdapter(list[RawTokenTransfer])

    def __init__(
        self,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
        max_concurrency: int | None = None,
    ):
        self.base_url = (base_url or settings.EXPLORER_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else settings.REQUEST_TIMEOUT
        )
        self._session = session
        self._own_session = session is None
        self._semaphore = asyncio.Semaphore(max_concurrency or settings.MAX_CONCURRENCY)

    async def __aenter__(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(headers=self.HEADERS, timeout=self.timeout)
            self._own_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._own_session:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("ExplorerClient used outside of 'async with'")
        return self._session

    def _build_url(self, chain: ChainConfig) -> str:
        return f"{self.base_url}/{chain.name.lower()}/{chain.network.lower()}/api"

    @staticmethod
    def _check_address(address: str) -> str:
        if not isinstance(address, str) or not Web3.is_address(address):
            raise InvalidAddressError(address)
        return address

    async def _request(self, chain: ChainConfig, action: str, **params: str) -> Any:
        url = self._build_url(chain)
        query = {"module": "account", "action": action, **params}

        module_logger.debug(f"GET {url} {query}")

        try:
            async with self._semaphore:
                async with self.session.get(
                    url,
                    params=query,
                    headers=self.HEADERS,
                    timeout=self.timeout,
                ) as resp:
                    if resp.status >= 400:
                        raise TransportError(f"{action}: HTTP {resp.status} from {url}")
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{action}: {type(e).__name__} {e}") from e
        except ValueError as e:
            raise MalformedResponseError(f"{action}: response is not JSON") from e

        try:
            envelope = ExplorerEnvelope.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"{action}: unexpected envelope {data!r}") from e

        if envelope.status == "0":
            # "No transactions found" / "No token transfers found" come back as status 0
            if isinstance(envelope.result, list) and not envelope.result:
                return []
            raise ExplorerError(f"{action}: {envelope.message or envelope.result}")

        return envelope.result

    @staticmethod
    def _scalar(action: str, result: Any) -> str | None:
        if result is None:
            return None
        if isinstance(result, (str, int)) and not isinstance(result, bool):
            return str(result)
        raise MalformedResponseError(f"{action}: expected a scalar result, got {result!r}")

    @staticmethod
    def _records(action: str, adapter: TypeAdapter, result: Any) -> list:
        if result is None:
            raise MalformedResponseError(f"{action}: result is missing")
        try:
            return adapter.validate_python(result)
        except ValidationError as e:
            raise MalformedResponseError(f"{action}: {e.error_count()} invalid records") from e

    async def get_balance(self, chain: ChainConfig, address: str) -> str | None:
        result = await self._request(chain, "balance", address=self._check_address(address))
        return self._scalar("balance", result)

    async def get_token_list(self, chain: ChainConfig, address: str) -> list[RawToken]:
        result = await self._request(chain, "tokenlist", address=self._check_address(address))
        return self._records("tokenlist", self._tokens_adapter, result)

    async def get_token_balance(
        self,
        chain: ChainConfig,
        address: str,
        contract_address: str
    ) -> str | None:
        result = await self._request(
            chain,
            "tokenbalance",
            contractaddress=contract_address,
            address=self._check_address(address),
        )
        return self._scalar("tokenbalance", result)

    async def get_tx_list(self, chain: ChainConfig, address: str) -> list[RawTx]:
        result = await self._request(chain, "txlist", address=self._check_address(address))
        return self._records("txlist", self._txs_adapter, result)

    async def get_token_tx(self, chain: ChainConfig, address: str) -> list[RawTokenTransfer]:
        result = await self._request(chain, "tokentx", address=self._check_address(address))
        return self._records("tokentx", self._token_txs_adapter, result)
