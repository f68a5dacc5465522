import asyncio
import logging
import re

import aiohttp
from pydantic import ValidationError

from clients.dto import MethodSignature, RawSignaturePage
from clients.errors import MalformedResponseError, TransportError
from config import settings

module_logger = logging.getLogger(__name__)

SELECTOR_RE = re.compile(r"^0x[0-9a-fA-F]{8}$")


class SelectorRegistry:
    """Best-effort lookup of 4-byte function selectors.

    Talks to a 4byte.directory compatible signatures endpoint. When several
    signatures collide on one selector, the earliest registered one wins.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
        max_concurrency: int | None = None,
    ):
        self.base_url = base_url or settings.SELECTOR_REGISTRY_URL
        self.timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else settings.REQUEST_TIMEOUT
        )
        self._session = session
        self._own_session = session is None
        self._cache: dict[str, MethodSignature] = {}
        self._pending: dict[str, asyncio.Task] = {}
        self._semaphore = asyncio.Semaphore(max_concurrency or settings.MAX_CONCURRENCY)

    async def __aenter__(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
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
            raise RuntimeError("SelectorRegistry used outside of 'async with'")
        return self._session

    @staticmethod
    def parse_name(text_signature: str) -> str:
        return text_signature.split("(", 1)[0].strip()

    async def _fetch(self, selector: str) -> RawSignaturePage:
        try:
            async with self._semaphore, self.session.get(
                self.base_url,
                params={"hex_signature": selector},
                timeout=self.timeout,
            ) as resp:
                if resp.status >= 400:
                    raise TransportError(f"selector {selector}: HTTP {resp.status}")
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"selector {selector}: {type(e).__name__} {e}") from e
        except ValueError as e:
            raise MalformedResponseError(f"selector {selector}: response is not JSON") from e

        try:
            return RawSignaturePage.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"selector {selector}: unexpected payload") from e

    async def _resolve(self, selector: str) -> MethodSignature | None:
        page = await self._fetch(selector)

        if not page.results:
            module_logger.debug(f"No signature registered for {selector}")
            return None

        earliest = min(page.results, key=lambda r: r.id)
        method = MethodSignature(
            name=self.parse_name(earliest.text_signature),
            text_signature=earliest.text_signature,
        )
        self._cache[selector] = method
        return method

    async def lookup(self, selector: str) -> MethodSignature | None:
        """Resolve ``selector``; concurrent calls for one selector share a request."""
        if not isinstance(selector, str) or not SELECTOR_RE.match(selector):
            return None

        selector = selector.lower()
        if selector in self._cache:
            return self._cache[selector]

        task = self._pending.get(selector)
        if task is None:
            task = asyncio.ensure_future(self._resolve(selector))
            self._pending[selector] = task
            task.add_done_callback(lambda _: self._pending.pop(selector, None))

        return await asyncio.shield(task)
