#Transport collaborators for GraphHopperRouter.
#Each one exposes `async fetch(url) -> str`: the raw body on 2xx, TransportError otherwise.
#They do not enforce the routing timeout, the coordinator does.

import asyncio
from typing import Optional

import aiohttp
import requests

from .errors import TransportError


class AiohttpTransport:
    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        # a session handed in by the caller is reused and never closed here
        self._session = session

    async def fetch(self, url: str) -> str:
        try:
            if self._session is not None:
                return await self._get(self._session, url)
            async with aiohttp.ClientSession() as s:
                return await self._get(s, url)
        except aiohttp.ClientResponseError as e:
            raise TransportError(f"{e.status} {e.message}") from e
        except aiohttp.ClientError as e:
            raise TransportError(e) from e
        except asyncio.TimeoutError as e:
            raise TransportError("session timeout") from e
        except UnicodeDecodeError as e:
            raise TransportError(f"undecodable body: {e}") from e

    @staticmethod
    async def _get(session: aiohttp.ClientSession, url: str) -> str:
        async with session.get(url) as resp:
            resp.raise_for_status()
            return await resp.text()


class RequestsTransport:
    """Blocking requests.get run in the loop's default executor."""

    def __init__(self, timeout: float = 60):
        self.timeout = timeout

    def get(self, url: str) -> str:
        try:
            r = requests.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(f"{e.response.status_code} {e.response.reason}") from e
        except requests.RequestException as e:
            raise TransportError(e) from e
        return r.text

    async def fetch(self, url: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get, url)
