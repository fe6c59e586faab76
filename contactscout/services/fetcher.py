# contactscout/services/fetcher.py
import logging
from typing import Optional

import httpx

from ..config import settings
from ..exceptions import FetchError

LOG = logging.getLogger("contactscout.fetcher")


class Fetcher:
    """
    Single-shot page fetcher on top of a shared ``httpx.AsyncClient``.

    One GET per call, redirects followed, no retries. Any failure comes
    out as ``FetchError`` carrying a human-readable message.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=httpx.Timeout(timeout),
                headers={"User-Agent": user_agent or settings.USER_AGENT},
            )
        self.client = client

    @classmethod
    def from_settings(cls) -> "Fetcher":
        return cls(timeout=settings.FETCH_TIMEOUT_SECONDS, user_agent=settings.USER_AGENT)

    async def fetch_text(self, url: str) -> str:
        try:
            resp = await self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            LOG.debug("fetch failed url=%s err=%r", url, e)
            raise FetchError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            raise FetchError(f"HTTP error! Status: {resp.status_code}")
        return resp.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
