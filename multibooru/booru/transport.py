import logging
from typing import Dict, Optional

import httpx

from ..config import settings
from .errors import AuthenticationRequired, HttpError, TooManyTags

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Thin async HTTP layer shared by every booru client.

    Wraps a single ``httpx.AsyncClient``. The connection pool is safe to
    share between concurrent operations. Cancelling the awaiting task aborts
    the request in flight.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.user_agent = user_agent or settings.USER_AGENT
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else settings.TIMEOUT,
                headers={"User-Agent": self.user_agent},
            )
        elif client.headers.get("User-Agent", "").startswith("python-httpx"):
            # Keep a caller-supplied User-Agent, replace httpx's default one.
            client.headers["User-Agent"] = self.user_agent
        self.client = client

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    def _check_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status == 422:
            raise TooManyTags(f"Server rejected the tag query ({response.url})")
        if status == 403:
            raise AuthenticationRequired(f"Authentication required for {response.url}")
        if not response.is_success:
            logger.error(f"Request to {response.url} returned status code {status}")
            raise HttpError(status, str(response.url))

    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """GET ``url`` and return the body as text."""
        logger.debug(f"GET {url}")
        response = await self.client.get(url, headers=headers)
        logger.debug(f"GET {url} returned status code {response.status_code}")
        self._check_status(response)
        response.encoding = "utf-8"
        return response.text

    async def fetch_redirect_url(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """GET ``url`` following redirects and return where it ended up."""
        logger.debug(f"GET {url} (following redirects)")
        response = await self.client.get(url, headers=headers, follow_redirects=True)
        self._check_status(response)
        return str(response.url)

    async def check(self, url: str) -> None:
        """HEAD ``url``; raises when the service is unreachable or failing."""
        response = await self.client.head(url)
        self._check_status(response)
