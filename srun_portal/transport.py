import logging
from typing import Optional, Protocol

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/107.0.0.0 Safari/537.36 Edg/107.0.1418.56"
)
DEFAULT_TIMEOUT = 8


class Transport(Protocol):
    def get(self, url: str) -> bytes:
        ...


class HttpTransport:
    """Blocking GET client that returns raw response bodies."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent or DEFAULT_USER_AGENT})

    def get(self, url: str) -> bytes:
        try:
            response = self.session.get(url, allow_redirects=False, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"request failed: {exc}") from exc
        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"status code: {response.status_code}", status_code=response.status_code
            )
        logger.debug("Received %d bytes status=%s", len(response.content), response.status_code)
        return response.content

    def close(self) -> None:
        self.session.close()
