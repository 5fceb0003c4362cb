"""HTTP transport for mirror index and language pack downloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import aiohttp

from pylangpack._constants import USER_AGENT
from pylangpack.config import LanguagePackConfig
from pylangpack.exceptions import LanguagePackTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Fully read HTTP response."""

    status: int
    reason: str = ""
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status == 200


class Transport(Protocol):
    """Structural transport interface used by the resolver and the service.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get(self, url: str) -> HttpResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport that reads whole response bodies.

    Non-200 statuses are returned, not raised, so callers can log the
    status and reason themselves. Network failures raise
    :class:`LanguagePackTransportError`.
    """

    def __init__(self, config: LanguagePackConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get(self, url: str) -> HttpResponse:
        _logger.debug("GET %s", url)
        headers = {"user-agent": USER_AGENT}
        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                return HttpResponse(status=resp.status, reason=resp.reason or "", body=body)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise LanguagePackTransportError(
                f"Request to {url} failed: {exc!r}",
                url=url,
            ) from exc
