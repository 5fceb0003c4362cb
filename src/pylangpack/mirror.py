"""Mirror discovery for the language pack base URL."""

from __future__ import annotations

import asyncio
import gzip
import logging
import xml.etree.ElementTree as ET  # noqa: S405
import zlib

from pylangpack._transport import Transport
from pylangpack.config import LanguagePackConfig
from pylangpack.exceptions import LanguagePackDecodeError
from pylangpack.models.mirror import MirrorEntry
from pylangpack.state.store import LanguagePackState

_logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"


def parse_mirror_index(payload: bytes) -> list[MirrorEntry]:
    """Decode a (gzip-compressed) mirror index into its mirror entries.

    Bodies already decompressed by the HTTP layer are accepted as well.

    Raises :class:`LanguagePackDecodeError` if the payload cannot be
    decompressed or is not well-formed XML.
    """
    if payload.startswith(_GZIP_MAGIC):
        try:
            payload = gzip.decompress(payload)
        except (OSError, EOFError, zlib.error) as exc:
            raise LanguagePackDecodeError(f"Mirror index is not valid gzip: {exc}") from exc
    try:
        root = ET.fromstring(payload)  # noqa: S314
    except ET.ParseError as exc:
        raise LanguagePackDecodeError(f"Mirror index is not valid XML: {exc}") from exc

    mirrors = [root] if root.tag == "mirror" else root.iter("mirror")
    return [
        MirrorEntry(
            title=element.findtext("title"),
            host=element.findtext("host"),
            path=element.findtext("path"),
            country=element.findtext("country"),
        )
        for element in mirrors
    ]


def select_base_url(payload: bytes) -> str:
    """Return the base URL of the first usable mirror in *payload*.

    Raises :class:`LanguagePackDecodeError` when no mirror has both a
    host and a path.
    """
    for entry in parse_mirror_index(payload):
        if entry.is_usable:
            return entry.base_url
    raise LanguagePackDecodeError("Mirror index lists no mirror with host and path")


class MirrorResolver:
    """Resolve and persist the base URL packs are downloaded from.

    Resolution never fails: if the mirror index cannot be fetched or
    decoded, the configured default base URL is used. The result is
    always written to the registry.
    """

    def __init__(self, config: LanguagePackConfig, transport: Transport, state: LanguagePackState) -> None:
        self._config = config
        self._transport = transport
        self._state = state

    async def resolve_base_url(self) -> str:
        url = self._config.mirrors_url
        base_url: str | None = None
        try:
            response = await self._transport.get(url)
            if response.ok:
                base_url = select_base_url(response.body)
            else:
                _logger.warning(
                    "Requesting %s was not successful, got status code %d (%s)",
                    url,
                    response.status,
                    response.reason,
                )
        except LanguagePackDecodeError as exc:
            _logger.error("Failed to decode list of mirrors from %s: %s", url, exc)
        except Exception as exc:  # noqa: BLE001
            _logger.error("Failed to download list of mirrors from %s", url, exc_info=exc)

        if not base_url:
            base_url = self._config.default_base_url
        await asyncio.to_thread(self._state.set_base_url, base_url)
        _logger.debug("Language pack base URL set to %s", base_url)
        return base_url
