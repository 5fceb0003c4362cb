"""Typed access to the ``languagePacks`` registry namespace."""

from __future__ import annotations

from pylangpack._constants import BASE_URL_KEY, REGISTRY_NAMESPACE
from pylangpack.state.registry import Registry


def pack_key(iso: str, module_key: str) -> str:
    """Registry key of a per-pack record (``"fr-backend"``)."""
    return f"{iso}-{module_key}"


def _as_timestamp(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    return None


class LanguagePackState:
    """Registry adapter for base URL and last update records.

    Whole-language records (key ``{iso}``) and per-pack attempt records
    (key ``{iso}-{module_key}``) are separate entries and never merged.
    """

    def __init__(self, registry: Registry, *, namespace: str = REGISTRY_NAMESPACE) -> None:
        self._registry = registry
        self._namespace = namespace

    @property
    def registry(self) -> Registry:
        return self._registry

    def base_url(self) -> str | None:
        value = self._registry.get(self._namespace, BASE_URL_KEY)
        if isinstance(value, str) and value:
            return value
        return None

    def set_base_url(self, url: str) -> None:
        self._registry.set(self._namespace, BASE_URL_KEY, url)

    def language_last_update(self, iso: str) -> int | None:
        return _as_timestamp(self._registry.get(self._namespace, iso))

    def mark_language_updated(self, iso: str, timestamp: int) -> None:
        self._registry.set(self._namespace, iso, int(timestamp))

    def pack_last_update(self, iso: str, module_key: str) -> int | None:
        return _as_timestamp(self._registry.get(self._namespace, pack_key(iso, module_key)))

    def mark_pack_attempt(self, iso: str, module_key: str, timestamp: int) -> None:
        self._registry.set(self._namespace, pack_key(iso, module_key), int(timestamp))
