"""Language pack synchronization service."""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
import time
import uuid
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import aiohttp

from pylangpack._constants import SYSTEM_MODULES_SEGMENT
from pylangpack._transport import HttpTransport, Transport
from pylangpack.catalog import LocaleCatalog, ModuleRegistry, has_language_resources
from pylangpack.config import LanguagePackConfig
from pylangpack.exceptions import (
    LanguagePackError,
    LanguagePackExtractionError,
    LanguagePackStateError,
    LanguagePackTransportError,
    LanguagePackValidationError,
)
from pylangpack.extractor import extract_archive
from pylangpack.locator import build_package_url
from pylangpack.mirror import MirrorResolver
from pylangpack.models.details import LanguageDetail, ModulePackDetail, PackDetail
from pylangpack.models.module import ModuleInfo
from pylangpack.models.outcome import SyncOutcome, UpdateReport
from pylangpack.state.registry import Registry
from pylangpack.state.store import LanguagePackState

_logger = logging.getLogger(__name__)

BaseUrlRewriter = Callable[[str, str], str]
"""Hook ``(base_url, module_key) -> base_url`` applied before a pack URL is built."""


def _identity_rewriter(base_url: str, _module_key: str) -> str:
    return base_url


def _backup_prefix(module_key: str) -> str:
    return f".{module_key}.old-"


def _remove_stale_backups(language_path: Path, module_key: str) -> None:
    """Delete previous pack trees left behind by an interrupted or failed cleanup."""
    for stale in language_path.glob(f"{_backup_prefix(module_key)}*"):
        if not stale.is_dir():
            continue
        try:
            shutil.rmtree(stale)
        except OSError as exc:
            _logger.warning("Could not remove stale pack tree %s: %s", stale, exc)
        else:
            _logger.debug("Removed stale pack tree %s", stale)


def _swap_directory(new_tree: Path, target: Path) -> None:
    """Move *new_tree* to *target*, replacing any existing tree.

    The previous tree is renamed aside first and restored if the new tree
    cannot be moved in, so *target* never holds partial content.
    """
    if not target.exists():
        new_tree.rename(target)
        return

    backup = target.with_name(f"{_backup_prefix(target.name)}{uuid.uuid4().hex[:8]}")
    target.rename(backup)
    try:
        new_tree.rename(target)
    except OSError:
        backup.rename(target)
        raise
    try:
        shutil.rmtree(backup)
    except OSError as exc:
        _logger.warning("Could not remove previous pack tree %s: %s", backup, exc)


class LanguagePackService:
    """Download and install language packs for active modules.

    Usage::

        async with LanguagePackService(config, locales, modules, registry) as service:
            await service.update_mirror_base_url()
            outcome = await service.sync_pack("backend", "fr")

    A ``transport`` may be injected instead of entering the context manager,
    which is what the tests do.

    The service keeps no per-pack state of its own; different packs may be
    synchronized concurrently, while syncs of the same (module, language)
    pair must be serialized by the caller.
    """

    def __init__(
        self,
        config: LanguagePackConfig,
        locales: LocaleCatalog,
        modules: ModuleRegistry,
        registry: Registry,
        *,
        transport: Transport | None = None,
        session: aiohttp.ClientSession | None = None,
        base_url_rewriter: BaseUrlRewriter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._locales = locales
        self._modules = modules
        self._state = LanguagePackState(registry)
        self._transport = transport
        self._external_session = session is not None
        self._http_session = session
        self._rewrite_base_url = base_url_rewriter or _identity_rewriter
        self._clock = clock

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LanguagePackService:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    @property
    def state(self) -> LanguagePackState:
        return self._state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise LanguagePackError("Service not initialized. Use 'async with LanguagePackService(...) as service:'")
        return self._transport

    def _now(self) -> int:
        return int(self._clock())

    def _require_language(self, iso: str) -> None:
        if iso not in self._locales.available_languages() or iso not in self._locales.active_languages():
            raise LanguagePackValidationError(f"Language iso code {iso} not available or active")

    def _require_module(self, module_key: str) -> ModuleInfo:
        for module in self._modules.active_modules():
            if module.key == module_key:
                return module
        raise LanguagePackValidationError(f"Module {module_key} not loaded")

    def _is_system_module(self, module: ModuleInfo) -> bool:
        root = self._config.system_modules_path
        if root is not None:
            return module.path.resolve().is_relative_to(root.resolve())
        return SYSTEM_MODULES_SEGMENT in module.path.parts

    async def _remote_base_url(self, module_key: str) -> str:
        base_url = await asyncio.to_thread(self._state.base_url)
        if base_url is None:
            raise LanguagePackStateError("Language pack baseUrl not found")
        if base_url == self._config.default_base_url and self._config.beta_translation_server:
            base_url = self._config.beta_base_url
        return self._rewrite_base_url(base_url, module_key)

    def _extraction_path(self, iso: str, module_key: str) -> Path:
        return self._config.labels_path / iso / module_key

    async def _record_failure(self, iso: str, module_key: str) -> SyncOutcome:
        await asyncio.to_thread(self._state.mark_pack_attempt, iso, module_key, self._now())
        return SyncOutcome.FAILED

    def _install_pack(self, module_key: str, iso: str, content: bytes) -> None:
        """Stage, extract and swap a downloaded pack into place (blocking)."""
        language_path = self._config.labels_path / iso
        zip_path = self._config.transient_path / f"{module_key}-l10n-{iso}.zip"

        self._config.transient_path.mkdir(parents=True, exist_ok=True)
        language_path.mkdir(parents=True, exist_ok=True)
        _remove_stale_backups(language_path, module_key)
        staging = Path(tempfile.mkdtemp(prefix=f".{module_key}-l10n-", dir=language_path))
        try:
            zip_path.write_bytes(content)
            extract_archive(zip_path, staging)

            staged_pack = staging / module_key
            if not staged_pack.is_dir():
                raise LanguagePackExtractionError(f"Archive contains no {module_key}/ directory")
            discarded = sorted(path.name for path in staging.iterdir() if path.name != module_key)
            if discarded:
                _logger.warning("Ignoring entries outside %s/ in pack %s-%s: %s", module_key, iso, module_key, discarded)

            _swap_directory(staged_pack, self._extraction_path(iso, module_key))
        finally:
            shutil.rmtree(staging, ignore_errors=True)
            zip_path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Synchronization
    # ------------------------------------------------------------------

    async def update_mirror_base_url(self) -> str:
        """Resolve the download mirror and store it in the registry."""
        resolver = MirrorResolver(self._config, self._require_transport(), self._state)
        return await resolver.resolve_base_url()

    async def sync_pack(self, module_key: str, iso: str) -> SyncOutcome:
        """Download and install one language pack.

        Returns
        -------
        SyncOutcome
            ``NEW`` or ``UPDATED`` on success, ``FAILED`` otherwise. A failed
            attempt is stamped in the registry under ``{iso}-{module_key}``;
            the previously installed pack, if any, is left in place.

        Raises
        ------
        LanguagePackValidationError
            If the language is not available and active, or the module is
            not loaded.
        LanguagePackStateError
            If no base URL has been resolved yet.
        """
        self._require_language(iso)
        module = self._require_module(module_key)
        base_url = await self._remote_base_url(module.key)
        package_url = build_package_url(
            base_url,
            module.key,
            iso,
            self._config.host_major_version,
            self._is_system_module(module),
        )
        transport = self._require_transport()

        # Decided before downloading so a failure is reported for the intended action.
        pack_exists = self._extraction_path(iso, module.key).is_dir()
        outcome = SyncOutcome.UPDATED if pack_exists else SyncOutcome.NEW

        try:
            response = await transport.get(package_url)
        except LanguagePackTransportError as exc:
            _logger.error("Failed to download language pack %s: %s", package_url, exc)
            return await self._record_failure(iso, module.key)

        if not response.ok:
            _logger.warning(
                "Requesting %s was not successful, got status code %d (%s)",
                package_url,
                response.status,
                response.reason,
            )
            return await self._record_failure(iso, module.key)
        if not response.body:
            _logger.warning("Language pack %s is empty", package_url)
            return await self._record_failure(iso, module.key)

        try:
            await asyncio.to_thread(self._install_pack, module.key, iso, response.body)
        except LanguagePackExtractionError as exc:
            _logger.error("Could not extract language pack %s: %s", package_url, exc)
            return await self._record_failure(iso, module.key)
        except OSError as exc:
            _logger.error("Could not install language pack %s", package_url, exc_info=exc)
            return await self._record_failure(iso, module.key)

        _logger.debug("Language pack %s-%s installed (%s)", iso, module.key, outcome)
        return outcome

    def mark_languages_updated(self, isos: Iterable[str]) -> None:
        """Stamp the whole-language "last updated" time for each code.

        All codes are validated before any record is written.
        """
        codes = list(isos)
        active = set(self._locales.active_languages())
        for iso in codes:
            if iso not in active:
                raise LanguagePackValidationError(f"Language iso code {iso} not available or active")
        now = self._now()
        for iso in codes:
            self._state.mark_language_updated(iso, now)

    async def update_packs(
        self,
        isos: Iterable[str] | None = None,
        module_keys: Iterable[str] | None = None,
    ) -> UpdateReport:
        """Refresh the mirror, then sync every selected (module, language) pair.

        Without filters every active language and every active module that
        ships ``.xlf`` resources is synced. Languages are stamped as updated
        once all their packs were attempted.
        """
        languages = list(isos) if isos else list(self._locales.active_languages())
        for iso in languages:
            self._require_language(iso)
        if module_keys:
            modules = [self._require_module(key) for key in module_keys]
        else:
            modules = [module for module in self._modules.active_modules() if has_language_resources(module)]

        base_url = await self.update_mirror_base_url()
        results: dict[str, dict[str, SyncOutcome]] = {}
        for iso in languages:
            per_language = results.setdefault(iso, {})
            for module in modules:
                per_language[module.key] = await self.sync_pack(module.key, iso)
        await asyncio.to_thread(self.mark_languages_updated, languages)

        report = UpdateReport(base_url=base_url, results=results)
        _logger.info(
            "Language packs: %d new, %d updated, %d failed",
            report.new,
            report.updated,
            report.failed,
        )
        return report

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def language_details(self) -> list[LanguageDetail]:
        """All known languages with activity and last update, sorted by name."""
        active = set(self._locales.active_languages())
        details = [
            LanguageDetail(
                iso=iso,
                name=name,
                active=iso in active,
                last_update=self._state.language_last_update(iso),
                dependencies=tuple(self._locales.locale_dependencies(iso)),
            )
            for iso, name in self._locales.available_languages().items()
            if iso != "default"
        ]
        return sorted(details, key=lambda detail: detail.name)

    def module_pack_details(self) -> list[ModulePackDetail]:
        """Modules shipping ``.xlf`` resources with one pack entry per active language."""
        active = list(self._locales.active_languages())
        details = [
            ModulePackDetail(
                key=module.key,
                title=module.title,
                packs=tuple(
                    PackDetail(
                        iso=iso,
                        exists=self._extraction_path(iso, module.key).is_dir(),
                        last_update=self._state.pack_last_update(iso, module.key),
                    )
                    for iso in active
                ),
            )
            for module in self._modules.active_modules()
            if has_language_resources(module)
        ]
        return sorted(details, key=lambda detail: detail.key)
