"""Locale catalog and module registry collaborators.

The synchronizer never reads ambient configuration: the active languages
and the installed modules are handed in through these interfaces.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Protocol

from pylangpack._constants import LANGUAGE_RESOURCES_DIR, LOCALE_DEPENDENCIES
from pylangpack.config import LanguagePackConfig
from pylangpack.models.module import ModuleInfo

_logger = logging.getLogger(__name__)


class LocaleCatalog(Protocol):
    def available_languages(self) -> Mapping[str, str]:
        ...

    def active_languages(self) -> Sequence[str]:
        ...

    def locale_dependencies(self, iso: str) -> Sequence[str]:
        ...


class ModuleRegistry(Protocol):
    def active_modules(self) -> Sequence[ModuleInfo]:
        ...


class StaticLocaleCatalog:
    """Locale catalog over fixed mappings."""

    def __init__(
        self,
        available: Mapping[str, str],
        active: Iterable[str],
        dependencies: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._available = dict(available)
        # Falsy entries are placeholders for disabled languages.
        self._active = tuple(iso for iso in active if iso)
        self._dependencies = dict(LOCALE_DEPENDENCIES if dependencies is None else dependencies)

    @classmethod
    def from_config(cls, config: LanguagePackConfig) -> StaticLocaleCatalog:
        return cls(config.available_languages, config.active_languages)

    def available_languages(self) -> Mapping[str, str]:
        return dict(self._available)

    def active_languages(self) -> Sequence[str]:
        return self._active

    def locale_dependencies(self, iso: str) -> Sequence[str]:
        return tuple(self._dependencies.get(iso, ()))


class StaticModuleRegistry:
    """Module registry over a fixed list."""

    def __init__(self, modules: Iterable[ModuleInfo]) -> None:
        self._modules = tuple(modules)

    def active_modules(self) -> Sequence[ModuleInfo]:
        return self._modules


def _read_title(path: Path) -> str:
    manifest = path / "composer.json"
    if not manifest.is_file():
        return ""
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        _logger.debug("Ignoring unreadable manifest %s: %s", manifest, exc)
        return ""
    description = data.get("description") if isinstance(data, dict) else None
    return description if isinstance(description, str) else ""


class DirectoryModuleRegistry:
    """Treat every subdirectory of the given roots as an installed module.

    The directory name is the module key. Roots that do not exist are
    skipped. When two roots hold the same key the first root wins.
    """

    def __init__(self, *roots: Path | None) -> None:
        self._roots = tuple(root for root in roots if root is not None)

    def active_modules(self) -> Sequence[ModuleInfo]:
        modules: dict[str, ModuleInfo] = {}
        for root in self._roots:
            if not root.is_dir():
                _logger.debug("Module root %s does not exist", root)
                continue
            for child in sorted(root.iterdir()):
                if not child.is_dir() or child.name.startswith(".") or child.name in modules:
                    continue
                modules[child.name] = ModuleInfo(key=child.name, path=child, title=_read_title(child))
        return tuple(modules.values())


def has_language_resources(module: ModuleInfo) -> bool:
    """Whether a module ships at least one ``.xlf`` file."""
    resources = module.path.joinpath(*LANGUAGE_RESOURCES_DIR)
    if not resources.is_dir():
        return False
    return any(resources.rglob("*.xlf"))
