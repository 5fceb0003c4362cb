from __future__ import annotations

import json
from pathlib import Path

from pylangpack.catalog import (
    DirectoryModuleRegistry,
    StaticLocaleCatalog,
    has_language_resources,
)
from pylangpack.config import LanguagePackConfig
from pylangpack.models import ModuleInfo


def _make_module(root: Path, key: str, *, xlf: bool = True, description: str | None = None) -> Path:
    path = root / key
    resources = path / "Resources" / "Private" / "Language"
    resources.mkdir(parents=True)
    if xlf:
        (resources / "locallang.xlf").write_text("<xliff/>", encoding="utf-8")
    if description is not None:
        (path / "composer.json").write_text(json.dumps({"description": description}), encoding="utf-8")
    return path


def test_static_catalog_drops_disabled_entries() -> None:
    catalog = StaticLocaleCatalog({"fr": "French", "de": "German"}, ["fr", "", "de"])

    assert list(catalog.active_languages()) == ["fr", "de"]
    assert catalog.locale_dependencies("fr_CA") == ("fr",)
    assert catalog.locale_dependencies("de") == ()


def test_static_catalog_from_config() -> None:
    catalog = StaticLocaleCatalog.from_config(LanguagePackConfig(active_languages=("de",)))

    assert catalog.active_languages() == ("de",)
    assert catalog.available_languages()["de"] == "German"


def test_directory_registry_lists_modules(tmp_path: Path) -> None:
    _make_module(tmp_path / "sysext", "backend", description="Backend interface")
    _make_module(tmp_path / "ext", "news")
    _make_module(tmp_path / "ext", "backend")
    (tmp_path / "ext" / "README.md").write_text("not a module", encoding="utf-8")
    (tmp_path / "ext" / ".git").mkdir()

    registry = DirectoryModuleRegistry(tmp_path / "sysext", tmp_path / "ext", None, tmp_path / "missing")
    modules = registry.active_modules()

    assert [(module.key, module.title) for module in modules] == [
        ("backend", "Backend interface"),
        ("news", ""),
    ]
    assert modules[0].path == tmp_path / "sysext" / "backend"


def test_has_language_resources(tmp_path: Path) -> None:
    with_xlf = _make_module(tmp_path, "news")
    without_xlf = _make_module(tmp_path, "plain", xlf=False)

    assert has_language_resources(ModuleInfo(key="news", path=with_xlf))
    assert not has_language_resources(ModuleInfo(key="plain", path=without_xlf))
    assert not has_language_resources(ModuleInfo(key="gone", path=tmp_path / "gone"))
