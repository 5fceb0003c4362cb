"""Read-only views combining the locale catalog, module registry and state."""

from __future__ import annotations

from pydantic import Field

from pylangpack.models._base import LangPackBaseModel, RegistryTimestamp


class LanguageDetail(LangPackBaseModel):
    """A language known to the host and its last whole-language update."""

    iso: str
    name: str
    active: bool = False
    last_update: RegistryTimestamp = None
    dependencies: tuple[str, ...] = ()


class PackDetail(LangPackBaseModel):
    """State of one module's pack for one active language."""

    iso: str
    exists: bool = False
    last_update: RegistryTimestamp = None


class ModulePackDetail(LangPackBaseModel):
    """A module shipping translatable resources and its packs."""

    key: str
    title: str = ""
    packs: tuple[PackDetail, ...] = Field(default_factory=tuple)
