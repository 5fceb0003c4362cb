"""Data models for pylangpack."""

from pylangpack.models._base import LangPackBaseModel, RegistryTimestamp, parse_registry_timestamp
from pylangpack.models.details import LanguageDetail, ModulePackDetail, PackDetail
from pylangpack.models.mirror import MirrorEntry
from pylangpack.models.module import ModuleInfo
from pylangpack.models.outcome import SyncOutcome, UpdateReport

__all__ = [
    "LangPackBaseModel",
    "LanguageDetail",
    "MirrorEntry",
    "ModuleInfo",
    "ModulePackDetail",
    "PackDetail",
    "RegistryTimestamp",
    "SyncOutcome",
    "UpdateReport",
    "parse_registry_timestamp",
]
