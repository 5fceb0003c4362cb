"""pylangpack - Async language pack synchronizer for modular applications."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pylangpack")
except PackageNotFoundError:
    __version__ = "0+local"
from pylangpack.catalog import (
    DirectoryModuleRegistry,
    LocaleCatalog,
    ModuleRegistry,
    StaticLocaleCatalog,
    StaticModuleRegistry,
)
from pylangpack.config import LanguagePackConfig
from pylangpack.exceptions import (
    LanguagePackConfigError,
    LanguagePackDecodeError,
    LanguagePackError,
    LanguagePackExtractionError,
    LanguagePackStateError,
    LanguagePackTransportError,
    LanguagePackValidationError,
)
from pylangpack.extractor import extract_archive
from pylangpack.locator import build_package_url, host_major_version
from pylangpack.mirror import MirrorResolver
from pylangpack.models import (
    LanguageDetail,
    MirrorEntry,
    ModuleInfo,
    ModulePackDetail,
    PackDetail,
    SyncOutcome,
    UpdateReport,
)
from pylangpack.service import BaseUrlRewriter, LanguagePackService
from pylangpack.state import JsonFileRegistry, LanguagePackState, MemoryRegistry, Registry

__all__ = [
    "__version__",
    "BaseUrlRewriter",
    "DirectoryModuleRegistry",
    "JsonFileRegistry",
    "LanguageDetail",
    "LanguagePackConfig",
    "LanguagePackConfigError",
    "LanguagePackDecodeError",
    "LanguagePackError",
    "LanguagePackExtractionError",
    "LanguagePackService",
    "LanguagePackState",
    "LanguagePackStateError",
    "LanguagePackTransportError",
    "LanguagePackValidationError",
    "LocaleCatalog",
    "MemoryRegistry",
    "MirrorEntry",
    "MirrorResolver",
    "ModuleInfo",
    "ModulePackDetail",
    "ModuleRegistry",
    "PackDetail",
    "Registry",
    "StaticLocaleCatalog",
    "StaticModuleRegistry",
    "SyncOutcome",
    "UpdateReport",
    "build_package_url",
    "extract_archive",
    "host_major_version",
]
