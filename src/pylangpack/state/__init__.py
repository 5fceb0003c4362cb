"""State/registry layer.

The registry is the single persistent home of the resolved base URL and
the "last updated" timestamps. Everything else in pylangpack is derived
from the filesystem or from the injected catalogs.
"""

from pylangpack.state.registry import JsonFileRegistry, MemoryRegistry, Registry
from pylangpack.state.store import LanguagePackState

__all__ = [
    "JsonFileRegistry",
    "LanguagePackState",
    "MemoryRegistry",
    "Registry",
]
