"""Remote locations of language pack archives.

Packs are sharded by the first two characters of the module key::

    https://typo3.org/fileadmin/ter/b/a/backend-l10n/backend-l10n-fr.v12.zip
    https://typo3.org/fileadmin/ter/a/n/anextension-l10n/anextension-l10n-hu.zip

System modules get one pack per host major version (``.v12``); other
modules share a single pack across host versions.
"""

from __future__ import annotations

from pylangpack.exceptions import LanguagePackValidationError


def _validate_module_key(module_key: str) -> None:
    if len(module_key) < 2:
        raise LanguagePackValidationError(f"Module key {module_key!r} must have at least 2 characters")
    if "/" in module_key or "\\" in module_key:
        raise LanguagePackValidationError(f"Module key {module_key!r} must not contain path separators")


def host_major_version(version: str) -> str:
    """Return the major component of a dotted version string."""
    return version.strip().split(".", 1)[0]


def package_path(module_key: str, iso: str, major_version: str, *, is_system_module: bool) -> str:
    """Return the pack path relative to the base URL."""
    _validate_module_key(module_key)
    suffix = f".v{major_version}" if is_system_module else ""
    return f"{module_key[0]}/{module_key[1]}/{module_key}-l10n/{module_key}-l10n-{iso}{suffix}.zip"


def build_package_url(
    base_url: str,
    module_key: str,
    iso: str,
    major_version: str,
    is_system_module: bool,
) -> str:
    """Build the download URL of one language pack.

    ``base_url`` is used verbatim and is expected to end with ``/``.

    Raises :class:`LanguagePackValidationError` for a malformed module key.
    """
    return base_url + package_path(module_key, iso, major_version, is_system_module=is_system_module)
