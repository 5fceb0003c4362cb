"""Client configuration for pylangpack."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pylangpack._constants import BETA_BASE_URL, DEFAULT_BASE_URL, DEFAULT_LANGUAGES, MIRRORS_URL, TRANSIENT_DIR
from pylangpack.exceptions import LanguagePackConfigError
from pylangpack.locator import host_major_version


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclasses.dataclass(frozen=True)
class LanguagePackConfig:
    """Synchronizer configuration.

    Parameters
    ----------
    labels_path : Path
        Root directory for extracted packs, laid out as
        ``{labels_path}/{iso}/{module_key}/``.
    var_path : Path
        Directory for variable data; downloads are staged under
        ``{var_path}/transient/``.
    host_version : str
        Version of the host application. Its major component tags
        packs of system modules (``.v12.zip``).
    system_modules_path : Path or None
        Directory holding the host's built-in modules. When unset, a
        module counts as built-in if its path has a ``sysext`` segment.
    beta_translation_server : bool
        Use the beta translation server instead of the default one.
        Only applies while the resolved base URL is the default.
    mirrors_url : str
        Location of the gzip-compressed XML mirror index.
    default_base_url : str
        Fallback base URL when mirror discovery fails.
    beta_base_url : str
        Base URL of the beta translation server.
    request_timeout : float
        Total timeout in seconds for each HTTP request.
    registry_path : Path or None
        JSON file backing the registry. Defaults to
        ``{var_path}/registry.json``.
    modules_path : Path or None
        Directory scanned for installed modules by the CLI.
    available_languages : Mapping[str, str]
        ISO code to language name for every language the host knows.
    active_languages : tuple[str, ...]
        ISO codes enabled on this installation.
    """

    labels_path: Path = Path("var/labels")
    var_path: Path = Path("var")
    host_version: str = "12.4"
    system_modules_path: Path | None = None
    beta_translation_server: bool = False
    mirrors_url: str = MIRRORS_URL
    default_base_url: str = DEFAULT_BASE_URL
    beta_base_url: str = BETA_BASE_URL
    request_timeout: float = 30.0
    registry_path: Path | None = None
    modules_path: Path | None = None
    available_languages: Mapping[str, str] = dataclasses.field(default_factory=lambda: dict(DEFAULT_LANGUAGES))
    active_languages: tuple[str, ...] = ()

    @property
    def host_major_version(self) -> str:
        """Major component of :attr:`host_version` (``"12.4.3"`` -> ``"12"``)."""
        return host_major_version(self.host_version)

    @property
    def transient_path(self) -> Path:
        return self.var_path / TRANSIENT_DIR

    @property
    def resolved_registry_path(self) -> Path:
        if self.registry_path is not None:
            return self.registry_path
        return self.var_path / "registry.json"

    @classmethod
    def from_env(cls, **overrides: Any) -> LanguagePackConfig:
        """Create configuration from environment variables.

        Reads optional ``LANGPACK_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LanguagePackConfig
            Populated configuration.

        Raises
        ------
        LanguagePackConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_PATH_MAP = {
            "LANGPACK_LABELS_PATH": "labels_path",
            "LANGPACK_VAR_PATH": "var_path",
            "LANGPACK_SYSTEM_MODULES_PATH": "system_modules_path",
            "LANGPACK_REGISTRY_PATH": "registry_path",
            "LANGPACK_MODULES_PATH": "modules_path",
        }
        _ENV_STR_MAP = {
            "LANGPACK_HOST_VERSION": "host_version",
            "LANGPACK_MIRRORS_URL": "mirrors_url",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_PATH_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = Path(val)
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("LANGPACK_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise LanguagePackConfigError(
                    f"LANGPACK_REQUEST_TIMEOUT must be a number, got {timeout_env!r}"
                ) from exc

        if "beta_translation_server" not in overrides:
            config_kwargs["beta_translation_server"] = _env_bool(
                env.get("LANGPACK_BETA_TRANSLATION_SERVER"),
                False,
            )

        active_env = env.get("LANGPACK_ACTIVE_LANGUAGES")
        if active_env is not None and "active_languages" not in overrides:
            config_kwargs["active_languages"] = _env_list(active_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
