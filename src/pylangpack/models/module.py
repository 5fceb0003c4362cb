"""Installed module model."""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator

from pylangpack.models._base import LangPackBaseModel


class ModuleInfo(LangPackBaseModel):
    """An installed module of the host application.

    Parameters
    ----------
    key : str
        Module key, e.g. ``"backend"``.
    path : Path
        Installation directory of the module.
    title : str
        Human readable title, if known.
    """

    key: str
    path: Path
    title: str = ""

    @field_validator("key")
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        key = value.strip()
        if not key:
            raise ValueError("module key must be non-empty")
        return key
