"""Mirror index model."""

from __future__ import annotations

from pydantic import field_validator

from pylangpack.models._base import LangPackBaseModel


class MirrorEntry(LangPackBaseModel):
    """One ``<mirror>`` element of the mirror index."""

    title: str = ""
    host: str = ""
    path: str = ""
    country: str = ""

    @field_validator("title", "host", "path", "country", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def is_usable(self) -> bool:
        return bool(self.host) and bool(self.path)

    @property
    def base_url(self) -> str:
        return f"https://{self.host}{self.path}"
