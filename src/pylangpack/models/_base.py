"""Base model shared by pylangpack's pydantic models.

Every model inherits from :class:`LangPackBaseModel`, which freezes
instances and ignores unknown keys so that registry documents and
parsed mirror entries can carry fields this library does not model.

Registry timestamps are stored as epoch seconds; :data:`RegistryTimestamp`
turns them into aware UTC datetimes at the model boundary.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_registry_timestamp(value: Any) -> datetime | None:
    """Convert a registry epoch timestamp (seconds or milliseconds) to a UTC datetime.

    Returns ``None`` when the value is ``None``, empty, or not numeric.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        ts = int(float(value))
    except (TypeError, ValueError):
        return None
    if ts >= _MS_THRESHOLD:
        ts = ts // 1000
    return datetime.fromtimestamp(ts, tz=UTC)


RegistryTimestamp = Annotated[datetime | None, BeforeValidator(parse_registry_timestamp)]
"""Annotated type that coerces registry epoch ints to UTC datetimes."""


class LangPackBaseModel(BaseModel):
    """Base for pylangpack models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
