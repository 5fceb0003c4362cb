"""Sync outcome models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pylangpack.models._base import LangPackBaseModel


class SyncOutcome(StrEnum):
    """Result of synchronizing one (module, language) pack.

    ``NEW``: no previous extraction existed and the pack was installed.
    ``UPDATED``: a previous extraction was replaced.
    ``FAILED``: download, extraction, or replacement did not succeed.
    """

    NEW = "new"
    UPDATED = "update"
    FAILED = "failed"


class UpdateReport(LangPackBaseModel):
    """Outcome of a bulk update run, keyed language -> module -> outcome."""

    base_url: str
    results: dict[str, dict[str, SyncOutcome]] = Field(default_factory=dict)

    def _count(self, outcome: SyncOutcome) -> int:
        return sum(1 for packs in self.results.values() for value in packs.values() if value is outcome)

    @property
    def new(self) -> int:
        return self._count(SyncOutcome.NEW)

    @property
    def updated(self) -> int:
        return self._count(SyncOutcome.UPDATED)

    @property
    def failed(self) -> int:
        return self._count(SyncOutcome.FAILED)

    @property
    def ok(self) -> bool:
        return self.failed == 0
