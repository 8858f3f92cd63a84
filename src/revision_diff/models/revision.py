"""Revision document model — immutable historical versions of a content entity."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from revision_diff.models.base import DocumentBase


class Revision(DocumentBase):
    """One immutable historical version of a content entity.

    ``revision_id`` increases with recency, so ordering revisions by id orders
    them chronologically.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    entity_type: str
    revision_id: int
    author_id: str | None = None
    translation_ids: frozenset[str] = frozenset()
    affected_translations: frozenset[str] = frozenset()
    log_message: str | None = None
    content: dict[str, Any] = Field(default_factory=dict)

    def has_translation(self, langcode: str) -> bool:
        return langcode in self.translation_ids

    def is_translation_affected(self, langcode: str) -> bool:
        """Return True when this revision actually changed the given translation."""
        return self.has_translation(langcode) and langcode in self.affected_translations
