"""Content entity document model — the revisioned item an overview is built for."""

from __future__ import annotations

from pydantic import Field

from revision_diff.models.base import DocumentBase


class ContentEntity(DocumentBase):
    """A content entity and the pointer to its current revision."""

    entity_type: str
    label: str
    langcode: str = "en"
    translation_languages: dict[str, str] = Field(
        default_factory=lambda: {"en": "English"}
    )
    current_revision_id: int

    @property
    def has_translations(self) -> bool:
        return len(self.translation_languages) > 1

    def language_name(self, langcode: str | None = None) -> str:
        code = langcode or self.langcode
        return self.translation_languages.get(code, code)
