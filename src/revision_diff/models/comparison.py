"""Comparison request and selection failure models."""

from __future__ import annotations

from enum import StrEnum
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict

COMPARE_PATH = "/compare"


class SelectionError(StrEnum):
    """Reasons a revision pair cannot be compared."""

    INSUFFICIENT_REVISIONS = "insufficient_revisions"
    SELECTION_INCOMPLETE = "selection_incomplete"
    SELECTION_IDENTICAL = "selection_identical"


_MESSAGES = {
    SelectionError.INSUFFICIENT_REVISIONS: "Multiple revisions are needed for comparison.",
    SelectionError.SELECTION_INCOMPLETE: "Select two revisions to compare.",
    SelectionError.SELECTION_IDENTICAL: "Select different revisions to compare.",
}


class SelectionFailure(BaseModel):
    """A validation failure attached to a form field."""

    model_config = ConfigDict(frozen=True)

    kind: SelectionError
    field: str = "entity_revisions_table"

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]


class ComparisonRequest(BaseModel):
    """A canonical older-to-newer comparison of two revisions."""

    model_config = ConfigDict(frozen=True)

    entity_id: str
    entity_type: str
    left_revision_id: int
    right_revision_id: int
    layout_id: str | None = None

    def url(self) -> str:
        """Build the navigation target for the comparison view."""
        params: dict[str, object] = {
            "left": self.left_revision_id,
            "right": self.right_revision_id,
        }
        if self.layout_id:
            params["layout"] = self.layout_id
        path = (
            f"{COMPARE_PATH}/{quote(self.entity_type, safe='')}"
            f"/{quote(self.entity_id, safe='')}"
        )
        return f"{path}?{urlencode(params)}"
