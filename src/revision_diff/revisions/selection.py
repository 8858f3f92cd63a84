"""Comparison selection — validate a chosen revision pair and order it older first."""

from __future__ import annotations

from revision_diff.models.comparison import (
    ComparisonRequest,
    SelectionError,
    SelectionFailure,
)

MIN_REVISIONS = 2


def check_available(visible_count: int) -> SelectionFailure | None:
    """Fail when fewer than two revisions are visible for selection."""
    if visible_count < MIN_REVISIONS:
        return SelectionFailure(kind=SelectionError.INSUFFICIENT_REVISIONS)
    return None


def select(
    left_id: int | None,
    right_id: int | None,
    *,
    entity_id: str,
    entity_type: str,
    layout_id: str | None,
) -> ComparisonRequest | SelectionFailure:
    """Build a canonical comparison from two picks, in either order.

    The older revision always ends up on the left, so swapping the picks
    yields the same request.
    """
    if left_id is None or right_id is None:
        return SelectionFailure(kind=SelectionError.SELECTION_INCOMPLETE)
    if left_id == right_id:
        return SelectionFailure(kind=SelectionError.SELECTION_IDENTICAL)

    older, newer = sorted((left_id, right_id))
    return ComparisonRequest(
        entity_id=entity_id,
        entity_type=entity_type,
        left_revision_id=older,
        right_revision_id=newer,
        layout_id=layout_id,
    )


def validate(
    visible_count: int,
    left_id: int | None,
    right_id: int | None,
    *,
    entity_id: str,
    entity_type: str,
    layout_id: str | None,
) -> ComparisonRequest | SelectionFailure:
    """Run the availability check, then :func:`select`; the first failure wins."""
    failure = check_available(visible_count)
    if failure is not None:
        return failure
    return select(
        left_id,
        right_id,
        entity_id=entity_id,
        entity_type=entity_type,
        layout_id=layout_id,
    )
