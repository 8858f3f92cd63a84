"""Tests for comparison selection and ordering."""

import itertools

import pytest

from revision_diff.models.comparison import ComparisonRequest, SelectionError, SelectionFailure
from revision_diff.revisions.selection import check_available, select, validate

_TARGET = {"entity_id": "node-1", "entity_type": "node", "layout_id": "split_fields"}


class TestSelect:
    """Test the select function."""

    @pytest.mark.parametrize(("a", "b"), list(itertools.permutations([1, 2, 7, 10], 2)))
    def test_orders_older_first_and_is_symmetric(self, a: int, b: int) -> None:
        """Verify the result is older-to-newer regardless of pick order."""
        forward = select(a, b, **_TARGET)
        backward = select(b, a, **_TARGET)

        assert isinstance(forward, ComparisonRequest)
        assert forward.left_revision_id < forward.right_revision_id
        assert forward == backward

    def test_keeps_ordered_pair(self) -> None:
        """Verify an already ordered pair is passed through."""
        result = select(3, 8, **_TARGET)

        assert result == ComparisonRequest(
            entity_id="node-1",
            entity_type="node",
            left_revision_id=3,
            right_revision_id=8,
            layout_id="split_fields",
        )

    @pytest.mark.parametrize("revision_id", [1, 5, 42])
    def test_identical_picks(self, revision_id: int) -> None:
        """Verify picking the same revision twice is rejected."""
        result = select(revision_id, revision_id, **_TARGET)

        assert result == SelectionFailure(kind=SelectionError.SELECTION_IDENTICAL)

    @pytest.mark.parametrize(("left", "right"), [(None, 2), (2, None), (None, None)])
    def test_incomplete_picks(self, left: int | None, right: int | None) -> None:
        """Verify a missing pick is rejected."""
        result = select(left, right, **_TARGET)

        assert isinstance(result, SelectionFailure)
        assert result.kind is SelectionError.SELECTION_INCOMPLETE
        assert result.message == "Select two revisions to compare."
        assert result.field == "entity_revisions_table"

    def test_incomplete_wins_over_identical(self) -> None:
        """Verify completeness is checked before identity."""
        result = select(None, None, **_TARGET)

        assert result.kind is SelectionError.SELECTION_INCOMPLETE

    def test_layout_may_be_absent(self) -> None:
        """Verify a request can be built when no layout is enabled."""
        result = select(2, 1, entity_id="node-1", entity_type="node", layout_id=None)

        assert result.layout_id is None


class TestValidate:
    """Test the availability check and the chained validation."""

    @pytest.mark.parametrize("count", [0, 1])
    def test_check_available_rejects_fewer_than_two(self, count: int) -> None:
        """Verify fewer than two visible revisions cannot be compared."""
        failure = check_available(count)

        assert failure.kind is SelectionError.INSUFFICIENT_REVISIONS
        assert failure.message == "Multiple revisions are needed for comparison."

    def test_check_available_accepts_two(self) -> None:
        """Verify two visible revisions are enough."""
        assert check_available(2) is None

    def test_insufficient_wins_over_other_failures(self) -> None:
        """Verify the availability check runs first."""
        result = validate(1, 3, 3, **_TARGET)

        assert result.kind is SelectionError.INSUFFICIENT_REVISIONS

    def test_valid_selection(self) -> None:
        """Verify a valid submission yields a normalized request."""
        result = validate(3, 9, 4, **_TARGET)

        assert isinstance(result, ComparisonRequest)
        assert (result.left_revision_id, result.right_revision_id) == (4, 9)
