"""Tests for the revision overview and comparison routes."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException

from revision_diff.config import DiffConfig, RadioBehavior
from revision_diff.models.comparison import ComparisonRequest, SelectionError, SelectionFailure
from revision_diff.routes.revisions import compare_revisions, revision_overview


@pytest.fixture
def request_mock():
    request = MagicMock()
    request.app.state.cosmos = MagicMock()
    request.app.state.templates = MagicMock()
    request.app.state.settings.diff = DiffConfig(
        revision_pager_limit=25, radio_behavior=RadioBehavior.LINEAR
    )
    return request


class TestRevisionOverviewRoute:
    """Test the Revision Overview Route."""

    async def test_renders_overview(self, request_mock, entity) -> None:
        """Verify the overview template receives the loaded overview."""
        overview = MagicMock(visible_count=3)
        with (
            patch("revision_diff.routes.revisions.EntityRepository") as entity_repo_cls,
            patch(
                "revision_diff.routes.revisions.load_overview",
                new_callable=AsyncMock,
                return_value=overview,
            ) as load,
        ):
            entity_repo_cls.return_value.get_entity = AsyncMock(return_value=entity)
            await revision_overview(request_mock, "node", "node-1", page=2)

        load.assert_awaited_once()
        assert load.call_args.kwargs == {
            "page": 2,
            "pager_limit": 25,
            "radio_behavior": "linear",
            "langcode": None,
        }
        call_args = request_mock.app.state.templates.TemplateResponse.call_args
        assert call_args[0][0] == "revisions.html"
        assert call_args[0][1]["overview"] is overview
        assert call_args[0][1]["failure"] is None
        assert call_args.kwargs["status_code"] == 200

    async def test_missing_entity_is_404(self, request_mock) -> None:
        """Verify unknown entities raise HTTP 404."""
        with patch("revision_diff.routes.revisions.EntityRepository") as entity_repo_cls:
            entity_repo_cls.return_value.get_entity = AsyncMock(return_value=None)
            with pytest.raises(HTTPException) as exc_info:
                await revision_overview(request_mock, "node", "missing")

        assert exc_info.value.status_code == 404


class TestCompareRoute:
    """Test the Compare Revisions Route."""

    async def test_redirects_to_comparison(self, request_mock, entity) -> None:
        """Verify a valid selection redirects with 303 to the compare view."""
        comparison = ComparisonRequest(
            entity_id="node-1",
            entity_type="node",
            left_revision_id=3,
            right_revision_id=10,
            layout_id="split_fields",
        )
        with (
            patch("revision_diff.routes.revisions.EntityRepository") as entity_repo_cls,
            patch(
                "revision_diff.routes.revisions.request_comparison",
                new_callable=AsyncMock,
                return_value=comparison,
            ) as request_comparison,
        ):
            entity_repo_cls.return_value.get_entity = AsyncMock(return_value=entity)
            response = await compare_revisions(
                request_mock, "node", "node-1", radios_left="10", radios_right="3"
            )

        assert response.status_code == 303
        assert response.headers["location"] == "/compare/node/node-1?left=3&right=10&layout=split_fields"
        args = request_comparison.call_args[0]
        assert args[1:3] == (10, 3)

    async def test_rerenders_with_failure(self, request_mock, entity) -> None:
        """Verify a rejected selection returns to the overview with a message."""
        failure = SelectionFailure(kind=SelectionError.SELECTION_INCOMPLETE)
        overview = MagicMock()
        with (
            patch("revision_diff.routes.revisions.EntityRepository") as entity_repo_cls,
            patch(
                "revision_diff.routes.revisions.request_comparison",
                new_callable=AsyncMock,
                return_value=failure,
            ),
            patch(
                "revision_diff.routes.revisions.load_overview",
                new_callable=AsyncMock,
                return_value=overview,
            ),
        ):
            entity_repo_cls.return_value.get_entity = AsyncMock(return_value=entity)
            await compare_revisions(request_mock, "node", "node-1", radios_left="3")

        call_args = request_mock.app.state.templates.TemplateResponse.call_args
        assert call_args[0][1]["failure"] is failure
        assert call_args[0][1]["overview"] is overview
        assert call_args.kwargs["status_code"] == 400

    async def test_malformed_pick_counts_as_missing(self, request_mock, entity) -> None:
        """Verify a non-numeric pick is validated as incomplete, not rejected by FastAPI."""
        overview = MagicMock()
        with (
            patch("revision_diff.routes.revisions.EntityRepository") as entity_repo_cls,
            patch(
                "revision_diff.routes.revisions.request_comparison",
                new_callable=AsyncMock,
                return_value=SelectionFailure(kind=SelectionError.SELECTION_INCOMPLETE),
            ) as request_comparison,
            patch(
                "revision_diff.routes.revisions.load_overview",
                new_callable=AsyncMock,
                return_value=overview,
            ) as load_overview,
        ):
            entity_repo_cls.return_value.get_entity = AsyncMock(return_value=entity)
            await compare_revisions(
                request_mock, "node", "node-1", radios_left="abc", radios_right="7", page="x"
            )

        assert request_comparison.call_args[0][1:3] == (None, 7)
        assert request_comparison.call_args.kwargs["page"] == 0
        assert load_overview.call_args.kwargs["page"] == 0
        assert request_mock.app.state.templates.TemplateResponse.call_args.kwargs["status_code"] == 400
