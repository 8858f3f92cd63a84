"""Comparison submission — validate the picked pair against the visible page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from revision_diff.revisions import selection
from revision_diff.services.overview import load_chain
from revision_diff.services.plugins import load_layout_registry

if TYPE_CHECKING:
    from revision_diff.database.repositories.revisions import RevisionRepository
    from revision_diff.database.repositories.settings import LayoutSettingsRepository
    from revision_diff.models.comparison import ComparisonRequest, SelectionFailure
    from revision_diff.models.entity import ContentEntity

logger = logging.getLogger(__name__)


async def request_comparison(
    entity: ContentEntity,
    left_id: int | None,
    right_id: int | None,
    revisions_repo: RevisionRepository,
    layout_repo: LayoutSettingsRepository,
    *,
    page: int,
    pager_limit: int,
    langcode: str | None = None,
) -> ComparisonRequest | SelectionFailure:
    """Validate a submitted revision pair and attach the default layout."""
    chain = await load_chain(
        entity,
        revisions_repo,
        page=page,
        pager_limit=pager_limit,
        langcode=langcode or entity.langcode,
    )
    registry = await load_layout_registry(layout_repo)
    layout_id = registry.default_id()
    if layout_id is None:
        logger.warning("No layout plugin enabled — comparison will use the viewer default")

    return selection.validate(
        len(chain),
        left_id,
        right_id,
        entity_id=entity.id,
        entity_type=entity.entity_type,
        layout_id=layout_id,
    )
