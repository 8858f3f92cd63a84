"""Revision routes — overview listing and comparison submission."""

from __future__ import annotations

import logging
import time
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import TypeAdapter, ValidationError

from revision_diff.database.repositories.entities import EntityRepository
from revision_diff.database.repositories.revisions import RevisionRepository
from revision_diff.database.repositories.settings import LayoutSettingsRepository
from revision_diff.models.comparison import ComparisonRequest, SelectionFailure
from revision_diff.models.entity import ContentEntity
from revision_diff.services.comparison import request_comparison
from revision_diff.services.overview import RevisionOverview, load_overview

router = APIRouter(tags=["revisions"])
logger = logging.getLogger(__name__)

_FORM_INT = TypeAdapter(int)


def _form_int(raw: str | None) -> int | None:
    """A submitted integer field, or None when it is absent or malformed."""
    if raw is None:
        return None
    try:
        return _FORM_INT.validate_python(raw)
    except ValidationError:
        return None


async def _get_entity(request: Request, entity_type: str, entity_id: str) -> ContentEntity:
    cosmos = request.app.state.cosmos
    entity = await EntityRepository(cosmos.database).get_entity(entity_type, entity_id)
    if entity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity_type} {entity_id} not found",
        )
    return entity


async def _overview(
    request: Request, entity: ContentEntity, page: int, langcode: str | None
) -> RevisionOverview:
    settings = request.app.state.settings
    return await load_overview(
        entity,
        RevisionRepository(request.app.state.cosmos.database),
        page=page,
        pager_limit=settings.diff.revision_pager_limit,
        radio_behavior=settings.diff.radio_behavior.value,
        langcode=langcode,
    )


def _render(
    request: Request,
    overview: RevisionOverview,
    *,
    failure: SelectionFailure | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    templates = request.app.state.templates
    return templates.TemplateResponse(
        "revisions.html",
        {"request": request, "overview": overview, "failure": failure},
        status_code=status_code,
    )


@router.get("/{entity_type}/{entity_id}/revisions", response_class=HTMLResponse)
async def revision_overview(
    request: Request,
    entity_type: str,
    entity_id: str,
    page: int = 0,
    langcode: str | None = None,
) -> HTMLResponse:
    """Render the revision overview table for an entity."""
    started_at = time.monotonic()
    entity = await _get_entity(request, entity_type, entity_id)
    overview = await _overview(request, entity, max(page, 0), langcode)
    logger.info(
        "Revision overview loaded — entity=%s/%s page=%d rows=%d duration_ms=%.0f",
        entity_type,
        entity_id,
        overview.pager.page,
        overview.visible_count,
        (time.monotonic() - started_at) * 1000,
    )
    return _render(request, overview)


@router.post("/{entity_type}/{entity_id}/revisions")
async def compare_revisions(
    request: Request,
    entity_type: str,
    entity_id: str,
    radios_left: Annotated[str | None, Form()] = None,
    radios_right: Annotated[str | None, Form()] = None,
    page: Annotated[str | None, Form()] = None,
    langcode: Annotated[str | None, Form()] = None,
) -> Response:
    """Validate the picked revisions and redirect to their comparison.

    A pick that is not a revision id counts as no pick, so the user is sent
    back to the overview with a message.
    """
    entity = await _get_entity(request, entity_type, entity_id)
    page_number = max(_form_int(page) or 0, 0)
    cosmos = request.app.state.cosmos
    settings = request.app.state.settings

    result = await request_comparison(
        entity,
        _form_int(radios_left),
        _form_int(radios_right),
        RevisionRepository(cosmos.database),
        LayoutSettingsRepository(cosmos.database),
        page=page_number,
        pager_limit=settings.diff.revision_pager_limit,
        langcode=langcode,
    )

    if isinstance(result, ComparisonRequest):
        logger.info(
            "Comparison requested — entity=%s/%s left=%d right=%d layout=%s",
            entity_type,
            entity_id,
            result.left_revision_id,
            result.right_revision_id,
            result.layout_id,
        )
        return RedirectResponse(result.url(), status_code=status.HTTP_303_SEE_OTHER)

    logger.info(
        "Comparison rejected — entity=%s/%s reason=%s",
        entity_type,
        entity_id,
        result.kind,
    )
    overview = await _overview(request, entity, page_number, langcode)
    return _render(
        request,
        overview,
        failure=result,
        status_code=status.HTTP_400_BAD_REQUEST,
    )
