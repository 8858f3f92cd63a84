"""Settings routes — layout plugin ordering and per field type diff builder settings."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from revision_diff.database.repositories.settings import (
    FieldPluginConfigRepository,
    LayoutSettingsRepository,
)
from revision_diff.plugins.field_builders import (
    FieldDiffBuilder,
    applicable_builders,
    field_builder_registry,
)
from revision_diff.plugins.layouts import DiffLayout
from revision_diff.plugins.registry import PluginRegistry
from revision_diff.services.plugins import (
    LayoutSettingsError,
    UnsupportedFieldTypeError,
    load_field_builder,
    load_layout_registry,
    save_field_settings,
    save_layout_settings,
)

router = APIRouter(prefix="/admin/diff", tags=["settings"])
logger = logging.getLogger(__name__)


def _layout_rows(registry: PluginRegistry[DiffLayout]) -> list[dict]:
    """Every catalog layout with its configured state, configured ones first."""
    configured = {descriptor.id: descriptor for descriptor in registry.descriptors()}
    unconfigured = [plugin_id for plugin_id in registry.catalog if plugin_id not in configured]
    rows = []
    for plugin_id in [*configured, *unconfigured]:
        layout = registry.create(plugin_id)
        descriptor = configured.get(plugin_id)
        rows.append(
            {
                "id": layout.plugin_id,
                "label": layout.label,
                "description": layout.description,
                "enabled": descriptor.enabled if descriptor else False,
                "weight": descriptor.weight if descriptor else registry.get(plugin_id).weight,
            }
        )
    return rows


@router.get("/layouts", response_class=HTMLResponse)
async def layout_settings(request: Request) -> HTMLResponse:
    """Render the layout plugin settings form."""
    repo = LayoutSettingsRepository(request.app.state.cosmos.database)
    registry = await load_layout_registry(repo)
    templates = request.app.state.templates
    return templates.TemplateResponse(
        "layouts.html",
        {
            "request": request,
            "layouts": _layout_rows(registry),
            "default_layout": registry.default_id(),
            "error": None,
        },
    )


@router.post("/layouts")
async def update_layout_settings(request: Request) -> Response:
    """Save enabled flags and weights for the layout plugins."""
    repo = LayoutSettingsRepository(request.app.state.cosmos.database)
    form = await request.form()
    try:
        await save_layout_settings(repo, form)
    except LayoutSettingsError as exc:
        logger.info("Layout settings rejected — errors=%s", sorted(exc.errors))
        registry = await load_layout_registry(repo)
        templates = request.app.state.templates
        return templates.TemplateResponse(
            "layouts.html",
            {
                "request": request,
                "layouts": _layout_rows(registry),
                "default_layout": registry.default_id(),
                "error": str(exc),
            },
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/admin/diff/layouts", status_code=status.HTTP_303_SEE_OTHER)


def _render_field_settings(
    request: Request,
    field_type: str,
    builder: FieldDiffBuilder,
    *,
    errors: dict[str, str] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    templates = request.app.state.templates
    return templates.TemplateResponse(
        "field_settings.html",
        {
            "request": request,
            "field_type": field_type,
            "builder": builder,
            "builders": applicable_builders(field_builder_registry(), field_type),
            "elements": builder.build_config_form(),
            "errors": errors or {},
        },
        status_code=status_code,
    )


@router.get("/fields/{field_type}", response_class=HTMLResponse)
async def field_settings(
    request: Request, field_type: str, plugin: str | None = None
) -> HTMLResponse:
    """Render the diff builder settings form for a field type."""
    repo = FieldPluginConfigRepository(request.app.state.cosmos.database)
    try:
        builder = await load_field_builder(field_type, repo, plugin)
    except UnsupportedFieldTypeError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _render_field_settings(request, field_type, builder)


@router.post("/fields/{field_type}")
async def update_field_settings(request: Request, field_type: str) -> Response:
    """Validate and save diff builder settings for a field type."""
    repo = FieldPluginConfigRepository(request.app.state.cosmos.database)
    form = await request.form()
    plugin_id = form.get("plugin_id")
    try:
        result = await save_field_settings(
            field_type,
            form,
            repo,
            str(plugin_id) if plugin_id else None,
        )
    except UnsupportedFieldTypeError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if not result.ok:
        logger.info(
            "Field settings rejected — field_type=%s errors=%s",
            field_type,
            sorted(result.errors),
        )
        return _render_field_settings(
            request,
            field_type,
            result.builder,
            errors=result.errors,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse(
        f"/admin/diff/fields/{field_type}", status_code=status.HTTP_303_SEE_OTHER
    )
