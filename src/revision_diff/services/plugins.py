"""Plugin settings business logic — layout registry loading and field builder settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError, create_model

from revision_diff.models.plugin import PluginSetting
from revision_diff.plugins.base import form_errors
from revision_diff.plugins.field_builders import applicable_builders, field_builder_registry
from revision_diff.plugins.layouts import LAYOUT_PLUGINS, layout_registry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from revision_diff.database.repositories.settings import (
        FieldPluginConfigRepository,
        LayoutSettingsRepository,
    )
    from revision_diff.models.plugin import FieldPluginConfig
    from revision_diff.plugins.field_builders import FieldDiffBuilder
    from revision_diff.plugins.layouts import DiffLayout
    from revision_diff.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


class UnsupportedFieldTypeError(LookupError):
    """Raised when no enabled diff builder handles a field type."""


class LayoutSettingsError(ValueError):
    """Raised when a layout settings submission does not validate."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors.values()))


def _layout_form_fields() -> dict[str, Any]:
    """One ``<id>_enabled`` checkbox and ``<id>_weight`` number per catalog layout."""
    fields: dict[str, Any] = {}
    for plugin_id, definition in LAYOUT_PLUGINS.items():
        fields[f"{plugin_id}_enabled"] = (bool, False)
        fields[f"{plugin_id}_weight"] = (int, definition.weight)
    return fields


LayoutSettingsForm = create_model("LayoutSettingsForm", **_layout_form_fields())


@dataclass
class FieldSettingsResult:
    builder: FieldDiffBuilder
    errors: dict[str, str] = field(default_factory=dict)
    config: FieldPluginConfig | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


async def load_layout_registry(repo: LayoutSettingsRepository) -> PluginRegistry[DiffLayout]:
    """Build a layout registry from the current stored settings."""
    registry = layout_registry(await repo.get_plugin_settings())
    unknown = registry.unknown_ids()
    if unknown:
        logger.warning("Ignoring unknown layout plugins in settings — ids=%s", unknown)
    return registry


async def save_layout_settings(
    repo: LayoutSettingsRepository, values: Mapping[str, Any]
) -> dict[str, PluginSetting]:
    """Persist enabled flags and weights submitted as ``<id>_enabled``/``<id>_weight``.

    Raises ``LayoutSettingsError`` when the submission does not validate.
    """
    submitted = {name: values[name] for name in LayoutSettingsForm.model_fields if name in values}
    try:
        form = LayoutSettingsForm.model_validate(submitted)
    except ValidationError as exc:
        raise LayoutSettingsError(form_errors(exc, {})) from exc
    plugins = {
        plugin_id: PluginSetting(
            enabled=getattr(form, f"{plugin_id}_enabled"),
            weight=getattr(form, f"{plugin_id}_weight"),
        )
        for plugin_id in LAYOUT_PLUGINS
    }
    await repo.save_plugin_settings(plugins)
    return plugins


async def load_field_builder(
    field_type: str,
    repo: FieldPluginConfigRepository,
    plugin_id: str | None = None,
) -> FieldDiffBuilder:
    """Instantiate the builder configured for ``field_type``.

    Falls back to the first applicable builder when nothing is stored, and
    applies stored settings only when they belong to the chosen builder.
    """
    registry = field_builder_registry()
    candidates = [descriptor.id for descriptor in applicable_builders(registry, field_type)]
    if not candidates:
        raise UnsupportedFieldTypeError(field_type)

    stored = await repo.get_config(field_type)
    if plugin_id is None:
        plugin_id = stored.plugin_id if stored and stored.plugin_id in candidates else candidates[0]
    elif plugin_id not in candidates:
        raise UnsupportedFieldTypeError(f"{plugin_id} does not support {field_type}")

    configuration = stored.settings if stored and stored.plugin_id == plugin_id else None
    return registry.create(plugin_id, configuration=configuration)


async def save_field_settings(
    field_type: str,
    values: Mapping[str, Any],
    repo: FieldPluginConfigRepository,
    plugin_id: str | None = None,
) -> FieldSettingsResult:
    """Validate submitted builder settings and persist them when valid."""
    builder = await load_field_builder(field_type, repo, plugin_id)
    try:
        submitted = builder.submit(values, field_type)
    except ValidationError as exc:
        return FieldSettingsResult(builder=builder, errors=builder.form_errors(exc))
    config = await repo.save_config(submitted)
    return FieldSettingsResult(builder=builder, config=config)
