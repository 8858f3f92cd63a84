"""Diff layout plugins — how a two-revision comparison is laid out.

Rendering belongs to the comparison view; this service only orders the
layouts and picks the default one for the comparison link.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from revision_diff.models.plugin import PluginSetting
from revision_diff.plugins.registry import PluginDefinition, PluginRegistry, build_catalog

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class DiffLayout:
    plugin_id: str
    label: str
    description: str = ""


def _layout(
    plugin_id: str, label: str, weight: int, description: str
) -> PluginDefinition[DiffLayout]:
    return PluginDefinition(
        id=plugin_id,
        label=label,
        factory=partial(DiffLayout, label=label, description=description),
        weight=weight,
        description=description,
    )


LAYOUT_PLUGINS: dict[str, PluginDefinition[DiffLayout]] = build_catalog(
    [
        _layout(
            "split_fields",
            "Split fields",
            0,
            "Field based layout, displays revision comparison side by side.",
        ),
        _layout(
            "unified_fields",
            "Unified fields",
            1,
            "Field based layout, displays revision comparison line by line.",
        ),
        _layout(
            "visual_inline",
            "Visual inline",
            2,
            "Visual layout, displays revision comparison using the entity type view mode.",
        ),
    ]
)


def default_layout_settings() -> dict[str, PluginSetting]:
    return {
        plugin_id: PluginSetting(enabled=True, weight=definition.weight)
        for plugin_id, definition in LAYOUT_PLUGINS.items()
    }


def layout_registry(settings: Mapping[str, PluginSetting]) -> PluginRegistry[DiffLayout]:
    return PluginRegistry(LAYOUT_PLUGINS, settings)
