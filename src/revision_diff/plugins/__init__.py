"""Pluggable diff layouts and field diff builders."""

from revision_diff.plugins.field_builders import (
    FIELD_BUILDERS,
    FieldDiffBuilder,
    applicable_builders,
    field_builder_registry,
)
from revision_diff.plugins.layouts import (
    LAYOUT_PLUGINS,
    DiffLayout,
    default_layout_settings,
    layout_registry,
)
from revision_diff.plugins.registry import (
    PluginDefinition,
    PluginNotFoundError,
    PluginRegistry,
)

__all__ = [
    "FIELD_BUILDERS",
    "LAYOUT_PLUGINS",
    "DiffLayout",
    "FieldDiffBuilder",
    "PluginDefinition",
    "PluginNotFoundError",
    "PluginRegistry",
    "applicable_builders",
    "default_layout_settings",
    "field_builder_registry",
    "layout_registry",
]
