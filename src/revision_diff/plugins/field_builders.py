"""Field diff builders — per field type strategies and their settings forms."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from revision_diff.models.plugin import FIELD_TYPE_KEY, FieldPluginConfig
from revision_diff.plugins.base import ConfigOption, ConfigurablePlugin, OptionKind
from revision_diff.plugins.registry import PluginDefinition, PluginRegistry, build_catalog

if TYPE_CHECKING:
    from collections.abc import Mapping

    from revision_diff.models.plugin import PluginDescriptor

SHOW_HEADER = ConfigOption(
    name="show_header",
    title="Show field title",
    kind=OptionKind.CHECKBOX,
    default=True,
    weight=-5,
)

MARKDOWN = ConfigOption(
    name="markdown",
    title="Markdown callback",
    kind=OptionKind.SELECT,
    default="html_to_text",
    choices={
        "html_to_text": "HTML to text",
        "filter_xss": "Filter XSS (some tags)",
        "filter_xss_all": "Filter XSS (all tags)",
    },
    description="These provide ways to clean markup tags to make comparisons easier to read.",
)

COMMON_OPTIONS = (SHOW_HEADER, MARKDOWN)


class FieldDiffBuilder(ConfigurablePlugin):
    """Builds the comparison for one field type."""

    def submit(self, values: Mapping[str, Any], field_type: str) -> FieldPluginConfig:
        """Apply submitted values and shape them for storage under ``field_type``."""
        configuration = self.apply(values)
        configuration[FIELD_TYPE_KEY] = field_type
        return FieldPluginConfig.from_configuration(self.plugin_id, configuration)


def core_builder(
    plugin_id: str, configuration: Mapping[str, Any] | None = None
) -> FieldDiffBuilder:
    return FieldDiffBuilder(plugin_id, "Core field diff", COMMON_OPTIONS, configuration)


def text_builder(
    plugin_id: str, configuration: Mapping[str, Any] | None = None
) -> FieldDiffBuilder:
    options = (
        *COMMON_OPTIONS,
        ConfigOption(
            name="compare_format",
            title="Compare format",
            kind=OptionKind.CHECKBOX,
            default=False,
            description="This is only used if the \"Text processing\" instance settings are set to Filtered text (user selects text format).",
        ),
    )
    return FieldDiffBuilder(plugin_id, "Text field diff", options, configuration)


def list_builder(
    plugin_id: str, configuration: Mapping[str, Any] | None = None
) -> FieldDiffBuilder:
    options = (
        *COMMON_OPTIONS,
        ConfigOption(
            name="compare",
            title="Comparison method",
            kind=OptionKind.SELECT,
            default="label",
            choices={"label": "Label", "key": "Key"},
        ),
    )
    return FieldDiffBuilder(plugin_id, "List field diff", options, configuration)


def entity_reference_builder(
    plugin_id: str, configuration: Mapping[str, Any] | None = None
) -> FieldDiffBuilder:
    options = (
        *COMMON_OPTIONS,
        ConfigOption(
            name="compare_entity_reference",
            title="Comparison method",
            kind=OptionKind.SELECT,
            default="label",
            choices={"label": "Label", "id": "Entity ID"},
        ),
    )
    return FieldDiffBuilder(plugin_id, "Entity reference field diff", options, configuration)


FIELD_BUILDERS: dict[str, PluginDefinition[FieldDiffBuilder]] = build_catalog(
    [
        PluginDefinition(
            id="text_field_diff_builder",
            label="Text field diff",
            factory=text_builder,
            weight=-10,
            field_types=("text", "text_long", "text_with_summary", "string_long"),
        ),
        PluginDefinition(
            id="list_field_diff_builder",
            label="List field diff",
            factory=list_builder,
            weight=-10,
            field_types=("list_string", "list_integer", "list_float"),
        ),
        PluginDefinition(
            id="entity_reference_field_diff_builder",
            label="Entity reference field diff",
            factory=entity_reference_builder,
            weight=-10,
            field_types=("entity_reference",),
        ),
        PluginDefinition(
            id="core_field_diff_builder",
            label="Core field diff",
            factory=core_builder,
            field_types=(
                "string",
                "string_long",
                "integer",
                "decimal",
                "float",
                "boolean",
                "email",
                "timestamp",
                "created",
                "changed",
            ),
        ),
    ]
)


def field_builder_registry() -> PluginRegistry[FieldDiffBuilder]:
    return PluginRegistry.with_defaults(FIELD_BUILDERS)


def applicable_builders(
    registry: PluginRegistry[FieldDiffBuilder], field_type: str
) -> list[PluginDescriptor]:
    """Enabled builders that can compare ``field_type``, best match first."""
    catalog = registry.catalog
    return [
        descriptor
        for descriptor in registry.list_enabled()
        if field_type in catalog[descriptor.id].field_types
    ]
