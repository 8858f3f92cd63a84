"""Plugin configuration models — layout settings and per-field builder settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from revision_diff.models.base import DocumentBase

INTERNAL_KEY_PREFIX = "#"
FIELD_TYPE_KEY = "#field_type"

LAYOUT_SETTINGS_ID = "layout_plugins"


class PluginSetting(BaseModel):
    """Enabled flag and weight for one configured plugin."""

    enabled: bool = True
    weight: int = 0


class PluginDescriptor(BaseModel):
    """A configured plugin as exposed by the registry."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    weight: int = 0
    enabled: bool = True


class LayoutSettings(DocumentBase):
    """Stored enable/weight overlay for the layout plugins."""

    id: str = LAYOUT_SETTINGS_ID
    plugins: dict[str, PluginSetting] = Field(default_factory=dict)


class FieldPluginConfig(DocumentBase):
    """The diff builder chosen for a field type, with its settings.

    The document id is the field type, so there is exactly one per type.
    """

    field_type: str
    plugin_id: str
    settings: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_configuration(
        cls, plugin_id: str, configuration: dict[str, Any]
    ) -> FieldPluginConfig:
        """Shape a builder configuration for storage, dropping internal keys."""
        field_type = configuration.get(FIELD_TYPE_KEY)
        if not field_type:
            raise ValueError(f"Configuration for {plugin_id} has no {FIELD_TYPE_KEY}")
        settings = {
            key: value
            for key, value in configuration.items()
            if not key.startswith(INTERNAL_KEY_PREFIX)
        }
        return cls(
            id=field_type,
            field_type=field_type,
            plugin_id=plugin_id,
            settings=settings,
        )
