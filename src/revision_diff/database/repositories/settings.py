"""Repositories for plugin settings stored in the settings container (partitioned by /id)."""

from __future__ import annotations

import logging

from revision_diff.database.repositories.base import BaseRepository
from revision_diff.models.plugin import (
    LAYOUT_SETTINGS_ID,
    FieldPluginConfig,
    LayoutSettings,
    PluginSetting,
)
from revision_diff.plugins.layouts import default_layout_settings

logger = logging.getLogger(__name__)


class LayoutSettingsRepository(BaseRepository[LayoutSettings]):
    """Enable/weight overlay for the layout plugins."""

    container_name = "settings"
    model_class = LayoutSettings

    async def get_plugin_settings(self) -> dict[str, PluginSetting]:
        """Return the stored layout settings, falling back to the built-in defaults."""
        stored = await self.get(LAYOUT_SETTINGS_ID, LAYOUT_SETTINGS_ID)
        if stored is None or not stored.plugins:
            return default_layout_settings()
        return dict(stored.plugins)

    async def save_plugin_settings(self, plugins: dict[str, PluginSetting]) -> LayoutSettings:
        document = LayoutSettings(plugins=plugins)
        await self.upsert(document)
        logger.info("Layout settings saved — plugins=%d", len(plugins))
        return document


class FieldPluginConfigRepository(BaseRepository[FieldPluginConfig]):
    """Per field type diff builder configuration, keyed by field type."""

    container_name = "settings"
    model_class = FieldPluginConfig

    async def get_config(self, field_type: str) -> FieldPluginConfig | None:
        return await self.get(field_type, field_type)

    async def save_config(self, config: FieldPluginConfig) -> FieldPluginConfig:
        await self.upsert(config)
        logger.info(
            "Field plugin config saved — field_type=%s plugin=%s",
            config.field_type,
            config.plugin_id,
        )
        return config
