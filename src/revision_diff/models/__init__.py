"""Data models for Cosmos DB document types and comparison values."""

from revision_diff.models.comparison import (
    ComparisonRequest,
    SelectionError,
    SelectionFailure,
)
from revision_diff.models.entity import ContentEntity
from revision_diff.models.plugin import (
    FieldPluginConfig,
    LayoutSettings,
    PluginDescriptor,
    PluginSetting,
)
from revision_diff.models.revision import Revision

__all__ = [
    "ComparisonRequest",
    "ContentEntity",
    "FieldPluginConfig",
    "LayoutSettings",
    "PluginDescriptor",
    "PluginSetting",
    "Revision",
    "SelectionError",
    "SelectionFailure",
]
