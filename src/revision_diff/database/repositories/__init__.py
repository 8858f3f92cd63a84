"""Repository modules for each Cosmos DB container."""

from revision_diff.database.repositories.entities import EntityRepository
from revision_diff.database.repositories.revisions import RevisionRepository
from revision_diff.database.repositories.settings import (
    FieldPluginConfigRepository,
    LayoutSettingsRepository,
)

__all__ = [
    "EntityRepository",
    "FieldPluginConfigRepository",
    "LayoutSettingsRepository",
    "RevisionRepository",
]
