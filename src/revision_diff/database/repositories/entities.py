"""Repository for the entities container (partitioned by /id)."""

from __future__ import annotations

from revision_diff.database.repositories.base import BaseRepository
from revision_diff.models.entity import ContentEntity


class EntityRepository(BaseRepository[ContentEntity]):
    container_name = "entities"
    model_class = ContentEntity

    async def get_entity(self, entity_type: str, entity_id: str) -> ContentEntity | None:
        """Fetch an entity, or None when missing or of a different type."""
        entity = await self.get(entity_id, entity_id)
        if entity is None or entity.entity_type != entity_type:
            return None
        return entity

    async def current_revision_id(self, entity_type: str, entity_id: str) -> int | None:
        entity = await self.get_entity(entity_type, entity_id)
        return entity.current_revision_id if entity else None
