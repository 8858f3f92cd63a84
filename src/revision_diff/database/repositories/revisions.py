"""Repository for the revisions container (partitioned by /entity_id)."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from revision_diff.database.repositories.base import BaseRepository
from revision_diff.models.revision import Revision

if TYPE_CHECKING:
    from collections.abc import Sequence

_ACTIVE = "NOT IS_DEFINED(c.deleted_at) OR IS_NULL(c.deleted_at)"


class RevisionRepository(BaseRepository[Revision]):
    """Read-only access to entity revisions."""

    container_name = "revisions"
    model_class = Revision

    async def list_revision_ids(
        self,
        entity_type: str,
        entity_id: str,
        *,
        limit: int,
        offset: int = 0,
    ) -> list[int]:
        """Fetch one page of revision ids, newest first."""
        ids: list[int] = []
        async for item in self._container.query_items(
            "SELECT VALUE c.revision_id FROM c"
            " WHERE c.entity_type = @entity_type AND c.entity_id = @entity_id"
            f" AND ({_ACTIVE})"
            " ORDER BY c.revision_id DESC"
            " OFFSET @offset LIMIT @limit",
            parameters=[
                {"name": "@entity_type", "value": entity_type},
                {"name": "@entity_id", "value": entity_id},
                {"name": "@offset", "value": offset},
                {"name": "@limit", "value": limit},
            ],
            partition_key=entity_id,
        ):
            ids.append(cast("int", item))
        return ids

    async def count_revisions(self, entity_type: str, entity_id: str) -> int:
        """Return the number of active revisions of an entity."""
        total = 0
        async for item in self._container.query_items(
            "SELECT VALUE COUNT(1) FROM c"
            " WHERE c.entity_type = @entity_type AND c.entity_id = @entity_id"
            f" AND ({_ACTIVE})",
            parameters=[
                {"name": "@entity_type", "value": entity_type},
                {"name": "@entity_id", "value": entity_id},
            ],
            partition_key=entity_id,
        ):
            total = cast("int", item)
        return total

    async def load_revision(
        self, entity_type: str, entity_id: str, revision_id: int
    ) -> Revision | None:
        """Fetch a single revision, or None when it does not exist."""
        results = await self.query(
            "SELECT * FROM c"
            " WHERE c.entity_type = @entity_type AND c.entity_id = @entity_id"
            " AND c.revision_id = @revision_id"
            f" AND ({_ACTIVE})",
            [
                {"name": "@entity_type", "value": entity_type},
                {"name": "@entity_id", "value": entity_id},
                {"name": "@revision_id", "value": revision_id},
            ],
        )
        return results[0] if results else None

    async def load_revisions(
        self, entity_type: str, entity_id: str, revision_ids: Sequence[int]
    ) -> dict[int, Revision]:
        """Fetch several revisions at once, keyed by revision id.

        Ids that no longer exist are absent from the result.
        """
        if not revision_ids:
            return {}
        results = await self.query(
            "SELECT * FROM c"
            " WHERE c.entity_type = @entity_type AND c.entity_id = @entity_id"
            " AND ARRAY_CONTAINS(@revision_ids, c.revision_id)"
            f" AND ({_ACTIVE})",
            [
                {"name": "@entity_type", "value": entity_type},
                {"name": "@entity_id", "value": entity_id},
                {"name": "@revision_ids", "value": list(revision_ids)},
            ],
        )
        return {revision.revision_id: revision for revision in results}
