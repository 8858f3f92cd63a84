"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from revision_diff.models.base import DocumentBase

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

T = TypeVar("T", bound=DocumentBase)


class BaseRepository(Generic[T]):
    """Read and upsert helpers shared by every container repository.

    Soft-deleted documents (those with ``deleted_at`` set) are treated as
    missing by :meth:`get`.
    """

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container = database.get_container_client(self.container_name)

    async def get(self, item_id: str, partition_key: str) -> T | None:
        try:
            data = await self._container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return None
        if data.get("deleted_at") is not None:
            return None
        return self.model_class.model_validate(data)

    async def upsert(self, item: T) -> T:
        item.updated_at = datetime.now(UTC)
        await self._container.upsert_item(body=item.model_dump(mode="json"))
        return item

    async def query(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[T]:
        results: list[T] = []
        async for item in self._container.query_items(query, parameters=parameters):
            results.append(self.model_class.model_validate(cast("dict[str, Any]", item)))
        return results
