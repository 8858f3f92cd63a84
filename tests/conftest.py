"""Shared fixtures for the revision diff tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from revision_diff.models.entity import ContentEntity
from revision_diff.models.revision import Revision


class AsyncItems:
    """Async iterator standing in for a Cosmos ``AsyncItemPaged`` result."""

    def __init__(self, items: list[Any]) -> None:
        self._items = list(items)

    def __aiter__(self) -> AsyncItems:
        return self

    async def __anext__(self) -> Any:
        if not self._items:
            raise StopAsyncIteration
        return self._items.pop(0)


def _make_revision(
    revision_id: int,
    *,
    entity_id: str = "node-1",
    langcodes: tuple[str, ...] = ("en",),
    affected: tuple[str, ...] | None = None,
    **kwargs: Any,
) -> Revision:
    return Revision(
        entity_id=entity_id,
        entity_type="node",
        revision_id=revision_id,
        created_at=datetime(2025, 1, revision_id % 28 + 1, 9, 30, tzinfo=UTC),
        author_id="editor",
        translation_ids=frozenset(langcodes),
        affected_translations=frozenset(langcodes if affected is None else affected),
        **kwargs,
    )


@pytest.fixture
def make_revision():
    return _make_revision


@pytest.fixture
def async_items():
    return AsyncItems


@pytest.fixture
def entity() -> ContentEntity:
    return ContentEntity(
        id="node-1",
        entity_type="node",
        label="About us",
        current_revision_id=10,
    )


@pytest.fixture
def mock_db() -> MagicMock:
    db = MagicMock()
    db.get_container_client.return_value = AsyncMock()
    return db
