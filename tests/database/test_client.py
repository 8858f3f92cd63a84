"""Tests for the Cosmos DB client wrapper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from revision_diff.config import CosmosConfig
from revision_diff.database.client import CONTAINERS, CosmosClient


@pytest.fixture
def config() -> CosmosConfig:
    return CosmosConfig(endpoint="https://cosmos.example.com", key="secret", database="diffs")


def test_database_before_initialize_raises(config) -> None:
    """Verify the database is unavailable until initialized."""
    client = CosmosClient(config)

    with pytest.raises(RuntimeError, match="not initialized"):
        _ = client.database


async def test_initialize_and_close(config) -> None:
    """Verify the database reference follows the client lifecycle."""
    with patch("revision_diff.database.client.AzureCosmosClient") as mock_cls:
        azure_client = MagicMock()
        azure_client.close = AsyncMock()
        mock_cls.return_value = azure_client

        client = CosmosClient(config)
        await client.initialize()

        mock_cls.assert_called_once_with("https://cosmos.example.com", credential="secret")
        azure_client.get_database_client.assert_called_once_with("diffs")
        assert client.database is azure_client.get_database_client.return_value

        await client.close()

    azure_client.close.assert_awaited_once()
    with pytest.raises(RuntimeError):
        _ = client.database


async def test_initialize_creates_containers(config) -> None:
    """Verify provisioning creates every container with its partition key."""
    with patch("revision_diff.database.client.AzureCosmosClient") as mock_cls:
        database = MagicMock()
        database.create_container_if_not_exists = AsyncMock()
        azure_client = MagicMock()
        azure_client.create_database_if_not_exists = AsyncMock(return_value=database)
        mock_cls.return_value = azure_client

        client = CosmosClient(config)
        await client.initialize(create_containers=True)

    azure_client.create_database_if_not_exists.assert_awaited_once_with("diffs")
    azure_client.get_database_client.assert_not_called()
    assert client.database is database
    created = {
        call.kwargs["id"]: call.kwargs["partition_key"].path
        for call in database.create_container_if_not_exists.await_args_list
    }
    assert created == CONTAINERS
