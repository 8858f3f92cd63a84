"""Async Cosmos DB client and container provisioning for the diff service."""

from __future__ import annotations

import logging

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient
from azure.cosmos.aio import DatabaseProxy

from revision_diff.config import CosmosConfig

logger = logging.getLogger(__name__)

# Container name → partition key path. Revisions share a partition per entity so a
# page of history is a single-partition query.
CONTAINERS: dict[str, str] = {
    "entities": "/id",
    "revisions": "/entity_id",
    "settings": "/id",
}


class CosmosClient:
    """Owns the Azure client and hands out the diff database."""

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._database: DatabaseProxy | None = None

    async def initialize(self, *, create_containers: bool = False) -> None:
        """Connect, optionally creating the database and its containers.

        Provisioning is meant for the local emulator; deployed accounts are
        expected to exist already.
        """
        self._client = AzureCosmosClient(self._config.endpoint, credential=self._config.key)
        if create_containers:
            self._database = await self._client.create_database_if_not_exists(
                self._config.database
            )
            for name, partition_path in CONTAINERS.items():
                await self._database.create_container_if_not_exists(
                    id=name, partition_key=PartitionKey(path=partition_path)
                )
            logger.info(
                "Cosmos containers ensured — database=%s containers=%s",
                self._config.database,
                sorted(CONTAINERS),
            )
        else:
            self._database = self._client.get_database_client(self._config.database)
        logger.info(
            "Cosmos client initialized — endpoint=%s database=%s",
            self._config.endpoint,
            self._config.database,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None

    @property
    def database(self) -> DatabaseProxy:
        if self._database is None:
            raise RuntimeError("CosmosClient not initialized — call initialize() first")
        return self._database
