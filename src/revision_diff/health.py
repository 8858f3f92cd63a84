"""Startup checks for the Cosmos DB account the diff service reads from."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import httpx

if TYPE_CHECKING:
    from revision_diff.config import CosmosConfig, Settings

logger = logging.getLogger(__name__)


async def _probe_emulator(config: CosmosConfig) -> str | None:
    """Return a problem description when the local emulator cannot serve requests."""
    netloc = urlparse(config.endpoint).netloc
    async with httpx.AsyncClient(timeout=3) as client:
        try:
            response = await client.get(f"{config.endpoint.rstrip('/')}/")
        except httpx.ConnectError:
            return f"Cosmos DB emulator is not running at {netloc}"
    # The emulator answers 5xx while its partitions are still starting.
    if response.status_code >= 500:
        return f"Cosmos DB emulator at {netloc} is still starting (HTTP {response.status_code})"
    return None


async def cosmos_problems(settings: Settings) -> list[str]:
    """List everything that would stop the service from reaching Cosmos DB."""
    config = settings.cosmos
    if not config.endpoint:
        return ["COSMOS_ENDPOINT is not set — export it before starting the app"]

    problems: list[str] = []
    if not config.key:
        problems.append("COSMOS_KEY is not set — the account key is required")
    # Deployed accounts are https; only a local emulator is probed.
    if not config.endpoint.startswith("https://"):
        problem = await _probe_emulator(config)
        if problem:
            problems.append(problem)
    return problems


async def check_emulators(settings: Settings) -> bool:
    """Log any Cosmos DB problems and report whether startup can continue."""
    problems = await cosmos_problems(settings)
    for problem in problems:
        logger.error(problem)
    if problems:
        logger.error("Start the emulator with: docker compose up -d")
        return False
    return True
