"""Application configuration — typed settings read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import StrEnum


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


class RadioBehavior(StrEnum):
    """How the revision radio columns react to clicks in the browser."""

    SIMPLE = "simple"
    LINEAR = "linear"


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    slow_request_ms: int = field(
        default_factory=lambda: int(_env("SLOW_REQUEST_MS", "800"))
    )

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class CosmosConfig:
    endpoint: str = field(default_factory=lambda: _env("COSMOS_ENDPOINT"))
    key: str = field(default_factory=lambda: _env("COSMOS_KEY"))
    database: str = field(
        default_factory=lambda: _env("COSMOS_DATABASE", "revision-diff")
    )


@dataclass(frozen=True)
class DiffConfig:
    """Revision overview settings."""

    revision_pager_limit: int = field(
        default_factory=lambda: int(_env("DIFF_REVISION_PAGER_LIMIT", "50"))
    )
    radio_behavior: RadioBehavior = field(
        default_factory=lambda: RadioBehavior(_env("DIFF_RADIO_BEHAVIOR", "simple"))
    )

    def __post_init__(self) -> None:
        if self.revision_pager_limit < 1:
            raise ValueError(
                f"DIFF_REVISION_PAGER_LIMIT must be at least 1, got {self.revision_pager_limit}"
            )


@dataclass(frozen=True)
class Settings:
    app: AppConfig = field(default_factory=AppConfig)
    cosmos: CosmosConfig = field(default_factory=CosmosConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)


def load_settings() -> Settings:
    """Build settings from the current environment.

    Raises ``ValueError`` when a numeric or enumerated variable is malformed.
    """
    return Settings()
