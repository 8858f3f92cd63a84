"""Revision overview business logic — page loading, row building, descriptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from revision_diff.revisions.chain import RevisionChain

if TYPE_CHECKING:
    from revision_diff.database.repositories.revisions import RevisionRepository
    from revision_diff.models.entity import ContentEntity
    from revision_diff.models.revision import Revision
    from revision_diff.revisions.chain import ChainEntry

logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%Y - %H:%M"


@dataclass(frozen=True)
class Operation:
    name: str
    title: str
    url: str


@dataclass(frozen=True)
class RevisionRow:
    """Template-ready row for one revision."""

    revision_id: int
    date: str
    url: str
    author: str
    description: str
    is_current: bool
    left_default: int | None
    right_default: int | None
    operations: list[Operation] = field(default_factory=list)


@dataclass(frozen=True)
class Pager:
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return max(1, -(-self.total // self.limit))

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.pages


@dataclass(frozen=True)
class RevisionOverview:
    entity: ContentEntity
    langcode: str
    title: str
    rows: list[RevisionRow]
    can_compare: bool
    pager: Pager
    radio_behavior: str

    @property
    def visible_count(self) -> int:
        return len(self.rows)


def overview_title(entity: ContentEntity, langcode: str) -> str:
    if entity.has_translations:
        return f"{entity.language_name(langcode)} revisions for {entity.label}"
    return f"Revisions for {entity.label}"


def describe_revision(revision: Revision, previous: Revision | None) -> str:
    """Return the log message, or a summary of the fields changed since ``previous``."""
    if revision.log_message:
        return revision.log_message
    if previous is None:
        return ""
    changed = sorted(
        name
        for name in revision.content.keys() | previous.content.keys()
        if revision.content.get(name) != previous.content.get(name)
    )
    if not changed:
        return "No changes."
    return "Changes on: " + ", ".join(changed)


def revision_operations(
    entity: ContentEntity, revision_id: int, langcode: str
) -> list[Operation]:
    """Revert and delete links for a non-current revision."""
    base = f"/{entity.entity_type}/{entity.id}/revisions/{revision_id}"
    revert_url = f"{base}/revert/{langcode}" if entity.has_translations else f"{base}/revert"
    revert_title = (
        "Revert" if revision_id < entity.current_revision_id else "Set as current revision"
    )
    return [
        Operation(name="revert", title=revert_title, url=revert_url),
        Operation(name="delete", title="Delete", url=f"{base}/delete"),
    ]


def build_row(entry: ChainEntry, entity: ContentEntity, langcode: str) -> RevisionRow:
    revision = entry.revision
    if entry.is_current:
        url = f"/{entity.entity_type}/{entity.id}"
        operations: list[Operation] = []
    else:
        url = f"/{entity.entity_type}/{entity.id}/revisions/{entry.revision_id}/view"
        operations = revision_operations(entity, entry.revision_id, langcode)
    return RevisionRow(
        revision_id=entry.revision_id,
        date=revision.created_at.strftime(DATE_FORMAT),
        url=url,
        author=revision.author_id or "Anonymous",
        description=describe_revision(revision, entry.previous),
        is_current=entry.is_current,
        left_default=entry.left_default,
        right_default=entry.right_default,
        operations=operations,
    )


async def load_chain(
    entity: ContentEntity,
    revisions_repo: RevisionRepository,
    *,
    page: int,
    pager_limit: int,
    langcode: str,
) -> RevisionChain:
    """Fetch one page of revisions and build its chain."""
    ids = await revisions_repo.list_revision_ids(
        entity.entity_type,
        entity.id,
        limit=pager_limit,
        offset=page * pager_limit,
    )
    unique_ids = sorted(set(ids), reverse=True)
    if len(unique_ids) != len(ids):
        logger.warning(
            "Dropping duplicate revision ids — entity=%s/%s ids=%s",
            entity.entity_type,
            entity.id,
            ids,
        )
    ids = unique_ids
    revisions = await revisions_repo.load_revisions(entity.entity_type, entity.id, ids)
    missing = [revision_id for revision_id in ids if revision_id not in revisions]
    if missing:
        logger.info(
            "Skipping stale revision references — entity=%s/%s missing=%s",
            entity.entity_type,
            entity.id,
            missing,
        )
    return RevisionChain(
        ids,
        revisions.get,
        current_revision_id=entity.current_revision_id,
        langcode=langcode,
    )


async def load_overview(
    entity: ContentEntity,
    revisions_repo: RevisionRepository,
    *,
    page: int,
    pager_limit: int,
    radio_behavior: str,
    langcode: str | None = None,
) -> RevisionOverview:
    """Assemble everything the revision overview page displays."""
    langcode = langcode or entity.langcode
    chain = await load_chain(
        entity,
        revisions_repo,
        page=page,
        pager_limit=pager_limit,
        langcode=langcode,
    )
    total = await revisions_repo.count_revisions(entity.entity_type, entity.id)
    rows = [build_row(entry, entity, langcode) for entry in chain]
    return RevisionOverview(
        entity=entity,
        langcode=langcode,
        title=overview_title(entity, langcode),
        rows=rows,
        can_compare=chain.can_compare,
        pager=Pager(page=page, limit=pager_limit, total=total),
        radio_behavior=radio_behavior,
    )
