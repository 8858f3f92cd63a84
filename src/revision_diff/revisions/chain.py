"""Revision chain — the selectable rows of a paginated revision history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from revision_diff.models.revision import Revision


@dataclass(frozen=True)
class ChainEntry:
    """A revision row and the physically previous revision it is described against.

    ``previous_id`` is the positional neighbour in the page even when that
    revision no longer resolves, in which case ``previous`` is ``None``.
    """

    revision: Revision
    previous: Revision | None
    previous_id: int | None
    is_current: bool
    left_default: int | None
    right_default: int | None

    @property
    def revision_id(self) -> int:
        return self.revision.revision_id


class RevisionChain:
    """Turn a newest-first page of revision ids into selectable rows.

    Ids that no longer resolve are skipped, as are revisions that did not
    touch the requested translation. Previous-revision lookups use the
    unfiltered page, so each row describes what changed since the prior
    physical revision. Default picks only ever name rows that are shown.
    The chain can be iterated any number of times.
    """

    def __init__(
        self,
        ids: Sequence[int],
        resolve: Callable[[int], Revision | None],
        *,
        current_revision_id: int | None,
        langcode: str | None = None,
    ) -> None:
        self._ids = tuple(ids)
        if any(newer <= older for newer, older in zip(self._ids, self._ids[1:])):
            raise ValueError("Revision ids must be strictly descending")
        self._resolve = resolve
        self._current_revision_id = current_revision_id
        self._langcode = langcode

    @property
    def ids(self) -> tuple[int, ...]:
        return self._ids

    @property
    def can_compare(self) -> bool:
        """Comparison columns are offered only when the page holds two or more ids."""
        return len(self._ids) > 1

    def __iter__(self) -> Iterator[ChainEntry]:
        return self._entries()

    def __len__(self) -> int:
        return sum(1 for _ in self._entries())

    def entries(self) -> list[ChainEntry]:
        return list(self._entries())

    def _visible(self) -> list[tuple[int, Revision]]:
        """Positions and revisions of the rows shown for this page."""
        visible = []
        for position, revision_id in enumerate(self._ids):
            revision = self._resolve(revision_id)
            if revision is None:
                continue
            if self._langcode and not revision.is_translation_affected(self._langcode):
                continue
            visible.append((position, revision))
        return visible

    def _entries(self) -> Iterator[ChainEntry]:
        visible = self._visible()
        # Every non-current row preselects the second visible row on the left.
        anchor = visible[1][1].revision_id if len(visible) > 1 else None

        for index, (position, revision) in enumerate(visible):
            previous_id = self._ids[position + 1] if position + 1 < len(self._ids) else None
            previous = self._resolve(previous_id) if previous_id is not None else None

            is_current = revision.revision_id == self._current_revision_id
            if is_current:
                # Nearest older row on screen.
                older = visible[index + 1][1].revision_id if index + 1 < len(visible) else None
                left_default, right_default = older, revision.revision_id
            else:
                left_default, right_default = anchor, None

            yield ChainEntry(
                revision=revision,
                previous=previous,
                previous_id=previous_id,
                is_current=is_current,
                left_default=left_default,
                right_default=right_default,
            )
