"""Meta-aware flat status list for the changes view.

Folds each `<asset>.meta` status entry into the entry of its asset so the
changes view shows one row per logical file. A row remembers whether the
change came from the asset itself, from its `.meta` file, or from both.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from metagit.core.meta_paths import asset_path_from_meta, is_meta_path
from metagit.core.status_flags import ALL_STATUSES, StatusFlags
from metagit.status.models.status_data import (
    MetaChange,
    RawStatusEntry,
    StatusList,
    StatusListEntry,
)

logger = logging.getLogger(__name__)


@dataclass
class _WorkingEntry:
    """Mutable row used only while a single build pass runs."""

    path: str
    state: StatusFlags
    meta_change: MetaChange
    selected: bool
    touched: bool = False

    def observe(self, state: StatusFlags, origin: MetaChange, *, authoritative: bool) -> None:
        if not self.touched:
            self.state = state
            self.meta_change = origin
            self.touched = True
            return

        # Already seen this pass: the asset's own status wins over its .meta
        if authoritative:
            self.state = state
        self.meta_change |= origin

    def freeze(self) -> StatusListEntry:
        return StatusListEntry(
            path=self.path,
            state=self.state,
            meta_change=MetaChange(self.meta_change),
            selected=self.selected,
        )


def _merge(
    previous: Iterable[StatusListEntry],
    raw: Iterable[RawStatusEntry],
    status_filter: StatusFlags,
) -> StatusList:
    working: dict[str, _WorkingEntry] = {
        entry.path: _WorkingEntry(
            path=entry.path,
            state=entry.state,
            meta_change=entry.meta_change,
            selected=entry.selected,
        )
        for entry in previous
    }

    for entry in raw:
        if (entry.flags & status_filter) == 0:
            continue

        if is_meta_path(entry.path):
            path = asset_path_from_meta(entry.path)
            origin = MetaChange.META
            authoritative = False
        else:
            path = entry.path
            origin = MetaChange.OBJECT
            authoritative = True

        current = working.get(path)
        if current is None:
            working[path] = _WorkingEntry(
                path=path,
                state=entry.flags,
                meta_change=origin,
                selected=False,
                touched=True,
            )
            continue

        current.observe(entry.flags, origin, authoritative=authoritative)

    survivors = [item.freeze() for item in working.values() if item.touched]
    pruned = len(working) - len(survivors)
    logger.debug("Built status list: entries=%d, pruned=%d", len(survivors), pruned)
    return StatusList(survivors)


def build_status_list(
    raw: Iterable[RawStatusEntry], status_filter: StatusFlags = ALL_STATUSES
) -> StatusList:
    """Build the changes view from a raw status snapshot.

    Args:
        raw: Raw (path, flags) entries; order does not affect the result
        status_filter: Display mask; entries sharing no bit with it are skipped

    Returns:
        StatusList sorted by (state, path)

    Example:
        >>> raw = [
        ...     RawStatusEntry("Foo.png", StatusFlags.MODIFIED_IN_WORKDIR),
        ...     RawStatusEntry("Foo.png.meta", StatusFlags.MODIFIED_IN_WORKDIR),
        ... ]
        >>> [(e.path, e.meta_change) for e in build_status_list(raw)]
        [('Foo.png', <MetaChange.BOTH: 3>)]
    """
    return _merge((), raw, status_filter)


def update_status_list(
    existing: StatusList,
    raw: Iterable[RawStatusEntry],
    status_filter: StatusFlags = ALL_STATUSES,
) -> StatusList:
    """Rebuild the changes view, carrying UI state over from a previous list.

    Entries whose path survives keep their selected flag; entries absent
    from the new snapshot are dropped. existing itself is not modified.
    """
    return _merge(existing, raw, status_filter)
