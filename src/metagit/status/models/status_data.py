"""Data models for status aggregation."""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from enum import IntFlag
from typing import overload

from metagit.core.meta_paths import split_segments
from metagit.core.status_flags import NO_STATUSES, StatusFlags, combine_flags


@dataclass(frozen=True)
class RawStatusEntry:
    """One (path, flags) pair as reported by the status provider.

    Paths are repository-relative and use `/` separators.
    """

    path: str
    flags: StatusFlags


class MetaChange(IntFlag):
    """Where a list entry's change originates: the asset, its `.meta`, or both."""

    NONE = 0
    OBJECT = 1 << 0
    META = 1 << 1
    BOTH = OBJECT | META


@dataclass(frozen=True)
class StatusListEntry:
    """A logical file in the changes view, with its `.meta` change folded in."""

    path: str
    state: StatusFlags
    meta_change: MetaChange
    selected: bool = False

    @property
    def sort_key(self) -> tuple[int, str]:
        return (int(self.state), self.path)


class StatusList(Sequence[StatusListEntry]):
    """Immutable, sorted snapshot of the changes view.

    Entries are ordered by (state, path): grouped by status type first, then
    alphabetically. Selection operations return new lists.
    """

    def __init__(self, entries: Sequence[StatusListEntry] = ()) -> None:
        self._entries: tuple[StatusListEntry, ...] = tuple(
            sorted(entries, key=lambda entry: entry.sort_key)
        )

    @overload
    def __getitem__(self, index: int) -> StatusListEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[StatusListEntry]: ...

    def __getitem__(self, index: int | slice) -> StatusListEntry | Sequence[StatusListEntry]:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StatusListEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusList):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"StatusList({list(self._entries)!r})"

    def find(self, path: str) -> StatusListEntry | None:
        for entry in self._entries:
            if entry.path == path:
                return entry
        return None

    def paths(self) -> list[str]:
        return [entry.path for entry in self._entries]

    def selected_entries(self) -> list[StatusListEntry]:
        return [entry for entry in self._entries if entry.selected]

    def states(self) -> list[StatusFlags]:
        """Distinct states in display order (one group header each)."""
        seen: list[StatusFlags] = []
        for entry in self._entries:
            if not seen or seen[-1] != entry.state:
                seen.append(entry.state)
        return seen

    def group_by_state(self) -> list[tuple[StatusFlags, list[StatusListEntry]]]:
        groups: list[tuple[StatusFlags, list[StatusListEntry]]] = []
        for entry in self._entries:
            if groups and groups[-1][0] == entry.state:
                groups[-1][1].append(entry)
            else:
                groups.append((entry.state, [entry]))
        return groups

    def combined_selected_state(self) -> StatusFlags:
        return combine_flags(entry.state for entry in self._entries if entry.selected)

    def select_all(self, select: bool) -> "StatusList":
        return self.select_where(lambda _entry: True, select)

    def select_where(
        self, predicate: Callable[[StatusListEntry], bool], select: bool
    ) -> "StatusList":
        """Set selected=select on entries matching predicate, leave the rest alone."""
        return StatusList(
            [
                replace(entry, selected=select) if predicate(entry) else entry
                for entry in self._entries
            ]
        )

    def select_state(self, state: StatusFlags) -> "StatusList":
        """Select exactly the entries whose state equals state."""
        return StatusList(
            [replace(entry, selected=entry.state == state) for entry in self._entries]
        )

    def toggle(self, path: str) -> "StatusList":
        return StatusList(
            [
                replace(entry, selected=not entry.selected) if entry.path == path else entry
                for entry in self._entries
            ]
        )

    def select_range(
        self,
        start: int,
        end: int,
        *,
        additive: bool = False,
        visible_filter: StatusFlags | None = None,
    ) -> "StatusList":
        """Select entries between two positions (inclusive, either order).

        Positions count only entries visible under visible_filter (all entries
        when None). Without additive, everything else is deselected first.
        """
        low, high = min(start, end), max(start, end)
        result: list[StatusListEntry] = []
        position = 0
        for entry in self._entries:
            visible = visible_filter is None or (entry.state & visible_filter) != 0
            selected = entry.selected if additive else False
            if visible:
                if low <= position <= high:
                    selected = True
                position += 1
            result.append(replace(entry, selected=selected))
        return StatusList(result)


@dataclass
class StatusTreeEntry:
    """One path segment in the status tree.

    state is the OR of every status reported at or below this node. Nodes are
    only mutated while their tree is being built.
    """

    depth: int
    state: StatusFlags = NO_STATUSES
    force_status: bool = False
    children: dict[str, "StatusTreeEntry"] = field(default_factory=dict)


@dataclass(frozen=True)
class TreeSettings:
    """Policy for building the status tree.

    rollup_depth counts levels from a leaf upward within which ancestors are
    forced to show their aggregated status; -1 means unlimited.
    """

    show_empty_folders: bool = False
    rollup_depth: int = 1


@dataclass(frozen=True)
class StatusTree:
    """Root mapping of top-level segment name to StatusTreeEntry."""

    entries: dict[str, StatusTreeEntry]

    def get_status(self, path: str) -> StatusTreeEntry | None:
        """Look up a node by slash-delimited path without creating nodes."""
        segments = split_segments(path)
        if not segments:
            return None

        current = self.entries
        node: StatusTreeEntry | None = None
        for segment in segments:
            node = current.get(segment)
            if node is None:
                return None
            current = node.children
        return node

    def walk(self) -> Iterator[tuple[str, StatusTreeEntry]]:
        """Yield (path, node) pairs depth-first in insertion order."""
        stack: list[tuple[str, StatusTreeEntry]] = [
            (name, node) for name, node in reversed(self.entries.items())
        ]
        while stack:
            path, node = stack.pop()
            yield path, node
            stack.extend(
                (f"{path}/{name}", child) for name, child in reversed(node.children.items())
            )

    def __len__(self) -> int:
        return sum(1 for _ in self.walk())
