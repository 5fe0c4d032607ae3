"""Raw repository status snapshot with scoped updates."""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from metagit.core.meta_paths import normalize_path, paths_with_meta
from metagit.core.status_flags import StatusFlags, combine_flags
from metagit.status.models.status_data import RawStatusEntry


class StatusSnapshot(Mapping[str, RawStatusEntry]):
    """Immutable mapping of path to RawStatusEntry.

    Iteration yields paths in sorted order; entries() yields the raw entries
    in the same order, ready to feed the list and tree builders.
    """

    def __init__(self, entries: Mapping[str, RawStatusEntry] | None = None) -> None:
        self._entries: Mapping[str, RawStatusEntry] = MappingProxyType(
            dict(sorted((entries or {}).items()))
        )

    @staticmethod
    def from_entries(entries: Iterable[RawStatusEntry]) -> "StatusSnapshot":
        """Create a snapshot, normalizing separators; later duplicates win."""
        by_path: dict[str, RawStatusEntry] = {}
        for entry in entries:
            path = normalize_path(entry.path)
            by_path[path] = entry if path == entry.path else RawStatusEntry(path, entry.flags)
        return StatusSnapshot(by_path)

    def __getitem__(self, path: str) -> RawStatusEntry:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"StatusSnapshot({list(self._entries.values())!r})"

    def entries(self) -> list[RawStatusEntry]:
        return list(self._entries.values())

    def replace_paths(
        self, paths: Iterable[str], entries: Iterable[RawStatusEntry]
    ) -> "StatusSnapshot":
        """Return a snapshot with the given paths rescanned.

        Every listed path and its `.meta` counterpart is dropped, then the
        freshly retrieved entries are inserted. A path that no longer has a
        status simply disappears.
        """
        rescanned = {normalize_path(path) for path in paths}
        rescanned.update(paths_with_meta(list(rescanned)))

        merged = {path: entry for path, entry in self._entries.items() if path not in rescanned}
        for entry in StatusSnapshot.from_entries(entries).entries():
            merged[entry.path] = entry
        return StatusSnapshot(merged)

    def conflicted_paths(self) -> list[str]:
        return [
            path for path, entry in self._entries.items() if entry.flags & StatusFlags.CONFLICTED
        ]

    def has_conflicts(self) -> bool:
        return bool(self.conflicted_paths())

    def combined_flags(self) -> StatusFlags:
        return combine_flags(entry.flags for entry in self._entries.values())
