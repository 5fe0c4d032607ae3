"""Status session: retrieves snapshots and keeps both status views current.

The session owns the last raw snapshot plus the derived changes list and
status tree for one repository. Refreshes are serialized with a lock; each
refresh replaces the view wholesale, and readers only ever see complete views.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from metagit.core.context import MetagitContext
from metagit.core.meta_paths import normalize_path, paths_with_meta
from metagit.core.repo_discovery import NoRepoSentinel, RepoContext
from metagit.core.status_flags import StatusFlags
from metagit.status.models.status_data import (
    RawStatusEntry,
    StatusList,
    StatusListEntry,
    StatusTree,
)
from metagit.status.snapshot import StatusSnapshot
from metagit.status.status_list import update_status_list
from metagit.status.status_tree import build_status_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusView:
    """A consistent set of status results built from one snapshot."""

    snapshot: StatusSnapshot
    status_list: StatusList
    tree: StatusTree

    @staticmethod
    def empty() -> "StatusView":
        return StatusView(
            snapshot=StatusSnapshot(),
            status_list=StatusList(),
            tree=StatusTree(entries={}),
        )


class StatusSession:
    """Drives status retrieval and rebuilds for one repository.

    Example:
        >>> session = StatusSession(ctx)
        >>> view = session.refresh()
        >>> session.mark_dirty(["Assets/Foo.png"])
        >>> view = session.refresh()  # rescans only Foo.png and Foo.png.meta
    """

    def __init__(self, ctx: MetagitContext) -> None:
        if isinstance(ctx.repo, NoRepoSentinel):
            raise ValueError(ctx.repo.message)
        self._ctx = ctx
        self._repo: RepoContext = ctx.repo
        self._status_filter = ctx.settings.status_filter
        self._lock = threading.Lock()
        self._view = StatusView.empty()
        self._has_snapshot = False
        self._needs_full_refresh = True
        self._dirty_paths: set[str] = set()
        self._updating = False
        self._updating_paths: frozenset[str] = frozenset()

    @property
    def view(self) -> StatusView:
        return self._view

    @property
    def status_filter(self) -> StatusFlags:
        return self._status_filter

    @property
    def is_dirty(self) -> bool:
        return self._needs_full_refresh or bool(self._dirty_paths)

    @property
    def is_updating(self) -> bool:
        return self._updating

    def is_file_updating(self, path: str) -> bool:
        """True while a refresh covering path is running."""
        # Read without the lock: refresh holds it for the whole scan, and both
        # fields are reassigned, never mutated in place.
        if not self._updating:
            return False
        if not self._updating_paths:
            return True
        return normalize_path(path) in self._updating_paths

    def mark_dirty(self, paths: Iterable[str] | None = None) -> None:
        """Schedule a rescan of specific paths, or of everything when paths is None."""
        if paths is None:
            self._needs_full_refresh = True
            return
        self._dirty_paths.update(normalize_path(path) for path in paths)

    def _empty_folder_check(self) -> Callable[[str], bool]:
        root = self._repo.root
        git = self._ctx.git

        def check(primary_path: str) -> bool:
            return git.is_empty_dir(root / primary_path)

        return check

    def _retrieve(self, paths: list[str] | None) -> list[RawStatusEntry]:
        settings = self._ctx.settings
        return self._ctx.git.retrieve_status(
            self._repo.root,
            paths,
            detect_renames=settings.detect_renames,
            include_ignored=settings.include_ignored,
        )

    def _rebuild(self, snapshot: StatusSnapshot) -> StatusView:
        raw = snapshot.entries()
        status_list = update_status_list(self._view.status_list, raw, self._status_filter)
        tree = build_status_tree(
            raw,
            self._ctx.settings.tree_settings(),
            is_empty_folder=self._empty_folder_check(),
        )
        return StatusView(snapshot=snapshot, status_list=status_list, tree=tree)

    def refresh(self, *, force_full: bool = False) -> StatusView:
        """Retrieve status and rebuild both views.

        A full scan runs when forced, on the first refresh, or after
        mark_dirty() without paths; otherwise only the dirty paths (and
        their `.meta` counterparts) are rescanned.

        Raises:
            RuntimeError: If status retrieval fails; the previous view is kept
        """
        with self._lock:
            full = force_full or self._needs_full_refresh or not self._has_snapshot
            scoped_paths = None if full else sorted(paths_with_meta(sorted(self._dirty_paths)))

            if not full and not scoped_paths:
                logger.debug("Refresh skipped: nothing dirty")
                return self._view

            self._updating = True
            self._updating_paths = frozenset(scoped_paths or ())
            try:
                logger.debug(
                    "Refreshing status: mode=%s, paths=%d",
                    "full" if full else "scoped",
                    len(scoped_paths or ()),
                )
                entries = self._retrieve(scoped_paths)
                if full:
                    snapshot = StatusSnapshot.from_entries(entries)
                else:
                    snapshot = self._view.snapshot.replace_paths(scoped_paths or (), entries)
                self._view = self._rebuild(snapshot)
                self._has_snapshot = True
                self._needs_full_refresh = False
                self._dirty_paths.clear()
                return self._view
            except RuntimeError:
                logger.warning("Could not retrieve git status for %s", self._repo.root)
                logger.debug("Exception details:", exc_info=True)
                raise
            finally:
                self._updating = False
                self._updating_paths = frozenset()

    def set_filter(self, status_filter: StatusFlags) -> StatusView:
        """Change the changes-view filter and rebuild from the last snapshot."""
        with self._lock:
            self._status_filter = status_filter
            self._view = replace(
                self._view,
                status_list=update_status_list(
                    self._view.status_list, self._view.snapshot.entries(), status_filter
                ),
            )
            return self._view

    def _apply_selection(self, change: Callable[[StatusList], StatusList]) -> StatusList:
        with self._lock:
            status_list = change(self._view.status_list)
            self._view = replace(self._view, status_list=status_list)
            return status_list

    def select_all(self, select: bool) -> StatusList:
        return self._apply_selection(lambda current: current.select_all(select))

    def select_state(self, state: StatusFlags) -> StatusList:
        return self._apply_selection(lambda current: current.select_state(state))

    def toggle(self, path: str) -> StatusList:
        return self._apply_selection(lambda current: current.toggle(path))

    def select_range(self, start: int, end: int, *, additive: bool = False) -> StatusList:
        return self._apply_selection(
            lambda current: current.select_range(
                start, end, additive=additive, visible_filter=self._status_filter
            )
        )

    def selected_paths_with_meta(self) -> list[str]:
        """Selected logical files expanded to the paths git should act on."""
        selected: list[StatusListEntry] = self._view.status_list.selected_entries()
        return paths_with_meta(entry.path for entry in selected)


def repo_relative(repo: RepoContext, path: Path) -> str | None:
    """Convert a filesystem path to the repository-relative `/` form.

    Returns "" for the repository root and None for paths outside it.
    """
    resolved = path.resolve()
    if not resolved.is_relative_to(repo.root):
        return None
    if resolved == repo.root:
        return ""
    return resolved.relative_to(repo.root).as_posix()
