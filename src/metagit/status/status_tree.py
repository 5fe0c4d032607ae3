"""Hierarchical per-directory status tree.

Git reports changes per file only. A directory's status is inferred by
OR-ing the flags of every path below it into each enclosing segment, so one
change is visible at every ancestor level. rollup_depth bounds how many levels
above a leaf are forced to display that aggregate.
"""

import logging
from collections.abc import Callable, Iterable

from metagit.core.meta_paths import (
    asset_path_from_meta,
    is_meta_path,
    split_segments,
    strip_meta_segment,
)
from metagit.core.status_flags import StatusFlags
from metagit.status.models.status_data import (
    RawStatusEntry,
    StatusTree,
    StatusTreeEntry,
    TreeSettings,
)

logger = logging.getLogger(__name__)

EmptyFolderCheck = Callable[[str], bool]


def _never_empty(_path: str) -> bool:
    return False


def _effective_status(
    entry: RawStatusEntry, settings: TreeSettings, is_empty_folder: EmptyFolderCheck
) -> StatusFlags:
    if (
        not settings.show_empty_folders
        and is_meta_path(entry.path)
        and is_empty_folder(asset_path_from_meta(entry.path))
    ):
        return StatusFlags.IGNORED
    return entry.flags


def _is_forced(levels_below: int, rollup_depth: int) -> bool:
    return rollup_depth < 0 or levels_below < rollup_depth + 1


def _add_entry(
    root: dict[str, StatusTreeEntry],
    segments: list[str],
    status: StatusFlags,
    rollup_depth: int,
) -> None:
    children = root
    leaf_index = len(segments) - 1
    for index, segment in enumerate(segments):
        name = strip_meta_segment(segment)
        node = children.get(name)
        if node is None:
            node = StatusTreeEntry(depth=index)
            children[name] = node
        node.state = StatusFlags(node.state | status)

        if _is_forced(leaf_index - index, rollup_depth):
            node.force_status = True

        children = node.children


def build_status_tree(
    raw: Iterable[RawStatusEntry],
    settings: TreeSettings,
    *,
    is_empty_folder: EmptyFolderCheck | None = None,
) -> StatusTree:
    """Build a fresh status tree from a raw status snapshot.

    Args:
        raw: Raw (path, flags) entries with `/` separators
        settings: Empty-folder visibility and rollup depth
        is_empty_folder: Predicate telling whether a repository-relative path
            is an existing empty directory. Defaults to "never", which keeps
            the builder free of filesystem access.

    Returns:
        A new StatusTree; nothing is shared with previous builds
    """
    check = is_empty_folder if is_empty_folder is not None else _never_empty
    root: dict[str, StatusTreeEntry] = {}
    count = 0

    for entry in raw:
        segments = split_segments(entry.path)
        if not segments:
            continue
        status = _effective_status(entry, settings, check)
        _add_entry(root, segments, status, settings.rollup_depth)
        count += 1

    logger.debug(
        "Built status tree: entries=%d, top_level=%d, rollup_depth=%d",
        count,
        len(root),
        settings.rollup_depth,
    )
    return StatusTree(entries=root)
