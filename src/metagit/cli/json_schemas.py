"""Pydantic models for JSON output schemas.

This module defines the validated JSON schemas for CLI commands that support
--format json output. These models ensure type safety and provide runtime
validation of JSON output structures.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from metagit.core.status_flags import StatusFlags, flag_names, status_badge
from metagit.status.models.status_data import (
    MetaChange,
    StatusList,
    StatusListEntry,
    StatusTree,
    StatusTreeEntry,
    TreeSettings,
)

_META_CHANGE_NAMES = {
    MetaChange.NONE: "none",
    MetaChange.OBJECT: "object",
    MetaChange.META: "meta",
    MetaChange.BOTH: "both",
}


class StatusEntryInfo(BaseModel):
    """One logical file in the changes view.

    Attributes:
        path: Asset path (never a .meta path)
        state: Numeric status flags
        flags: Names of the individual status flags
        badge: Short porcelain-like badge
        meta_change: Origin of the change ("object", "meta" or "both")
        selected: Selection state
    """

    model_config = ConfigDict(strict=True)

    path: str
    state: int = Field(..., ge=0)
    flags: list[str]
    badge: str
    meta_change: str = Field(..., pattern="^(none|object|meta|both)$")
    selected: bool


class StatusGroupInfo(BaseModel):
    """Entries sharing one state, in display order."""

    model_config = ConfigDict(strict=True)

    state: int = Field(..., ge=0)
    flags: list[str]
    minimized: bool
    count: int = Field(..., ge=0)
    entries: list[StatusEntryInfo]


class StatusListResponse(BaseModel):
    """JSON response schema for the `metagit status` command."""

    model_config = ConfigDict(strict=True)

    repo_root: str
    status_filter: list[str]
    total: int = Field(..., ge=0)
    groups: list[StatusGroupInfo]


class StatusTreeNodeInfo(BaseModel):
    """One node of the aggregated status tree."""

    model_config = ConfigDict(strict=True)

    name: str
    path: str
    state: int = Field(..., ge=0)
    flags: list[str]
    depth: int = Field(..., ge=0)
    force_status: bool
    children: list["StatusTreeNodeInfo"]


class StatusTreeResponse(BaseModel):
    """JSON response schema for the `metagit tree` command."""

    model_config = ConfigDict(strict=True)

    repo_root: str
    rollup_depth: int = Field(..., ge=-1)
    show_empty_folders: bool
    nodes: list[StatusTreeNodeInfo]


def entry_to_pydantic(entry: StatusListEntry) -> StatusEntryInfo:
    return StatusEntryInfo(
        path=entry.path,
        state=int(entry.state),
        flags=flag_names(entry.state),
        badge=status_badge(entry.state),
        meta_change=_META_CHANGE_NAMES[MetaChange(entry.meta_change)],
        selected=entry.selected,
    )


def status_list_to_pydantic(
    repo_root: Path,
    status_list: StatusList,
    status_filter: StatusFlags,
    minimized: StatusFlags,
) -> StatusListResponse:
    """Convert a StatusList to its validated JSON model.

    Minimized groups still list their entries; only the flag is reported.
    """
    groups = [
        StatusGroupInfo(
            state=int(state),
            flags=flag_names(state),
            minimized=(state & minimized) != 0,
            count=len(entries),
            entries=[entry_to_pydantic(entry) for entry in entries],
        )
        for state, entries in status_list.group_by_state()
    ]
    return StatusListResponse(
        repo_root=str(repo_root),
        status_filter=flag_names(status_filter),
        total=len(status_list),
        groups=groups,
    )


def _node_to_pydantic(name: str, path: str, node: StatusTreeEntry) -> StatusTreeNodeInfo:
    return StatusTreeNodeInfo(
        name=name,
        path=path,
        state=int(node.state),
        flags=flag_names(node.state),
        depth=node.depth,
        force_status=node.force_status,
        children=[
            _node_to_pydantic(child_name, f"{path}/{child_name}", child)
            for child_name, child in node.children.items()
        ],
    )


def status_tree_to_pydantic(
    repo_root: Path,
    tree: StatusTree,
    settings: TreeSettings,
    *,
    root_path: str | None = None,
) -> StatusTreeResponse:
    """Convert a StatusTree (or the subtree at root_path) to its JSON model."""
    if root_path:
        node = tree.get_status(root_path)
        name = root_path.rstrip("/").rsplit("/", 1)[-1]
        nodes = [] if node is None else [_node_to_pydantic(name, root_path.rstrip("/"), node)]
    else:
        nodes = [_node_to_pydantic(name, name, node) for name, node in tree.entries.items()]

    return StatusTreeResponse(
        repo_root=str(repo_root),
        rollup_depth=settings.rollup_depth,
        show_empty_folders=settings.show_empty_folders,
        nodes=nodes,
    )
