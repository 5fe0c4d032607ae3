"""Data models for status aggregation."""

from metagit.status.models.status_data import (
    MetaChange,
    RawStatusEntry,
    StatusList,
    StatusListEntry,
    StatusTree,
    StatusTreeEntry,
    TreeSettings,
)

__all__ = [
    "MetaChange",
    "RawStatusEntry",
    "StatusList",
    "StatusListEntry",
    "StatusTree",
    "StatusTreeEntry",
    "TreeSettings",
]
