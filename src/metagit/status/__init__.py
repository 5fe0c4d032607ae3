"""Status aggregation: meta-aware changes list and per-directory status tree."""

from metagit.status.snapshot import StatusSnapshot
from metagit.status.status_list import build_status_list, update_status_list
from metagit.status.status_tree import build_status_tree

__all__ = [
    "StatusSnapshot",
    "build_status_list",
    "build_status_tree",
    "update_status_list",
]
