"""Output rendering for the status views.

Provides a common interface for rendering command output in different formats
(text, JSON). Text goes to stderr through rich; JSON goes to stdout through
emit_json() after pydantic validation.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from metagit.cli.json_output import emit_json
from metagit.cli.json_schemas import status_list_to_pydantic, status_tree_to_pydantic
from metagit.cli.output import user_output
from metagit.core.status_flags import StatusFlags, flag_names, status_badge
from metagit.status.models.status_data import (
    MetaChange,
    StatusList,
    StatusTree,
    StatusTreeEntry,
    TreeSettings,
)

_BADGE_STYLES: tuple[tuple[StatusFlags, str], ...] = (
    (StatusFlags.CONFLICTED, "bold red"),
    (StatusFlags.IGNORED, "dim"),
    (
        StatusFlags.DELETED_FROM_INDEX | StatusFlags.DELETED_FROM_WORKDIR,
        "red",
    ),
    (StatusFlags.NEW_IN_INDEX | StatusFlags.NEW_IN_WORKDIR, "green"),
)


def _style_for(state: StatusFlags) -> str:
    for mask, style in _BADGE_STYLES:
        if state & mask:
            return style
    return "yellow"


def _state_label(state: StatusFlags) -> str:
    return " | ".join(flag_names(state))


def _make_console() -> Console:
    return Console(stderr=True, width=200)


class OutputRenderer(ABC):
    """Base class for output renderers.

    Different renderer implementations provide text or JSON output for the
    same collected data.
    """

    @abstractmethod
    def render_status_list(
        self,
        repo_root: Path,
        status_list: StatusList,
        status_filter: StatusFlags,
        minimized: StatusFlags,
    ) -> None:
        """Render the meta-folded changes list grouped by state."""
        ...

    @abstractmethod
    def render_status_tree(
        self,
        repo_root: Path,
        tree: StatusTree,
        settings: TreeSettings,
        *,
        root_path: str | None = None,
    ) -> None:
        """Render the aggregated status tree, or the subtree at root_path."""
        ...


class TextRenderer(OutputRenderer):
    """Renders output as formatted text for human consumption."""

    def render_status_list(
        self,
        repo_root: Path,
        status_list: StatusList,
        status_filter: StatusFlags,
        minimized: StatusFlags,
    ) -> None:
        if len(status_list) == 0:
            user_output("No changes")
            return

        console = _make_console()
        for state, entries in status_list.group_by_state():
            header = Text(f"{_state_label(state)} ({len(entries)})", style="bold")
            console.print(header)
            if state & minimized:
                continue

            for entry in entries:
                line = Text("  ")
                line.append(f"{status_badge(entry.state):<2}", style=_style_for(entry.state))
                line.append(" ")
                line.append(entry.path)
                if entry.meta_change & MetaChange.META:
                    line.append(" [meta]", style="cyan")
                console.print(line)

    def render_status_tree(
        self,
        repo_root: Path,
        tree: StatusTree,
        settings: TreeSettings,
        *,
        root_path: str | None = None,
    ) -> None:
        if root_path:
            node = tree.get_status(root_path)
            if node is None:
                user_output(f"No status for {root_path}")
                return
            roots = {root_path.rstrip("/"): node}
        else:
            roots = tree.entries

        if not roots:
            user_output("No changes")
            return

        display = Tree(Text(str(repo_root), style="bold"))
        for name, node in roots.items():
            self._add_node(display, name, node)
        _make_console().print(display)

    def _add_node(self, parent: Tree, name: str, node: StatusTreeEntry) -> None:
        label = Text(name)
        if node.force_status:
            label.append(" ")
            badge = status_badge(node.state).strip() or "-"
            label.append(f"[{badge}]", style=_style_for(node.state))
        branch = parent.add(label)
        for child_name, child in node.children.items():
            self._add_node(branch, child_name, child)


class JsonRenderer(OutputRenderer):
    """Renders output as JSON for machine consumption.

    Output goes to stdout via machine_output() to enable shell pipelines.
    """

    def render_status_list(
        self,
        repo_root: Path,
        status_list: StatusList,
        status_filter: StatusFlags,
        minimized: StatusFlags,
    ) -> None:
        model = status_list_to_pydantic(repo_root, status_list, status_filter, minimized)
        emit_json(model.model_dump(mode="json"))

    def render_status_tree(
        self,
        repo_root: Path,
        tree: StatusTree,
        settings: TreeSettings,
        *,
        root_path: str | None = None,
    ) -> None:
        model = status_tree_to_pydantic(repo_root, tree, settings, root_path=root_path)
        emit_json(model.model_dump(mode="json"))


def get_renderer(format: str) -> OutputRenderer:
    """Factory function to get appropriate renderer based on format.

    Args:
        format: Output format ("text" or "json")

    Returns:
        Appropriate renderer instance
    """
    if format == "json":
        return JsonRenderer()
    return TextRenderer()
