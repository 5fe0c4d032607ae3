"""Tree command implementation."""

from dataclasses import replace
from pathlib import Path

import click

from metagit.cli.commands.path_helpers import resolve_repo_path
from metagit.cli.ensure import Ensure
from metagit.cli.json_output import json_error_boundary
from metagit.cli.output import user_output
from metagit.cli.rendering import get_renderer
from metagit.core.context import MetagitContext
from metagit.core.session import StatusSession


@click.command("tree")
@click.option(
    "--depth",
    type=click.IntRange(min=-1),
    default=None,
    help="Levels above a changed file that show its status (-1 for no limit)",
)
@click.option(
    "--show-empty-folders/--hide-empty-folders",
    default=None,
    help="Report .meta files of empty folders with their real status",
)
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (text or json)",
)
@click.argument("path", required=False, type=click.Path(path_type=Path))
@json_error_boundary
@click.pass_obj
def tree_cmd(
    ctx: MetagitContext,
    depth: int | None,
    show_empty_folders: bool | None,
    format: str,
    path: Path | None,
) -> None:
    """Show the per-folder aggregated status tree.

    With PATH, show only the subtree rooted at PATH.

    \b
    JSON Output (--format json):
    Output schema is defined and validated by StatusTreeResponse
    in metagit.cli.json_schemas.
    """
    repo = Ensure.in_repository(ctx)

    settings = ctx.settings
    if depth is not None:
        settings = replace(settings, project_status_overlay_depth=depth)
    if show_empty_folders is not None:
        settings = replace(settings, show_empty_folders=show_empty_folders)
    if settings != ctx.settings:
        ctx = replace(ctx, settings=settings)

    try:
        view = StatusSession(ctx).refresh()
    except RuntimeError as e:
        if format == "json":
            raise
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    root_path = resolve_repo_path(ctx, repo, path, format=format) if path is not None else ""
    if root_path:
        node = view.tree.get_status(root_path)
        if node is None and format == "json":
            raise ValueError(f"No status for path: {root_path}")
        Ensure.invariant(node is not None, f"No status for path: {root_path}")

    renderer = get_renderer(format)
    renderer.render_status_tree(
        repo.root, view.tree, settings.tree_settings(), root_path=root_path or None
    )
