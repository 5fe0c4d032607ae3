"""Status command implementation."""

from pathlib import Path

import click

from metagit.cli.commands.path_helpers import resolve_repo_path
from metagit.cli.ensure import Ensure
from metagit.cli.json_output import json_error_boundary
from metagit.cli.output import user_output
from metagit.cli.rendering import get_renderer
from metagit.core.context import MetagitContext
from metagit.core.session import StatusSession
from metagit.core.status_flags import parse_flag_names
from metagit.status.models.status_data import StatusList


def _is_under(path: str, prefixes: list[str]) -> bool:
    for prefix in prefixes:
        if not prefix or path == prefix or path.startswith(prefix + "/"):
            return True
    return False


@click.command("status")
@click.option(
    "--filter",
    "filters",
    multiple=True,
    help="Only show entries with these status flags (repeatable, e.g. modified_in_workdir)",
)
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (text or json)",
)
@click.option(
    "--path",
    "paths",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Limit output to files at or below this path (repeatable)",
)
@json_error_boundary
@click.pass_obj
def status_cmd(
    ctx: MetagitContext, filters: tuple[str, ...], format: str, paths: tuple[Path, ...]
) -> None:
    """Show changed files with their .meta companions folded in.

    \b
    JSON Output (--format json):
    Output schema is defined and validated by StatusListResponse
    in metagit.cli.json_schemas.
    """
    repo = Ensure.in_repository(ctx)

    session = StatusSession(ctx)
    if filters:
        try:
            status_filter = parse_flag_names(
                name for value in filters for name in value.split(",")
            )
        except ValueError as e:
            if format == "json":
                raise
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from e
        Ensure.invariant(status_filter != 0, "--filter must name at least one status flag")
        session.set_filter(status_filter)

    try:
        view = session.refresh()
    except RuntimeError as e:
        if format == "json":
            raise
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    status_list = view.status_list
    if paths:
        prefixes = [resolve_repo_path(ctx, repo, path, format=format) for path in paths]
        status_list = StatusList(
            [entry for entry in status_list if _is_under(entry.path, prefixes)]
        )

    renderer = get_renderer(format)
    renderer.render_status_list(
        repo.root, status_list, session.status_filter, ctx.settings.minimized_statuses
    )
