"""Resolution of user-supplied paths for status commands."""

from pathlib import Path

from metagit.cli.ensure import Ensure
from metagit.core.context import MetagitContext
from metagit.core.repo_discovery import RepoContext
from metagit.core.session import repo_relative


def resolve_repo_path(ctx: MetagitContext, repo: RepoContext, path: Path, *, format: str) -> str:
    """Resolve path (relative to cwd) to its repository-relative form.

    Returns "" for the repository root. A path outside the repository is an
    error: a ValueError in JSON mode (reported by json_error_boundary),
    otherwise a styled error and exit code 1.
    """
    relative = repo_relative(repo, ctx.cwd / path)
    message = f"Path is not inside the repository: {path}"
    if relative is None and format == "json":
        raise ValueError(message)
    return Ensure.not_none(relative, message)
