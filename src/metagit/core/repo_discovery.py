"""Repository discovery functionality.

Discovers git repository information from a given path without requiring
full MetagitContext (enables settings loading before context creation).
"""

from dataclasses import dataclass
from pathlib import Path

from metagit.core.git.abc import Git
from metagit.core.settings import SETTINGS_DIR_NAME, SETTINGS_FILE_NAME


@dataclass(frozen=True)
class RepoContext:
    """Represents a git working tree root and where its metagit settings live."""

    root: Path
    git_dir: Path
    settings_path: Path  # <git dir>/metagit/config.toml


@dataclass(frozen=True)
class NoRepoSentinel:
    """Sentinel value indicating execution outside a git repository.

    Commands that require repo context can check for this sentinel and fail fast.
    """

    message: str = "Not inside a git repository"


def discover_repo_or_sentinel(cwd: Path, git: Git) -> RepoContext | NoRepoSentinel:
    """Find the repository containing `cwd`.

    Asks git first, then falls back to walking up from `cwd` looking for a
    `.git` directory.

    Args:
        cwd: Current working directory to start search from
        git: Git operations interface

    Returns:
        RepoContext if inside a git repository, NoRepoSentinel otherwise
    """
    if not git.path_exists(cwd):
        return NoRepoSentinel(message=f"Start path '{cwd}' does not exist")

    root = git.get_repository_root(cwd)
    if root is None:
        cur = cwd.resolve()
        for parent in [cur, *cur.parents]:
            if git.is_dir(parent / ".git"):
                root = parent
                break

    if root is None:
        return NoRepoSentinel(message="Not inside a git repository (no .git found up the tree)")

    git_dir = git.get_git_dir(root)
    return RepoContext(
        root=root,
        git_dir=git_dir,
        settings_path=git_dir / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME,
    )
