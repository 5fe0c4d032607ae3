"""Production Git implementation using subprocess."""

import logging
from collections.abc import Sequence
from pathlib import Path

from metagit.core.git.abc import Git
from metagit.core.git.parsing import parse_porcelain_status
from metagit.core.meta_paths import is_empty_folder
from metagit.core.subprocess import run_subprocess_with_context
from metagit.status.models.status_data import RawStatusEntry

logger = logging.getLogger(__name__)


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def retrieve_status(
        self,
        repo_root: Path,
        paths: Sequence[str] | None = None,
        *,
        detect_renames: bool,
        include_ignored: bool,
    ) -> list[RawStatusEntry]:
        """Run `git status --porcelain -z` and translate it to raw entries."""
        cmd = [
            "git",
            "status",
            "--porcelain=v1",
            "-z",
            "--untracked-files=all",
            "--find-renames" if detect_renames else "--no-renames",
        ]
        if include_ignored:
            cmd.append("--ignored")
        if paths:
            cmd.append("--")
            cmd.extend(paths)

        result = run_subprocess_with_context(
            cmd,
            operation_context="retrieve repository status",
            cwd=repo_root,
        )
        entries = parse_porcelain_status(result.stdout)
        logger.debug(
            "Retrieved status: entries=%d, scoped=%s", len(entries), paths is not None
        )
        return entries

    def get_repository_root(self, cwd: Path) -> Path | None:
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--show-toplevel"],
            operation_context="find repository root",
            cwd=cwd,
            check=False,
        )
        if result.returncode != 0:
            return None

        root = result.stdout.strip()
        if not root:
            return None
        return Path(root).resolve()

    def get_git_dir(self, repo_root: Path) -> Path:
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--git-dir"],
            operation_context="find git directory",
            cwd=repo_root,
        )
        git_dir = Path(result.stdout.strip())
        if not git_dir.is_absolute():
            git_dir = repo_root / git_dir
        return git_dir.resolve()

    def path_exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_empty_dir(self, path: Path) -> bool:
        return is_empty_folder(path)
