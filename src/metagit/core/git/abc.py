"""Status provider interface over git.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using the git binary
- FakeGit (tests/fakes/git.py): In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from metagit.status.models.status_data import RawStatusEntry


class Git(ABC):
    """Abstract interface for the git operations metagit needs.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def retrieve_status(
        self,
        repo_root: Path,
        paths: Sequence[str] | None = None,
        *,
        detect_renames: bool,
        include_ignored: bool,
    ) -> list[RawStatusEntry]:
        """Retrieve per-path status flags.

        Args:
            repo_root: Path to the repository root
            paths: Repository-relative paths to rescan, or None for a full scan
            detect_renames: Report renames instead of delete/add pairs
            include_ignored: Also report ignored paths

        Returns:
            One RawStatusEntry per changed path, relative to repo_root with
            `/` separators

        Raises:
            RuntimeError: If the git command fails
        """
        ...

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the working tree root containing cwd, or None outside a repository."""
        ...

    @abstractmethod
    def get_git_dir(self, repo_root: Path) -> Path:
        """Get the git directory (usually repo_root/.git)."""
        ...

    @abstractmethod
    def path_exists(self, path: Path) -> bool:
        """Check if a path exists on the filesystem."""
        ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    @abstractmethod
    def is_empty_dir(self, path: Path) -> bool:
        """Check if a path is an existing directory with no entries."""
        ...
