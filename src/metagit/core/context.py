"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from metagit.core.git.abc import Git
from metagit.core.git.real import RealGit
from metagit.core.repo_discovery import NoRepoSentinel, RepoContext, discover_repo_or_sentinel
from metagit.core.settings import (
    FilesystemSettingsStore,
    InMemorySettingsStore,
    SettingsStore,
    StatusSettings,
)


@dataclass(frozen=True)
class MetagitContext:
    """Immutable context holding all dependencies for metagit operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.

    Note: when repo is a NoRepoSentinel, settings are defaults and
    settings_store is in-memory.
    """

    git: Git
    settings_store: SettingsStore
    settings: StatusSettings
    cwd: Path  # Current working directory at CLI invocation
    repo: RepoContext | NoRepoSentinel

    @staticmethod
    def for_test(
        git: Git | None = None,
        settings_store: SettingsStore | None = None,
        settings: StatusSettings | None = None,
        cwd: Path | None = None,
        repo: RepoContext | NoRepoSentinel | None = None,
    ) -> "MetagitContext":
        """Create test context with optional pre-configured dependencies.

        Args:
            git: Optional Git implementation. If None, creates empty FakeGit.
            settings_store: Optional SettingsStore. If None, creates an
                InMemorySettingsStore holding settings.
            settings: Optional StatusSettings. If None, loads from settings_store.
            cwd: Optional current working directory. If None, uses Path("/test/repo").
            repo: Optional RepoContext or NoRepoSentinel. If None, uses a
                RepoContext rooted at cwd.

        Returns:
            MetagitContext configured with provided values and test defaults

        Example:
            >>> git = FakeGit(statuses={Path("/repo"): [RawStatusEntry("a.txt", flags)]})
            >>> ctx = MetagitContext.for_test(git=git, cwd=Path("/repo"))
        """
        from tests.fakes.git import FakeGit

        if git is None:
            git = FakeGit()

        if settings_store is None:
            settings_store = InMemorySettingsStore(settings)

        if settings is None:
            settings = settings_store.load()

        if cwd is None:
            cwd = Path("/test/repo")

        if repo is None:
            repo = RepoContext(
                root=cwd,
                git_dir=cwd / ".git",
                settings_path=settings_store.path(),
            )

        return MetagitContext(
            git=git,
            settings_store=settings_store,
            settings=settings,
            cwd=cwd,
            repo=repo,
        )


def create_context(cwd: Path | None = None) -> MetagitContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        cwd: Directory to discover the repository from (defaults to Path.cwd())

    Returns:
        MetagitContext with real implementations

    Raises:
        ValueError: If the repository's settings file is malformed
    """
    # 1. Capture cwd (no deps)
    if cwd is None:
        cwd = Path.cwd()

    # 2. Create ops and discover repo
    git: Git = RealGit()
    repo = discover_repo_or_sentinel(cwd, git)

    # 3. Load settings (defaults outside a repository)
    settings_store: SettingsStore
    if isinstance(repo, NoRepoSentinel):
        settings_store = InMemorySettingsStore()
    else:
        settings_store = FilesystemSettingsStore(repo.settings_path)
    settings = settings_store.load()

    return MetagitContext(
        git=git,
        settings_store=settings_store,
        settings=settings,
        cwd=cwd,
        repo=repo,
    )
