"""Integration tests running metagit against a real git repository."""

import json
import shutil
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from metagit.cli.cli import cli
from metagit.core.context import create_context
from metagit.core.git.real import RealGit
from metagit.core.repo_discovery import NoRepoSentinel, RepoContext
from metagit.core.session import StatusSession
from metagit.core.status_flags import StatusFlags
from metagit.status.models.status_data import MetaChange, RawStatusEntry

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def unity_repo(tmp_path: Path) -> Path:
    repo = (tmp_path / "project").resolve()
    (repo / "Assets").mkdir(parents=True)
    _git(repo, "init")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")

    (repo / "Assets" / "Foo.png").write_text("v1", encoding="utf-8")
    (repo / "Assets" / "Foo.png.meta").write_text("guid: 1", encoding="utf-8")
    (repo / "Assets" / "Keep.txt").write_text("keep", encoding="utf-8")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit")
    return repo


def test_retrieve_status_reports_workdir_changes(unity_repo: Path) -> None:
    (unity_repo / "Assets" / "Foo.png").write_text("v2", encoding="utf-8")
    (unity_repo / "Assets" / "Bar.mat.meta").write_text("guid: 2", encoding="utf-8")

    entries = RealGit().retrieve_status(
        unity_repo, None, detect_renames=True, include_ignored=False
    )

    assert sorted(entries, key=lambda entry: entry.path) == [
        RawStatusEntry("Assets/Bar.mat.meta", StatusFlags.NEW_IN_WORKDIR),
        RawStatusEntry("Assets/Foo.png", StatusFlags.MODIFIED_IN_WORKDIR),
    ]


def test_retrieve_status_scoped_to_paths(unity_repo: Path) -> None:
    (unity_repo / "Assets" / "Foo.png").write_text("v2", encoding="utf-8")
    (unity_repo / "Assets" / "Keep.txt").write_text("changed", encoding="utf-8")

    entries = RealGit().retrieve_status(
        unity_repo,
        ["Assets/Keep.txt", "Assets/Keep.txt.meta"],
        detect_renames=True,
        include_ignored=False,
    )

    assert [entry.path for entry in entries] == ["Assets/Keep.txt"]


def test_retrieve_status_detects_staged_rename(unity_repo: Path) -> None:
    _git(unity_repo, "mv", "Assets/Keep.txt", "Assets/Kept.txt")

    entries = RealGit().retrieve_status(
        unity_repo, None, detect_renames=True, include_ignored=False
    )

    assert entries == [RawStatusEntry("Assets/Kept.txt", StatusFlags.RENAMED_IN_INDEX)]


def test_repository_discovery(unity_repo: Path) -> None:
    ctx = create_context(cwd=unity_repo / "Assets")

    assert isinstance(ctx.repo, RepoContext)
    assert ctx.repo.root == unity_repo
    assert ctx.repo.settings_path == unity_repo / ".git" / "metagit" / "config.toml"


def test_discovery_outside_repository(tmp_path: Path) -> None:
    outside = tmp_path / "plain"
    outside.mkdir()

    ctx = create_context(cwd=outside)

    assert isinstance(ctx.repo, NoRepoSentinel)


def test_session_folds_meta_and_hides_empty_folders(unity_repo: Path) -> None:
    # Arrange
    (unity_repo / "Assets" / "Foo.png").write_text("v2", encoding="utf-8")
    (unity_repo / "Assets" / "Foo.png.meta").write_text("guid: 1b", encoding="utf-8")
    (unity_repo / "Assets" / "Empty").mkdir()
    (unity_repo / "Assets" / "Empty.meta").write_text("folderAsset: yes", encoding="utf-8")

    # Act
    view = StatusSession(create_context(cwd=unity_repo)).refresh()

    # Assert
    summary = {entry.path: entry.meta_change for entry in view.status_list}
    assert summary == {"Assets/Foo.png": MetaChange.BOTH, "Assets/Empty": MetaChange.META}
    empty = view.tree.get_status("Assets/Empty")
    assert empty is not None
    assert empty.state == StatusFlags.IGNORED


def test_scoped_refresh_picks_up_new_change(unity_repo: Path) -> None:
    session = StatusSession(create_context(cwd=unity_repo))
    assert len(session.refresh().status_list) == 0

    (unity_repo / "Assets" / "Keep.txt.meta").write_text("guid: 3", encoding="utf-8")
    session.mark_dirty(["Assets/Keep.txt"])
    view = session.refresh()

    entry = view.status_list.find("Assets/Keep.txt")
    assert entry is not None
    assert entry.meta_change == MetaChange.META
    assert entry.state == StatusFlags.NEW_IN_WORKDIR


def test_cli_status_json(unity_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (unity_repo / "Assets" / "Foo.png.meta").write_text("guid: 1b", encoding="utf-8")
    monkeypatch.chdir(unity_repo)

    result = CliRunner().invoke(cli, ["status", "--format", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["repo_root"] == str(unity_repo)
    assert data["groups"][0]["entries"][0]["path"] == "Assets/Foo.png"
    assert data["groups"][0]["entries"][0]["meta_change"] == "meta"


def test_cli_config_round_trip(unity_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(unity_repo)
    runner = CliRunner()

    set_result = runner.invoke(cli, ["config", "set", "show_empty_folders", "true"])
    get_result = runner.invoke(cli, ["config", "get", "show_empty_folders"])

    assert set_result.exit_code == 0, set_result.output
    assert get_result.stdout.strip() == "true"
    assert (unity_repo / ".git" / "metagit" / "config.toml").exists()
