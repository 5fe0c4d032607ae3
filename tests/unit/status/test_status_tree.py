"""Tests for the per-directory status tree builder."""

from metagit.core.status_flags import StatusFlags
from metagit.status.models.status_data import RawStatusEntry, TreeSettings
from metagit.status.status_tree import build_status_tree

MODIFIED = StatusFlags.MODIFIED_IN_WORKDIR
NEW = StatusFlags.NEW_IN_WORKDIR
STAGED = StatusFlags.MODIFIED_IN_INDEX


def _forced(tree_paths: dict[str, bool]) -> set[str]:
    return {path for path, forced in tree_paths.items() if forced}


def test_single_file_creates_one_node_per_segment() -> None:
    # Arrange
    raw = [RawStatusEntry("Assets/Sub/a.txt", MODIFIED)]

    # Act
    tree = build_status_tree(raw, TreeSettings())

    # Assert
    paths = [path for path, _node in tree.walk()]
    assert paths == ["Assets", "Assets/Sub", "Assets/Sub/a.txt"]
    for path in paths:
        node = tree.get_status(path)
        assert node is not None
        assert node.state == MODIFIED


def test_depth_counts_from_root() -> None:
    tree = build_status_tree([RawStatusEntry("A/B/c.txt", MODIFIED)], TreeSettings())

    depths = {path: node.depth for path, node in tree.walk()}

    assert depths == {"A": 0, "A/B": 1, "A/B/c.txt": 2}


def test_ancestor_state_is_or_of_descendants() -> None:
    # Arrange
    raw = [
        RawStatusEntry("A/x.txt", MODIFIED),
        RawStatusEntry("A/B/y.txt", NEW),
        RawStatusEntry("A/B/z.txt", STAGED),
    ]

    # Act
    tree = build_status_tree(raw, TreeSettings(rollup_depth=-1))

    # Assert
    a = tree.get_status("A")
    b = tree.get_status("A/B")
    assert a is not None and b is not None
    assert a.state == MODIFIED | NEW | STAGED
    assert b.state == NEW | STAGED
    for path, node in tree.walk():
        for child in node.children.values():
            assert node.state & child.state == child.state, path


def test_rollup_depth_one_forces_leaf_and_parent() -> None:
    tree = build_status_tree(
        [RawStatusEntry("A/B/C/d.txt", MODIFIED)], TreeSettings(rollup_depth=1)
    )

    forced = _forced({path: node.force_status for path, node in tree.walk()})

    assert forced == {"A/B/C", "A/B/C/d.txt"}


def test_rollup_depth_zero_forces_only_leaf() -> None:
    tree = build_status_tree([RawStatusEntry("A/B/c.txt", MODIFIED)], TreeSettings(rollup_depth=0))

    forced = _forced({path: node.force_status for path, node in tree.walk()})

    assert forced == {"A/B/c.txt"}


def test_rollup_depth_unlimited_forces_every_ancestor() -> None:
    tree = build_status_tree(
        [RawStatusEntry("A/B/C/d.txt", MODIFIED)], TreeSettings(rollup_depth=-1)
    )

    assert all(node.force_status for _path, node in tree.walk())


def test_force_status_is_sticky_across_entries() -> None:
    """A node forced by a shallow entry stays forced when a deep entry passes through."""
    raw = [
        RawStatusEntry("A/b.txt", MODIFIED),
        RawStatusEntry("A/B/C/D/e.txt", NEW),
    ]

    tree = build_status_tree(raw, TreeSettings(rollup_depth=0))

    a = tree.get_status("A")
    assert a is not None
    assert a.force_status is False
    b_txt = tree.get_status("A/b.txt")
    assert b_txt is not None and b_txt.force_status is True

    forced = build_status_tree(raw, TreeSettings(rollup_depth=1)).get_status("A")
    assert forced is not None and forced.force_status is True


def test_meta_entry_merges_into_asset_node() -> None:
    raw = [
        RawStatusEntry("Assets/Foo.png", MODIFIED),
        RawStatusEntry("Assets/Foo.png.meta", NEW),
    ]

    tree = build_status_tree(raw, TreeSettings())

    assets = tree.get_status("Assets")
    assert assets is not None
    assert list(assets.children) == ["Foo.png"]
    assert assets.children["Foo.png"].state == MODIFIED | NEW


def test_folder_meta_contributes_to_folder_node() -> None:
    raw = [
        RawStatusEntry("Assets/Folder.meta", NEW),
        RawStatusEntry("Assets/Folder/a.txt", NEW),
    ]

    tree = build_status_tree(raw, TreeSettings())

    assets = tree.get_status("Assets")
    assert assets is not None
    assert list(assets.children) == ["Folder"]


def test_empty_folder_meta_reported_as_ignored_when_hidden() -> None:
    # Arrange
    raw = [RawStatusEntry("Assets/Empty.meta", NEW)]

    # Act
    tree = build_status_tree(
        raw,
        TreeSettings(show_empty_folders=False),
        is_empty_folder=lambda path: path == "Assets/Empty",
    )

    # Assert
    empty = tree.get_status("Assets/Empty")
    assert empty is not None
    assert empty.state == StatusFlags.IGNORED
    assets = tree.get_status("Assets")
    assert assets is not None
    assert assets.state == StatusFlags.IGNORED


def test_empty_folder_meta_keeps_status_when_shown() -> None:
    tree = build_status_tree(
        [RawStatusEntry("Assets/Empty.meta", NEW)],
        TreeSettings(show_empty_folders=True),
        is_empty_folder=lambda path: True,
    )

    empty = tree.get_status("Assets/Empty")
    assert empty is not None
    assert empty.state == NEW


def test_non_meta_paths_never_checked_for_empty_folder() -> None:
    checked: list[str] = []

    def check(path: str) -> bool:
        checked.append(path)
        return True

    tree = build_status_tree(
        [RawStatusEntry("Assets/a.txt", NEW)], TreeSettings(), is_empty_folder=check
    )

    node = tree.get_status("Assets/a.txt")
    assert node is not None and node.state == NEW
    assert checked == []


def test_get_status_missing_and_empty_paths() -> None:
    tree = build_status_tree([RawStatusEntry("A/b.txt", MODIFIED)], TreeSettings())

    assert tree.get_status("A/missing.txt") is None
    assert tree.get_status("Z") is None
    assert tree.get_status("") is None


def test_get_status_does_not_create_nodes() -> None:
    tree = build_status_tree([RawStatusEntry("A/b.txt", MODIFIED)], TreeSettings())
    before = len(tree)

    tree.get_status("A/missing/deeper")

    assert len(tree) == before


def test_get_status_tolerates_extra_separators() -> None:
    tree = build_status_tree([RawStatusEntry("A/B/c.txt", MODIFIED)], TreeSettings())

    node = tree.get_status("A//B/")

    assert node is not None
    assert node.depth == 1


def test_entries_without_segments_are_skipped() -> None:
    tree = build_status_tree(
        [RawStatusEntry("", MODIFIED), RawStatusEntry("/", NEW)], TreeSettings()
    )

    assert len(tree) == 0


def test_builds_are_independent() -> None:
    settings = TreeSettings()
    first = build_status_tree([RawStatusEntry("A/b.txt", MODIFIED)], settings)

    second = build_status_tree([RawStatusEntry("A/c.txt", NEW)], settings)

    a = first.get_status("A")
    assert a is not None
    assert a.state == MODIFIED
    assert list(a.children) == ["b.txt"]
    assert second.get_status("A/b.txt") is None
