"""Tests for .meta sidecar path helpers."""

from pathlib import Path

from metagit.core.meta_paths import (
    asset_path_from_meta,
    is_empty_folder,
    is_empty_folder_meta,
    is_meta_path,
    meta_path_from_asset,
    normalize_path,
    path_with_meta,
    paths_with_meta,
    split_segments,
    strip_meta_segment,
)


def test_is_meta_path() -> None:
    assert is_meta_path("Assets/Foo.png.meta")
    assert is_meta_path("Assets.meta")
    assert not is_meta_path("Assets/Foo.png")
    assert not is_meta_path("Assets/metadata")


def test_asset_path_from_meta_strips_one_suffix() -> None:
    assert asset_path_from_meta("Assets/Foo.png.meta") == "Assets/Foo.png"
    assert asset_path_from_meta("Assets/Foo.meta.meta") == "Assets/Foo.meta"
    assert asset_path_from_meta("Assets/Foo.png") == "Assets/Foo.png"


def test_meta_path_from_asset() -> None:
    assert meta_path_from_asset("Assets/Foo.png") == "Assets/Foo.png.meta"
    assert meta_path_from_asset("Assets/Folder") == "Assets/Folder.meta"


def test_path_with_meta_for_file_includes_both() -> None:
    assert path_with_meta("Assets/Foo.png") == ["Assets/Foo.png", "Assets/Foo.png.meta"]


def test_path_with_meta_for_meta_file_includes_asset() -> None:
    assert path_with_meta("Assets/Foo.png.meta") == ["Assets/Foo.png.meta", "Assets/Foo.png"]


def test_path_with_meta_for_folder_yields_only_meta() -> None:
    """A path without an extension stands for a folder; only its .meta is tracked."""
    assert path_with_meta("Assets/Folder") == ["Assets/Folder.meta"]


def test_paths_with_meta_flattens() -> None:
    result = paths_with_meta(["a.txt", "Dir"])

    assert result == ["a.txt", "a.txt.meta", "Dir.meta"]


def test_normalize_path_replaces_backslashes() -> None:
    assert normalize_path("Assets\\Sub\\a.txt") == "Assets/Sub/a.txt"
    assert normalize_path("Assets/a.txt") == "Assets/a.txt"
    assert normalize_path("Assets/a.txt", separator="/") == "Assets/a.txt"


def test_split_segments_drops_empty_segments() -> None:
    assert split_segments("Assets//Sub/a.txt/") == ["Assets", "Sub", "a.txt"]
    assert split_segments("") == []
    assert split_segments("/") == []


def test_strip_meta_segment() -> None:
    assert strip_meta_segment("Foo.png.meta") == "Foo.png"
    assert strip_meta_segment("Folder.meta") == "Folder"
    assert strip_meta_segment("Foo.png") == "Foo.png"
    assert strip_meta_segment(".meta") == ".meta"


def test_is_empty_folder(tmp_path: Path) -> None:
    empty = tmp_path / "Empty"
    empty.mkdir()
    full = tmp_path / "Full"
    full.mkdir()
    (full / "a.txt").write_text("a", encoding="utf-8")

    assert is_empty_folder(empty)
    assert not is_empty_folder(full)
    assert not is_empty_folder(tmp_path / "Missing")
    assert not is_empty_folder(full / "a.txt")


def test_is_empty_folder_meta(tmp_path: Path) -> None:
    (tmp_path / "Assets" / "Empty").mkdir(parents=True)
    (tmp_path / "Assets" / "a.txt").write_text("a", encoding="utf-8")

    assert is_empty_folder_meta("Assets/Empty.meta", tmp_path)
    assert not is_empty_folder_meta("Assets.meta", tmp_path)
    assert not is_empty_folder_meta("Assets/Empty", tmp_path)
    assert not is_empty_folder_meta("Assets/a.txt.meta", tmp_path)
