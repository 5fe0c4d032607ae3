"""Path helpers for `.meta` sidecar files.

Every asset in the project may have a companion `<asset>.meta` file. The
association between the two is purely syntactic: strip or append the suffix.
Only is_empty_folder/is_empty_folder_meta touch the filesystem.
"""

import os
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

META_SUFFIX = ".meta"


def is_meta_path(path: str) -> bool:
    return path.endswith(META_SUFFIX)


def asset_path_from_meta(meta_path: str) -> str:
    """Strip one trailing `.meta` suffix; non-meta paths are returned unchanged."""
    if is_meta_path(meta_path):
        return meta_path[: -len(META_SUFFIX)]
    return meta_path


def meta_path_from_asset(asset_path: str) -> str:
    return asset_path + META_SUFFIX


def _has_extension(path: str) -> bool:
    return PurePosixPath(path).suffix != ""


def path_with_meta(path: str) -> list[str]:
    """Return a path together with its sidecar counterpart.

    The path itself is included only when it has an extension, so a bare
    directory proxy contributes its `.meta` file alone.

    Example:
        >>> path_with_meta("Assets/Foo.png")
        ['Assets/Foo.png', 'Assets/Foo.png.meta']
        >>> path_with_meta("Assets/Folder")
        ['Assets/Folder.meta']
    """
    result: list[str] = []
    if _has_extension(path):
        result.append(path)

    counterpart = asset_path_from_meta(path) if is_meta_path(path) else meta_path_from_asset(path)
    if counterpart:
        result.append(counterpart)
    return result


def paths_with_meta(paths: Iterable[str]) -> list[str]:
    return [expanded for path in paths for expanded in path_with_meta(path)]


def normalize_path(path: str, separator: str = "\\") -> str:
    """Replace a foreign separator with `/`."""
    if separator == "/":
        return path
    return path.replace(separator, "/")


def split_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def strip_meta_segment(segment: str) -> str:
    # A segment that is exactly ".meta" is a real (hidden) name, keep it
    if segment == META_SUFFIX:
        return segment
    return asset_path_from_meta(segment)


def is_empty_folder(path: Path) -> bool:
    if not path.is_dir():
        return False
    with os.scandir(path) as entries:
        return next(entries, None) is None


def is_empty_folder_meta(path: str, root: Path) -> bool:
    """Return True if path is a `.meta` file backing an existing empty directory.

    Args:
        path: Repository-relative path using `/` separators
        root: Repository root the path is relative to
    """
    if not is_meta_path(path):
        return False
    return is_empty_folder(root / asset_path_from_meta(path))
