"""Tests for porcelain status parsing."""

import pytest

from metagit.core.git.parsing import parse_porcelain_status, status_code_to_flags
from metagit.core.status_flags import StatusFlags
from metagit.status.models.status_data import RawStatusEntry


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("??", StatusFlags.NEW_IN_WORKDIR),
        ("!!", StatusFlags.IGNORED),
        (" M", StatusFlags.MODIFIED_IN_WORKDIR),
        ("M ", StatusFlags.MODIFIED_IN_INDEX),
        ("MM", StatusFlags.MODIFIED_IN_INDEX | StatusFlags.MODIFIED_IN_WORKDIR),
        ("A ", StatusFlags.NEW_IN_INDEX),
        ("AM", StatusFlags.NEW_IN_INDEX | StatusFlags.MODIFIED_IN_WORKDIR),
        ("D ", StatusFlags.DELETED_FROM_INDEX),
        (" D", StatusFlags.DELETED_FROM_WORKDIR),
        ("R ", StatusFlags.RENAMED_IN_INDEX),
        ("C ", StatusFlags.NEW_IN_INDEX),
        (" T", StatusFlags.TYPE_CHANGE_IN_WORKDIR),
        (" A", StatusFlags.NEW_IN_WORKDIR),
        ("UU", StatusFlags.CONFLICTED),
        ("AA", StatusFlags.CONFLICTED),
        ("DU", StatusFlags.CONFLICTED),
    ],
)
def test_status_code_to_flags(code: str, expected: StatusFlags) -> None:
    assert status_code_to_flags(code) == expected


def test_parse_empty_output() -> None:
    assert parse_porcelain_status("") == []


def test_parse_nul_separated_records() -> None:
    output = " M Assets/Foo.png\0?? Assets/Foo.png.meta\0M  README.md\0"

    entries = parse_porcelain_status(output)

    assert entries == [
        RawStatusEntry("Assets/Foo.png", StatusFlags.MODIFIED_IN_WORKDIR),
        RawStatusEntry("Assets/Foo.png.meta", StatusFlags.NEW_IN_WORKDIR),
        RawStatusEntry("README.md", StatusFlags.MODIFIED_IN_INDEX),
    ]


def test_parse_rename_skips_source_path() -> None:
    output = "R  Assets/New.png\0Assets/Old.png\0 M b.txt\0"

    entries = parse_porcelain_status(output)

    assert entries == [
        RawStatusEntry("Assets/New.png", StatusFlags.RENAMED_IN_INDEX),
        RawStatusEntry("b.txt", StatusFlags.MODIFIED_IN_WORKDIR),
    ]


def test_parse_keeps_spaces_in_paths() -> None:
    entries = parse_porcelain_status("?? My Folder/a file.txt\0")

    assert entries == [RawStatusEntry("My Folder/a file.txt", StatusFlags.NEW_IN_WORKDIR)]
