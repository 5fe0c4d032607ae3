"""Combinable git status flags.

StatusFlags mirrors libgit2's status bits so a single path can carry several
statuses at once (e.g. staged and then modified again in the working tree).
Sorting by the integer value groups index changes before workdir changes.
"""

from collections.abc import Iterable
from enum import IntFlag


class StatusFlags(IntFlag):
    """Bitset of status kinds for one path."""

    UNALTERED = 0
    NEW_IN_INDEX = 1 << 0
    MODIFIED_IN_INDEX = 1 << 1
    DELETED_FROM_INDEX = 1 << 2
    RENAMED_IN_INDEX = 1 << 3
    TYPE_CHANGE_IN_INDEX = 1 << 4
    NEW_IN_WORKDIR = 1 << 7
    MODIFIED_IN_WORKDIR = 1 << 8
    DELETED_FROM_WORKDIR = 1 << 9
    TYPE_CHANGE_IN_WORKDIR = 1 << 10
    RENAMED_IN_WORKDIR = 1 << 11
    UNREADABLE = 1 << 12
    IGNORED = 1 << 14
    CONFLICTED = 1 << 15


# Single-bit members in bit order (UNALTERED excluded)
SINGLE_FLAGS: tuple[StatusFlags, ...] = tuple(
    flag for flag in StatusFlags.__members__.values() if flag.value != 0
)

ALL_STATUSES = StatusFlags(sum(flag.value for flag in SINGLE_FLAGS))
NO_STATUSES = StatusFlags.UNALTERED

INDEX_CHANGES = (
    StatusFlags.NEW_IN_INDEX
    | StatusFlags.MODIFIED_IN_INDEX
    | StatusFlags.DELETED_FROM_INDEX
    | StatusFlags.RENAMED_IN_INDEX
    | StatusFlags.TYPE_CHANGE_IN_INDEX
)

WORKDIR_CHANGES = (
    StatusFlags.NEW_IN_WORKDIR
    | StatusFlags.MODIFIED_IN_WORKDIR
    | StatusFlags.DELETED_FROM_WORKDIR
    | StatusFlags.RENAMED_IN_WORKDIR
    | StatusFlags.TYPE_CHANGE_IN_WORKDIR
)

_INDEX_BADGES: tuple[tuple[StatusFlags, str], ...] = (
    (StatusFlags.NEW_IN_INDEX, "A"),
    (StatusFlags.MODIFIED_IN_INDEX, "M"),
    (StatusFlags.DELETED_FROM_INDEX, "D"),
    (StatusFlags.RENAMED_IN_INDEX, "R"),
    (StatusFlags.TYPE_CHANGE_IN_INDEX, "T"),
)

_WORKDIR_BADGES: tuple[tuple[StatusFlags, str], ...] = (
    (StatusFlags.NEW_IN_WORKDIR, "?"),
    (StatusFlags.MODIFIED_IN_WORKDIR, "M"),
    (StatusFlags.DELETED_FROM_WORKDIR, "D"),
    (StatusFlags.RENAMED_IN_WORKDIR, "R"),
    (StatusFlags.TYPE_CHANGE_IN_WORKDIR, "T"),
)


def is_flag_set(flags: StatusFlags, mask: StatusFlags) -> bool:
    """Return True if any bit of mask is present in flags."""
    return (flags & mask) != 0


def are_not_set(flags: StatusFlags, *masks: StatusFlags) -> bool:
    """Return True if none of the given bits is present in flags."""
    return all((flags & mask) == 0 for mask in masks)


def set_flags(flags: StatusFlags, mask: StatusFlags, value: bool = True) -> StatusFlags:
    """Return flags with the bits of mask set (value=True) or cleared."""
    if value:
        return StatusFlags(flags | mask)
    return StatusFlags(flags & ~mask & ALL_STATUSES)


def combine_flags(flags: Iterable[StatusFlags]) -> StatusFlags:
    """OR all flags together."""
    combined = NO_STATUSES
    for flag in flags:
        combined |= flag
    return StatusFlags(combined)


def can_stage(flags: StatusFlags) -> bool:
    return is_flag_set(flags, WORKDIR_CHANGES)


def can_unstage(flags: StatusFlags) -> bool:
    return is_flag_set(flags, INDEX_CHANGES)


def can_blame(flags: StatusFlags) -> bool:
    """Blame needs a committed version, so new and ignored paths are excluded."""
    return are_not_set(
        flags,
        StatusFlags.NEW_IN_INDEX,
        StatusFlags.IGNORED,
        StatusFlags.NEW_IN_WORKDIR,
    )


def flag_names(flags: StatusFlags) -> list[str]:
    """Names of the individual bits set in flags, in bit order.

    Returns ["UNALTERED"] when no bit is set.
    """
    names = [flag.name for flag in SINGLE_FLAGS if flags & flag and flag.name is not None]
    if not names:
        return [StatusFlags.UNALTERED.name or "UNALTERED"]
    return names


def parse_flag_names(names: Iterable[str]) -> StatusFlags:
    """Parse flag names back into a StatusFlags value.

    Accepts member names case-insensitively plus the special names "all" and
    "none". Blank names are ignored.

    Raises:
        ValueError: If a name is not a StatusFlags member
    """
    result = NO_STATUSES
    for raw_name in names:
        name = raw_name.strip().upper().replace("-", "_")
        if not name:
            continue
        if name == "ALL":
            result |= ALL_STATUSES
            continue
        if name == "NONE":
            continue
        if name not in StatusFlags.__members__:
            valid = ", ".join(StatusFlags.__members__)
            raise ValueError(f"Unknown status flag '{raw_name}'. Valid flags: {valid}")
        result |= StatusFlags[name]
    return StatusFlags(result)


def status_badge(flags: StatusFlags) -> str:
    """Short porcelain-like badge, index letters first then workdir letters."""
    if flags & StatusFlags.CONFLICTED:
        return "U"
    if flags & StatusFlags.IGNORED:
        return "!"

    index = "".join(letter for flag, letter in _INDEX_BADGES if flags & flag)
    workdir = "".join(letter for flag, letter in _WORKDIR_BADGES if flags & flag)
    return (index + workdir) or " "
