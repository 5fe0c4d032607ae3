"""Parsing of `git status --porcelain=v1 -z` output into status flags."""

from metagit.core.status_flags import StatusFlags
from metagit.status.models.status_data import RawStatusEntry

_UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})

_INDEX_FLAGS: dict[str, StatusFlags] = {
    "A": StatusFlags.NEW_IN_INDEX,
    "M": StatusFlags.MODIFIED_IN_INDEX,
    "D": StatusFlags.DELETED_FROM_INDEX,
    "R": StatusFlags.RENAMED_IN_INDEX,
    "C": StatusFlags.NEW_IN_INDEX,
    "T": StatusFlags.TYPE_CHANGE_IN_INDEX,
}

_WORKDIR_FLAGS: dict[str, StatusFlags] = {
    "M": StatusFlags.MODIFIED_IN_WORKDIR,
    "D": StatusFlags.DELETED_FROM_WORKDIR,
    "R": StatusFlags.RENAMED_IN_WORKDIR,
    "T": StatusFlags.TYPE_CHANGE_IN_WORKDIR,
    # Intent-to-add (git add -N) shows as " A"
    "A": StatusFlags.NEW_IN_WORKDIR,
}


def status_code_to_flags(code: str) -> StatusFlags:
    """Translate a two-character porcelain XY code into StatusFlags."""
    if code == "??":
        return StatusFlags.NEW_IN_WORKDIR
    if code == "!!":
        return StatusFlags.IGNORED
    if code in _UNMERGED_CODES:
        return StatusFlags.CONFLICTED

    index_code, workdir_code = code[0], code[1]
    flags = StatusFlags.UNALTERED
    flags |= _INDEX_FLAGS.get(index_code, StatusFlags.UNALTERED)
    flags |= _WORKDIR_FLAGS.get(workdir_code, StatusFlags.UNALTERED)
    return StatusFlags(flags)


def parse_porcelain_status(output: str) -> list[RawStatusEntry]:
    """Parse NUL-separated porcelain v1 output.

    Each record is "XY <path>". Rename and copy records are followed by an
    extra token holding the source path; the first path is the destination.
    """
    entries: list[RawStatusEntry] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        path = token[3:]
        entries.append(RawStatusEntry(path=path, flags=status_code_to_flags(code)))

        if "R" in code or "C" in code:
            index += 1

    return entries
