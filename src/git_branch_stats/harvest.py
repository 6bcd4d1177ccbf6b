from __future__ import annotations

import dataclasses
import os
from concurrent.futures import ThreadPoolExecutor

from .git import BranchQueries
from .models import ChangedFile, DiffBoundary, IsolationResult

ROOT_COMMIT_WARNING = (
    "WARN: Branch has independent commits since the first commit of the repo, "
    "stats will be skewed (can't run stats *before* the first commit)"
)


def resolve_boundary(vcs: BranchQueries, isolation: IsolationResult) -> DiffBoundary:
    oldest = isolation.oldest
    if oldest is None:
        raise ValueError("isolation has no commits to diff")
    origin = f"{oldest}~"
    if vcs.rev_exists(origin):
        return DiffBoundary(origin=origin)
    # The oldest commit is a root commit: diff from it instead, which drops its own changes.
    return DiffBoundary(origin=oldest, commit_adjustment=-1, warnings=(ROOT_COMMIT_WARNING,))


def _count(value: bytes) -> int:
    try:
        n = int(value.strip())
    except ValueError:
        return 0
    return max(n, 0)


def parse_numstat(data: bytes) -> list[ChangedFile]:
    """
    Parse `git diff --numstat -z` output.

    Records are NUL terminated: `added\\tdeleted\\tpath`, or for renames
    `added\\tdeleted\\t` followed by the old and new path as two more fields.
    Binary files report "-" for both counts; those and any other non-numeric
    count become 0. Paths are decoded with the filesystem encoding so they
    round-trip unchanged into later git calls.
    """
    fields = data.split(b"\0")
    files: list[ChangedFile] = []
    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        parts = record.split(b"\t", 2)
        if len(parts) < 3:
            continue
        added_s, deleted_s, raw_path = parts
        old_path: str | None = None
        if not raw_path:
            if i + 1 >= len(fields):
                break
            old_path, raw_path = os.fsdecode(fields[i]), fields[i + 1]
            i += 2
            if not raw_path:
                continue
        files.append(
            ChangedFile(
                path=os.fsdecode(raw_path),
                additions=_count(added_s),
                deletions=_count(deleted_s),
                old_path=old_path,
            )
        )
    return files


def list_changed_files(vcs: BranchQueries, origin: str, tip: str) -> list[ChangedFile]:
    return parse_numstat(vcs.diff_numstat(origin, tip))


def extract_added_lines(diff: bytes) -> bytes:
    # Only "\n" ends a diff line. A line is kept when one "+" is followed by anything
    # but another "+", so "+++ b/path" headers and "++" lines never match. An added
    # blank line ("+" then the newline) is kept as an empty line.
    added: list[bytes] = []
    lines = diff.split(b"\n")
    last = len(lines) - 1
    for n, line in enumerate(lines):
        if not line.startswith(b"+"):
            continue
        rest = line[1:]
        if rest.startswith(b"+") or (not rest and n == last):
            continue
        added.append(rest)
    return b"\n".join(added)


def fill_added_content(vcs: BranchQueries, origin: str, tip: str, changed: ChangedFile) -> ChangedFile:
    if changed.additions <= 0:
        return changed
    diff = vcs.diff_file(origin, tip, changed.path, changed.old_path)
    return dataclasses.replace(changed, added_content=extract_added_lines(diff))


def fill_added_contents(
    vcs: BranchQueries,
    origin: str,
    tip: str,
    files: list[ChangedFile],
    jobs: int = 1,
) -> list[ChangedFile]:
    if jobs <= 1 or len(files) <= 1:
        return [fill_added_content(vcs, origin, tip, f) for f in files]
    with ThreadPoolExecutor(max_workers=jobs) as ex:
        return list(ex.map(lambda f: fill_added_content(vcs, origin, tip, f), files))
