from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class ChangedFile:
    path: str
    additions: int = 0
    deletions: int = 0
    added_content: bytes | None = None  # only filled when additions > 0
    old_path: str | None = None  # set for renames


@dataclasses.dataclass(frozen=True)
class ExcerptUnit:
    path: str
    content: bytes
    size: int


@dataclasses.dataclass(frozen=True)
class IsolationResult:
    commit_hashes: tuple[str, ...]  # newest first
    author_emails: tuple[str, ...]  # first occurrence order

    @property
    def oldest(self) -> str | None:
        return self.commit_hashes[-1] if self.commit_hashes else None


@dataclasses.dataclass(frozen=True)
class DiffBoundary:
    origin: str
    commit_adjustment: int = 0
    warnings: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class BranchStatsReport:
    commits: int = 0
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0
    language_stats: tuple[tuple[str, int], ...] = ()
    emails: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "commits": self.commits,
            "additions": self.additions,
            "deletions": self.deletions,
            "files_changed": self.files_changed,
            "language_stats": [[name, size] for name, size in self.language_stats],
            "emails": list(self.emails),
            "warnings": list(self.warnings),
        }
