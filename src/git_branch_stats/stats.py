from __future__ import annotations

from typing import Callable

from .aggregate import Classify, LanguageTally, aggregate
from .excerpt import make_excerpt
from .git import BranchQueries, UnknownRevisionError
from .harvest import fill_added_contents, list_changed_files, resolve_boundary
from .isolation import resolve_isolation
from .languages import LanguageClassifier
from .models import BranchStatsReport, ChangedFile, DiffBoundary, IsolationResult

NO_COMMITS_WARNING = "WARN: Branch has no independent commits (everything is reachable from another branch)"


def assemble(
    isolation: IsolationResult,
    boundary: DiffBoundary,
    changed_files: list[ChangedFile],
    tally: LanguageTally,
) -> BranchStatsReport:
    return BranchStatsReport(
        commits=max(0, len(isolation.commit_hashes) + boundary.commit_adjustment),
        additions=sum(f.additions for f in changed_files),
        deletions=sum(f.deletions for f in changed_files),
        files_changed=len(changed_files),
        language_stats=tuple(tally.ranked()),
        emails=isolation.author_emails,
        warnings=boundary.warnings,
    )


def analyze_branch(
    vcs: BranchQueries,
    branch: str | None = None,
    *,
    classify: Classify | None = None,
    jobs: int = 1,
    progress: Callable[[str], None] | None = None,
) -> BranchStatsReport:
    def note(msg: str) -> None:
        if progress is not None:
            progress(msg)

    target = branch or vcs.current_branch()
    if not vcs.rev_exists(target):
        raise UnknownRevisionError(target)
    if classify is None:
        classify = LanguageClassifier().classify

    branches = vcs.list_branches()
    isolation = resolve_isolation(vcs, target, branches)
    note(f"Branch {target}: {len(isolation.commit_hashes)} independent commit(s) across {len(branches)} branch(es)")
    if not isolation.commit_hashes:
        return BranchStatsReport(warnings=(NO_COMMITS_WARNING,))

    boundary = resolve_boundary(vcs, isolation)
    files = list_changed_files(vcs, boundary.origin, target)
    note(f"Diffing {boundary.origin}..{target}: {len(files)} changed file(s)")
    files = fill_added_contents(vcs, boundary.origin, target, files, jobs=jobs)

    units = [make_excerpt(f.path, f.added_content or b"") for f in files if f.additions > 0]
    tally = aggregate(units, classify)
    return assemble(isolation, boundary, files, tally)
