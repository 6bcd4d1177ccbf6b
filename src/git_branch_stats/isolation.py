from __future__ import annotations

from .git import BranchQueries
from .models import IsolationResult


def other_branch_refs(target: str, all_branches: list[str]) -> list[str]:
    target_short = target[len("refs/heads/") :] if target.startswith("refs/heads/") else target
    return [f"refs/heads/{b}" for b in all_branches if b != target_short]


def resolve_isolation(vcs: BranchQueries, target: str, all_branches: list[str]) -> IsolationResult:
    """
    Non-merge commits reachable from `target` and from no other local branch, newest first.

    A repository with a single branch has nothing to compare against, so the whole
    non-merge history of `target` is returned.
    """
    if len(all_branches) == 1:
        records = vcs.log_commits(target, [])
    else:
        records = vcs.log_commits(target, other_branch_refs(target, all_branches))

    hashes = tuple(sha for sha, _email in records)
    emails = tuple(dict.fromkeys(email for _sha, email in records if email))
    return IsolationResult(commit_hashes=hashes, author_emails=emails)
