from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Protocol


class GitError(RuntimeError):
    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        self.git_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip()[:500]
        msg = f"git {' '.join(args)} exited {returncode}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnknownRevisionError(GitError):
    def __init__(self, rev: str) -> None:
        super().__init__(["rev-parse", "--verify", rev], 1, f"unknown revision: {rev}")
        self.rev = rev


def run_git_bytes(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, bytes, bytes]:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            timeout=timeout_s,
        )
    except FileNotFoundError as e:
        raise GitError(args, 127, f"git executable not found: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise GitError(args, -1, f"timed out after {timeout_s}s") from e
    return proc.returncode, proc.stdout, proc.stderr


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    code, out, err = run_git_bytes(args, cwd, timeout_s)
    return code, out.decode("utf-8", errors="replace"), err.decode("utf-8", errors="replace")


def get_repo_toplevel(candidate: Path) -> Optional[Path]:
    code, out, _ = run_git(["rev-parse", "--show-toplevel"], cwd=candidate)
    if code != 0:
        return None
    try:
        return Path(out.strip()).resolve()
    except Exception:
        return None


class BranchQueries(Protocol):
    """The git queries the branch analysis needs; `GitRepo` is the real one."""

    def current_branch(self) -> str: ...

    def list_branches(self) -> list[str]: ...

    def log_commits(self, ref: str, exclude_refs: list[str]) -> list[tuple[str, str]]: ...

    def rev_exists(self, rev: str) -> bool: ...

    def diff_numstat(self, origin: str, tip: str) -> bytes: ...

    def diff_file(self, origin: str, tip: str, path: str, old_path: str | None = None) -> bytes: ...


class GitRepo:
    def __init__(self, path: Path, timeout_s: int = 300) -> None:
        self.path = path
        self.timeout_s = timeout_s

    def _git_bytes(self, args: list[str]) -> bytes:
        code, out, err = run_git_bytes(["-c", "core.quotepath=off", *args], cwd=self.path, timeout_s=self.timeout_s)
        if code != 0:
            raise GitError(args, code, err.decode("utf-8", errors="replace"))
        return out

    def _git(self, args: list[str]) -> str:
        return self._git_bytes(args).decode("utf-8", errors="replace")

    def current_branch(self) -> str:
        return self._git(["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def list_branches(self) -> list[str]:
        out = self._git(["for-each-ref", "--format=%(refname:short)", "refs/heads"])
        return [line.strip() for line in out.split("\n") if line.strip()]

    def log_commits(self, ref: str, exclude_refs: list[str]) -> list[tuple[str, str]]:
        args = ["log", "--no-merges", "--format=%H%x09%ae", ref]
        if exclude_refs:
            args += ["--not", *exclude_refs]
        args.append("--")
        out = self._git(args)
        commits: list[tuple[str, str]] = []
        for line in out.split("\n"):
            line = line.strip()
            if not line:
                continue
            sha, _, email = line.partition("\t")
            commits.append((sha, email.strip()))
        return commits

    def rev_exists(self, rev: str) -> bool:
        code, _, _ = run_git(
            ["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"],
            cwd=self.path,
            timeout_s=self.timeout_s,
        )
        return code == 0

    def diff_numstat(self, origin: str, tip: str) -> bytes:
        # -z: paths are never quoted, renames come as separate old/new fields
        return self._git_bytes(["diff", "--numstat", "-z", "-M", origin, tip, "--"])

    def diff_file(self, origin: str, tip: str, path: str, old_path: str | None = None) -> bytes:
        paths = [old_path, path] if old_path and old_path != path else [path]
        return self._git_bytes(["--literal-pathspecs", "diff", "--no-color", "--no-ext-diff", "-M", origin, tip, "--", *paths])
