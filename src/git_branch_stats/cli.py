from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import DEFAULT_CONFIG_NAME, load_config, settings_from_config
from .git import GitError, GitRepo, get_repo_toplevel
from .render import render_text, report_json, warning_line, write_json
from .stats import analyze_branch


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-branch-stats",
        description="Report commits, line changes, authors and languages unique to one git branch.",
    )
    parser.add_argument("branch", nargs="?", default=None, help="Branch to analyze (default: current branch).")
    parser.add_argument("--repo", type=Path, default=Path("."), help="Path inside the git repository.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to a JSON config (default: {DEFAULT_CONFIG_NAME} at the repository top level).",
    )
    parser.add_argument("--jobs", type=int, default=0, help="Parallel per-file diffs (0 = use config, default 1).")
    parser.add_argument("--format", choices=["json", "text"], default="json", help="Output format for stdout.")
    parser.add_argument("--output", type=Path, default=None, help="Also write the JSON report to this file.")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress and warning lines on stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(argv)

    def progress(msg: str) -> None:
        if not args.quiet:
            print(msg, file=sys.stderr)

    try:
        top = get_repo_toplevel(args.repo.resolve())
        if top is None:
            print(f"error: not a git repository: {args.repo}", file=sys.stderr)
            return 2
        config_path = args.config if args.config is not None else top / DEFAULT_CONFIG_NAME
        settings = settings_from_config(load_config(config_path))
        jobs = args.jobs if args.jobs > 0 else settings.jobs

        repo = GitRepo(top, timeout_s=settings.git_timeout_s)
        branch = args.branch or repo.current_branch()
        report = analyze_branch(
            repo,
            branch,
            classify=settings.classifier().classify,
            jobs=jobs,
            progress=progress,
        )
    except GitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for w in report.warnings:
        progress(warning_line(w))
    if args.output is not None:
        write_json(args.output, report)
        progress(f"Wrote report: {args.output}")
    if args.format == "text":
        sys.stdout.write(render_text(report, branch=branch))
    else:
        sys.stdout.write(report_json(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
