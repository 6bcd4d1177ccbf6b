from __future__ import annotations

import json
from pathlib import Path

from .models import BranchStatsReport


def report_json(report: BranchStatsReport) -> str:
    return json.dumps(report.to_dict(), indent=2, sort_keys=False) + "\n"


def write_json(path: Path, report: BranchStatsReport) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report_json(report), encoding="utf-8")


def warning_line(warning: str) -> str:
    w = warning.strip()
    if w.startswith("WARN:"):
        w = w[len("WARN:") :].strip()
    return f"[WARN] {w}"


def _human_bytes(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    if n < 1024 * 1024:
        return f"{n / 1024:.1f} KiB"
    return f"{n / (1024 * 1024):.1f} MiB"


def render_text(report: BranchStatsReport, branch: str = "") -> str:
    lines: list[str] = []
    if branch:
        lines.append(f"== {branch} ==")
    lines.append(f"- commits: {report.commits}")
    lines.append(f"- files changed: {report.files_changed}")
    lines.append(f"- additions/deletions: +{report.additions}/-{report.deletions}")
    if report.emails:
        lines.append(f"- authors: {', '.join(report.emails)}")

    if report.language_stats:
        total = sum(size for _name, size in report.language_stats)
        width = max(len(name) for name, _size in report.language_stats)
        lines.append("- languages:")
        for name, size in report.language_stats:
            share = (100.0 * size / total) if total else 0.0
            lines.append(f"    {name.ljust(width)}  {share:5.1f}%  {_human_bytes(size)}")
    lines.extend(warning_line(w) for w in report.warnings)
    return "\n".join(lines) + "\n"
