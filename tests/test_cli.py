from __future__ import annotations

import json
from pathlib import Path

import pytest

from git_branch_stats import __version__
from git_branch_stats.cli import main
from tests._fixtures.repos import GitRepoBuilder


def _feature_repo(repo_builder: GitRepoBuilder) -> Path:
    repo_builder.commit({"README.md": "# demo\n"}, "init")
    repo_builder.checkout("feature", create=True)
    repo_builder.commit({"app.py": "print('hi')\n", "vendor/lib.py": "x = 1\n"}, "work", email="dev@example.com")
    return repo_builder.root


def test_json_report_for_current_branch(repo_builder: GitRepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    root = _feature_repo(repo_builder)
    assert main(["--repo", str(root)]) == 0
    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert data == {
        "commits": 1,
        "additions": 2,
        "deletions": 0,
        "files_changed": 2,
        "language_stats": [["Python", len("print('hi')")]],
        "emails": ["dev@example.com"],
        "warnings": [],
    }
    assert "Branch feature" in captured.err


def test_text_output_and_report_file(repo_builder: GitRepoBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = _feature_repo(repo_builder)
    out_file = tmp_path / "out" / "report.json"
    assert main(["feature", "--repo", str(root), "--format", "text", "--output", str(out_file), "--quiet"]) == 0
    captured = capsys.readouterr()
    assert "== feature ==" in captured.out
    assert "- commits: 1" in captured.out
    assert "Python" in captured.out
    assert captured.err == ""
    assert json.loads(out_file.read_text(encoding="utf-8"))["files_changed"] == 2


def test_config_file_marks_extra_vendored_paths(repo_builder: GitRepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    root = _feature_repo(repo_builder)
    (root / ".git-branch-stats.json").write_text(json.dumps({"vendored_path_globs": ["app.py"], "jobs": 2}), encoding="utf-8")
    assert main(["feature", "--repo", str(root), "--quiet"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["language_stats"] == []
    assert data["files_changed"] == 2


def test_unknown_branch_exits_with_error(repo_builder: GitRepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    root = _feature_repo(repo_builder)
    assert main(["does-not-exist", "--repo", str(root)]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error:" in captured.err
    assert "does-not-exist" in captured.err


def test_not_a_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    plain = tmp_path / "plain"
    plain.mkdir()
    assert main(["--repo", str(plain)]) == 2
    assert "not a git repository" in capsys.readouterr().err


def test_root_commit_warning_echoed_on_stderr(repo_builder: GitRepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    repo_builder.commit({"a.py": "a = 1\n"}, "init")
    repo_builder.commit({"b.py": "b = 2\n"}, "next")
    assert main(["--repo", str(repo_builder.root)]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["commits"] == 1
    assert "[WARN] Branch has independent commits since the first commit" in captured.err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
