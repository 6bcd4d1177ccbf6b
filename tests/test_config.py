from __future__ import annotations

import json
from pathlib import Path

import pytest

from git_branch_stats.config import BranchStatsSettings, load_config, settings_from_config
from git_branch_stats.languages import Language


def test_missing_config_is_empty(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nope.json") == {}
    assert settings_from_config({}) == BranchStatsSettings()


def test_non_object_config_rejected(tmp_path: Path) -> None:
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)


def test_settings_from_config(tmp_path: Path) -> None:
    p = tmp_path / "cfg.json"
    p.write_text(
        json.dumps(
            {
                "jobs": 4,
                "git_timeout_s": "oops",
                "vendored_path_prefixes": ["libs", ""],
                "generated_path_globs": ["*.gen.py"],
                "extension_languages": {"tpl": "Smarty", ".X": "Xtend", "": "Nothing"},
                "unknown": True,
            }
        ),
        encoding="utf-8",
    )
    settings = settings_from_config(load_config(p))
    assert settings.jobs == 4
    assert settings.git_timeout_s == 300
    assert settings.vendored_path_prefixes == ("libs",)
    assert settings.extension_languages == ((".tpl", "Smarty"), (".x", "Xtend"))

    classifier = settings.classifier()
    assert classifier.is_vendored("libs/a.py") is True
    assert classifier.is_vendored("vendor/a.py") is True
    assert classifier.is_generated("src/model.gen.py", b"") is True
    assert classifier.language_for("page.tpl") == Language("Smarty")


def test_bad_jobs_fall_back_to_default() -> None:
    assert settings_from_config({"jobs": 0}).jobs == 1
    assert settings_from_config({"jobs": None}).jobs == 1
