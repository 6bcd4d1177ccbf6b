from __future__ import annotations

import dataclasses
import json
from pathlib import Path

from .languages import DEFAULT_GENERATED_GLOBS, DEFAULT_VENDORED_GLOBS, DEFAULT_VENDORED_PREFIXES, LanguageClassifier

DEFAULT_CONFIG_NAME = ".git-branch-stats.json"


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    data = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config must be a JSON object: {config_path}")
    return data


@dataclasses.dataclass(frozen=True)
class BranchStatsSettings:
    jobs: int = 1
    git_timeout_s: int = 300
    vendored_path_prefixes: tuple[str, ...] = ()
    vendored_path_globs: tuple[str, ...] = ()
    generated_path_globs: tuple[str, ...] = ()
    extension_languages: tuple[tuple[str, str], ...] = ()

    def classifier(self) -> LanguageClassifier:
        return LanguageClassifier(
            vendored_prefixes=DEFAULT_VENDORED_PREFIXES + self.vendored_path_prefixes,
            vendored_globs=DEFAULT_VENDORED_GLOBS + self.vendored_path_globs,
            generated_globs=DEFAULT_GENERATED_GLOBS + self.generated_path_globs,
            extension_languages=self.extension_languages,
        )


def _str_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v).strip() for v in value if str(v).strip())


def _positive_int(value: object, default: int) -> int:
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def settings_from_config(config: dict) -> BranchStatsSettings:
    ext_langs: list[tuple[str, str]] = []
    raw = config.get("extension_languages") or {}
    if isinstance(raw, dict):
        for ext, name in raw.items():
            ext = str(ext).strip().lower()
            name = str(name or "").strip()
            if not ext or not name:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            ext_langs.append((ext, name))

    return BranchStatsSettings(
        jobs=_positive_int(config.get("jobs"), 1),
        git_timeout_s=_positive_int(config.get("git_timeout_s"), 300),
        vendored_path_prefixes=_str_list(config.get("vendored_path_prefixes")),
        vendored_path_globs=_str_list(config.get("vendored_path_globs")),
        generated_path_globs=_str_list(config.get("generated_path_globs")),
        extension_languages=tuple(ext_langs),
    )
