from __future__ import annotations

import fnmatch


def clean_path(path: str) -> str:
    p = path.replace("\\", "/").strip()
    while p.startswith("./"):
        p = p[2:]
    return p.lstrip("/")


def matches_path(path: str, prefixes: list[str] | tuple[str, ...], globs: list[str] | tuple[str, ...]) -> bool:
    """True when a directory prefix occurs anywhere in `path`, or a glob matches the path or its base name."""
    p = clean_path(path)
    base = p.rsplit("/", 1)[-1]
    for pref in prefixes:
        pr = clean_path(pref or "")
        if not pr:
            continue
        if not pr.endswith("/"):
            pr = pr + "/"
        if p.startswith(pr) or f"/{pr}" in p:
            return True
    for pat in globs:
        if pat and (fnmatch.fnmatch(p, pat) or fnmatch.fnmatch(base, pat)):
            return True
    return False
