from __future__ import annotations

import dataclasses
from collections import defaultdict
from typing import Callable, Iterable

from .languages import Classification
from .models import ExcerptUnit

Classify = Callable[[str, bytes], Classification]


def rank_sizes(sizes: dict[str, int]) -> list[tuple[str, int]]:
    # Largest first; equal sizes fall back to the language name so output is stable.
    return sorted(sizes.items(), key=lambda kv: (-kv[1], kv[0]))


@dataclasses.dataclass(frozen=True)
class LanguageTally:
    sizes: dict[str, int] = dataclasses.field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.sizes.values())

    @property
    def dominant(self) -> str | None:
        ranked = self.ranked()
        return ranked[0][0] if ranked else None

    def ranked(self) -> list[tuple[str, int]]:
        return rank_sizes(self.sizes)


def aggregate(units: Iterable[ExcerptUnit], classify: Classify) -> LanguageTally:
    sizes: dict[str, int] = defaultdict(int)
    for unit in units:
        c = classify(unit.path, unit.content)
        if not c.countable or c.language is None:
            continue
        if unit.size > 0:
            sizes[c.language.group] += unit.size
    return LanguageTally(dict(sizes))


def merge_tallies(*tallies: LanguageTally) -> LanguageTally:
    sizes: dict[str, int] = defaultdict(int)
    for t in tallies:
        for name, size in t.sizes.items():
            sizes[name] += size
    return LanguageTally(dict(sizes))
