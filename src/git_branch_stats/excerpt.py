from __future__ import annotations

from .models import ExcerptUnit


def make_excerpt(path: str, content: str | bytes) -> ExcerptUnit:
    """
    Wrap a partial file (e.g. only the lines a branch added) so it can be classified
    as if it were the file at `path`. The path is only an identity for extension and
    shebang lookup; size is the excerpt's byte length, never the size on disk.
    """
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
    return ExcerptUnit(path=path, content=data, size=len(data))
