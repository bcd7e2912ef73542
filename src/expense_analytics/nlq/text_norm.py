from __future__ import annotations

import re

_WORD_RE = re.compile(r"[^\W_]+", re.UNICODE)


def words(s: str) -> list[str]:
    """Case-folded alphanumeric runs; underscores and punctuation split words."""
    return _WORD_RE.findall((s or "").casefold())


def significant_words(s: str, min_len: int = 3) -> list[str]:
    return [w for w in words(s) if len(w) >= min_len]
