from __future__ import annotations

from typing import Any, Iterable, Mapping

from expense_analytics.analytics.models import TransactionRecord, ensure_records
from expense_analytics.nlq.text_norm import significant_words, words

MIN_TOKEN_LEN = 3


def category_vocabulary(records: Iterable[TransactionRecord | Mapping[str, Any]]) -> list[str]:
    """Distinct category labels in the order the snapshot first mentions them."""
    seen: list[str] = []
    for r in ensure_records(records):
        label = r.category
        if label and label.strip() and label not in seen:
            seen.append(label)
    return seen


def detect_category(message: str, categories: Iterable[str]) -> str | None:
    """
    First category (in vocabulary order) mentioned by the message.

    A label matches when the whole label occurs in the message, or when any
    of its words longer than two characters occurs as a word of the message.
    When several labels could match, the earliest one in `categories` wins.
    """
    lowered = (message or "").casefold()
    if not lowered.strip():
        return None

    message_words = set(words(lowered))

    for category in categories:
        normalized = (category or "").strip().casefold()
        if not normalized:
            continue

        if normalized in lowered:
            return category

        if any(w in message_words for w in significant_words(normalized, MIN_TOKEN_LEN)):
            return category

    return None
