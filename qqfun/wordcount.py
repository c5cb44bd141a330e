"""Hot words of a group chat: counting and ranking Chinese word slices."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Mapping

TOP_N = 20
MAX_MESSAGES = 10000
DEFAULT_MESSAGES = 1000
_CHINESE = re.compile(r"^[一-龥]+$")


def rank_by_word_count(freqs: Mapping[str, int]) -> list[tuple[str, int]]:
    """Words with their counts, most frequent first."""
    return sorted(freqs.items(), key=lambda kv: (-kv[1], kv[0]))


def count_words(slices: Iterable[str], stopwords: Iterable[str]) -> Counter[str]:
    """Count the all-Chinese word slices that are not stop words."""
    stop = set(stopwords)
    counts: Counter[str] = Counter()
    for piece in slices:
        word = piece.strip()
        if _CHINESE.match(word) and word not in stop:
            counts[word] += 1
    return counts


def clamp_message_count(p: int) -> int:
    """How many messages to read: at most 10000, 1000 when unspecified."""
    if p > MAX_MESSAGES:
        return MAX_MESSAGES
    if p == 0:
        return DEFAULT_MESSAGES
    return p