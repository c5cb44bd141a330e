"""Reincarnation lottery: a weighted draw of a birth country and a gender."""

from __future__ import annotations

import bisect
import json
import random
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Generic, TypeVar

T = TypeVar("T")

FAIL_THRESHOLD = 1 << 27
SUCCESS_TEXT = "投胎成功！\n您出生在 {country}, 是 {gender}。"
FAIL_TEXT = "投胎失败！\n您没能活到出生，祝您下次好运！"


class WeightedChooser(Generic[T]):
    """Pick items at random with probability proportional to integer weights."""

    def __init__(self, choices: Iterable[tuple[T, int]]) -> None:
        ordered = sorted(choices, key=lambda c: c[1])
        self._items: list[T] = []
        self._totals: list[int] = []
        total = 0
        for item, weight in ordered:
            if weight < 0:
                raise ValueError(f"negative weight for {item!r}")
            total += int(weight)
            self._items.append(item)
            self._totals.append(total)
        if total < 1:
            raise ValueError("zero Choices with Weight >= 1")
        self._total = total

    def pick(self, rng: Any = None) -> T:
        """Draw one item."""
        rng = rng or random
        r = rng.randrange(self._total) + 1
        return self._items[bisect.bisect_left(self._totals, r)]


GENDERS: WeightedChooser[str] = WeightedChooser(
    [("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001)]
)


def load_rates(path: str | Path) -> list[tuple[str, float]]:
    """Read a JSON list of ``{"name", "weight"}`` records."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [(entry.get("name", ""), float(entry.get("weight", 0.0))) for entry in data]


def country_chooser(rates: Iterable[tuple[str, float]]) -> WeightedChooser[str]:
    """Build a chooser from fractional country weights (scaled by 1e9)."""
    return WeightedChooser((name, int(weight * 1e9)) for name, weight in rates)


def reborn(countries: WeightedChooser[str], rng: Any = None) -> str:
    """Play one round and return the reply text."""
    rng = rng or random
    if rng.randrange(1 << 31) > FAIL_THRESHOLD:
        return SUCCESS_TEXT.format(country=countries.pick(rng), gender=GENDERS.pick(rng))
    return FAIL_TEXT