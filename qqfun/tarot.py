"""Major arcana tarot draws and card meanings."""

from __future__ import annotations

import json
import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
DECK_SIZE = 22
MAX_DRAW = 20
REASONS = ("您抽到的是~\n", "锵锵锵，塔罗牌的预言是~\n", "诶，让我看看您抽到了~\n")
POSITIONS = ("正位", "逆位")
REVERSE = ("", "Reverse")


@dataclass(frozen=True)
class Card:
    """One card with its upright and reversed meanings."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""

    @property
    def short_name(self) -> str:
        """The name without its parenthesised suffix."""
        return self.name.split("(")[0]


_BLANK = Card("")


def load_deck(data: bytes | str) -> dict[str, Card]:
    """Parse the card file: a JSON object of index to ``{name, info}``."""
    raw: dict[str, Any] = json.loads(data)
    deck = {}
    for key, entry in raw.items():
        info = entry.get("info") or {}
        deck[key] = Card(
            name=entry.get("name", ""),
            description=info.get("description", ""),
            reverse_description=info.get("reverseDescription", ""),
            img_url=info.get("imgUrl", ""),
        )
    return deck


def parse_count(match: str) -> int:
    """Number of cards asked for by a ``N张`` fragment; one when empty."""
    if not match:
        return 1
    return int(match[:-1])


class TarotDeck:
    """The 22 major arcana, indexed by their number as a string."""

    def __init__(self, cards: Mapping[str, Card]) -> None:
        self.cards = dict(cards)
        self._meanings = {card.short_name: card for card in self.cards.values()}

    def _one(self, index: int, rng: Any) -> tuple[str, str]:
        p = rng.randrange(2)
        name = self.cards.get(str(index), _BLANK).name
        text = f"{REASONS[rng.randrange(len(REASONS))]}{POSITIONS[p]} 的 {name}\n"
        image = f"{BED}MajorArcana{REVERSE[p]}/{index}.png"
        return text, image

    def draw(self, n: int = 1, rng: Any = None, in_group: bool = True) -> list[tuple[str, str]]:
        """Draw ``n`` distinct cards; return (text, image URL) for each.

        Raises ValueError for a count that is not positive, too large, or
        above one outside a group.
        """
        rng = rng or random
        if n <= 0:
            raise ValueError("张数必须为正")
        if n > 1 and not in_group:
            raise ValueError("抽取多张仅支持群聊")
        if n > MAX_DRAW:
            raise ValueError("抽取张数过多")
        if n == 1:
            return [self._one(rng.randrange(DECK_SIZE), rng)]
        drawn: set[int] = set()
        result = []
        for _ in range(n):
            j = rng.randrange(DECK_SIZE)
            while j in drawn:
                j = rng.randrange(DECK_SIZE)
            drawn.add(j)
            result.append(self._one(j, rng))
        return result

    def explain(self, name: str) -> tuple[str | None, str]:
        """Meaning of a card by its short name: (image URL or None, text)."""
        card = self._meanings.get(name)
        if card is None:
            return None, f"没有找到{name}噢~"
        text = (
            f"\n{name}的含义是~"
            f"\n正位:{card.description}"
            f"\n逆位:{card.reverse_description}"
        )
        return BED + card.img_url, text