"""Wordle: guess an English word letter by letter."""

from __future__ import annotations

import bisect
from collections.abc import Iterable
from enum import Enum


class Mark(Enum):
    """How one cell of the board is coloured."""

    MATCH = 0
    EXIST = 1
    NOTEXIST = 2
    UNDONE = 3


COLORS: dict[Mark, tuple[int, int, int, int]] = {
    Mark.MATCH: (125, 166, 108, 255),
    Mark.EXIST: (199, 183, 96, 255),
    Mark.NOTEXIST: (123, 123, 123, 255),
    Mark.UNDONE: (219, 219, 219, 255),
}

CLASSES: dict[str, int] = {"": 5, "五阶": 5, "六阶": 6, "七阶": 7}


class WordleError(Exception):
    """A guess that the game rejects or that ends it."""


class LengthNotEnough(WordleError):
    """The guess has the wrong length."""

    def __init__(self) -> None:
        super().__init__("length not enough")


class UnknownWord(WordleError):
    """The guess is not in the dictionary."""

    def __init__(self) -> None:
        super().__init__("unknown word")


class TimesRunOut(WordleError):
    """The last allowed guess was used without finding the word."""

    def __init__(self) -> None:
        super().__init__("times run out")


def grade(target: str, guess: str) -> list[Mark]:
    """Mark each letter of ``guess`` against ``target``."""
    marks = []
    for j, ch in enumerate(guess):
        if j < len(target) and target[j] == ch:
            marks.append(Mark.MATCH)
        elif ch in target:
            marks.append(Mark.EXIST)
        else:
            marks.append(Mark.NOTEXIST)
    return marks


def load_words(text: str) -> list[str]:
    """Split a word list file into a sorted list of lines."""
    return sorted(text.replace("\r", "").split("\n"))


class WordleGame:
    """One round: ``len(target) + 1`` guesses to find ``target``."""

    def __init__(self, target: str, dictionary: Iterable[str]) -> None:
        self.target = target
        self._dictionary = sorted(dictionary)
        self.guesses: list[str] = []

    @property
    def chances(self) -> int:
        return len(self.target) + 1

    def _known(self, word: str) -> bool:
        i = bisect.bisect_left(self._dictionary, word)
        return i < len(self._dictionary) and self._dictionary[i] == word

    def guess(self, word: str) -> bool:
        """Record a guess; return True when it finds the word.

        Raises LengthNotEnough or UnknownWord for a rejected guess, and
        TimesRunOut when a wrong guess uses up the last chance.
        """
        word = word.lower()
        win = word == self.target
        if not win:
            if len(word) != len(self.target):
                raise LengthNotEnough()
            if not self._known(word):
                raise UnknownWord()
        self.guesses.append(word)
        if win:
            return True
        if len(self.guesses) >= self.chances:
            raise TimesRunOut()
        return False

    def grid(self) -> list[list[tuple[str, Mark]]]:
        """Board rows: graded upper-case letters, then empty undone rows."""
        rows = []
        for i in range(self.chances):
            if i < len(self.guesses):
                word = self.guesses[i]
                rows.append(list(zip(word.upper(), grade(self.target, word))))
            else:
                rows.append([("", Mark.UNDONE)] * len(self.target))
        return rows