"""Daily sign-in and cookie score keeping, stored in SQLite."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

SIGNIN_MAX = 1
SCOREMAX = 120
LEVELS: tuple[int, ...] = (0, 1, 2, 5, 10, 20, 35, 55, 75, 100, 120)


@dataclass(frozen=True)
class SignIn:
    """A member's sign-in count and the moment it was last changed."""

    uid: int
    count: int
    updated_at: datetime

    def signed_on(self, day: datetime) -> bool:
        """True when the record was last updated on the calendar day of ``day``."""
        return self.updated_at.date() == day.date()


class ScoreDB:
    """Scores and sign-in counts per member."""

    def __init__(self, path: str | Path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS score "
                "(uid INTEGER PRIMARY KEY NOT NULL, score INTEGER NOT NULL DEFAULT 0)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS sign_in "
                "(uid INTEGER PRIMARY KEY NOT NULL, count INTEGER NOT NULL DEFAULT 0, "
                "updated_at TEXT NOT NULL)"
            )

    def __enter__(self) -> ScoreDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def get_score(self, uid: int) -> int:
        """Return a member's score, creating a zero entry if there is none."""
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT score FROM score WHERE uid = ?", (uid,)
            ).fetchone()
            if row is None:
                self._conn.execute("INSERT INTO score (uid, score) VALUES (?, 0)", (uid,))
                return 0
            return row[0]

    def set_score(self, uid: int, score: int) -> None:
        """Insert or update a member's score."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def get_sign_in(self, uid: int) -> SignIn:
        """Return a member's sign-in record, creating an empty one if missing."""
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
            ).fetchone()
            if row is None:
                now = datetime.now()
                self._conn.execute(
                    "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, 0, ?)",
                    (uid, now.isoformat()),
                )
                return SignIn(uid, 0, now)
            return SignIn(uid, row[0], datetime.fromisoformat(row[1]))

    def set_sign_in_count(self, uid: int, count: int, now: datetime | None = None) -> None:
        """Insert or update a member's sign-in count, stamping it with ``now``."""
        stamp = (now or datetime.now()).isoformat()
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, stamp),
            )

    def top_scores(self, n: int) -> list[tuple[int, int]]:
        """Return up to ``n`` (uid, score) pairs, highest score first."""
        with self._lock, self._conn:
            rows = self._conn.execute(
                "SELECT uid, score FROM score ORDER BY score DESC LIMIT ?", (n,)
            ).fetchall()
        return [(uid, score) for uid, score in rows]


def hour_word(t: datetime) -> str:
    """Greeting for the hour of ``t``."""
    h = t.hour
    if 6 <= h < 12:
        return "早上好"
    if 12 <= h < 14:
        return "中午好"
    if 14 <= h < 19:
        return "下午好"
    if 19 <= h < 24:
        return "晚上好"
    if 0 <= h < 6:
        return "凌晨好"
    return ""


def level_for(score: int) -> int:
    """Level reached with ``score``; -1 when it is beyond the table."""
    for level, threshold in enumerate(LEVELS):
        if score == threshold:
            return level
        if score < threshold:
            return level - 1
    return -1


def next_level_score(level: int) -> int:
    """Score needed for the level after ``level``."""
    if level < len(LEVELS) - 1:
        return LEVELS[level + 1]
    return SCOREMAX


def add_score(db: ScoreDB, uid: int, add: int) -> tuple[int, bool]:
    """Add to a member's score, capped at SCOREMAX.

    Returns the new score and whether the cap was hit.
    """
    score = db.get_score(uid) + add
    capped = score > SCOREMAX
    if capped:
        score = SCOREMAX
    db.set_score(uid, score)
    return score, capped