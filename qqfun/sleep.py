"""Good-night and good-morning bookkeeping per group, stored in SQLite."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timedelta
from pathlib import Path

_EPOCH = datetime.min


def _stamp(t: datetime) -> str:
    return t.isoformat(sep=" ", timespec="microseconds")


def _parse(text: str) -> datetime:
    return datetime.fromisoformat(text)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class SleepDB:
    """Last good-night or good-morning time of every member of every group."""

    def __init__(self, path: str | Path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS sleep_manage ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, group_id INTEGER NOT NULL, "
                "user_id INTEGER NOT NULL, sleep_time TEXT NOT NULL)"
            )

    def __enter__(self) -> SleepDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def _record(self, gid: int, uid: int, now: datetime, since: datetime) -> tuple[int, timedelta]:
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT sleep_time FROM sleep_manage WHERE group_id = ? AND user_id = ? "
                "ORDER BY id LIMIT 1",
                (gid, uid),
            ).fetchone()
            delta = timedelta(0)
            if row is None:
                self._conn.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                delta = now - _parse(row[0])
                self._conn.execute(
                    "UPDATE sleep_manage SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
            (position,) = self._conn.execute(
                "SELECT COUNT(*) FROM sleep_manage WHERE group_id = ? "
                "AND sleep_time <= ? AND sleep_time >= ?",
                (gid, _stamp(now), _stamp(since)),
            ).fetchone()
        return position, delta

    def sleep(self, gid: int, uid: int, now: datetime | None = None) -> tuple[int, timedelta]:
        """Record a good night.

        Returns the member's place among tonight's sleepers (counted from
        21:00) and how long they were awake since their last record.
        """
        now = now or datetime.now()
        since = _EPOCH
        if now.hour >= 21:
            since = now - timedelta(hours=now.hour - 21, minutes=now.minute, seconds=now.second)
        elif now.hour <= 3:
            since = now - timedelta(hours=3 + now.hour, minutes=now.minute, seconds=now.second)
        return self._record(gid, uid, now, since)

    def get_up(self, gid: int, uid: int, now: datetime | None = None) -> tuple[int, timedelta]:
        """Record a good morning.

        Returns the member's place among this morning's risers (counted from
        06:00) and how long they slept since their last record.
        """
        now = now or datetime.now()
        since = now - timedelta(hours=now.hour - 6, minutes=now.minute, seconds=now.second)
        return self._record(gid, uid, now, since)


def split_duration(delta: timedelta) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds."""
    total = delta // timedelta(microseconds=1)
    hour_us, minute_us, second_us = 3_600_000_000, 60_000_000, 1_000_000
    hour = _trunc_div(total, hour_us)
    minute = _trunc_div(total - hour * hour_us, minute_us)
    second = _trunc_div(total - hour * hour_us - minute * minute_us, second_us)
    return hour, minute, second


def is_morning(now: datetime | None = None) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    hour = (now or datetime.now()).hour
    return 6 <= hour <= 12


def is_evening(now: datetime | None = None) -> bool:
    """Good nights count from 21 o'clock to 3 o'clock."""
    hour = (now or datetime.now()).hour
    return hour >= 21 or hour <= 3


def _unknown(h: int, m: int, s: int) -> bool:
    return (h == 0 and m == 0 and s == 0) or h >= 24


def good_morning_text(position: int, delta: timedelta) -> str:
    """Reply to a good morning."""
    h, m, s = split_duration(delta)
    if _unknown(h, m, s):
        return f"早安成功！你是今天第{position}个起床的"
    return f"早安成功！你的睡眠时长为{h}时{m}分{s}秒,你是今天第{position}个起床的"


def good_night_text(position: int, delta: timedelta) -> str:
    """Reply to a good night."""
    h, m, s = split_duration(delta)
    if _unknown(h, m, s):
        return f"晚安成功！你是今天第{position}个睡觉的"
    return f"晚安成功！你的清醒时长为{h}时{m}分{s}秒,你是今天第{position}个睡觉的"