"""Daily one-husband-one-wife register for chat groups, stored in SQLite."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path

UPDATE_TABLE = "updateinfo"
ALL_GROUPS = "ALL"

_SINGLE_WIDTH = " ,.;:'|!()[]"
_COLUMNS = "user, target, username, targetname, updatetime"


@dataclass(frozen=True)
class Couple:
    """One registered pair: ``user`` took ``target`` on ``updatetime``."""

    user: int
    target: int
    username: str
    targetname: str
    updatetime: str = ""

    @property
    def single_noble(self) -> bool:
        """True when the entry records a deliberate single day (no target)."""
        return self.target == 0


class Standing(IntEnum):
    """Where a member stands in today's register."""

    BRIDE = 0
    GROOM = 1
    SINGLE = 3


def today_stamp(now: datetime | None = None) -> str:
    """Format a day the way the register stores it: ``YYYY/MM/DD``."""
    return (now or datetime.now()).strftime("%Y/%m/%d")


def slice_name(name: str) -> str:
    """Shorten a display name so that it fits one column of the roster image."""
    if len(name.encode("utf-8")) <= 21:
        return name
    width = 0
    for i, ch in enumerate(name):
        if width > 18:
            return name[: i - 2] + "......"
        if ord(ch) >= 10000:
            width += 3
        elif ch in _SINGLE_WIDTH:
            width += 1
        else:
            width += 2
    return name


def _table(gid: int | str) -> str:
    return f'"{int(gid)}"'


class MarriageRegistry:
    """The register office: one table per group plus a table of reset days."""

    def __init__(self, path: str | Path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {UPDATE_TABLE} "
                "(gid INTEGER PRIMARY KEY NOT NULL, updatetime TEXT NOT NULL)"
            )

    def __enter__(self) -> MarriageRegistry:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def _ensure_group(self, table: str) -> None:
        self._conn.execute(
            f"CREATE TABLE IF NOT EXISTS {table} ("
            "user INTEGER PRIMARY KEY NOT NULL, target INTEGER NOT NULL, "
            "username TEXT NOT NULL, targetname TEXT NOT NULL, "
            "updatetime TEXT NOT NULL)"
        )

    def _table_exists(self, name: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?", (name,)
        ).fetchone()
        return row is not None

    def _group_tables(self) -> list[str]:
        rows = self._conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name != ?",
            (UPDATE_TABLE,),
        ).fetchall()
        return [name for (name,) in rows if name.lstrip("-").isdigit()]

    def _stamp(self, gid: int, today: str) -> None:
        self._conn.execute(
            f"INSERT OR REPLACE INTO {UPDATE_TABLE} (gid, updatetime) VALUES (?, ?)",
            (gid, today),
        )

    def check_update(self, gid: int, today: str) -> str:
        """Return the day the group was last reset, recording ``today`` if unknown."""
        with self._lock, self._conn:
            row = self._conn.execute(
                f"SELECT updatetime FROM {UPDATE_TABLE} WHERE gid = ?", (gid,)
            ).fetchone()
            if row is None:
                self._stamp(gid, today)
                return today
            return row[0]

    def reset(self, gid: int | str, today: str) -> None:
        """Clear one group's register, or every group's when ``gid`` is ``"ALL"``."""
        with self._lock, self._conn:
            if str(gid) == ALL_GROUPS:
                for name in self._group_tables():
                    self._conn.execute(f'DROP TABLE "{name}"')
                    self._stamp(int(name), today)
                return
            gid = int(gid)
            table = _table(gid)
            if not self._table_exists(str(gid)):
                self._ensure_group(table)
                return
            self._conn.execute(f"DROP TABLE {table}")
            self._ensure_group(table)
            self._stamp(gid, today)

    def divorce(self, gid: int, target: int) -> int:
        """Remove every pair whose target is ``target``; return how many went."""
        table = _table(gid)
        with self._lock, self._conn:
            self._ensure_group(table)
            cur = self._conn.execute(f"DELETE FROM {table} WHERE target = ?", (target,))
            return cur.rowcount

    def remarry(
        self, gid: int, uid: int, target: int, username: str, targetname: str, today: str
    ) -> None:
        """Register ``uid`` with ``target`` unless both already head an entry."""
        table = _table(gid)
        with self._lock, self._conn:
            self._ensure_group(table)
            query = f"SELECT 1 FROM {table} WHERE user = ?"
            if (
                self._conn.execute(query, (uid,)).fetchone() is not None
                and self._conn.execute(query, (target,)).fetchone() is not None
            ):
                return
            self._conn.execute(
                f"INSERT OR REPLACE INTO {table} ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (uid, target, username, targetname, today),
            )

    def roster(self, gid: int) -> list[Couple]:
        """List today's pairs of a group, ordered by the taking member."""
        table = _table(gid)
        with self._lock, self._conn:
            self._ensure_group(table)
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM {table} GROUP BY user ORDER BY user"
            ).fetchall()
        return [Couple(*row) for row in rows]

    def lookup(self, gid: int, uid: int) -> tuple[Couple | None, Standing]:
        """Find ``uid``'s entry and whether they took someone or were taken."""
        table = _table(gid)
        with self._lock, self._conn:
            self._ensure_group(table)
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM {table} WHERE user = ?", (uid,)
            ).fetchone()
            if row is not None:
                return Couple(*row), Standing.GROOM
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM {table} WHERE target = ?", (uid,)
            ).fetchone()
            if row is not None:
                return Couple(*row), Standing.BRIDE
        return None, Standing.SINGLE

    def register(
        self, gid: int, uid: int, target: int, username: str, targetname: str, today: str
    ) -> None:
        """Record that ``uid`` took ``target`` today, replacing ``uid``'s old entry."""
        table = _table(gid)
        with self._lock, self._conn:
            self._ensure_group(table)
            self._conn.execute(
                f"INSERT OR REPLACE INTO {table} ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (uid, target, username, targetname, today),
            )