"""Galgame CG and sticker picture sets, stored in SQLite."""

from __future__ import annotations

import random as _random
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CG_TYPE = "Gal CG"
EMOTICON_TYPE = "其他"
NOT_FOUND = "暂时没有这样的图呢"

_COLUMNS = "id, title, picture_type, picture_description, picture_list"


@dataclass(frozen=True)
class Ymgal:
    """One picture set: its id, title, kind, description and comma-joined URLs."""

    id: int = 0
    title: str = ""
    picture_type: str = ""
    picture_description: str = ""
    picture_list: str = ""

    @property
    def pictures(self) -> list[str]:
        """The picture URLs of the set."""
        return self.picture_list.split(",") if self.picture_list else []


_EMPTY = Ymgal()


class YmgalDB:
    """Picture sets keyed by their site id."""

    def __init__(self, path: str | Path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.RLock()
        with self._lock, self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS ymgal ("
                "id INTEGER PRIMARY KEY NOT NULL, title TEXT NOT NULL DEFAULT '', "
                "picture_type TEXT NOT NULL DEFAULT '', "
                "picture_description VARCHAR(1024) NOT NULL DEFAULT '', "
                "picture_list VARCHAR(20000) NOT NULL DEFAULT '')"
            )

    def __enter__(self) -> YmgalDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def upsert(
        self,
        id: int,
        title: str,
        picture_type: str,
        picture_description: str,
        picture_list: str,
    ) -> None:
        """Insert a picture set, or replace the fields of an existing one."""
        with self._lock, self._conn:
            self._conn.execute(
                f"INSERT INTO ymgal ({_COLUMNS}) VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET title = excluded.title, "
                "picture_type = excluded.picture_type, "
                "picture_description = excluded.picture_description, "
                "picture_list = excluded.picture_list",
                (int(id), title, picture_type, picture_description, picture_list),
            )

    def get_by_id(self, id: int | str) -> Ymgal:
        """Return the set with ``id``, or an empty set when there is none."""
        with self._lock:
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM ymgal WHERE id = ?", (int(id),)
            ).fetchone()
        return Ymgal(*row) if row is not None else _EMPTY

    def _pick(self, where: str, params: tuple[Any, ...], rng: Any) -> Ymgal:
        rng = rng or _random
        with self._lock:
            (count,) = self._conn.execute(
                f"SELECT COUNT(*) FROM ymgal WHERE {where}", params
            ).fetchone()
            if count == 0:
                return _EMPTY
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM ymgal WHERE {where} "
                "ORDER BY rowid LIMIT 1 OFFSET ?",
                (*params, rng.randrange(count)),
            ).fetchone()
        return Ymgal(*row) if row is not None else _EMPTY

    def random(self, picture_type: str, rng: Any = None) -> Ymgal:
        """Pick a random set of the given kind; empty when there is none."""
        return self._pick("picture_type = ?", (picture_type,), rng)

    def by_key(self, picture_type: str, key: str, rng: Any = None) -> Ymgal:
        """Pick a random set of the given kind whose title or description holds ``key``."""
        pattern = f"%{key}%"
        return self._pick(
            "picture_type = ? AND (picture_description LIKE ? OR title LIKE ?)",
            (picture_type, pattern, pattern),
            rng,
        )


def forward_contents(y: Ymgal) -> list[tuple[str, str]]:
    """Forward-message nodes for a set as (kind, value) pairs.

    The title comes first, then the description when there is one, then
    one image node per picture.  An empty list means there is nothing to send.
    """
    if not y.picture_list:
        return []
    nodes = [("text", y.title)]
    if y.picture_description:
        nodes.append(("text", y.picture_description))
    nodes.extend(("image", url) for url in y.picture_list.split(","))
    return nodes