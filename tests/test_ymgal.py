import random

import pytest

from qqfun.ymgal import CG_TYPE, EMOTICON_TYPE, Ymgal, YmgalDB, forward_contents


@pytest.fixture
def db(tmp_path):
    with YmgalDB(tmp_path / "ymgal.db") as database:
        yield database


def test_upsert_and_get_by_id(db):
    db.upsert(7, "Title A", CG_TYPE, "desc", "u1,u2")
    got = db.get_by_id("7")
    assert got == Ymgal(7, "Title A", CG_TYPE, "desc", "u1,u2")
    assert got.pictures == ["u1", "u2"]


def test_upsert_updates_existing(db):
    db.upsert(7, "Old", CG_TYPE, "d", "a")
    db.upsert(7, "New", EMOTICON_TYPE, "d2", "b,c")
    assert db.get_by_id(7) == Ymgal(7, "New", EMOTICON_TYPE, "d2", "b,c")


def test_get_missing_is_empty(db):
    assert db.get_by_id(99) == Ymgal()
    assert db.get_by_id(99).picture_list == ""


def test_random_respects_type(db):
    db.upsert(1, "cg1", CG_TYPE, "", "x")
    db.upsert(2, "cg2", CG_TYPE, "", "y")
    db.upsert(3, "emo", EMOTICON_TYPE, "", "z")
    rng = random.Random(1)
    for _ in range(20):
        assert db.random(CG_TYPE, rng).picture_type == CG_TYPE
        assert db.random(EMOTICON_TYPE, rng).id == 3


def test_random_covers_all_of_type(db):
    for i in range(1, 4):
        db.upsert(i, f"t{i}", CG_TYPE, "", "p")
    rng = random.Random(5)
    seen = {db.random(CG_TYPE, rng).id for _ in range(60)}
    assert seen == {1, 2, 3}


def test_random_empty_type(db):
    db.upsert(1, "cg", CG_TYPE, "", "x")
    assert db.random(EMOTICON_TYPE, random.Random(0)) == Ymgal()


def test_by_key_matches_title_or_description(db):
    db.upsert(1, "Summer Days", CG_TYPE, "", "a")
    db.upsert(2, "Other", CG_TYPE, "a summer story", "b")
    db.upsert(3, "Winter", CG_TYPE, "cold", "c")
    db.upsert(4, "Summer", EMOTICON_TYPE, "", "d")
    rng = random.Random(2)
    seen = {db.by_key(CG_TYPE, "ummer", rng).id for _ in range(40)}
    assert seen == {1, 2}
    assert db.by_key(CG_TYPE, "nothing", rng) == Ymgal()


def test_forward_contents_full():
    y = Ymgal(1, "T", CG_TYPE, "D", "u1,u2")
    assert forward_contents(y) == [
        ("text", "T"),
        ("text", "D"),
        ("image", "u1"),
        ("image", "u2"),
    ]


def test_forward_contents_without_description():
    y = Ymgal(1, "T", CG_TYPE, "", "u1")
    assert forward_contents(y) == [("text", "T"), ("image", "u1")]


def test_forward_contents_empty_set():
    assert forward_contents(Ymgal(1, "T", CG_TYPE, "D", "")) == []