from datetime import datetime, timedelta

import pytest

from qqfun.score import (
    LEVELS,
    SCOREMAX,
    ScoreDB,
    add_score,
    hour_word,
    level_for,
    next_level_score,
)


@pytest.fixture
def db(tmp_path):
    with ScoreDB(tmp_path / "score.db") as database:
        yield database


def test_get_score_creates_zero(db):
    assert db.get_score(42) == 0
    assert db.top_scores(10) == [(42, 0)]


def test_set_score_round_trip(db):
    db.set_score(7, 33)
    assert db.get_score(7) == 33
    db.set_score(7, 44)
    assert db.get_score(7) == 44


def test_top_scores_order_and_limit(db):
    for uid, score in [(1, 5), (2, 50), (3, 20), (4, 35)]:
        db.set_score(uid, score)
    top = db.top_scores(3)
    assert [uid for uid, _ in top] == [2, 4, 3]
    scores = [s for _, s in db.top_scores(10)]
    assert scores == sorted(scores, reverse=True)
    assert len(scores) == 4


def test_sign_in_default_and_update(db):
    fresh = db.get_sign_in(9)
    assert fresh.count == 0
    assert fresh.uid == 9
    when = datetime(2022, 6, 13, 8, 30)
    db.set_sign_in_count(9, 3, when)
    record = db.get_sign_in(9)
    assert record.count == 3
    assert record.updated_at == when
    assert record.signed_on(when)
    assert not record.signed_on(when + timedelta(days=1))


def test_persistence(tmp_path):
    path = tmp_path / "p.db"
    with ScoreDB(path) as first:
        first.set_score(11, 77)
    with ScoreDB(path) as second:
        assert second.get_score(11) == 77


@pytest.mark.parametrize(
    "hour, word",
    [
        (6, "早上好"),
        (11, "早上好"),
        (12, "中午好"),
        (13, "中午好"),
        (14, "下午好"),
        (18, "下午好"),
        (19, "晚上好"),
        (23, "晚上好"),
        (0, "凌晨好"),
        (5, "凌晨好"),
    ],
)
def test_hour_word(hour, word):
    assert hour_word(datetime(2022, 1, 1, hour, 0)) == word


def test_level_at_thresholds():
    for level, threshold in enumerate(LEVELS):
        assert level_for(threshold) == level


def test_level_between_thresholds():
    for level, (low, high) in enumerate(zip(LEVELS, LEVELS[1:])):
        if low + 1 < high:
            assert level_for(low + 1) == level
            assert level_for(high - 1) == level


def test_level_beyond_table():
    assert level_for(SCOREMAX + 1) == -1


def test_next_level_score():
    for level in range(len(LEVELS) - 1):
        assert next_level_score(level) == LEVELS[level + 1]
    assert next_level_score(len(LEVELS) - 1) == SCOREMAX


def test_add_score_accumulates(db):
    assert add_score(db, 5, 1) == (1, False)
    assert add_score(db, 5, 1) == (2, False)
    assert db.get_score(5) == 2


def test_add_score_caps(db):
    db.set_score(6, SCOREMAX - 1)
    score, capped = add_score(db, 6, 5)
    assert score == SCOREMAX
    assert capped is True
    assert db.get_score(6) == SCOREMAX