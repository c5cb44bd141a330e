from datetime import datetime, timedelta

import pytest

from qqfun.sleep import (
    SleepDB,
    good_morning_text,
    good_night_text,
    is_evening,
    is_morning,
    split_duration,
)


@pytest.fixture
def db(tmp_path):
    with SleepDB(tmp_path / "manage.db") as sdb:
        yield sdb


def test_first_sleep_has_no_duration(db):
    position, delta = db.sleep(1, 10, datetime(2022, 6, 1, 22, 0))
    assert position == 1
    assert delta == timedelta(0)


def test_sleepers_are_counted_in_order(db):
    db.sleep(1, 10, datetime(2022, 6, 1, 22, 0))
    position, _ = db.sleep(1, 11, datetime(2022, 6, 1, 22, 30))
    assert position == 2


def test_other_groups_do_not_count(db):
    db.sleep(1, 10, datetime(2022, 6, 1, 22, 0))
    position, _ = db.sleep(2, 11, datetime(2022, 6, 1, 22, 30))
    assert position == 1


def test_yesterdays_sleepers_do_not_count(db):
    db.sleep(1, 10, datetime(2022, 6, 1, 22, 0))
    position, _ = db.sleep(1, 11, datetime(2022, 6, 2, 22, 30))
    assert position == 1


def test_after_midnight_counts_from_previous_evening(db):
    db.sleep(1, 10, datetime(2022, 6, 1, 22, 0))
    position, _ = db.sleep(1, 11, datetime(2022, 6, 2, 1, 0))
    assert position == 2


def test_get_up_reports_sleep_length(db):
    night = datetime(2022, 6, 1, 23, 0)
    morning = datetime(2022, 6, 2, 7, 15)
    db.sleep(1, 10, night)
    position, delta = db.get_up(1, 10, morning)
    assert delta == morning - night
    assert position == 1


def test_split_duration():
    assert split_duration(timedelta(hours=8, minutes=5, seconds=3)) == (8, 5, 3)
    assert split_duration(timedelta(0)) == (0, 0, 0)


def test_split_duration_round_trip():
    delta = timedelta(days=1, hours=2, minutes=3, seconds=4, microseconds=500)
    h, m, s = split_duration(delta)
    assert timedelta(hours=h, minutes=m, seconds=s) <= delta < timedelta(hours=h, minutes=m, seconds=s + 1)


def test_time_windows():
    assert is_morning(datetime(2022, 6, 1, 6, 0))
    assert is_morning(datetime(2022, 6, 1, 12, 59))
    assert not is_morning(datetime(2022, 6, 1, 13, 0))
    assert is_evening(datetime(2022, 6, 1, 21, 0))
    assert is_evening(datetime(2022, 6, 1, 3, 59))
    assert not is_evening(datetime(2022, 6, 1, 4, 0))


def test_texts_without_duration():
    assert good_morning_text(2, timedelta(0)) == "早安成功！你是今天第2个起床的"
    assert good_night_text(3, timedelta(hours=30)) == "晚安成功！你是今天第3个睡觉的"


def test_texts_with_duration():
    text = good_morning_text(1, timedelta(hours=7, minutes=2, seconds=9))
    assert text.startswith("早安成功！你的睡眠时长为7时2分9秒")
    assert good_night_text(4, timedelta(minutes=1)).endswith("你是今天第4个睡觉的")