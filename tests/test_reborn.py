import json
import random

import pytest

from qqfun.reborn import (
    FAIL_TEXT,
    GENDERS,
    WeightedChooser,
    country_chooser,
    load_rates,
    reborn,
)


class _Rng:
    def __init__(self, value=None):
        self.value = value

    def randrange(self, stop):
        return stop - 1 if self.value is None else self.value


def test_single_item_always_picked():
    chooser = WeightedChooser([("a", 5)])
    rng = random.Random(1)
    assert {chooser.pick(rng) for _ in range(50)} == {"a"}


def test_zero_weight_never_picked():
    chooser = WeightedChooser([("a", 0), ("b", 3), ("c", 7)])
    rng = random.Random(2)
    picks = {chooser.pick(rng) for _ in range(500)}
    assert picks == {"b", "c"}


def test_all_zero_weights_rejected():
    with pytest.raises(ValueError):
        WeightedChooser([("a", 0), ("b", 0)])


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        WeightedChooser([("a", -1), ("b", 5)])


def test_pick_bounds_follow_sorted_weights():
    chooser = WeightedChooser([("heavy", 10), ("light", 1)])
    assert chooser.pick(_Rng(0)) == "light"
    assert chooser.pick(_Rng()) == "heavy"


def test_gender_chooser_values():
    rng = random.Random(3)
    picks = {GENDERS.pick(rng) for _ in range(2000)}
    assert picks <= {"男孩子", "女孩子", "雌雄同体"}
    assert "男孩子" in picks


def test_load_rates_round_trip(tmp_path):
    path = tmp_path / "rate.json"
    records = [{"name": "甲", "weight": 0.25}, {"name": "乙", "weight": 0.75}]
    path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    assert load_rates(path) == [("甲", 0.25), ("乙", 0.75)]


def test_country_chooser_excludes_zero_weight():
    chooser = country_chooser([("none", 0.0), ("only", 0.5)])
    rng = random.Random(4)
    assert {chooser.pick(rng) for _ in range(100)} == {"only"}


def test_reborn_failure_at_threshold():
    countries = country_chooser([("日本", 1.0)])
    assert reborn(countries, _Rng(0)) == FAIL_TEXT
    assert reborn(countries, _Rng(1 << 27)) == FAIL_TEXT


def test_reborn_success_message():
    countries = country_chooser([("日本", 1.0)])
    assert reborn(countries, _Rng()) == "投胎成功！\n您出生在 日本, 是 男孩子。"