from __future__ import annotations

import numpy as np
import pytest

from nars_core.entity.budget import BudgetValue
from nars_core.exceptions import ConfigurationError
from nars_core.storage.bag import Bag


class _Item:
    def __init__(self, key: str, priority: float, durability: float = 0.5, quality: float = 0.5) -> None:
        self.key = key
        self.budget = BudgetValue(priority, durability, quality)

    def merge(self, other: "_Item") -> None:
        self.budget.merge(other.budget)

    def __str__(self) -> str:
        return f"{self.budget} {self.key}"


def _bag(capacity: int = 10, forget_cycle: int = 10, seed: int = 0) -> Bag:
    return Bag(capacity=capacity, forget_cycle=forget_cycle, rng=np.random.default_rng(seed), name="test")


def test_size_never_exceeds_capacity():
    bag = _bag(capacity=5)
    rng = np.random.default_rng(42)
    for i in range(50):
        bag.put_in(_Item(f"k{i}", float(rng.random())))
        assert len(bag) <= 5
    assert len(bag) == 5


def test_overflow_evicts_lowest_priority_item():
    bag = _bag(capacity=4)
    priorities = {"a": 0.05, "b": 0.03, "c": 0.07, "d": 0.04}
    for key, p in priorities.items():
        assert bag.put_in(_Item(key, p)) is True
    assert bag.put_in(_Item("e", 0.06)) is True

    assert len(bag) == 4
    assert "b" not in bag
    assert {"a", "c", "d", "e"} == {item.key for item in bag}


def test_overflow_tie_evicts_earliest_entry():
    bag = _bag(capacity=2)
    bag.put_in(_Item("first", 0.2))
    bag.put_in(_Item("second", 0.2))
    bag.put_in(_Item("high", 0.9))
    assert "first" not in bag
    assert "second" in bag
    assert "high" in bag


def test_new_item_evicted_on_arrival_reports_false():
    bag = _bag(capacity=2)
    bag.put_in(_Item("a", 0.5))
    bag.put_in(_Item("b", 0.6))
    assert bag.put_in(_Item("low", 0.01)) is False
    assert "low" not in bag
    assert len(bag) == 2


def test_duplicate_key_merges_instead_of_duplicating():
    bag = _bag()
    assert bag.put_in(_Item("k", 0.2, quality=0.3)) is True
    assert bag.put_in(_Item("k", 0.6, quality=0.9)) is False
    assert len(bag) == 1
    item = bag.get("k")
    assert item.budget.priority == pytest.approx(0.6)
    assert item.budget.quality == pytest.approx(0.9)
    assert bag.level_of("k") == 60


def test_take_out_eventually_returns_inserted_key():
    bag = _bag()
    for i in range(8):
        bag.put_in(_Item(f"other{i}", 0.1 * (i + 1)))
    bag.put_in(_Item("target", 0.35))

    found = None
    for _ in range(len(bag)):
        item = bag.take_out()
        if item.key == "target":
            found = item
            break
    assert found is not None
    assert "target" not in bag


def test_take_out_on_empty_bag_returns_none():
    assert _bag().take_out() is None


def test_put_back_never_increases_priority():
    bag = _bag(forget_cycle=5)
    bag.put_in(_Item("k", 0.9, durability=0.7, quality=0.8))
    last = 0.9
    for _ in range(30):
        item = bag.take_out()
        bag.put_back(item)
        assert item.budget.priority <= last
        last = item.budget.priority
    assert last < 0.9


def test_put_back_below_quality_floor_does_not_raise_priority():
    bag = _bag()
    item = _Item("k", 0.02, durability=0.9, quality=1.0)
    bag.put_back(item)
    assert item.budget.priority == pytest.approx(0.02)


def test_higher_durability_decays_slower():
    bag = _bag()
    durable = _Item("durable", 0.8, durability=0.9, quality=0.1)
    fragile = _Item("fragile", 0.8, durability=0.3, quality=0.1)
    bag.put_back(durable)
    bag.put_back(fragile)
    assert durable.budget.priority > fragile.budget.priority


def test_zero_capacity_is_rejected():
    with pytest.raises(ConfigurationError):
        Bag(capacity=0, forget_cycle=10)


def test_bucket_index_is_clamped():
    bag = _bag()
    assert bag.bucket_index(1.0) == 99
    assert bag.bucket_index(0.0) == 0
    assert bag.bucket_index(0.999) == 99
    bag.put_in(_Item("top", 1.0))
    assert bag.level_of("top") == 99


def test_selection_prefers_high_priority_without_starving_low():
    bag = _bag(seed=7)
    bag.put_in(_Item("high", 0.95))
    bag.put_in(_Item("low", 0.05))
    counts = {"high": 0, "low": 0}
    for _ in range(500):
        item = bag.take_out()
        counts[item.key] += 1
        bag.put_in(item)
    assert counts["high"] > counts["low"]
    assert counts["low"] > 0


def test_fifo_within_bucket():
    bag = _bag()
    bag.put_in(_Item("older", 0.015))
    bag.put_in(_Item("newer", 0.015))
    assert bag.take_out().key == "older"
    assert bag.take_out().key == "newer"


def test_pick_out_and_mass_bookkeeping():
    bag = _bag()
    bag.put_in(_Item("a", 0.5))
    bag.put_in(_Item("b", 0.2))
    assert bag.mass == 51 + 21
    picked = bag.pick_out("a")
    assert picked.key == "a"
    assert bag.pick_out("a") is None
    assert bag.mass == 21
    assert bag.average_priority() == pytest.approx(0.21)


def test_age_decays_every_item():
    bag = _bag(forget_cycle=1)
    bag.put_in(_Item("a", 0.9, durability=0.5, quality=0.1))
    bag.put_in(_Item("b", 0.6, durability=0.5, quality=0.1))
    bag.age()
    assert bag.get("a").budget.priority < 0.9
    assert bag.get("b").budget.priority < 0.6
    assert bag.level_of("a") == bag.bucket_index(bag.get("a").budget.priority)


def test_to_string_long_lists_levels():
    bag = _bag()
    bag.put_in(_Item("a", 0.5))
    text = bag.to_string_long()
    assert " BAG test" in text
    assert "--- LEVEL 50:" in text
    assert text.endswith(">>>> end of Bag test")
