from __future__ import annotations

import pytest
from pydantic import ValidationError

from nars_core.config import BagConfig, Config, StampConfig, TruthConfig


def test_defaults():
    config = Config()
    assert config.bag.levels == 100
    assert config.bag.concept_capacity == 1000
    assert config.bag.task_link_capacity == 20
    assert config.budget.threshold == 0.01
    assert config.truth.default_judgment_confidence == 0.9
    assert config.concept.term_link_record_length == 10
    assert config.stamp.maximum_length == 8
    assert config.silent_threshold == 0.0


def test_seed_from_environment(monkeypatch):
    monkeypatch.setenv("NARS_SEED", "42")
    assert Config().seed == 42
    monkeypatch.delenv("NARS_SEED")
    assert Config().seed is None


def test_stamp_length_must_be_power_of_two():
    assert StampConfig(maximum_length=16).maximum_length == 16
    with pytest.raises(ValidationError):
        StampConfig(maximum_length=6)


def test_bag_sizes_must_be_positive():
    with pytest.raises(ValidationError):
        BagConfig(concept_capacity=0)
    with pytest.raises(ValidationError):
        BagConfig(levels=-1)


def test_truth_section_holds_only_input_defaults():
    assert set(TruthConfig.model_fields) == {"default_judgment_frequency", "default_judgment_confidence"}
    config = Config(truth={"default_judgment_confidence": 0.8})
    assert config.truth.default_judgment_confidence == 0.8
