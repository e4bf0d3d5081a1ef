from __future__ import annotations

import pytest

from nars_core.entity.budget import BudgetValue
from nars_core.entity.sentence import Punctuation, Sentence
from nars_core.entity.stamp import Stamp
from nars_core.entity.truth import TruthValue
from nars_core.exceptions import InvariantError
from nars_core.inference import budget_functions, truth_functions
from nars_core.language.term import CompoundTerm, Term
from nars_core.utils import c2w, w2c


def test_budget_merge_takes_max_priority_and_durability():
    a = BudgetValue(0.3, 0.9, 0.2)
    b = BudgetValue(0.7, 0.4, 0.8)
    a.merge(b)
    assert a.priority == pytest.approx(0.7)
    assert a.durability == pytest.approx(0.9)
    assert a.quality == pytest.approx(0.2)


def test_budget_merge_with_itself_is_idempotent():
    a = BudgetValue(0.3, 0.6, 0.5)
    a.merge(a.copy())
    a.merge(a)
    assert a == BudgetValue(0.3, 0.6, 0.5)


def test_budget_fields_are_clamped_on_mutation():
    b = BudgetValue(1.5, -0.2, 0.5)
    assert b.priority == 1.0
    assert b.durability == 0.0
    b.priority = -3
    b.quality = 7
    assert b.priority == 0.0
    assert b.quality == 1.0


def test_budget_summary_and_threshold():
    b = BudgetValue(0.8, 0.8, 0.8)
    assert b.summary() == pytest.approx(0.8)
    assert b.above_threshold(0.5)
    assert not BudgetValue(0.0, 0.9, 0.9).above_threshold(0.01)
    assert str(b) == "$0.8000;0.8000;0.8000$"
    assert b.to_string_brief() == "$0.80;0.80;0.80$"


def test_budget_inc_dec_use_extended_boolean_operators():
    b = BudgetValue(0.5, 0.5, 0.5)
    b.inc_priority(0.5)
    assert b.priority == pytest.approx(0.75)
    b.dec_durability(0.5)
    assert b.durability == pytest.approx(0.25)


def test_truth_confidence_is_capped_and_expectation():
    t = TruthValue(1.0, 1.0)
    assert t.confidence < 1.0
    assert TruthValue(1.0, 0.9).expectation == pytest.approx(0.95)
    assert TruthValue(0.0, 0.9).to_string_brief() == "%0.00;0.90%"


def test_evidence_conversion_round_trip():
    assert w2c(1.0) == pytest.approx(0.5)
    assert c2w(w2c(9.0)) == pytest.approx(9.0)


def test_stamp_create_has_singleton_base():
    stamp = Stamp.create(serial=5, time=3)
    assert stamp.evidential_base == (5,)
    assert stamp.creation_time == 3
    assert str(stamp) == "{3 : 5}"


def test_stamp_empty_base_is_an_invariant_violation():
    with pytest.raises(InvariantError):
        Stamp(creation_time=0, evidential_base=())


def test_stamp_merge_fails_on_overlap():
    a = Stamp(0, (1, 2))
    b = Stamp(0, (2, 3))
    assert a.overlaps(b)
    assert Stamp.merge(a, b, time=5) is None


def test_stamp_merge_is_commutative_as_a_set():
    a = Stamp(0, (1, 4))
    b = Stamp(1, (2, 3, 7))
    ab = Stamp.merge(a, b, time=9)
    ba = Stamp.merge(b, a, time=9)
    assert ab is not None and ba is not None
    assert set(ab.evidential_base) == set(ba.evidential_base) == {1, 2, 3, 4, 7}
    assert ab.creation_time == 9
    assert ab.equivalent(ba)


def test_stamp_merge_interleaves_longer_base_first():
    merged = Stamp.merge(Stamp(0, (1, 2)), Stamp(0, (3,)), time=1)
    assert merged.evidential_base == (1, 3, 2)


def test_stamp_merge_truncation_keeps_newest_serials():
    a = Stamp(0, tuple(range(1, 7)))
    b = Stamp(0, tuple(range(7, 13)))
    merged = Stamp.merge(a, b, time=2, max_length=8)
    assert merged.length == 8
    assert set(merged.evidential_base) == set(range(5, 13))


def test_truth_functions_match_reference_values():
    strong = TruthValue(1.0, 0.9)
    ded = truth_functions.deduction(strong, strong)
    assert (ded.frequency, ded.confidence) == pytest.approx((1.0, 0.81))

    rev = truth_functions.revision(TruthValue(1.0, 0.9), TruthValue(0.0, 0.9))
    assert rev.frequency == pytest.approx(0.5)
    assert rev.confidence == pytest.approx(18 / 19)

    abd = truth_functions.abduction(strong, strong)
    assert abd.frequency == pytest.approx(1.0)
    assert abd.confidence == pytest.approx(w2c(0.81))

    ana = truth_functions.analogy(strong, TruthValue(0.5, 0.9))
    assert ana.frequency == pytest.approx(0.5)
    assert ana.confidence == pytest.approx(0.405)

    assert truth_functions.abduction(TruthValue(1.0, 0.9, analytic=True), strong).confidence == 0.0


def test_forget_respects_quality_floor():
    budget = BudgetValue(0.9, 0.5, 0.5)
    budget_functions.forget(budget, forget_rate=10, relative_threshold=0.1)
    assert 0.05 < budget.priority < 0.9


def test_truth_to_quality_values_strong_negatives():
    assert budget_functions.truth_to_quality(TruthValue(1.0, 0.9)) == pytest.approx(0.95)
    assert budget_functions.truth_to_quality(TruthValue(0.0, 0.9)) == pytest.approx(0.7125)


def test_ranking_a_question_is_an_invariant_violation():
    question = Sentence(Term("bird"), Punctuation.QUESTION, None, Stamp(0, (1,)))
    with pytest.raises(InvariantError):
        budget_functions.rank_belief(question)
    with pytest.raises(InvariantError):
        budget_functions.solution_quality(None, question)


def test_compound_without_connector_or_name_is_an_invariant_violation():
    with pytest.raises(InvariantError):
        CompoundTerm(None, [Term("a"), Term("b")])
