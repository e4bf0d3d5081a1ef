from __future__ import annotations

import pytest

from nars_core.config import Config
from nars_core.entity.budget import BudgetValue
from nars_core.entity.links import TermLink
from nars_core.entity.sentence import Punctuation
from nars_core.exceptions import InvalidInputError
from nars_core.language import Connector, LinkType, Relation, Term, prepare_component_links
from nars_core.language.term import make_compound, make_statement
from nars_core.language.parser import parse_task, parse_term
from nars_core.storage.memory import Memory


def _memory() -> Memory:
    return Memory(Config(seed=0))


# -- terms -------------------------------------------------------------------


def test_statement_name_and_complexity():
    st = make_statement(Relation.INHERITANCE, Term("robin"), Term("bird"))
    assert st is not None
    assert st.name == "<robin --> bird>"
    assert st.complexity == 3
    assert st.subject == Term("robin")


def test_similarity_orders_its_sides():
    a = make_statement(Relation.SIMILARITY, Term("swan"), Term("duck"))
    b = make_statement(Relation.SIMILARITY, Term("duck"), Term("swan"))
    assert a == b
    assert a.name == "<duck <-> swan>"


def test_reflexive_statements_are_rejected():
    assert make_statement(Relation.INHERITANCE, Term("a"), Term("a")) is None
    conj = make_compound(Connector.INTERSECTION_EXT, [Term("a"), Term("b")])
    assert make_statement(Relation.INHERITANCE, conj, Term("a")) is None


def test_commutative_compound_is_sorted_and_deduplicated():
    term = make_compound(Connector.INTERSECTION_EXT, [Term("b"), Term("a"), Term("b")])
    assert term.name == "(&,a,b)"
    assert make_compound(Connector.INTERSECTION_EXT, [Term("a")]) == Term("a")
    assert make_compound(Connector.SET_EXT, [Term("a")]).name == "{a}"


def test_variables_are_not_constant():
    assert Term("bird").is_constant
    assert not Term("?x").is_constant
    st = make_statement(Relation.INHERITANCE, Term("?x"), Term("bird"))
    assert not st.is_constant


# -- templates ---------------------------------------------------------------


def test_templates_of_simple_statement():
    st = make_statement(Relation.INHERITANCE, Term("bird"), Term("animal"))
    templates = prepare_component_links(st)
    assert [(t.target.name, t.link_type, t.indices) for t in templates] == [
        ("bird", LinkType.COMPOUND_STATEMENT, (0,)),
        ("animal", LinkType.COMPOUND_STATEMENT, (1,)),
    ]


def test_templates_of_product_statement_include_transform():
    st = parse_term("<(*,acid,base) --> reaction>")
    templates = prepare_component_links(st)
    found = {(t.target.name, t.link_type, t.indices) for t in templates}
    assert ("(*,acid,base)", LinkType.COMPOUND_STATEMENT, (0,)) in found
    assert ("acid", LinkType.TRANSFORM, (0, 0)) in found
    assert ("base", LinkType.TRANSFORM, (0, 1)) in found
    assert ("reaction", LinkType.COMPOUND_STATEMENT, (1,)) in found


def test_condition_templates_are_prefixed_with_zero():
    st = parse_term("<(&&,a,b) ==> c>")
    found = {(t.target.name, t.link_type, t.indices) for t in prepare_component_links(st)}
    assert ("a", LinkType.COMPOUND_CONDITION, (0, 0)) in found
    assert ("b", LinkType.COMPOUND_CONDITION, (0, 1)) in found
    assert ("c", LinkType.COMPOUND_STATEMENT, (1,)) in found


def test_term_link_keys_encode_direction_and_indices():
    st = make_statement(Relation.INHERITANCE, Term("bird"), Term("animal"))
    template = prepare_component_links(st)[0]
    down = TermLink.from_template(Term("bird"), template, BudgetValue(0.5, 0.5, 0.5))
    up = TermLink.from_template(st, template, BudgetValue(0.5, 0.5, 0.5))
    assert down.link_type is LinkType.COMPONENT_STATEMENT
    assert down.key == " @(T3-1)_ bird"
    assert up.link_type is LinkType.COMPOUND_STATEMENT
    assert up.key == " _@(T4-1) <bird --> animal>"
    assert down.get_index(0) == 0
    assert down.get_index(3) == -1


# -- parser ------------------------------------------------------------------


def test_parse_judgment_with_defaults():
    task = parse_task("<robin --> bird>.", _memory(), time=4)
    sentence = task.sentence
    assert sentence.content.name == "<robin --> bird>"
    assert sentence.punctuation is Punctuation.JUDGMENT
    assert sentence.truth.frequency == 1.0
    assert sentence.truth.confidence == pytest.approx(0.9)
    assert sentence.stamp.creation_time == 4
    assert sentence.stamp.evidential_base == (1,)
    assert task.budget.priority == pytest.approx(0.8)
    assert task.budget.durability == pytest.approx(0.8)
    assert task.budget.quality == pytest.approx(0.95)
    assert task.is_input


def test_parse_explicit_budget_and_truth():
    task = parse_task("$0.5;0.4$ <robin --> bird>. %0.0;0.8%", _memory(), time=0)
    assert task.sentence.truth.frequency == 0.0
    assert task.sentence.truth.confidence == pytest.approx(0.8)
    assert task.budget.priority == pytest.approx(0.5)
    assert task.budget.durability == pytest.approx(0.4)


def test_parse_question_defaults():
    task = parse_task("<robin --> animal>?", _memory(), time=0)
    assert task.sentence.is_question
    assert task.sentence.truth is None
    assert task.budget.priority == pytest.approx(0.9)
    assert task.budget.quality == 1.0


def test_parse_prefixed_lines():
    memory = _memory()
    assert parse_task(" OUT: <robin --> animal>. %1.00;0.81%", memory, time=0) is None
    task = parse_task("  IN: <robin --> bird>.", memory, time=0)
    assert task.content.name == "<robin --> bird>"


def test_each_input_gets_a_fresh_serial():
    memory = _memory()
    first = parse_task("<a --> b>.", memory, time=0)
    second = parse_task("<a --> b>.", memory, time=0)
    assert not first.sentence.stamp.overlaps(second.sentence.stamp)


@pytest.mark.parametrize(
    "line",
    [
        "<robin --> bird>",
        "<robin --> bird>. %1.5;0.9%",
        "<robin --> bird?",
        "<robin bird>.",
        "(*,a,b.",
        "<robin --> animal>? %1.0;0.9%",
        "(/,rel,a,b).",
    ],
)
def test_invalid_lines_raise(line):
    with pytest.raises(InvalidInputError):
        parse_task(line, _memory(), time=0)


def test_parse_image_and_nested_statement():
    image = parse_term("(/,reaction,_,base)")
    assert image.name == "(/,reaction,_,base)"
    assert image.relation_index == 0
    nested = parse_term("<<a --> b> ==> <c --> d>>")
    assert nested.relation is Relation.IMPLICATION
    assert nested.subject.name == "<a --> b>"


def test_instance_and_property_sugar():
    assert parse_term("<Tweety {-- bird>").name == "<{Tweety} --> bird>"
    assert parse_term("<raven --] black>").name == "<raven --> [black]>"
    assert parse_term("<Tweety {-] yellow>").name == "<{Tweety} --> [yellow]>"
