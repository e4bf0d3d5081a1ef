"""Narsese input parser.

One line is one sentence: an optional budget, a term, the punctuation and
an optional truth value::

    $0.8;0.8$ <robin --> bird>. %1.0;0.9%
    <robin --> animal>?
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from nars_core.entity.budget import BudgetValue
from nars_core.entity.sentence import Punctuation, Sentence, Task
from nars_core.entity.truth import TruthValue
from nars_core.exceptions import InvalidInputError
from nars_core.inference.budget_functions import truth_to_quality
from nars_core.language.term import (
    IMAGE_PLACEHOLDER,
    VARIABLE_PREFIXES,
    Connector,
    Relation,
    Term,
    make_compound,
    make_statement,
)

if TYPE_CHECKING:
    from nars_core.config import Config
    from nars_core.storage.memory import Memory

BUDGET_MARK = "$"
TRUTH_MARK = "%"
VALUE_SEPARATOR = ";"
PREFIX_MARK = ":"
INPUT_LINE = "IN"
OUTPUT_LINE = "OUT"

_OPENERS = "({[<"
_CLOSERS = ")}]>"
_RESERVED = set("(){}[]<>,;%$ \t")
_INSTANCE = "{--"
_PROPERTY = "--]"
_INSTANCE_PROPERTY = "{-]"
_RELATIONS = {r.value for r in Relation} | {_INSTANCE, _PROPERTY, _INSTANCE_PROPERTY}
_CONNECTORS = {c.value: c for c in Connector if not c.is_set}


def parse_task(line: str, memory: Memory, time: int) -> Task | None:
    """Parse one input line into a task stamped at ``time``.

    Returns None for lines that echo the system's own output.
    """
    text = line.strip()
    prefix_end = text.find(PREFIX_MARK)
    if prefix_end > 0:
        prefix = text[:prefix_end].strip()
        if prefix == OUTPUT_LINE:
            return None
        if prefix == INPUT_LINE:
            text = text[prefix_end + 1 :].strip()
    if not text:
        raise InvalidInputError("empty sentence", line)

    budget_text = None
    if text.startswith(BUDGET_MARK):
        end = text.find(BUDGET_MARK, 1)
        if end < 0:
            raise InvalidInputError("unclosed budget", line)
        budget_text = text[1:end]
        text = text[end + 1 :].strip()

    truth_text = None
    if text.endswith(TRUTH_MARK):
        start = text.rfind(TRUTH_MARK, 0, len(text) - 1)
        if start < 0:
            raise InvalidInputError("unclosed truth value", line)
        truth_text = text[start + 1 : -1]
        text = text[:start].strip()

    if not text:
        raise InvalidInputError("missing content", line)
    try:
        punctuation = Punctuation(text[-1])
    except ValueError:
        raise InvalidInputError(f"unknown punctuation {text[-1]!r}", line) from None
    content = parse_term(text[:-1])

    config = memory.config
    truth = None
    if punctuation is Punctuation.JUDGMENT:
        truth = _parse_truth(truth_text, config, line)
    elif truth_text is not None:
        raise InvalidInputError("a question takes no truth value", line)
    budget = _parse_budget(budget_text, punctuation, truth, config, line)
    sentence = Sentence(content, punctuation, truth, memory.new_stamp(time))
    return Task(sentence, budget)


def _parse_floats(text: str, line: str) -> list[float]:
    try:
        values = [float(part) for part in text.split(VALUE_SEPARATOR) if part.strip()]
    except ValueError:
        raise InvalidInputError(f"not a number in {text!r}", line) from None
    if any(not 0.0 <= v <= 1.0 for v in values):
        raise InvalidInputError(f"value out of [0, 1] in {text!r}", line)
    return values


def _parse_truth(text: str | None, config: Config, line: str) -> TruthValue:
    frequency = config.truth.default_judgment_frequency
    confidence = config.truth.default_judgment_confidence
    if text is not None:
        values = _parse_floats(text, line)
        if values:
            frequency = values[0]
        if len(values) > 1:
            confidence = values[1]
    return TruthValue(frequency, confidence)


def _parse_budget(
    text: str | None,
    punctuation: Punctuation,
    truth: TruthValue | None,
    config: Config,
    line: str,
) -> BudgetValue:
    if punctuation is Punctuation.JUDGMENT:
        priority = config.budget.default_judgment_priority
        durability = config.budget.default_judgment_durability
    else:
        priority = config.budget.default_question_priority
        durability = config.budget.default_question_durability
    if text is not None:
        values = _parse_floats(text, line)
        if values:
            priority = values[0]
        if len(values) > 1:
            durability = values[1]
    quality = 1.0 if truth is None else truth_to_quality(truth)
    return BudgetValue(priority, durability, quality)


def parse_term(text: str) -> Term:
    """Parse the text of a term."""
    s = text.strip()
    if not s:
        raise InvalidInputError("empty term", text)
    first, last = s[0], s[-1]
    if first == "(":
        if last != ")":
            raise InvalidInputError("unbalanced compound term", text)
        return _parse_compound(s[1:-1], text)
    if first == "{":
        if last != "}":
            raise InvalidInputError("unbalanced set", text)
        return _checked(make_compound(Connector.SET_EXT, _parse_arguments(s[1:-1], text)), text)
    if first == "[":
        if last != "]":
            raise InvalidInputError("unbalanced set", text)
        return _checked(make_compound(Connector.SET_INT, _parse_arguments(s[1:-1], text)), text)
    if first == "<":
        if last != ">":
            raise InvalidInputError("unbalanced statement", text)
        return _parse_statement(s[1:-1], text)
    return _parse_atomic(s, text)


def _checked(term: Term | None, text: str) -> Term:
    if term is None:
        raise InvalidInputError("invalid term", text)
    return term


def _parse_atomic(s: str, text: str) -> Term:
    body = s[1:] if s.startswith(VARIABLE_PREFIXES) else s
    if not body or any(c in _RESERVED for c in body):
        raise InvalidInputError(f"invalid word {s!r}", text)
    return Term(s)


def _top_level(s: str) -> Iterator[tuple[int, str]]:
    """Positions of relations and commas that are not nested in brackets."""
    depth = 0
    i = 0
    while i < len(s):
        chunk = s[i : i + 3]
        if chunk in _RELATIONS:
            if depth == 0:
                yield i, chunk
            i += 3
            continue
        c = s[i]
        if c in _OPENERS:
            depth += 1
        elif c in _CLOSERS:
            depth -= 1
            if depth < 0:
                raise InvalidInputError("unbalanced brackets", s)
        elif c == "," and depth == 0:
            yield i, c
        i += 1
    if depth != 0:
        raise InvalidInputError("unbalanced brackets", s)


def _split_arguments(s: str) -> list[str]:
    parts: list[str] = []
    start = 0
    for i, token in _top_level(s):
        if token == ",":
            parts.append(s[start:i])
            start = i + 1
    parts.append(s[start:])
    return parts


def _parse_arguments(s: str, text: str) -> list[Term]:
    return [parse_term(part) for part in _split_arguments(s)]


def _parse_compound(s: str, text: str) -> Term:
    parts = _split_arguments(s)
    if len(parts) < 2:
        raise InvalidInputError("a compound needs an operator and components", text)
    op = parts[0].strip()
    connector = _CONNECTORS.get(op)
    if connector is None:
        raise InvalidInputError(f"unknown operator {op!r}", text)
    if connector.is_image:
        return _parse_image(connector, parts[1:], text)
    return _checked(make_compound(connector, [parse_term(p) for p in parts[1:]]), text)


def _parse_image(connector: Connector, parts: list[str], text: str) -> Term:
    """``(/,R,a,_)``: the relation comes first and ``_`` marks its slot."""
    if len(parts) < 2:
        raise InvalidInputError("an image needs a relation and components", text)
    relation = parse_term(parts[0])
    components: list[Term] = []
    relation_index = -1
    for part in parts[1:]:
        if part.strip() == IMAGE_PLACEHOLDER:
            if relation_index >= 0:
                raise InvalidInputError("an image takes one placeholder", text)
            relation_index = len(components)
            components.append(relation)
        else:
            components.append(parse_term(part))
    if relation_index < 0:
        raise InvalidInputError("an image needs a placeholder", text)
    return _checked(make_compound(connector, components, relation_index), text)


def _parse_statement(s: str, text: str) -> Term:
    for i, token in _top_level(s):
        if token == ",":
            continue
        subject = parse_term(s[:i])
        predicate = parse_term(s[i + 3 :])
        if token in (_INSTANCE, _INSTANCE_PROPERTY):
            subject = _checked(make_compound(Connector.SET_EXT, [subject]), text)
        if token in (_PROPERTY, _INSTANCE_PROPERTY):
            predicate = _checked(make_compound(Connector.SET_INT, [predicate]), text)
            relation = Relation.INHERITANCE
        elif token == _INSTANCE:
            relation = Relation.INHERITANCE
        else:
            relation = Relation(token)
        return _checked(make_statement(relation, subject, predicate), text)
    raise InvalidInputError("statement without a relation", text)
