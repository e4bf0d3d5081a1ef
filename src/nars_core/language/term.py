"""Terms, compound terms and statements.

Terms are compared and hashed by name. Statements carry their copula as a
``Relation`` discriminant instead of one subclass per statement kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from nars_core.exceptions import InvariantError

VARIABLE_PREFIXES = ("$", "#", "?")
QUERY_VARIABLE_PREFIX = "?"
IMAGE_PLACEHOLDER = "_"


class Relation(str, Enum):
    INHERITANCE = "-->"
    SIMILARITY = "<->"
    IMPLICATION = "==>"
    EQUIVALENCE = "<=>"

    @property
    def is_symmetric(self) -> bool:
        return self in (Relation.SIMILARITY, Relation.EQUIVALENCE)

    @property
    def is_higher_order(self) -> bool:
        return self in (Relation.IMPLICATION, Relation.EQUIVALENCE)

    @property
    def symmetric(self) -> Relation:
        if self.is_higher_order:
            return Relation.EQUIVALENCE
        return Relation.SIMILARITY

    @property
    def asymmetric(self) -> Relation:
        if self.is_higher_order:
            return Relation.IMPLICATION
        return Relation.INHERITANCE


class Connector(str, Enum):
    SET_EXT = "{"
    SET_INT = "["
    INTERSECTION_EXT = "&"
    INTERSECTION_INT = "|"
    DIFFERENCE_EXT = "-"
    DIFFERENCE_INT = "~"
    PRODUCT = "*"
    IMAGE_EXT = "/"
    IMAGE_INT = "\\"
    NEGATION = "--"
    DISJUNCTION = "||"
    CONJUNCTION = "&&"

    @property
    def is_commutative(self) -> bool:
        return self in _COMMUTATIVE

    @property
    def is_image(self) -> bool:
        return self in (Connector.IMAGE_EXT, Connector.IMAGE_INT)

    @property
    def is_set(self) -> bool:
        return self in (Connector.SET_EXT, Connector.SET_INT)


_COMMUTATIVE = frozenset(
    {
        Connector.SET_EXT,
        Connector.SET_INT,
        Connector.INTERSECTION_EXT,
        Connector.INTERSECTION_INT,
        Connector.DISJUNCTION,
        Connector.CONJUNCTION,
    }
)
_SET_CLOSERS = {Connector.SET_EXT: "}", Connector.SET_INT: "]"}


class Term:
    """An atomic term: a word or a variable."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    def is_constant(self) -> bool:
        return not self.name.startswith(VARIABLE_PREFIXES)

    @property
    def complexity(self) -> int:
        return 1

    @property
    def is_compound(self) -> bool:
        return False

    @property
    def is_commutative(self) -> bool:
        return False

    def contains_term(self, target: Term) -> bool:
        return self == target

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Term) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: Term) -> bool:
        return self.name < other.name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class CompoundTerm(Term):
    """A term built from an operator and an ordered list of components."""

    __slots__ = ("connector", "components", "relation_index", "_complexity")

    def __init__(
        self,
        connector: Connector | None,
        components: Sequence[Term],
        relation_index: int = -1,
        name: str | None = None,
    ) -> None:
        self.connector = connector
        self.components: tuple[Term, ...] = tuple(components)
        self.relation_index = relation_index
        self._complexity = 1 + sum(c.complexity for c in self.components)
        super().__init__(name if name is not None else self._make_name())

    def _make_name(self) -> str:
        if self.connector is None:
            raise InvariantError("a compound term needs a connector or an explicit name")
        if self.connector.is_set:
            return self.connector.value + ",".join(c.name for c in self.components) + _SET_CLOSERS[self.connector]
        if self.connector.is_image:
            parts = [self.connector.value, self.components[self.relation_index].name]
            for i, component in enumerate(self.components):
                parts.append(IMAGE_PLACEHOLDER if i == self.relation_index else component.name)
            return "(" + ",".join(parts) + ")"
        return "(" + ",".join([self.connector.value] + [c.name for c in self.components]) + ")"

    @property
    def is_constant(self) -> bool:
        return all(c.is_constant for c in self.components)

    @property
    def complexity(self) -> int:
        return self._complexity

    @property
    def is_compound(self) -> bool:
        return True

    @property
    def is_commutative(self) -> bool:
        return self.connector is not None and self.connector.is_commutative

    @property
    def is_product(self) -> bool:
        return self.connector is Connector.PRODUCT

    @property
    def is_image(self) -> bool:
        return self.connector is not None and self.connector.is_image

    def size(self) -> int:
        return len(self.components)

    def component_at(self, index: int) -> Term:
        return self.components[index]

    def contains_component(self, target: Term) -> bool:
        return target in self.components

    def contains_term(self, target: Term) -> bool:
        return self == target or any(c.contains_term(target) for c in self.components)


class Statement(CompoundTerm):
    """A subject, a relation and a predicate."""

    __slots__ = ("relation",)

    def __init__(self, relation: Relation, subject: Term, predicate: Term) -> None:
        self.relation = relation
        super().__init__(
            None,
            (subject, predicate),
            name=f"<{subject.name} {relation.value} {predicate.name}>",
        )

    @property
    def subject(self) -> Term:
        return self.components[0]

    @property
    def predicate(self) -> Term:
        return self.components[1]

    @property
    def is_commutative(self) -> bool:
        return self.relation.is_symmetric


def is_statement(term: Term | None, *relations: Relation) -> bool:
    """Whether ``term`` is a statement, optionally with one of ``relations``."""
    if not isinstance(term, Statement):
        return False
    return not relations or term.relation in relations


def is_compound(term: Term | None, *connectors: Connector) -> bool:
    if not isinstance(term, CompoundTerm) or isinstance(term, Statement):
        return False
    return not connectors or term.connector in connectors


def _invalid_reflexive(container: Term, component: Term) -> bool:
    if not isinstance(container, CompoundTerm) or is_compound(container, Connector.IMAGE_EXT, Connector.IMAGE_INT):
        return False
    return container.contains_component(component)


def invalid_statement(subject: Term, predicate: Term) -> bool:
    if subject == predicate:
        return True
    if _invalid_reflexive(subject, predicate) or _invalid_reflexive(predicate, subject):
        return True
    if isinstance(subject, Statement) and isinstance(predicate, Statement):
        if subject.subject == predicate.predicate and subject.predicate == predicate.subject:
            return True
    return False


def make_statement(relation: Relation, subject: Term | None, predicate: Term | None) -> Statement | None:
    """Build a statement, or return None if it would be invalid.

    Symmetric relations order their two sides by name.
    """
    if subject is None or predicate is None:
        return None
    if invalid_statement(subject, predicate):
        return None
    if relation.is_symmetric and predicate < subject:
        subject, predicate = predicate, subject
    return Statement(relation, subject, predicate)


def make_statement_like(template: Statement, subject: Term | None, predicate: Term | None) -> Statement | None:
    return make_statement(template.relation, subject, predicate)


def make_sym(template: Statement, subject: Term | None, predicate: Term | None) -> Statement | None:
    """Symmetric counterpart of ``template``'s relation over new sides."""
    return make_statement(template.relation.symmetric, subject, predicate)


def make_compound(connector: Connector, components: Iterable[Term], relation_index: int = -1) -> Term | None:
    parts = list(components)
    if connector.is_commutative:
        unique = {c.name: c for c in parts}
        parts = [unique[name] for name in sorted(unique)]
        if not parts:
            return None
        if len(parts) == 1 and not connector.is_set:
            return parts[0]
    elif connector is Connector.NEGATION:
        if len(parts) != 1:
            return None
    elif connector in (Connector.DIFFERENCE_EXT, Connector.DIFFERENCE_INT):
        if len(parts) != 2 or parts[0] == parts[1]:
            return None
    elif connector.is_image:
        if not 0 <= relation_index < len(parts):
            return None
    elif not parts:
        return None
    return CompoundTerm(connector, parts, relation_index)


def make_product(components: Sequence[Term]) -> Term | None:
    return make_compound(Connector.PRODUCT, components)


def make_image_from_product(connector: Connector, product: CompoundTerm, relation: Term, index: int) -> Term | None:
    """``(*,a,b)`` with ``R`` at ``index`` becomes ``(/,R,_,b)`` style image."""
    components = list(product.components)
    components[index] = relation
    return make_compound(connector, components, index)


def make_product_from_image(image: CompoundTerm, component: Term, index: int) -> Term | None:
    components = list(image.components)
    components[index] = component
    return make_product(components)


def make_image_from_image(image: CompoundTerm, component: Term, index: int) -> Term | None:
    """Move the placeholder of ``image`` to ``index``, filling its old slot with ``component``."""
    if image.connector is None:
        return None
    components = list(image.components)
    old_index = image.relation_index
    relation = components[old_index]
    components[old_index] = component
    components[index] = relation
    return make_compound(image.connector, components, index)
