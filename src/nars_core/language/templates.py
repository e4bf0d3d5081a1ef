"""Link templates: precomputed positions of the components of a compound."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from nars_core.language.term import CompoundTerm, Connector, Relation, Term, is_compound, is_statement


class LinkType(IntEnum):
    SELF = 0
    COMPONENT = 1
    COMPOUND = 2
    COMPONENT_STATEMENT = 3
    COMPOUND_STATEMENT = 4
    COMPONENT_CONDITION = 5
    COMPOUND_CONDITION = 6
    TRANSFORM = 8

    @property
    def points_to_component(self) -> bool:
        """Odd link types point from a compound down to one of its parts."""
        return self % 2 == 1

    def to_component(self) -> LinkType:
        """The component-side counterpart of a compound-side template type."""
        if self is LinkType.TRANSFORM:
            return self
        return LinkType(self - 1)


@dataclass(frozen=True)
class LinkTemplate:
    """Where ``target`` sits inside the compound the template was built for.

    Templates always carry the compound-side (even) type.
    """

    target: Term
    link_type: LinkType
    indices: tuple[int, ...]


def _template(target: Term, link_type: LinkType, *indices: int) -> LinkTemplate:
    if link_type is LinkType.COMPOUND_CONDITION:
        indices = (0,) + indices
    return LinkTemplate(target, link_type, indices)


def _is_product_or_image(term: Term) -> bool:
    return is_compound(term, Connector.PRODUCT, Connector.IMAGE_EXT, Connector.IMAGE_INT)


def prepare_component_links(term: CompoundTerm) -> list[LinkTemplate]:
    """Collect the templates linking ``term`` to its constant components."""
    link_type = LinkType.COMPOUND_STATEMENT if is_statement(term) else LinkType.COMPOUND
    templates: list[LinkTemplate] = []
    _prepare(term, link_type, term, templates)
    return templates


def _prepare(owner: CompoundTerm, link_type: LinkType, term: CompoundTerm, templates: list[LinkTemplate]) -> None:
    for i, t1 in enumerate(term.components):
        if t1.is_constant:
            templates.append(_template(t1, link_type, i))
        conditional = is_statement(owner, Relation.EQUIVALENCE) or (
            is_statement(owner, Relation.IMPLICATION) and i == 0
        )
        if conditional and is_compound(t1, Connector.CONJUNCTION, Connector.NEGATION):
            _prepare(t1, LinkType.COMPOUND_CONDITION, t1, templates)
        elif isinstance(t1, CompoundTerm):
            for j, t2 in enumerate(t1.components):
                if t2.is_constant:
                    if _is_product_or_image(t1):
                        if link_type is LinkType.COMPOUND_CONDITION:
                            templates.append(LinkTemplate(t2, LinkType.TRANSFORM, (0, i, j)))
                        else:
                            templates.append(LinkTemplate(t2, LinkType.TRANSFORM, (i, j)))
                    else:
                        templates.append(_template(t2, link_type, i, j))
                if _is_product_or_image(t2):
                    for k, t3 in enumerate(t2.components):
                        if not t3.is_constant:
                            continue
                        if link_type is LinkType.COMPOUND_CONDITION:
                            templates.append(LinkTemplate(t3, LinkType.TRANSFORM, (0, i, j, k)))
                        else:
                            templates.append(LinkTemplate(t3, LinkType.TRANSFORM, (i, j, k)))
