"""Structural rules: moving components between products and images."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nars_core.inference import budget_functions as bf
from nars_core.language.term import (
    CompoundTerm,
    Connector,
    Relation,
    Statement,
    Term,
    is_compound,
    make_image_from_image,
    make_image_from_product,
    make_product_from_image,
    make_statement,
    make_statement_like,
)

if TYPE_CHECKING:
    from nars_core.entity.sentence import Task
    from nars_core.storage.context import CycleContext


def transform_product_image(
    ctx: CycleContext,
    inh: Statement,
    old_content: Term,
    indices: tuple[int, ...],
    task: Task,
) -> None:
    """Rewrite an inheritance between a product (or image) and a term.

    ``<(*,a,b) --> R>`` becomes ``<a --> (/,R,_,b)>`` and so on. When the
    inheritance is nested inside ``old_content``, the nested position is
    rewritten in place.
    """
    if inh == old_content:
        if isinstance(inh.subject, CompoundTerm):
            _transform_subject_pi(ctx, inh.subject, inh.predicate, task)
        if isinstance(inh.predicate, CompoundTerm):
            _transform_predicate_pi(ctx, inh.subject, inh.predicate, task)
        return
    index = indices[-1]
    side = indices[-2]
    comp = inh.components[side]
    if not isinstance(comp, CompoundTerm) or index >= comp.size():
        return
    if is_compound(comp, Connector.PRODUCT):
        if side == 0:
            subject = comp.component_at(index)
            predicate = make_image_from_product(Connector.IMAGE_EXT, comp, inh.predicate, index)
        else:
            subject = make_image_from_product(Connector.IMAGE_INT, comp, inh.subject, index)
            predicate = comp.component_at(index)
    elif is_compound(comp, Connector.IMAGE_EXT) and side == 1:
        if index == comp.relation_index:
            subject = make_product_from_image(comp, inh.subject, index)
            predicate = comp.component_at(index)
        else:
            subject = comp.component_at(index)
            predicate = make_image_from_image(comp, inh.subject, index)
    elif is_compound(comp, Connector.IMAGE_INT) and side == 0:
        if index == comp.relation_index:
            subject = comp.component_at(index)
            predicate = make_product_from_image(comp, inh.predicate, index)
        else:
            subject = make_image_from_image(comp, inh.predicate, index)
            predicate = comp.component_at(index)
    else:
        return
    new_inh = make_statement(Relation.INHERITANCE, subject, predicate)
    if new_inh is None or not isinstance(old_content, Statement):
        return
    if indices[0] == 1:
        content = make_statement_like(old_content, old_content.subject, new_inh)
    elif indices[0] == 0:
        content = make_statement_like(old_content, new_inh, old_content.predicate)
    else:
        return
    _derive(ctx, content, task)


def _transform_subject_pi(ctx: CycleContext, subject: CompoundTerm, predicate: Term, task: Task) -> None:
    """<(*,a,b) --> R> |- <a --> (/,R,_,b)>, and <(\\,R,_,b) --> a> |- <R --> (*,a,b)>"""
    if is_compound(subject, Connector.PRODUCT):
        for i in range(subject.size()):
            new_subject = subject.component_at(i)
            new_predicate = make_image_from_product(Connector.IMAGE_EXT, subject, predicate, i)
            _derive(ctx, make_statement(Relation.INHERITANCE, new_subject, new_predicate), task)
    elif is_compound(subject, Connector.IMAGE_INT):
        for i in range(subject.size()):
            if i == subject.relation_index:
                new_subject = subject.component_at(i)
                new_predicate = make_product_from_image(subject, predicate, i)
            else:
                new_subject = make_image_from_image(subject, predicate, i)
                new_predicate = subject.component_at(i)
            _derive(ctx, make_statement(Relation.INHERITANCE, new_subject, new_predicate), task)


def _transform_predicate_pi(ctx: CycleContext, subject: Term, predicate: CompoundTerm, task: Task) -> None:
    """<R --> (*,a,b)> |- <(\\,R,_,b) --> a>, and <a --> (/,R,_,b)> |- <(*,a,b) --> R>"""
    if is_compound(predicate, Connector.PRODUCT):
        for i in range(predicate.size()):
            new_subject = make_image_from_product(Connector.IMAGE_INT, predicate, subject, i)
            new_predicate = predicate.component_at(i)
            _derive(ctx, make_statement(Relation.INHERITANCE, new_subject, new_predicate), task)
    elif is_compound(predicate, Connector.IMAGE_EXT):
        for i in range(predicate.size()):
            if i == predicate.relation_index:
                new_subject = make_product_from_image(predicate, subject, i)
                new_predicate = predicate.component_at(i)
            else:
                new_subject = predicate.component_at(i)
                new_predicate = make_image_from_image(predicate, subject, i)
            _derive(ctx, make_statement(Relation.INHERITANCE, new_subject, new_predicate), task)


def _derive(ctx: CycleContext, content: Term | None, task: Task) -> None:
    if content is None:
        return
    sentence = task.sentence
    truth = sentence.truth
    if sentence.is_question:
        budget = bf.compound_backward(ctx, content)
    else:
        if truth is None:
            return
        budget = bf.compound_forward(ctx, truth, content)
    ctx.single_premise_task(content, truth, budget)
