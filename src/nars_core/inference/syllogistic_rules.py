"""Syllogistic rules: two statements sharing one term."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nars_core.entity.sentence import Sentence
from nars_core.inference import budget_functions as bf
from nars_core.inference import truth_functions as tf
from nars_core.language.term import (
    Relation,
    Statement,
    Term,
    invalid_statement,
    make_statement_like,
    make_sym,
)

if TYPE_CHECKING:
    from nars_core.storage.context import CycleContext


def ded_exe(ctx: CycleContext, term1: Term, term2: Term, sentence: Sentence, belief: Sentence) -> None:
    """{<S ==> M>, <M ==> P>} |- {<S ==> P>, <P ==> S>}"""
    if invalid_statement(term1, term2):
        return
    content = sentence.content
    if not isinstance(content, Statement):
        return
    truth1 = truth2 = None
    if sentence.is_question:
        budget1 = bf.backward_weak(ctx, belief.truth)
        budget2 = bf.backward_weak(ctx, belief.truth)
    else:
        truth1 = tf.deduction(sentence.truth, belief.truth)
        truth2 = tf.exemplification(sentence.truth, belief.truth)
        budget1 = bf.forward(ctx, truth1)
        budget2 = bf.forward(ctx, truth2)
    ctx.double_premise_task(make_statement_like(content, term1, term2), truth1, budget1)
    ctx.double_premise_task(make_statement_like(content, term2, term1), truth2, budget2)


def abd_ind_com(ctx: CycleContext, term1: Term, term2: Term, task_sentence: Sentence, belief: Sentence) -> None:
    """{<M ==> S>, <M ==> P>} |- {<S ==> P>, <P ==> S>, <S <=> P>}"""
    if invalid_statement(term1, term2) or invalid_statement(term2, term1):
        return
    content = task_sentence.content
    if not isinstance(content, Statement):
        return
    truth1 = truth2 = truth3 = None
    if task_sentence.is_question:
        budget1 = bf.backward(ctx, belief.truth)
        budget2 = bf.backward_weak(ctx, belief.truth)
        budget3 = bf.backward(ctx, belief.truth)
    else:
        truth1 = tf.abduction(task_sentence.truth, belief.truth)
        truth2 = tf.abduction(belief.truth, task_sentence.truth)
        truth3 = tf.comparison(task_sentence.truth, belief.truth)
        budget1 = bf.forward(ctx, truth1)
        budget2 = bf.forward(ctx, truth2)
        budget3 = bf.forward(ctx, truth3)
    ctx.double_premise_task(make_statement_like(content, term1, term2), truth1, budget1)
    ctx.double_premise_task(make_statement_like(content, term2, term1), truth2, budget2)
    ctx.double_premise_task(make_sym(content, term1, term2), truth3, budget3)


def analogy(ctx: CycleContext, subject: Term, predicate: Term, asym: Sentence, sym: Sentence) -> None:
    """{<S ==> P>, <M <=> P>} |- <S ==> P>"""
    if invalid_statement(subject, predicate):
        return
    statement = asym.content
    if not isinstance(statement, Statement) or ctx.current_task is None:
        return
    sentence = ctx.current_task.sentence
    truth = None
    if sentence.is_question:
        if sentence.content.is_commutative:
            budget = bf.backward_weak(ctx, asym.truth)
        else:
            budget = bf.backward(ctx, sym.truth)
    else:
        truth = tf.analogy(asym.truth, sym.truth)
        budget = bf.forward(ctx, truth)
    ctx.double_premise_task(make_statement_like(statement, subject, predicate), truth, budget)


def resemblance(ctx: CycleContext, term1: Term, term2: Term, belief: Sentence, sentence: Sentence) -> None:
    """{<S <=> M>, <M <=> P>} |- <S <=> P>"""
    if invalid_statement(term1, term2):
        return
    statement = belief.content
    if not isinstance(statement, Statement):
        return
    truth = None
    if sentence.is_question:
        budget = bf.backward(ctx, belief.truth)
    else:
        truth = tf.resemblance(belief.truth, sentence.truth)
        budget = bf.forward(ctx, truth)
    ctx.double_premise_task(make_statement_like(statement, term1, term2), truth, budget)


def detachment(ctx: CycleContext, main_sentence: Sentence, sub_sentence: Sentence, side: int) -> None:
    """{<<M --> S> ==> <M --> P>>, <M --> S>} |- <M --> P>

    ``side`` is the position of the matched component in the main statement.
    """
    statement = main_sentence.content
    if not isinstance(statement, Statement) or not statement.relation.is_higher_order:
        return
    term = sub_sentence.content
    if side == 0 and term == statement.subject:
        content = statement.predicate
    elif side == 1 and term == statement.predicate:
        content = statement.subject
    else:
        return
    if isinstance(content, Statement) and invalid_statement(content.subject, content.predicate):
        return
    task = ctx.current_task
    belief = ctx.current_belief
    if task is None or belief is None:
        return
    truth = None
    if task.sentence.is_question:
        if statement.relation is Relation.EQUIVALENCE:
            budget = bf.backward(ctx, belief.truth)
        elif side == 0:
            budget = bf.backward_weak(ctx, belief.truth)
        else:
            budget = bf.backward(ctx, belief.truth)
    else:
        if statement.relation is Relation.EQUIVALENCE:
            truth = tf.analogy(sub_sentence.truth, main_sentence.truth)
        elif side == 0:
            truth = tf.deduction(main_sentence.truth, sub_sentence.truth)
        else:
            truth = tf.abduction(sub_sentence.truth, main_sentence.truth)
        budget = bf.forward(ctx, truth)
    ctx.double_premise_task(content, truth, budget)
