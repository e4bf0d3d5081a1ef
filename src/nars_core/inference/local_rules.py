"""Rules on premises with the same content: revision, answering, conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nars_core.entity.sentence import Punctuation, Sentence, Task
from nars_core.entity.truth import TruthValue
from nars_core.inference import budget_functions, truth_functions
from nars_core.language.term import QUERY_VARIABLE_PREFIX, Statement, make_statement_like, make_sym

if TYPE_CHECKING:
    from nars_core.entity.budget import BudgetValue
    from nars_core.storage.context import CycleContext

solution_quality = budget_functions.solution_quality


def match(ctx: CycleContext, task: Task, belief: Sentence) -> None:
    """Revise a judgment, or answer a question, with a belief of the same content."""
    sentence = task.sentence
    if sentence.is_judgment:
        if revisible(sentence, belief):
            revision(ctx, sentence, belief, True)
    elif sentence.content == belief.content:
        try_solution(ctx, belief, task)


def revisible(s1: Sentence, s2: Sentence) -> bool:
    return s1.content == s2.content and s1.revisible


def revision(ctx: CycleContext, new_belief: Sentence, old_belief: Sentence, feedback_to_links: bool) -> None:
    new_truth, old_truth = new_belief.truth, old_belief.truth
    if new_truth is None or old_truth is None:
        return
    truth = truth_functions.revision(new_truth, old_truth)
    budget = budget_functions.revise(ctx, new_truth, old_truth, truth, feedback_to_links)
    ctx.double_premise_task(new_belief.content, truth, budget)


def try_solution(ctx: CycleContext, belief: Sentence, task: Task) -> None:
    """Keep ``belief`` as the task's answer if it beats the current one."""
    problem = task.sentence
    old_best = task.best_solution
    if old_best is not None:
        if solution_quality(problem, old_best) >= solution_quality(problem, belief):
            return
    task.best_solution = belief
    if task.is_input:
        ctx.memory.report(belief, is_input=False)
    budget = budget_functions.solution_eval(ctx, problem, belief, task)
    if budget is not None and budget.above_threshold(ctx.threshold):
        ctx.activated_task(budget, belief, task.parent_belief)


def match_reverse(ctx: CycleContext) -> None:
    """The task and the belief are the same statement in reverse."""
    task = ctx.current_task
    belief = ctx.current_belief
    if task is None or belief is None:
        return
    if task.sentence.is_judgment:
        _infer_to_sym(ctx, task.sentence, belief)
    else:
        _conversion(ctx)


def match_asym_sym(ctx: CycleContext, asym: Sentence, sym: Sentence) -> None:
    """An asymmetric and a symmetric statement over the same two terms."""
    task = ctx.current_task
    if task is None:
        return
    if task.sentence.is_judgment:
        _infer_to_asym(ctx, asym, sym)
    else:
        convert_relation(ctx)


def _infer_to_sym(ctx: CycleContext, judgment1: Sentence, judgment2: Sentence) -> None:
    statement = judgment1.content
    if not isinstance(statement, Statement):
        return
    content = make_sym(statement, statement.subject, statement.predicate)
    truth = truth_functions.intersection(judgment1.truth, judgment2.truth)
    ctx.double_premise_task(content, truth, budget_functions.forward(ctx, truth))


def _infer_to_asym(ctx: CycleContext, asym: Sentence, sym: Sentence) -> None:
    statement = asym.content
    if not isinstance(statement, Statement):
        return
    content = make_statement_like(statement, statement.predicate, statement.subject)
    truth = truth_functions.reduce_conjunction(sym.truth, asym.truth)
    ctx.double_premise_task(content, truth, budget_functions.forward(ctx, truth))


def _conversion(ctx: CycleContext) -> None:
    if ctx.current_belief is None:
        return
    truth = truth_functions.conversion(ctx.current_belief.truth)
    _converted_judgment(ctx, truth, budget_functions.forward(ctx, truth))


def convert_relation(ctx: CycleContext) -> None:
    """Answer an asymmetric question from a symmetric belief, or back."""
    if ctx.current_belief is None or ctx.current_task is None:
        return
    truth = ctx.current_belief.truth
    if truth is None:
        return
    if ctx.current_task.content.is_commutative:
        truth = truth_functions.abduction_reliance(truth, 1.0)
    else:
        truth = truth_functions.deduction_reliance(truth, 1.0)
    _converted_judgment(ctx, truth, budget_functions.forward(ctx, truth))


def _converted_judgment(ctx: CycleContext, truth: TruthValue, budget: BudgetValue) -> None:
    if ctx.current_task is None or ctx.current_belief is None:
        return
    content = ctx.current_task.content
    belief_content = ctx.current_belief.content
    if not isinstance(content, Statement) or not isinstance(belief_content, Statement):
        return
    subject, predicate = content.subject, content.predicate
    if QUERY_VARIABLE_PREFIX in subject.name:
        other = belief_content.predicate if predicate == belief_content.subject else belief_content.subject
        content = make_statement_like(content, other, predicate)
    elif QUERY_VARIABLE_PREFIX in predicate.name:
        other = belief_content.predicate if subject == belief_content.subject else belief_content.subject
        content = make_statement_like(content, subject, other)
    ctx.single_premise_task(content, truth, budget, Punctuation.JUDGMENT)
