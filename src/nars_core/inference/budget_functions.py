"""Budget functions: how resources are assigned, adjusted and decayed."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from nars_core.entity.budget import BudgetValue
from nars_core.entity.sentence import Sentence
from nars_core.entity.truth import TruthValue
from nars_core.exceptions import InvariantError
from nars_core.language.term import Term
from nars_core.utils import and_, ave_ari, or_, w2c

if TYPE_CHECKING:
    from nars_core.entity.concept import Concept
    from nars_core.entity.sentence import Task
    from nars_core.storage.context import CycleContext


def truth_to_quality(truth: TruthValue) -> float:
    """Quality of a judgment; a strongly negative one is also informative."""
    exp = truth.expectation
    return max(exp, (1.0 - exp) * 0.75)


def rank_belief(judgment: Sentence) -> float:
    """Rank of a belief in a belief table: confidence or originality."""
    if judgment.truth is None:
        raise InvariantError("only judgments are ranked")
    originality = 1.0 / (judgment.stamp.length + 1)
    return or_(judgment.truth.confidence, originality)


def solution_quality(problem: Sentence | None, solution: Sentence) -> float:
    """How well ``solution`` answers ``problem``."""
    if solution.truth is None:
        raise InvariantError("a solution must be a judgment")
    if problem is None:
        return solution.truth.expectation
    if problem.contains_query_var():
        return solution.truth.expectation / solution.content.complexity
    return solution.truth.confidence


def solution_eval(
    ctx: CycleContext,
    problem: Sentence,
    solution: Sentence,
    task: Task | None = None,
) -> BudgetValue | None:
    """Budget of an answer; also lowers the priority of the answered task.

    Without an explicit ``task`` the context's current task is used and the
    current links receive feedback.
    """
    feedback_to_links = False
    if task is None:
        task = ctx.current_task
        feedback_to_links = True
    if task is None:
        return None
    quality = solution_quality(problem, solution)
    budget: BudgetValue | None = None
    if problem.is_judgment:
        task.budget.inc_priority(quality)
    else:
        task_priority = task.budget.priority
        budget = BudgetValue(or_(task_priority, quality), task.budget.durability, truth_to_quality(solution.truth))
        task.budget.priority = min(1.0 - quality, task_priority)
    if feedback_to_links:
        if ctx.current_task_link is not None:
            link_budget = ctx.current_task_link.budget
            link_budget.priority = min(1.0 - quality, link_budget.priority)
        if ctx.current_belief_link is not None:
            ctx.current_belief_link.budget.inc_priority(quality)
    return budget


def revise(
    ctx: CycleContext,
    task_truth: TruthValue,
    belief_truth: TruthValue,
    truth: TruthValue,
    feedback_to_links: bool,
) -> BudgetValue:
    """Budget of a revision; the premises lose what the conclusion gained."""
    task = ctx.current_task
    if task is None:
        raise InvariantError("revision needs a current task")
    dif_t = truth.exp_dif_abs(task_truth)
    task.budget.dec_priority(1.0 - dif_t)
    task.budget.dec_durability(1.0 - dif_t)
    if feedback_to_links:
        if ctx.current_task_link is not None:
            ctx.current_task_link.budget.dec_priority(1.0 - dif_t)
            ctx.current_task_link.budget.dec_durability(1.0 - dif_t)
        if ctx.current_belief_link is not None:
            dif_b = truth.exp_dif_abs(belief_truth)
            ctx.current_belief_link.budget.dec_priority(1.0 - dif_b)
            ctx.current_belief_link.budget.dec_durability(1.0 - dif_b)
    dif = truth.confidence - max(task_truth.confidence, belief_truth.confidence)
    priority = or_(dif, task.budget.priority)
    durability = ave_ari(dif, task.budget.durability)
    return BudgetValue(priority, durability, truth_to_quality(truth))


def distribute_among_links(budget: BudgetValue, count: int) -> BudgetValue:
    """Share of a task budget for each of ``count`` links."""
    priority = budget.priority / math.sqrt(count)
    return BudgetValue(priority, budget.durability, budget.quality)


def activate(concept: Concept, budget: BudgetValue) -> None:
    """Raise a concept's budget with an incoming link's budget."""
    old = concept.budget
    old.priority = or_(old.priority, budget.priority)
    old.durability = ave_ari(old.durability, budget.durability)
    old.quality = concept.total_quality()


def forget(budget: BudgetValue, forget_rate: float, relative_threshold: float) -> None:
    """Decay priority towards a floor set by quality.

    Higher durability decays slower. The priority never increases.
    """
    floor = budget.quality * relative_threshold
    p = budget.priority - floor
    if p > 0:
        floor += p * math.pow(budget.durability, 1.0 / (forget_rate * p))
    budget.priority = min(budget.priority, floor)


# Budgets of derived tasks


def forward(ctx: CycleContext, truth: TruthValue) -> BudgetValue:
    return _budget_inference(ctx, truth_to_quality(truth), 1)


def backward(ctx: CycleContext, truth: TruthValue) -> BudgetValue:
    return _budget_inference(ctx, truth_to_quality(truth), 1)


def backward_weak(ctx: CycleContext, truth: TruthValue) -> BudgetValue:
    return _budget_inference(ctx, w2c(1.0) * truth_to_quality(truth), 1)


def compound_forward(ctx: CycleContext, truth: TruthValue, content: Term) -> BudgetValue:
    return _budget_inference(ctx, truth_to_quality(truth), content.complexity)


def compound_backward(ctx: CycleContext, content: Term) -> BudgetValue:
    return _budget_inference(ctx, 1.0, content.complexity)


def compound_backward_weak(ctx: CycleContext, content: Term) -> BudgetValue:
    return _budget_inference(ctx, w2c(1.0), content.complexity)


def _budget_inference(ctx: CycleContext, quality: float, complexity: int) -> BudgetValue:
    source = ctx.current_task_link if ctx.current_task_link is not None else ctx.current_task
    if source is None:
        raise InvariantError("budget inference needs a current task")
    priority = source.budget.priority
    durability = source.budget.durability / complexity
    quality = quality / complexity
    belief_link = ctx.current_belief_link
    if belief_link is not None:
        priority = or_(priority, belief_link.budget.priority)
        durability = and_(durability, belief_link.budget.durability)
        target_activation = ctx.memory.concept_activation(belief_link.target)
        belief_link.budget.inc_priority(or_(quality, target_activation))
        belief_link.budget.inc_durability(quality)
    return BudgetValue(priority, durability, quality)
