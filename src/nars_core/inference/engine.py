"""Default rule engine wired into ``Memory``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nars_core.inference import budget_functions, local_rules, rule_tables

if TYPE_CHECKING:
    from nars_core.entity.links import TaskLink, TermLink
    from nars_core.entity.sentence import Sentence, Task
    from nars_core.storage.context import CycleContext


class NalRuleEngine:
    """Revision, question answering, syllogisms, detachment and
    product/image transforms over constant terms."""

    def reason(self, ctx: CycleContext, task_link: TaskLink, term_link: TermLink) -> None:
        rule_tables.reason(ctx, task_link, term_link)

    def transform_task(self, ctx: CycleContext, task_link: TaskLink) -> None:
        rule_tables.transform_task(ctx, task_link)

    def revisible(self, new_belief: Sentence, old_belief: Sentence) -> bool:
        return local_rules.revisible(new_belief, old_belief)

    def revision(self, ctx: CycleContext, new_belief: Sentence, old_belief: Sentence, feedback_to_links: bool) -> None:
        local_rules.revision(ctx, new_belief, old_belief, feedback_to_links)

    def try_solution(self, ctx: CycleContext, belief: Sentence, task: Task) -> None:
        local_rules.try_solution(ctx, belief, task)

    def solution_quality(self, problem: Sentence | None, solution: Sentence) -> float:
        return budget_functions.solution_quality(problem, solution)
