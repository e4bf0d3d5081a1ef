"""Contract between the control loop and the inference rules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nars_core.entity.links import TaskLink, TermLink
    from nars_core.entity.sentence import Sentence, Task
    from nars_core.storage.context import CycleContext


@runtime_checkable
class RuleEngine(Protocol):
    """What ``Memory`` and ``Concept`` need from a set of inference rules.

    Rules never return derived tasks; they hand them to the context
    (``ctx.double_premise_task`` and friends), which queues them for the
    next tick.
    """

    def reason(self, ctx: CycleContext, task_link: TaskLink, term_link: TermLink) -> None: ...

    def transform_task(self, ctx: CycleContext, task_link: TaskLink) -> None: ...

    def revisible(self, new_belief: Sentence, old_belief: Sentence) -> bool: ...

    def revision(self, ctx: CycleContext, new_belief: Sentence, old_belief: Sentence, feedback_to_links: bool) -> None: ...

    def try_solution(self, ctx: CycleContext, belief: Sentence, task: Task) -> None: ...

    def solution_quality(self, problem: Sentence | None, solution: Sentence) -> float: ...
