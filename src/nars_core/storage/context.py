"""Per-operation reasoning context.

One ``CycleContext`` is created for each unit of work inside a tick (one
task processed directly, or one concept fired). It holds the premises
under consideration and builds derived tasks from them, so no scratch
state lives on ``Memory`` itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nars_core.entity.budget import BudgetValue
from nars_core.entity.sentence import Punctuation, Sentence, Task
from nars_core.entity.stamp import Stamp
from nars_core.entity.truth import TruthValue
from nars_core.language.term import Term

if TYPE_CHECKING:
    from nars_core.entity.concept import Concept
    from nars_core.entity.links import TaskLink, TermLink
    from nars_core.storage.memory import Memory


@dataclass
class CycleContext:
    memory: Memory
    time: int
    current_task: Task | None = None
    current_task_link: TaskLink | None = None
    current_belief_link: TermLink | None = None
    current_belief: Sentence | None = None
    current_concept: Concept | None = None
    new_stamp: Stamp | None = None
    derived: int = 0

    @property
    def threshold(self) -> float:
        return self.memory.threshold

    def no_result(self) -> bool:
        return self.derived == 0

    def derived_task(self, task: Task) -> None:
        if self.memory.derived_task(task):
            self.derived += 1

    def double_premise_task(
        self,
        content: Term | None,
        truth: TruthValue | None,
        budget: BudgetValue,
        revisible: bool = True,
    ) -> None:
        """Derive from the current task and belief under the merged stamp."""
        if content is None or self.new_stamp is None or self.current_task is None:
            return
        punctuation = self.current_task.sentence.punctuation
        if punctuation is Punctuation.JUDGMENT and truth is None:
            return
        sentence = Sentence(content, punctuation, truth, self.new_stamp, revisible)
        self.derived_task(Task(sentence, budget, self.current_task, self.current_belief))

    def single_premise_task(
        self,
        content: Term | None,
        truth: TruthValue | None,
        budget: BudgetValue,
        punctuation: Punctuation | None = None,
    ) -> None:
        """Derive from the current task alone."""
        task = self.current_task
        if content is None or task is None:
            return
        parent = task.parent_task
        if parent is not None and content == parent.content:
            return
        task_sentence = task.sentence
        if punctuation is None:
            punctuation = task_sentence.punctuation
        if punctuation is Punctuation.JUDGMENT and truth is None:
            return
        if task_sentence.is_judgment or self.current_belief is None:
            stamp = task_sentence.stamp.with_time(self.time)
        else:
            stamp = self.current_belief.stamp.with_time(self.time)
        sentence = Sentence(content, punctuation, truth, stamp, task_sentence.revisible)
        self.derived_task(Task(sentence, budget, task, None))

    def activated_task(self, budget: BudgetValue, sentence: Sentence, candidate_belief: Sentence | None) -> None:
        """Feed an answer back in as a task of its own."""
        task = Task(sentence, budget, self.current_task, sentence, candidate_belief)
        if sentence.is_question:
            self.memory.report(sentence, is_input=False)
        self.memory.new_tasks.append(task)
        self.derived += 1
