"""Memory: the concept registry and the work cycle."""

from __future__ import annotations

import itertools
import logging
from collections import deque
from typing import TYPE_CHECKING

import numpy as np

from nars_core.config import Config
from nars_core.entity.budget import BudgetValue
from nars_core.entity.concept import Concept
from nars_core.entity.sentence import Sentence, Task
from nars_core.entity.stamp import Stamp
from nars_core.inference.budget_functions import activate
from nars_core.inference.engine import NalRuleEngine
from nars_core.language.term import Term
from nars_core.storage.bag import Bag
from nars_core.storage.context import CycleContext

if TYPE_CHECKING:
    from nars_core.protocol.types import RuleEngine

logger = logging.getLogger(__name__)

INPUT_PREFIX = "  IN: "
OUTPUT_PREFIX = " OUT: "


class Memory:
    """All concepts of one reasoner plus the queues feeding them.

    Nothing here is shared between instances, so separate reasoners can run
    in separate threads.
    """

    def __init__(self, config: Config | None = None, rules: RuleEngine | None = None) -> None:
        self.config = config or Config()
        self.rules: RuleEngine = rules if rules is not None else NalRuleEngine()
        self._init_state()

    def _init_state(self) -> None:
        bag = self.config.bag
        self.rng = np.random.default_rng(self.config.seed)
        self.concepts: Bag[Concept] = Bag(
            capacity=bag.concept_capacity,
            forget_cycle=bag.concept_forgetting_cycle,
            levels=bag.levels,
            threshold=bag.threshold,
            rng=self.rng,
            name="Concepts",
        )
        self.novel_tasks: Bag[Task] = Bag(
            capacity=bag.novel_task_capacity,
            forget_cycle=bag.new_task_forgetting_cycle,
            levels=bag.levels,
            threshold=bag.threshold,
            rng=self.rng,
            name="NovelTasks",
        )
        self.new_tasks: deque[Task] = deque()
        self.exports: list[str] = []
        self._serials = itertools.count(1)

    def reset(self) -> None:
        self._init_state()

    @property
    def threshold(self) -> float:
        return self.config.budget.threshold

    # -- registry ----------------------------------------------------------

    def new_stamp(self, time: int) -> Stamp:
        return Stamp.create(next(self._serials), time)

    def name_to_concept(self, name: str) -> Concept | None:
        return self.concepts.get(name)

    def name_to_term(self, name: str) -> Term | None:
        concept = self.concepts.get(name)
        return concept.term if concept is not None else None

    def term_to_concept(self, term: Term) -> Concept | None:
        return self.concepts.get(term.name)

    def get_concept(self, term: Term) -> Concept | None:
        """Look up the concept of ``term``, creating it on first use.

        Variables get no concept. Returns None as well when a new concept
        is evicted as soon as it is inserted.
        """
        if not term.is_constant:
            return None
        concept = self.concepts.get(term.name)
        if concept is None:
            concept = Concept(term, self.config, self.rng)
            if not self.concepts.put_in(concept):
                return None
        return concept

    def concept_activation(self, term: Term) -> float:
        concept = self.concepts.get(term.name)
        return concept.budget.priority if concept is not None else 0.0

    def activate_concept(self, concept: Concept, budget: BudgetValue) -> None:
        """Adjust a concept's budget out of band, as one pick/put pair."""
        self.concepts.pick_out(concept.key)
        activate(concept, budget)
        self.concepts.put_back(concept)

    # -- task entry --------------------------------------------------------

    def input_task(self, task: Task) -> None:
        if task.budget.above_threshold(self.threshold):
            logger.debug("Perceived %s", task.to_string_brief())
            self.report(task.sentence, is_input=True)
            self.new_tasks.append(task)
        else:
            logger.debug("Neglected %s", task.to_string_brief())

    def derived_task(self, task: Task) -> bool:
        if not task.budget.above_threshold(self.threshold):
            logger.debug("Ignored derivation %s", task.to_string_brief())
            return False
        logger.debug("Derived %s", task.to_string_brief())
        if task.budget.summary() > self.config.silent_threshold:
            self.report(task.sentence, is_input=False)
        self.new_tasks.append(task)
        return True

    # -- work cycle --------------------------------------------------------

    def work_cycle(self, clock: int) -> None:
        """Run one tick.

        New tasks first; a novel task only if no new task was processed; a
        concept only if neither produced anything. The novel task bag ages
        every tick.
        """
        processed = self._process_new_tasks(clock)
        if processed == 0:
            processed = self._process_novel_task(clock)
        if processed == 0:
            self._process_concept(clock)
        self.novel_tasks.age()

    def _process_new_tasks(self, clock: int) -> int:
        processed = 0
        for _ in range(len(self.new_tasks)):
            task = self.new_tasks.popleft()
            if task.is_input or self.term_to_concept(task.content) is not None:
                self.immediate_process(task, clock)
                processed += 1
                continue
            sentence = task.sentence
            if sentence.is_judgment and sentence.truth.expectation > self.config.memory.creation_expectation:
                self.novel_tasks.put_in(task)
                logger.debug("Queued novel task %s", task.to_string_brief())
            else:
                logger.debug("Neglected %s", task.to_string_brief())
        return processed

    def _process_novel_task(self, clock: int) -> int:
        task = self.novel_tasks.take_out()
        if task is None:
            return 0
        self.immediate_process(task, clock)
        return 1

    def _process_concept(self, clock: int) -> None:
        concept = self.concepts.take_out()
        if concept is None:
            return
        self.concepts.put_back(concept)
        ctx = CycleContext(self, clock, current_concept=concept)
        concept.fire(ctx)

    def immediate_process(self, task: Task, clock: int) -> None:
        concept = self.get_concept(task.content)
        if concept is None:
            return
        ctx = CycleContext(self, clock, current_task=task, current_concept=concept)
        self.activate_concept(concept, task.budget)
        concept.direct_process(ctx, task)

    # -- output ------------------------------------------------------------

    def report(self, sentence: Sentence, is_input: bool) -> None:
        prefix = INPUT_PREFIX if is_input else OUTPUT_PREFIX
        self.exports.append(prefix + sentence.to_string_brief())

    def drain_reports(self) -> list[str]:
        reports, self.exports = self.exports, []
        return reports

    def to_string_long(self) -> str:
        lines = [self.concepts.to_string_long(), self.novel_tasks.to_string_long()]
        if self.new_tasks:
            lines.append(" New tasks:")
            lines.extend(" " + str(task) for task in self.new_tasks)
        return "\n".join(lines)
