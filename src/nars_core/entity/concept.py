"""Concepts: per-term containers of beliefs, questions and links."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from nars_core.config import Config
from nars_core.entity.budget import BudgetValue
from nars_core.entity.links import TaskLink, TermLink
from nars_core.entity.sentence import Sentence, Task
from nars_core.entity.stamp import Stamp
from nars_core.inference.budget_functions import distribute_among_links, rank_belief
from nars_core.language.templates import LinkTemplate, LinkType, prepare_component_links
from nars_core.language.term import CompoundTerm, Term
from nars_core.storage.bag import Bag
from nars_core.utils import or_

if TYPE_CHECKING:
    from nars_core.storage.context import CycleContext


class Concept:
    """Everything the system knows about one term.

    Other concepts are only ever reached through the memory's registry,
    by term.
    """

    def __init__(self, term: Term, config: Config | None = None, rng: np.random.Generator | None = None) -> None:
        self.term = term
        self.config = config or Config()
        self.budget = BudgetValue()
        bag = self.config.bag
        self.task_links: Bag[TaskLink] = Bag(
            capacity=bag.task_link_capacity,
            forget_cycle=bag.task_link_forgetting_cycle,
            levels=bag.levels,
            threshold=bag.threshold,
            rng=rng,
            name=f"TaskLinks {term.name}",
        )
        self.term_links: Bag[TermLink] = Bag(
            capacity=bag.term_link_capacity,
            forget_cycle=bag.term_link_forgetting_cycle,
            levels=bag.levels,
            threshold=bag.threshold,
            rng=rng,
            name=f"TermLinks {term.name}",
        )
        self.templates: list[LinkTemplate] = (
            prepare_component_links(term) if isinstance(term, CompoundTerm) else []
        )
        self.beliefs: list[Sentence] = []
        self.questions: list[Task] = []

    @property
    def key(self) -> str:
        return self.term.name

    def merge(self, other: Concept) -> None:
        self.budget.merge(other.budget)

    def total_quality(self) -> float:
        """Quality of the concept: how well linked and how simple its term is."""
        return or_(self.term_links.average_priority(), 1.0 / self.term.complexity)

    # -- direct processing -------------------------------------------------

    def direct_process(self, ctx: CycleContext, task: Task) -> None:
        """Accept a task, then link it in if it is still worth the space."""
        if task.sentence.is_judgment:
            self._process_judgment(ctx, task)
        else:
            self._process_question(ctx, task)
        if task.budget.above_threshold(ctx.threshold):
            self.link_to_task(ctx, task)

    def _process_judgment(self, ctx: CycleContext, task: Task) -> None:
        rules = ctx.memory.rules
        judgment = task.sentence
        old_belief = self._evaluation(ctx, judgment, self.beliefs)
        if old_belief is not None:
            if judgment.stamp.equivalent(old_belief.stamp):
                parent = task.parent_task
                if parent is None or parent.sentence.is_judgment:
                    task.budget.dec_priority(0.0)
                return
            if rules.revisible(judgment, old_belief):
                ctx.new_stamp = Stamp.merge(
                    judgment.stamp, old_belief.stamp, ctx.time, ctx.memory.config.stamp.maximum_length
                )
                if ctx.new_stamp is not None:
                    ctx.current_belief = old_belief
                    rules.revision(ctx, judgment, old_belief, False)
        if task.budget.above_threshold(ctx.threshold):
            for question in list(self.questions):
                rules.try_solution(ctx, judgment, question)
            self._add_to_table(judgment, self.beliefs, self.config.concept.maximum_belief_length)

    def _process_question(self, ctx: CycleContext, task: Task) -> None:
        question = task.sentence
        is_new = True
        for existing in self.questions:
            if existing.content == question.content:
                question = existing.sentence
                is_new = False
                break
        if is_new:
            self.questions.append(task)
            if len(self.questions) > self.config.concept.maximum_questions_length:
                self.questions.pop(0)
        answer = self._evaluation(ctx, question, self.beliefs)
        if answer is not None:
            ctx.memory.rules.try_solution(ctx, answer, task)

    @staticmethod
    def _evaluation(ctx: CycleContext, query: Sentence, table: list[Sentence]) -> Sentence | None:
        """The belief in ``table`` that best answers ``query``."""
        best: Sentence | None = None
        best_quality = -1.0
        for judgment in table:
            quality = ctx.memory.rules.solution_quality(query, judgment)
            if quality > best_quality:
                best_quality = quality
                best = judgment
        return best

    @staticmethod
    def _add_to_table(sentence: Sentence, table: list[Sentence], capacity: int) -> None:
        """Insert by rank, skipping duplicates and trimming the tail."""
        rank = rank_belief(sentence)
        i = 0
        while i < len(table):
            if rank >= rank_belief(table[i]):
                if sentence.equivalent_to(table[i]):
                    return
                table.insert(i, sentence)
                break
            i += 1
        if len(table) >= capacity:
            del table[capacity:]
        elif i == len(table):
            table.append(sentence)

    # -- linking -----------------------------------------------------------

    def link_to_task(self, ctx: CycleContext, task: Task) -> None:
        """Link the task here and to every component concept."""
        task_budget = task.budget
        self.insert_task_link(ctx, TaskLink(task, None, task_budget.copy(), self.config.concept.term_link_record_length))
        if not self.templates:
            return
        sub_budget = distribute_among_links(task_budget, len(self.templates))
        if not sub_budget.above_threshold(ctx.threshold):
            return
        for template in self.templates:
            component_concept = ctx.memory.get_concept(template.target)
            if component_concept is not None:
                link = TaskLink(task, template, sub_budget.copy(), self.config.concept.term_link_record_length)
                component_concept.insert_task_link(ctx, link)
        self.build_term_links(ctx, task_budget)

    def insert_task_link(self, ctx: CycleContext, task_link: TaskLink) -> None:
        """Store a task link and let it activate this concept."""
        self.task_links.put_in(task_link)
        ctx.memory.activate_concept(self, task_link.budget)

    def insert_term_link(self, term_link: TermLink) -> None:
        self.term_links.put_in(term_link)

    def build_term_links(self, ctx: CycleContext, budget: BudgetValue) -> None:
        """Create paired term links to and from every component concept."""
        if not self.templates:
            return
        sub_budget = distribute_among_links(budget, len(self.templates))
        if not sub_budget.above_threshold(ctx.threshold):
            return
        for template in self.templates:
            if template.link_type is LinkType.TRANSFORM:
                continue
            component = template.target
            concept = ctx.memory.get_concept(component)
            if concept is None:
                continue
            self.insert_term_link(TermLink.from_template(component, template, sub_budget.copy()))
            concept.insert_term_link(TermLink.from_template(self.term, template, sub_budget.copy()))
            if isinstance(component, CompoundTerm):
                concept.build_term_links(ctx, sub_budget)

    # -- reasoning ---------------------------------------------------------

    def get_belief(self, ctx: CycleContext, task: Task) -> Sentence | None:
        """First belief whose evidence can be combined with the task's.

        Leaves the merged stamp in ``ctx.new_stamp``.
        """
        for belief in self.beliefs:
            ctx.new_stamp = Stamp.merge(
                task.sentence.stamp, belief.stamp, ctx.time, ctx.memory.config.stamp.maximum_length
            )
            if ctx.new_stamp is not None:
                return belief
        return None

    def fire(self, ctx: CycleContext) -> None:
        """Pair one task link with a few novel term links and reason on them."""
        task_link = self.task_links.take_out()
        if task_link is None:
            return
        rules = ctx.memory.rules
        ctx.current_concept = self
        ctx.current_task_link = task_link
        ctx.current_belief_link = None
        ctx.current_task = task_link.target_task
        if task_link.link_type is LinkType.TRANSFORM:
            ctx.current_belief = None
            rules.transform_task(ctx, task_link)
        else:
            remaining = self.config.concept.max_reasoned_term_link
            while ctx.no_result() and remaining > 0:
                term_link = self._take_novel_term_link(task_link, ctx.time)
                if term_link is None:
                    break
                ctx.current_belief_link = term_link
                rules.reason(ctx, task_link, term_link)
                self.term_links.put_back(term_link)
                remaining -= 1
        self.task_links.put_back(task_link)

    def _take_novel_term_link(self, task_link: TaskLink, time: int) -> TermLink | None:
        for _ in range(self.config.concept.max_matched_term_link):
            term_link = self.term_links.take_out()
            if term_link is None:
                return None
            if task_link.novel(term_link, time):
                return term_link
            self.term_links.put_back(term_link)
        return None

    # -- display -----------------------------------------------------------

    def __str__(self) -> str:
        return str(self.budget) + " " + self.key

    def __repr__(self) -> str:
        return f"Concept({self.key!r})"

    def to_string_long(self) -> str:
        lines = [str(self), self.term_links.to_string_long(), self.task_links.to_string_long()]
        if self.beliefs:
            lines.append("\n Beliefs:")
            lines.extend(" " + str(belief) for belief in self.beliefs)
        if self.questions:
            lines.append("\n Question:")
            lines.extend(" " + str(question) for question in self.questions)
        return "\n".join(lines)
