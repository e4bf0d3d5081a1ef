"""Sentences and tasks."""

from __future__ import annotations

from enum import Enum

from nars_core.entity.budget import BudgetValue
from nars_core.entity.stamp import Stamp
from nars_core.entity.truth import TruthValue
from nars_core.language.term import QUERY_VARIABLE_PREFIX, Term


class Punctuation(str, Enum):
    JUDGMENT = "."
    QUESTION = "?"


class Sentence:
    """A term with punctuation, truth (judgments only) and a stamp."""

    __slots__ = ("content", "punctuation", "truth", "stamp", "revisible")

    def __init__(
        self,
        content: Term,
        punctuation: Punctuation,
        truth: TruthValue | None,
        stamp: Stamp,
        revisible: bool = True,
    ) -> None:
        if punctuation is Punctuation.JUDGMENT and truth is None:
            raise ValueError("a judgment requires a truth value")
        self.content = content
        self.punctuation = punctuation
        self.truth = truth if punctuation is Punctuation.JUDGMENT else None
        self.stamp = stamp
        self.revisible = revisible

    @property
    def is_judgment(self) -> bool:
        return self.punctuation is Punctuation.JUDGMENT

    @property
    def is_question(self) -> bool:
        return self.punctuation is Punctuation.QUESTION

    def contains_query_var(self) -> bool:
        return QUERY_VARIABLE_PREFIX in self.content.name

    def equivalent_to(self, other: Sentence) -> bool:
        """Same content, same truth and the same evidence."""
        return (
            self.content == other.content
            and self.truth == other.truth
            and self.stamp.equivalent(other.stamp)
        )

    def to_key(self) -> str:
        key = self.content.name + self.punctuation.value
        if self.truth is not None:
            key += " " + self.truth.to_string_brief()
        return key

    def to_string_brief(self) -> str:
        return self.to_key() + " " + str(self.stamp)

    def __str__(self) -> str:
        text = self.content.name + self.punctuation.value + " "
        if self.truth is not None:
            text += str(self.truth) + " "
        return text + str(self.stamp)

    def __repr__(self) -> str:
        return f"Sentence({self.to_string_brief()!r})"


class Task:
    """A sentence to be processed, with its budget and derivation history."""

    __slots__ = ("sentence", "budget", "parent_task", "parent_belief", "best_solution")

    def __init__(
        self,
        sentence: Sentence,
        budget: BudgetValue,
        parent_task: Task | None = None,
        parent_belief: Sentence | None = None,
        best_solution: Sentence | None = None,
    ) -> None:
        self.sentence = sentence
        self.budget = budget
        self.parent_task = parent_task
        self.parent_belief = parent_belief
        self.best_solution = best_solution

    @property
    def key(self) -> str:
        return self.sentence.to_key()

    @property
    def content(self) -> Term:
        return self.sentence.content

    @property
    def is_input(self) -> bool:
        return self.parent_task is None

    def merge(self, other: Task) -> None:
        self.budget.merge(other.budget)
        if other.sentence.stamp.creation_time > self.sentence.stamp.creation_time:
            self.budget.quality = other.budget.quality

    def to_string_brief(self) -> str:
        return self.budget.to_string_brief() + " " + self.sentence.to_string_brief()

    def __str__(self) -> str:
        text = str(self.budget) + " " + str(self.sentence)
        if self.best_solution is not None:
            text += "\n  solution: " + self.best_solution.to_string_brief()
        return text

    def __repr__(self) -> str:
        return f"Task({self.to_string_brief()!r})"
