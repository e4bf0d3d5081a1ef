"""Task links and term links.

A link is a bag item carrying a budget and a typed position inside a
compound term. Term links point at another term, task links at a task.
"""

from __future__ import annotations

from collections import deque

from nars_core.entity.budget import BudgetValue
from nars_core.entity.sentence import Task
from nars_core.language.templates import LinkTemplate, LinkType
from nars_core.language.term import Term

TERM_LINK_RECORD_LENGTH = 10


def _link_key(link_type: LinkType, indices: tuple[int, ...], name: str) -> str:
    """Type and 1-based index marker, then the target name."""
    marker = "T" + str(int(link_type))
    if indices:
        marker += "-" + "-".join(str(i + 1) for i in indices)
    if link_type.points_to_component:
        return " @(" + marker + ")_ " + name
    return " _@(" + marker + ") " + name


class TermLink:
    """Link from the owning concept's term to ``target``."""

    __slots__ = ("target", "budget", "link_type", "indices", "_key")

    def __init__(
        self,
        target: Term,
        budget: BudgetValue,
        link_type: LinkType = LinkType.SELF,
        indices: tuple[int, ...] = (),
    ) -> None:
        self.target = target
        self.budget = budget
        self.link_type = link_type
        self.indices = indices
        self._key = _link_key(link_type, indices, target.name)

    @classmethod
    def from_template(cls, target: Term, template: LinkTemplate, budget: BudgetValue) -> TermLink:
        """Instantiate a template.

        When ``target`` is the template's own component the link points down
        to it, otherwise it points up to the compound.
        """
        link_type = template.link_type
        if template.target == target:
            link_type = link_type.to_component()
        return cls(target, budget, link_type, template.indices)

    @property
    def key(self) -> str:
        return self._key

    def get_index(self, position: int) -> int:
        if 0 <= position < len(self.indices):
            return self.indices[position]
        return -1

    def merge(self, other: TermLink) -> None:
        self.budget.merge(other.budget)

    def __str__(self) -> str:
        return str(self.budget) + self._key

    def __repr__(self) -> str:
        return f"TermLink({self._key!r})"


class TaskLink:
    """Link from the owning concept to a task.

    Remembers which term links it was recently paired with so the same pair
    is not reasoned on again within the record window.
    """

    __slots__ = ("target_task", "budget", "link_type", "indices", "record_length", "_records", "_key")

    def __init__(
        self,
        task: Task,
        template: LinkTemplate | None,
        budget: BudgetValue,
        record_length: int = TERM_LINK_RECORD_LENGTH,
    ) -> None:
        self.target_task = task
        self.budget = budget
        if template is None:
            self.link_type = LinkType.SELF
            self.indices: tuple[int, ...] = ()
        else:
            self.link_type = template.link_type
            self.indices = template.indices
        self._key = _link_key(self.link_type, self.indices, task.key)
        self.record_length = record_length
        self._records: deque[list] = deque(maxlen=record_length)

    @property
    def key(self) -> str:
        return self._key

    def get_index(self, position: int) -> int:
        if 0 <= position < len(self.indices):
            return self.indices[position]
        return -1

    def novel(self, term_link: TermLink, time: int) -> bool:
        """Whether ``term_link`` may be paired with this task link at ``time``."""
        if term_link.target == self.target_task.content:
            return False
        for record in self._records:
            if record[0] == term_link.key:
                if time < record[1] + self.record_length:
                    return False
                record[1] = time
                return True
        self._records.append([term_link.key, time])
        return True

    def merge(self, other: TaskLink) -> None:
        self.budget.merge(other.budget)

    def __str__(self) -> str:
        return str(self.budget) + self._key + " " + str(self.target_task.sentence.stamp)

    def __repr__(self) -> str:
        return f"TaskLink({self.key!r})"
