"""Budget values: the priority / durability / quality triple."""

from __future__ import annotations

from nars_core.utils import and_, ave_geo, clamp, format_fraction, format_fraction_long, or_

BUDGET_THRESHOLD = 0.01
MARK = "$"
SEPARATOR = ";"


class BudgetValue:
    """Resource allocation for an item.

    Every field is clamped into [0, 1] on every mutation. Priority drives
    selection, durability drives the decay rate and quality is set when the
    budget is created.
    """

    __slots__ = ("_priority", "_durability", "_quality")

    def __init__(self, priority: float = 0.01, durability: float = 0.01, quality: float = 0.01) -> None:
        self._priority = clamp(priority)
        self._durability = clamp(durability)
        self._quality = clamp(quality)

    @property
    def priority(self) -> float:
        return self._priority

    @priority.setter
    def priority(self, value: float) -> None:
        self._priority = clamp(value)

    @property
    def durability(self) -> float:
        return self._durability

    @durability.setter
    def durability(self, value: float) -> None:
        self._durability = clamp(value)

    @property
    def quality(self) -> float:
        return self._quality

    @quality.setter
    def quality(self, value: float) -> None:
        self._quality = clamp(value)

    def inc_priority(self, value: float) -> None:
        self.priority = or_(self._priority, value)

    def dec_priority(self, value: float) -> None:
        self.priority = and_(self._priority, value)

    def inc_durability(self, value: float) -> None:
        self.durability = or_(self._durability, value)

    def dec_durability(self, value: float) -> None:
        self.durability = and_(self._durability, value)

    def summary(self) -> float:
        """Geometric mean of the three fields."""
        return ave_geo(self._priority, self._durability, self._quality)

    def above_threshold(self, threshold: float = BUDGET_THRESHOLD) -> bool:
        return self.summary() >= threshold

    def merge(self, other: BudgetValue) -> None:
        """Merge an older budget for the same key into this one.

        Priority and durability take the maximum; quality stays with this
        (newer) budget.
        """
        self.priority = max(self._priority, other.priority)
        self.durability = max(self._durability, other.durability)

    def copy(self) -> BudgetValue:
        return BudgetValue(self._priority, self._durability, self._quality)

    def to_string_brief(self) -> str:
        return (
            MARK
            + format_fraction(self._priority)
            + SEPARATOR
            + format_fraction(self._durability)
            + SEPARATOR
            + format_fraction(self._quality)
            + MARK
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BudgetValue):
            return NotImplemented
        return (
            self._priority == other.priority
            and self._durability == other.durability
            and self._quality == other.quality
        )

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return (
            MARK
            + format_fraction_long(self._priority)
            + SEPARATOR
            + format_fraction_long(self._durability)
            + SEPARATOR
            + format_fraction_long(self._quality)
            + MARK
        )

    def __repr__(self) -> str:
        return f"BudgetValue({self._priority!r}, {self._durability!r}, {self._quality!r})"
