"""Truth values: frequency and confidence of a judgment."""

from __future__ import annotations

from nars_core.utils import clamp, format_fraction, format_fraction_long

MARK = "%"
SEPARATOR = ";"
MAX_CONFIDENCE = 0.9999


class TruthValue:
    __slots__ = ("frequency", "confidence", "analytic")

    def __init__(self, frequency: float, confidence: float, analytic: bool = False) -> None:
        self.frequency = clamp(frequency)
        self.confidence = min(clamp(confidence), MAX_CONFIDENCE)
        self.analytic = analytic

    @property
    def expectation(self) -> float:
        return self.confidence * (self.frequency - 0.5) + 0.5

    def exp_dif_abs(self, other: TruthValue) -> float:
        return abs(self.expectation - other.expectation)

    def is_negative(self) -> bool:
        return self.frequency < 0.5

    def copy(self) -> TruthValue:
        return TruthValue(self.frequency, self.confidence, self.analytic)

    def to_string_brief(self) -> str:
        return MARK + format_fraction(self.frequency) + SEPARATOR + format_fraction(self.confidence) + MARK

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TruthValue):
            return NotImplemented
        return self.frequency == other.frequency and self.confidence == other.confidence

    def __hash__(self) -> int:
        return hash((self.frequency, self.confidence))

    def __str__(self) -> str:
        return MARK + format_fraction_long(self.frequency) + SEPARATOR + format_fraction_long(self.confidence) + MARK

    def __repr__(self) -> str:
        return f"TruthValue({self.frequency!r}, {self.confidence!r})"
