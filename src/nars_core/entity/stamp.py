"""Evidential stamps.

A stamp records which input events a sentence is derived from. Two premises
whose bases share an id must never be combined.
"""

from __future__ import annotations

from dataclasses import dataclass

from nars_core.exceptions import InvariantError

MAXIMUM_STAMP_LENGTH = 8


@dataclass(frozen=True)
class Stamp:
    creation_time: int
    evidential_base: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.evidential_base:
            raise InvariantError("evidential base must not be empty")
        if len(set(self.evidential_base)) != len(self.evidential_base):
            raise InvariantError(f"evidential base has duplicate ids: {self.evidential_base}")

    @classmethod
    def create(cls, serial: int, time: int) -> Stamp:
        """Stamp for an input sentence: a singleton base of a fresh serial."""
        return cls(creation_time=time, evidential_base=(serial,))

    @property
    def length(self) -> int:
        return len(self.evidential_base)

    def overlaps(self, other: Stamp) -> bool:
        return not set(self.evidential_base).isdisjoint(other.evidential_base)

    def equivalent(self, other: Stamp) -> bool:
        """Same evidence, ignoring order and creation time."""
        return set(self.evidential_base) == set(other.evidential_base)

    def with_time(self, time: int) -> Stamp:
        return Stamp(creation_time=time, evidential_base=self.evidential_base)

    @classmethod
    def merge(
        cls,
        first: Stamp,
        second: Stamp,
        time: int,
        max_length: int = MAXIMUM_STAMP_LENGTH,
    ) -> Stamp | None:
        """Combine two stamps, or return None when their evidence overlaps.

        Bases are interleaved (longer first) and truncated to ``max_length``,
        keeping the highest, most recently issued serials.
        """
        if first.overlaps(second):
            return None
        a, b = first.evidential_base, second.evidential_base
        if len(b) > len(a):
            a, b = b, a
        merged: list[int] = []
        for i in range(len(a)):
            merged.append(a[i])
            if i < len(b):
                merged.append(b[i])
        if len(merged) > max_length:
            keep = set(sorted(merged, reverse=True)[:max_length])
            merged = [serial for serial in merged if serial in keep]
        return cls(creation_time=time, evidential_base=tuple(merged))

    def __str__(self) -> str:
        return "{" + f"{self.creation_time} : " + ";".join(str(s) for s in self.evidential_base) + "}"
