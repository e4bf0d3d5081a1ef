"""Truth value functions of the inference rules."""

from __future__ import annotations

from nars_core.entity.truth import TruthValue
from nars_core.utils import and_, c2w, or_, w2c

RELIANCE = 0.9


# Single-premise functions


def conversion(v1: TruthValue) -> TruthValue:
    w = and_(v1.frequency, v1.confidence)
    return TruthValue(1.0, w2c(w))


def negation(v1: TruthValue) -> TruthValue:
    return TruthValue(1.0 - v1.frequency, v1.confidence)


def contraposition(v1: TruthValue) -> TruthValue:
    w = and_(1.0 - v1.frequency, v1.confidence)
    return TruthValue(0.0, w2c(w))


# Double-premise functions


def revision(v1: TruthValue, v2: TruthValue) -> TruthValue:
    w1 = c2w(v1.confidence)
    w2 = c2w(v2.confidence)
    w = w1 + w2
    f = (w1 * v1.frequency + w2 * v2.frequency) / w
    return TruthValue(f, w2c(w))


def deduction(v1: TruthValue, v2: TruthValue) -> TruthValue:
    f = and_(v1.frequency, v2.frequency)
    c = and_(v1.confidence, v2.confidence, f)
    return TruthValue(f, c)


def deduction_reliance(v1: TruthValue, reliance: float = RELIANCE) -> TruthValue:
    """Deduction against an analytic premise of the given reliance."""
    c = and_(v1.frequency, v1.confidence, reliance)
    return TruthValue(v1.frequency, c, analytic=True)


def analogy(v1: TruthValue, v2: TruthValue) -> TruthValue:
    f = and_(v1.frequency, v2.frequency)
    c = and_(v1.confidence, v2.confidence, v2.frequency)
    return TruthValue(f, c)


def resemblance(v1: TruthValue, v2: TruthValue) -> TruthValue:
    f = and_(v1.frequency, v2.frequency)
    c = and_(v1.confidence, v2.confidence, or_(v1.frequency, v2.frequency))
    return TruthValue(f, c)


def abduction(v1: TruthValue, v2: TruthValue) -> TruthValue:
    if v1.analytic or v2.analytic:
        return TruthValue(0.5, 0.0)
    w = and_(v2.frequency, v1.confidence, v2.confidence)
    return TruthValue(v1.frequency, w2c(w))


def abduction_reliance(v1: TruthValue, reliance: float = RELIANCE) -> TruthValue:
    if v1.analytic:
        return TruthValue(0.5, 0.0)
    w = and_(v1.frequency, v1.confidence, reliance)
    return TruthValue(1.0, w2c(w), analytic=True)


def induction(v1: TruthValue, v2: TruthValue) -> TruthValue:
    return abduction(v2, v1)


def exemplification(v1: TruthValue, v2: TruthValue) -> TruthValue:
    if v1.analytic or v2.analytic:
        return TruthValue(0.5, 0.0)
    w = and_(v1.frequency, v2.frequency, v1.confidence, v2.confidence)
    return TruthValue(1.0, w2c(w))


def comparison(v1: TruthValue, v2: TruthValue) -> TruthValue:
    f0 = or_(v1.frequency, v2.frequency)
    f = 0.0 if f0 == 0.0 else and_(v1.frequency, v2.frequency) / f0
    w = and_(f0, v1.confidence, v2.confidence)
    return TruthValue(f, w2c(w))


def union(v1: TruthValue, v2: TruthValue) -> TruthValue:
    f = or_(v1.frequency, v2.frequency)
    c = and_(v1.confidence, v2.confidence)
    return TruthValue(f, c)


def intersection(v1: TruthValue, v2: TruthValue) -> TruthValue:
    f = and_(v1.frequency, v2.frequency)
    c = and_(v1.confidence, v2.confidence)
    return TruthValue(f, c)


def reduce_conjunction(v1: TruthValue, v2: TruthValue) -> TruthValue:
    """From a negated conjunction and one conjunct, conclude on the other."""
    v0 = intersection(negation(v1), v2)
    return negation(deduction_reliance(v0, 1.0))
