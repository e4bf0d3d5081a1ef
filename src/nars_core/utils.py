"""Shared utilities: extended boolean operators and evidence conversion."""

from __future__ import annotations

import math
from typing import Any

import orjson

HORIZON = 1.0


def json_dumps(obj: Any) -> str:
    return orjson.dumps(obj).decode()


def json_loads(data: str | bytes) -> Any:
    return orjson.loads(data)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def and_(*values: float) -> float:
    """Extended boolean AND: the product of the arguments."""
    product = 1.0
    for v in values:
        product *= v
    return product


def or_(*values: float) -> float:
    """Extended boolean OR: 1 minus the product of the complements."""
    product = 1.0
    for v in values:
        product *= 1.0 - v
    return 1.0 - product


def ave_ari(*values: float) -> float:
    return sum(values) / len(values)


def ave_geo(*values: float) -> float:
    product = 1.0
    for v in values:
        product *= v
    return math.pow(product, 1.0 / len(values))


def w2c(weight: float, horizon: float = HORIZON) -> float:
    """Convert an amount of evidence into a confidence value."""
    return weight / (weight + horizon)


def c2w(confidence: float, horizon: float = HORIZON) -> float:
    """Convert a confidence value into an amount of evidence."""
    return horizon * confidence / (1.0 - confidence)


def format_fraction(value: float) -> str:
    """Two-decimal rendering used by the brief string forms."""
    if value >= 1.0:
        return "1.00"
    return f"{value:.2f}"


def format_fraction_long(value: float) -> str:
    if value >= 1.0:
        return "1.0000"
    return f"{value:.4f}"
