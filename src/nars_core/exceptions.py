"""Error taxonomy for the reasoner.

Control-flow outcomes (budget below threshold, evidential overlap, bag
overflow) are not errors and never raise.
"""

from __future__ import annotations


class NarsError(Exception):
    """Base class for all reasoner errors."""


class ConfigurationError(NarsError):
    """Raised when a component is constructed with invalid parameters."""


class InvalidInputError(NarsError):
    """Raised when a Narsese line cannot be parsed."""

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


class InvariantError(NarsError):
    """Raised when an internal invariant is broken."""
