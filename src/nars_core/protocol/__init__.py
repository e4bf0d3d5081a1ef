"""Rule engine contract."""

from nars_core.protocol.types import RuleEngine

__all__ = ["RuleEngine"]
