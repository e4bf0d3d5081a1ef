"""NARS core: bags, concepts, stamps and the work cycle of a resource-bounded reasoner."""

from nars_core.config import Config
from nars_core.reasoner import Reasoner
from nars_core.storage.memory import Memory

__version__ = "0.1.0"

__all__ = ["Config", "Memory", "Reasoner", "__version__"]
