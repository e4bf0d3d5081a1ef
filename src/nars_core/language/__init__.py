"""Terms, link templates and the Narsese parser."""

from nars_core.language.templates import LinkTemplate, LinkType, prepare_component_links
from nars_core.language.term import CompoundTerm, Connector, Relation, Statement, Term

__all__ = [
    "CompoundTerm",
    "Connector",
    "LinkTemplate",
    "LinkType",
    "Relation",
    "Statement",
    "Term",
    "prepare_component_links",
]
