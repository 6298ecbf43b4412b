"""
unitproduct.relations
=====================

Relation declarations and their exactness validator.

The registry itself lives in `unitproduct.relations.registry`; importing it
builds and validates `DEFAULT_RELATIONS`, so it is not imported here.
"""

from .mapping import Relation, UnitMapping
from .validator import EXACTNESS_REL_TOL, validate_relations

__all__ = [
    "Relation",
    "UnitMapping",
    "EXACTNESS_REL_TOL",
    "validate_relations",
]
