"""
unitproduct.relations.validator
===============================

One-time consistency check over a set of relation declarations.

A preferred mapping is only allowed on the engine's exact path if multiplying
raw values in its units gives the right value in its product unit, i.e.
``scale(factor1) * scale(factor2) == scale(product)`` up to `EXACTNESS_REL_TOL`.
The default mapping is exempt from that check; it only anchors the canonical
conversion route.
"""
from __future__ import annotations

import logging
from typing import Iterable, Set

from unitproduct.core.dimensions import dim_mul
from unitproduct.core.utils import dimension_name
from unitproduct.errors import (
    DuplicateRelationKey,
    InexactPreferredMapping,
    MappingDimensionMismatch,
    MissingDefaultMapping,
)
from unitproduct.relations.mapping import Relation, RelationKey, UnitMapping

logger = logging.getLogger(__name__)

EXACTNESS_REL_TOL = 1e-9


def exactness_error(mapping: UnitMapping) -> float:
    """Relative error of ``scale(f1) * scale(f2)`` against ``scale(product)``."""
    expected = mapping.product.scale_to_si
    actual = mapping.factor1.scale_to_si * mapping.factor2.scale_to_si
    return abs(actual - expected) / expected


def is_exact(mapping: UnitMapping, rel_tol: float = EXACTNESS_REL_TOL) -> bool:
    return exactness_error(mapping) <= rel_tol


def _check_dimensions(relation: Relation, mapping: UnitMapping) -> None:
    for unit, dim, role in (
        (mapping.factor1, relation.factor1_dim, "factor1"),
        (mapping.factor2, relation.factor2_dim, "factor2"),
        (mapping.product, relation.product_dim, "product"),
    ):
        if unit.dim != dim:
            raise MappingDimensionMismatch(
                f"{relation}: {role} unit '{unit.name}' of {mapping} measures "
                f"{dimension_name(unit.dim)}, expected {dimension_name(dim)}"
            )


def validate_relation(relation: Relation, rel_tol: float = EXACTNESS_REL_TOL) -> None:
    """Validate a single relation. Raises a `RelationConfigError` subclass."""
    if relation.default is None:
        raise MissingDefaultMapping(relation)

    if dim_mul(relation.factor1_dim, relation.factor2_dim) != relation.product_dim:
        raise MappingDimensionMismatch(
            f"{relation}: factor dimensions do not multiply to the product dimension"
        )

    for mapping, is_default in relation.mappings():
        _check_dimensions(relation, mapping)
        if is_default:
            continue
        err = exactness_error(mapping)
        if err > rel_tol:
            raise InexactPreferredMapping(relation, mapping, err)


def validate_relations(
    relations: Iterable[Relation],
    rel_tol: float = EXACTNESS_REL_TOL,
) -> int:
    """Validate every relation in ``relations``; return how many were checked.

    Duplicate keys within ``relations`` raise `DuplicateRelationKey`: a
    declaration list is expected to name each dimension triple once.
    """
    seen: Set[RelationKey] = set()
    count = 0
    for relation in relations:
        if relation.key in seen:
            raise DuplicateRelationKey(relation.key)
        seen.add(relation.key)
        validate_relation(relation, rel_tol)
        count += 1
    logger.debug("Validated %d relation(s) at rel_tol=%g", count, rel_tol)
    return count


__all__ = [
    "EXACTNESS_REL_TOL",
    "exactness_error",
    "is_exact",
    "validate_relation",
    "validate_relations",
]
