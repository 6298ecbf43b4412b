"""
unitproduct.engine
==================

Multiplication and division of measurements through the relation registry.

For ``a × b`` the engine finds the relation declared for ``(dim(a), dim(b))``
(falling back to ``(dim(b), dim(a))`` with the operands swapped) and then
takes one of two paths:

- **exact path**: the first preferred mapping, in declared order, whose factor
  units are exactly the operands' units. The raw values are multiplied and the
  mapping's product unit is used as is. No conversion happens, so
  ``60 km/h × 2 h`` is ``120 km`` to the last bit.
- **canonical path**: both operands are converted into the default mapping's
  factor units through the unit catalog, multiplied, and returned in the
  default product unit.

Division is the inverse: ``product ÷ factor`` recovers the other factor of a
relation producing ``dim(product)``.

The engine holds no mutable state; any number of threads may share one. It
only accepts a frozen registry, one whose preferred mappings have passed the
exactness check.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from unitproduct.core.measurement import Measurement
from unitproduct.core.unit import Unit
from unitproduct.errors import DivisionByZero, NoRelationRegistered, RegistryNotFrozen
from unitproduct.relations.mapping import Relation, UnitMapping
from unitproduct.relations.registry import DEFAULT_RELATIONS, RelationRegistry
from unitproduct.units.catalog import DEFAULT_CATALOG, UnitCatalog

logger = logging.getLogger(__name__)


class ArithmeticEngine:
    """Performs relation-driven ``multiply`` / ``divide`` on measurements."""

    def __init__(
        self,
        registry: Optional[RelationRegistry] = None,
        catalog: Optional[UnitCatalog] = None,
    ) -> None:
        registry = registry if registry is not None else DEFAULT_RELATIONS
        if not registry.frozen:
            raise RegistryNotFrozen(
                "ArithmeticEngine needs a validated registry; call registry.freeze() first"
            )
        self.registry = registry
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    # --- multiplication ----------------------------------------------------

    def _find_product_relation(
        self, a: Measurement, b: Measurement
    ) -> Tuple[Relation, Measurement, Measurement]:
        relation = self.registry.lookup(a.dim, b.dim)
        if relation is not None:
            return relation, a, b
        relation = self.registry.lookup(b.dim, a.dim)
        if relation is not None:
            return relation, b, a
        raise NoRelationRegistered(a.dim, b.dim)

    def multiply(self, a: Measurement, b: Measurement) -> Measurement:
        """Return ``a × b`` in the unit the matching relation prescribes."""
        relation, f1, f2 = self._find_product_relation(a, b)

        for mapping in relation.preferred:
            if mapping.factor1 == f1.unit and mapping.factor2 == f2.unit:
                logger.debug("exact path %s for %s", mapping, relation)
                return Measurement(f1.value * f2.value, mapping.product)

        default = relation.default
        v1 = self.catalog.convert(f1.value, f1.unit, default.factor1)
        v2 = self.catalog.convert(f2.value, f2.unit, default.factor2)
        logger.debug("canonical path %s for %s", default, relation)
        return Measurement(v1 * v2, default.product)

    # --- division ----------------------------------------------------------

    def divide(self, product: Measurement, factor: Measurement) -> Measurement:
        """Return ``product ÷ factor``, the other factor of the matching relation."""
        relation = self.registry.lookup_by_product(product.dim, factor.dim)
        if relation is None:
            raise NoRelationRegistered(product.dim, factor.dim)
        if factor.value == 0:
            raise DivisionByZero(f"Cannot divide {product!r} by zero-valued {factor!r}")

        # Factor1 is tried first when both factors share a dimension.
        factor_is_first = relation.factor1_dim == factor.dim

        def split(mapping: UnitMapping) -> Tuple[Unit, Unit]:
            """(unit matching ``factor``, unit of the recovered factor)."""
            if factor_is_first:
                return mapping.factor1, mapping.factor2
            return mapping.factor2, mapping.factor1

        for mapping in relation.preferred:
            known, other = split(mapping)
            if mapping.product == product.unit and known == factor.unit:
                logger.debug("exact path %s for %s", mapping, relation)
                return Measurement(product.value / factor.value, other)

        default = relation.default
        known, other = split(default)
        p = self.catalog.convert(product.value, product.unit, default.product)
        f = self.catalog.convert(factor.value, factor.unit, known)
        logger.debug("canonical path %s for %s", default, relation)
        return Measurement(p / f, other)


# Public, shared default engine over the default registry and catalog
DEFAULT_ENGINE: ArithmeticEngine = ArithmeticEngine()


def multiply(a: Measurement, b: Measurement) -> Measurement:
    return DEFAULT_ENGINE.multiply(a, b)


def divide(product: Measurement, factor: Measurement) -> Measurement:
    return DEFAULT_ENGINE.divide(product, factor)


__all__ = ["ArithmeticEngine", "DEFAULT_ENGINE", "multiply", "divide"]
