"""
unitproduct.relations.registry
==============================

The relation registry: which dimension triples multiply together, and in
which units that multiplication is exact.

Lifecycle
---------
A registry is filled once (``register``) and then ``freeze``-d, which runs the
exactness validator first. A frozen registry refuses further registrations
and is safe to read from any number of threads without locking: lookups only
read dicts that no longer change. `ArithmeticEngine` only accepts frozen
registries.

The process-wide `DEFAULT_RELATIONS` is built, validated and frozen at import
time from the declarations in `_default_declarations`.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from unitproduct.core.dimensions import Dim, Dimension
from unitproduct.errors import DuplicateRelationKey, RegistryFrozen
from unitproduct.relations.mapping import Relation, RelationKey, UnitMapping
from unitproduct.relations.validator import EXACTNESS_REL_TOL, validate_relations
from unitproduct.units.catalog import DEFAULT_CATALOG, UnitCatalog

logger = logging.getLogger(__name__)


class RelationRegistry:
    """Relations keyed by their (factor1, factor2, product) dimension triple."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._relations: Dict[RelationKey, Relation] = {}
        self._by_factors: Dict[Tuple[Dimension, Dimension], Relation] = {}
        self._frozen = False

    @classmethod
    def from_declarations(
        cls,
        relations: Iterable[Relation],
        rel_tol: float = EXACTNESS_REL_TOL,
    ) -> "RelationRegistry":
        """Build, validate and freeze a registry from static declarations.

        A key declared twice raises `DuplicateRelationKey` instead of being
        silently replaced.
        """
        relations = list(relations)
        validate_relations(relations, rel_tol)
        reg = cls()
        for relation in relations:
            reg.register(relation, replace=False)
        reg.freeze(rel_tol)
        return reg

    # -------------------------- registration -------------------------------
    def register(self, relation: Relation, replace: bool = True) -> None:
        """Add ``relation``, replacing any relation for the same factor pair.

        Replacement is wholesale (default and preferred mappings alike); there
        is no merge. A previous relation with the same factors but another
        product is dropped too, so `lookup` and `lookup_by_product` always
        see the same set. With ``replace=False`` a collision raises
        `DuplicateRelationKey`.
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozen(f"Cannot register {relation}: registry is frozen")

            pair = (relation.factor1_dim, relation.factor2_dim)
            previous = self._by_factors.get(pair)
            if previous is not None:
                if not replace:
                    raise DuplicateRelationKey(previous.key)
                del self._relations[previous.key]
                logger.debug("Replacing %s", previous)

            self._relations[relation.key] = relation
            self._by_factors[pair] = relation
            logger.debug("Registered %s with %d preferred mapping(s)",
                         relation, len(relation.preferred))

    def validate(self, rel_tol: float = EXACTNESS_REL_TOL) -> None:
        validate_relations(self._relations.values(), rel_tol)

    def freeze(self, rel_tol: float = EXACTNESS_REL_TOL) -> None:
        """Validate the registered relations, then refuse further registrations.

        A validation failure raises and leaves the registry unfrozen.
        """
        with self._lock:
            if self._frozen:
                return
            self.validate(rel_tol)
            self._frozen = True
        logger.debug("Relation registry frozen with %d relation(s)", len(self._relations))

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---------------------------- lookup -----------------------------------
    def lookup(self, factor1_dim: Dim, factor2_dim: Dim) -> Optional[Relation]:
        """Relation declared as ``factor1_dim × factor2_dim``, order-sensitive."""
        return self._by_factors.get((Dimension(factor1_dim), Dimension(factor2_dim)))

    def lookup_by_product(
        self,
        product_dim: Dim,
        factor_dim: Optional[Dim] = None,
    ) -> Optional[Relation]:
        """First relation (in registration order) whose product is ``product_dim``.

        With ``factor_dim`` only relations that have it as Factor1 or Factor2
        are considered; that is the division use case.
        """
        for relation in self._relations.values():
            if relation.product_dim != product_dim:
                continue
            if factor_dim is None or factor_dim in (relation.factor1_dim, relation.factor2_dim):
                return relation
        return None

    def relations(self) -> List[Relation]:
        return list(self._relations.values())

    def __iter__(self) -> Iterator[Relation]:
        return iter(self.relations())

    def __len__(self) -> int:
        return len(self._relations)

    def __contains__(self, key: object) -> bool:
        return key in self._relations


# ---------------------------------------------------------------------------
# Static declarations
# ---------------------------------------------------------------------------

def _default_declarations(catalog: UnitCatalog) -> List[Relation]:
    g = catalog.get

    def m(f1: str, f2: str, p: str) -> UnitMapping:
        return UnitMapping(g(f1), g(f2), g(p))

    return [
        # length = speed × duration
        Relation.between(
            m("m/s", "s", "m"),
            preferred=[
                m("km/h", "h", "km"),
                m("mph", "h", "mi"),
                m("kn", "h", "nmi"),
            ],
        ),
        # volume = area × length
        Relation.between(m("m²", "m", "m³")),
        # speed = acceleration × duration
        Relation.between(m("m/s²", "s", "m/s")),
        # mass = mass concentration × volume
        Relation.between(
            m("g/L", "L", "g"),
            preferred=[m("kg/m³", "m³", "kg")],
        ),
        # voltage = resistance × current
        Relation.between(
            m("Ω", "A", "V"),
            preferred=[m("kΩ", "mA", "V")],
        ),
        # energy = power × duration
        Relation.between(
            m("W", "s", "J"),
            preferred=[
                m("kW", "h", "kWh"),
                m("W", "h", "Wh"),
            ],
        ),
        # charge = current × duration
        Relation.between(
            m("A", "s", "C"),
            preferred=[
                m("A", "h", "Ah"),
                m("mA", "h", "mAh"),
            ],
        ),
        # area = length × length
        Relation.between(
            m("m", "m", "m²"),
            preferred=[
                m("km", "km", "km²"),
                m("cm", "cm", "cm²"),
                m("ft", "ft", "ft²"),
            ],
        ),
        # power = voltage × current
        Relation.between(m("V", "A", "W")),
    ]


def _bootstrap_default_relations() -> RelationRegistry:
    return RelationRegistry.from_declarations(_default_declarations(DEFAULT_CATALOG))


# Public, shared, frozen default registry
DEFAULT_RELATIONS: RelationRegistry = _bootstrap_default_relations()


__all__ = [
    "RelationRegistry",
    "DEFAULT_RELATIONS",
]
