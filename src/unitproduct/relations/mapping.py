"""
unitproduct.relations.mapping
=============================

Value types for declaring multiplicative relations between dimensions.

A `Relation` says ``Factor1 × Factor2 = Product`` for three dimensions, e.g.
``speed × duration = length``. It owns one *default* `UnitMapping` (usually
the SI units, used as the canonical conversion route) and an ordered tuple of
*preferred* mappings whose units multiply exactly, e.g.
``km/h × h = km``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

from unitproduct.core.dimensions import Dim, Dimension
from unitproduct.core.unit import Unit
from unitproduct.core.utils import dimension_name

RelationKey = Tuple[Dimension, Dimension, Dimension]


@dataclass(frozen=True, slots=True)
class UnitMapping:
    """A (Factor1-unit, Factor2-unit, Product-unit) triple."""

    factor1: Unit
    factor2: Unit
    product: Unit

    def __iter__(self) -> Iterator[Unit]:
        return iter((self.factor1, self.factor2, self.product))

    def __str__(self) -> str:
        return f"({self.factor1.name} × {self.factor2.name} = {self.product.name})"


@dataclass(frozen=True, slots=True)
class Relation:
    """
    ``factor1_dim × factor2_dim = product_dim`` together with its unit mappings.

    Attributes
    ----------
    factor1_dim, factor2_dim, product_dim : Dim
        The dimensions of the relation. Order of the factors matters for
        lookup: (speed, duration) and (duration, speed) are different keys.
    default : UnitMapping or None
        Canonical mapping the engine converts through when no preferred
        mapping matches. It does not need to be exact. ``None`` is accepted
        here only so the validator can report it as a configuration error.
    preferred : tuple of UnitMapping
        Exact mappings, scanned in this order; the first structural match
        wins.
    """

    factor1_dim: Dim
    factor2_dim: Dim
    product_dim: Dim
    default: Optional[UnitMapping]
    preferred: Tuple[UnitMapping, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("factor1_dim", "factor2_dim", "product_dim"):
            object.__setattr__(self, name, Dimension(getattr(self, name)))
        # accept any sequence, store an immutable tuple
        object.__setattr__(self, "preferred", tuple(self.preferred))

    @classmethod
    def between(
        cls,
        default: UnitMapping,
        preferred: Sequence[UnitMapping] = (),
    ) -> "Relation":
        """Build a relation whose dimensions are read off the default mapping's units."""
        return cls(
            default.factor1.dim,
            default.factor2.dim,
            default.product.dim,
            default,
            tuple(preferred),
        )

    @property
    def key(self) -> RelationKey:
        return (self.factor1_dim, self.factor2_dim, self.product_dim)

    def mappings(self) -> Iterator[Tuple[UnitMapping, bool]]:
        """Yield ``(mapping, is_default)`` pairs, default first when present."""
        if self.default is not None:
            yield self.default, True
        for m in self.preferred:
            yield m, False

    def __str__(self) -> str:
        return (
            f"Relation({dimension_name(self.factor1_dim)} × "
            f"{dimension_name(self.factor2_dim)} = {dimension_name(self.product_dim)})"
        )


__all__ = ["UnitMapping", "Relation", "RelationKey"]
