"""
unitproduct.errors
==================

Exception hierarchy for the relation registry and the arithmetic engine.

Every error derives from `UnitProductError` and from the builtin exception a
caller would naturally reach for (`LookupError`, `TypeError`, `ValueError`,
`ZeroDivisionError`), so existing ``except`` clauses keep working.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from unitproduct.core.dimensions import Dim
    from unitproduct.core.unit import Unit
    from unitproduct.relations.mapping import Relation, UnitMapping


class UnitProductError(Exception):
    """Base class for all unitproduct errors."""


# ---------------------------------------------------------------------------
# Runtime errors (raised by the engine / catalog)
# ---------------------------------------------------------------------------

class NoRelationRegistered(UnitProductError, LookupError):
    """No relation links the requested dimensions."""

    def __init__(self, *dims: "Dim") -> None:
        from unitproduct.core.utils import dimension_name

        self.dims: Tuple["Dim", ...] = dims
        names = ", ".join(dimension_name(d) for d in dims)
        super().__init__(f"No relation registered for dimensions ({names})")


class IncompatibleDimension(UnitProductError, TypeError):
    """Two units of different dimensions were asked to convert into each other."""

    def __init__(self, from_unit: "Unit", to_unit: "Unit") -> None:
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(
            f"Cannot convert '{from_unit.name}' to '{to_unit.name}': "
            "units have different dimensions"
        )


class DivisionByZero(UnitProductError, ZeroDivisionError):
    """The divisor measurement has zero magnitude."""


# ---------------------------------------------------------------------------
# Configuration errors (raised while building/validating a registry)
# ---------------------------------------------------------------------------

class RelationConfigError(UnitProductError, ValueError):
    """A static relation declaration is inconsistent. Fatal at startup."""


class InexactPreferredMapping(RelationConfigError):
    def __init__(self, relation: "Relation", mapping: "UnitMapping", rel_err: float) -> None:
        self.relation = relation
        self.mapping = mapping
        self.rel_err = rel_err
        super().__init__(
            f"Preferred mapping {mapping} of {relation} is not exact "
            f"(relative error {rel_err:.3g})"
        )


class DuplicateRelationKey(RelationConfigError):
    def __init__(self, key: Tuple[Any, Any, Any]) -> None:
        from unitproduct.core.utils import dimension_name

        self.key = key
        names = ", ".join(dimension_name(d) for d in key)
        super().__init__(f"A relation for ({names}) is already registered")


class MissingDefaultMapping(RelationConfigError):
    def __init__(self, relation: "Relation") -> None:
        self.relation = relation
        super().__init__(f"{relation} has no default mapping")


class MappingDimensionMismatch(RelationConfigError):
    """A mapping's units do not belong to the dimensions of its relation."""


class RegistryFrozen(UnitProductError, RuntimeError):
    """The registry was validated and frozen; it no longer accepts registrations."""


class RegistryNotFrozen(UnitProductError, RuntimeError):
    """An engine was given a registry that has not been validated and frozen."""


__all__ = [
    "UnitProductError",
    "NoRelationRegistered",
    "IncompatibleDimension",
    "DivisionByZero",
    "RelationConfigError",
    "InexactPreferredMapping",
    "DuplicateRelationKey",
    "MissingDefaultMapping",
    "MappingDimensionMismatch",
    "RegistryFrozen",
    "RegistryNotFrozen",
]
