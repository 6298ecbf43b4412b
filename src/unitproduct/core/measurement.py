"""
unitproduct.core.measurement
============================

Defines `Measurement`, a numeric value paired with the `Unit` it is expressed
in.

Unlike an SI-normalising quantity type, a measurement keeps its magnitude in
its *own* unit: ``60 km/h`` stores ``60.0`` and the ``km/h`` unit, never
``16.666…`` m/s. Conversion happens only when asked for (`to`, `si_value`)
or inside the arithmetic engine's canonical path. That is what lets
``60 km/h * 2 h`` come out as exactly ``120 km``.

Measurement × measurement and measurement ÷ measurement are routed through
the process-wide `unitproduct.engine.DEFAULT_ENGINE`; multiplying by or
dividing by a plain number only scales the value.
"""

from __future__ import annotations

from math import isclose
from numbers import Real
from typing import TYPE_CHECKING, Union

from unitproduct.core.dimensions import Dim
from unitproduct.core.unit import Unit
from unitproduct.errors import DivisionByZero, IncompatibleDimension

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from unitproduct.units.catalog import UnitCatalog

Number = Union[int, float]


def _default_catalog() -> "UnitCatalog":
    from unitproduct.units.catalog import DEFAULT_CATALOG

    return DEFAULT_CATALOG


class Measurement:
    """
    A physical measurement: a magnitude expressed in a concrete unit.

    Attributes
    ----------
    value : float
        Magnitude, interpreted in `unit`.
    unit : Unit
        The unit the magnitude is expressed in. Its dimension decides which
        operations are legal.
    """
    __slots__ = ("_value", "_unit")

    def __init__(self, value: Number, unit: Unit):
        if not isinstance(unit, Unit):
            raise TypeError(f"unit must be a Unit, got {type(unit).__name__}")
        if not isinstance(value, Real):
            raise TypeError(f"value must be a real number, got {type(value).__name__}")
        self._value = float(value)
        self._unit = unit

    # --- Accessors ---------------------------------------------------------

    @property
    def value(self) -> float:
        return self._value

    @property
    def unit(self) -> Unit:
        return self._unit

    @property
    def dim(self) -> Dim:
        return self._unit.dim

    @property
    def si_value(self) -> float:
        """Magnitude expressed in the SI base unit of this dimension."""
        return self._value * self._unit.scale_to_si

    # --- Conversion --------------------------------------------------------

    def to(self, new_unit: "Unit | str", catalog: "UnitCatalog | None" = None) -> Measurement:
        """Return this measurement expressed in ``new_unit``.

        ``new_unit`` may be a `Unit` or a symbol known to ``catalog``
        (default: the shared catalog).
        """
        catalog = catalog if catalog is not None else _default_catalog()
        if isinstance(new_unit, str):
            new_unit = catalog.get(new_unit)
        return Measurement(catalog.convert(self._value, self._unit, new_unit), new_unit)

    # --- Comparison --------------------------------------------------------

    def _check_dim_compatible(self, other: object) -> "Measurement":
        if not isinstance(other, Measurement):
            raise TypeError(f"Cannot compare Measurement with type {type(other)}")
        if self.dim != other.dim:
            raise IncompatibleDimension(self._unit, other._unit)
        return other

    def _is_close(self, other_si: float) -> bool:
        return isclose(self.si_value, other_si, rel_tol=1e-12, abs_tol=0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        # Same physical dimension; SI magnitudes equal within tolerance.
        return self.dim == other.dim and self._is_close(other.si_value)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: object) -> bool:
        o = self._check_dim_compatible(other)
        return self.si_value < o.si_value and not self._is_close(o.si_value)

    def __le__(self, other: object) -> bool:
        o = self._check_dim_compatible(other)
        return self.si_value < o.si_value or self._is_close(o.si_value)

    def __gt__(self, other: object) -> bool:
        o = self._check_dim_compatible(other)
        return self.si_value > o.si_value and not self._is_close(o.si_value)

    def __ge__(self, other: object) -> bool:
        o = self._check_dim_compatible(other)
        return self.si_value > o.si_value or self._is_close(o.si_value)

    def as_key(self, precision: int = 12) -> tuple:
        """
        Returns a hashable, discretized key for this measurement.

        `__hash__` is disabled because `__eq__` uses `isclose`; use this to
        put measurements in dicts or sets at a chosen precision.

        >>> from unitproduct import u
        >>> a = 1000 * u.m
        >>> b = 1 * u.km
        >>> a.as_key() == b.as_key()
        True
        """
        rounded = round(self.si_value, precision)
        # -0.0 and 0.0 round identically but hash differently
        if rounded == 0.0:
            rounded = 0.0
        return (self.dim, rounded)

    # --- Arithmetic --------------------------------------------------------

    def __neg__(self) -> Measurement:
        return Measurement(-self._value, self._unit)

    def __pos__(self) -> Measurement:
        return self

    def __abs__(self) -> Measurement:
        return Measurement(abs(self._value), self._unit)

    def __add__(self, other: object) -> Measurement:
        if not isinstance(other, Measurement):
            return NotImplemented
        # left unit is retained
        converted = _default_catalog().convert(other._value, other._unit, self._unit)
        return Measurement(self._value + converted, self._unit)

    def __sub__(self, other: object) -> Measurement:
        if not isinstance(other, Measurement):
            return NotImplemented
        converted = _default_catalog().convert(other._value, other._unit, self._unit)
        return Measurement(self._value - converted, self._unit)

    def __mul__(self, other: object) -> Measurement:
        if isinstance(other, Measurement):
            from unitproduct.engine import multiply

            return multiply(self, other)
        if isinstance(other, Real):
            return Measurement(self._value * other, self._unit)
        return NotImplemented

    def __rmul__(self, other: object) -> Measurement:
        if isinstance(other, Real):
            return Measurement(other * self._value, self._unit)
        return NotImplemented

    def __truediv__(self, other: object) -> Measurement:
        if isinstance(other, Measurement):
            from unitproduct.engine import divide

            return divide(self, other)
        if isinstance(other, Real):
            if other == 0:
                raise DivisionByZero(f"Cannot divide {self!r} by zero")
            return Measurement(self._value / other, self._unit)
        return NotImplemented

    # --- Presentation ------------------------------------------------------

    def __float__(self) -> float:
        """
        Returns the magnitude in the measurement's own unit.

        .. note:: Units are removed and checking ability is lost.
        """
        return self._value

    def __repr__(self) -> str:
        return f"Measurement({self._value!r}, {self._unit.name!r})"

    def __str__(self) -> str:
        return f"{self._value:g} {self._unit.name}".rstrip()

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        return f"{format(self._value, spec)} {self._unit.name}".rstrip()


__all__ = ["Measurement"]
