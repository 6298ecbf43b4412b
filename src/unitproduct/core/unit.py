from __future__ import annotations

from dataclasses import dataclass
from math import isclose, isfinite
from numbers import Real
from typing import TYPE_CHECKING

from unitproduct.core.dimensions import Dim, Dimension

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from unitproduct.core.measurement import Measurement


# Scale factors closer than this are treated as the same unit.
UNIT_EQ_REL_TOL = 1e-12


@dataclass(frozen=True, slots=True, eq=False)
class Unit:
    """
    A concrete unit of one physical dimension.

    Attributes
    ----------
    name : str
        Symbol (e.g. "km", "km/h", "kWh").
    scale_to_si : float
        Multiplicative factor converting 1 of this unit to the SI base unit of
        its dimension. Examples: m=1.0, km=1000.0, h=3600.0, km/h=1/3.6.
    dim : Dim
        Dimension vector (L,M,T,I,Θ,N,J).
    """

    name: str
    scale_to_si: float
    dim: Dim

    def __post_init__(self) -> None:
        if len(self.dim) != 7:
            raise ValueError("dim must be a 7-tuple (L,M,T,I,Θ,N,J)")
        if not (self.scale_to_si > 0 and isfinite(self.scale_to_si)):
            raise ValueError("scale_to_si must be a positive, finite number")
        if not isinstance(self.dim, Dimension):
            object.__setattr__(self, "dim", Dimension(self.dim))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        # dimension must match exactly; scale_to_si can have tiny FP noise
        return (
            self.dim == other.dim
            and isclose(self.scale_to_si, other.scale_to_si, rel_tol=UNIT_EQ_REL_TOL, abs_tol=0.0)
        )

    def __hash__(self) -> int:
        # Equal units may differ by FP noise in scale, so only dim is hashed.
        return hash(self.dim)

    def __rmul__(self, value: object) -> "Measurement":
        if not isinstance(value, Real):
            return NotImplemented
        from unitproduct.core.measurement import Measurement

        return Measurement(value, self)

    def __repr__(self) -> str:
        return f"Unit({self.name!r})"

    def __str__(self) -> str:
        return self.name


__all__ = ["Unit", "UNIT_EQ_REL_TOL"]
