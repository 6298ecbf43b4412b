# unitproduct.core.dimensions

from __future__ import annotations
from typing import Iterable, Union, Tuple, TypeAlias, Any

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[int, int, int, int, int, int, int]
DimLike = Union["Dimension", DimTuple, Iterable[int]]

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 7-length vector of integer exponents for SI base dimensions.

    Tuple subclass => hashable, comparable, usable as dict keys. The relation
    registry keys its entries on tuples of these.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0)) -> "Dimension":
        if isinstance(data, Dimension):
            return tuple.__new__(cls, data)

        t = tuple(data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        if not all(isinstance(x, int) for x in t):
            raise TypeError("Dimension exponents must be integers.")
        return tuple.__new__(cls, t)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension": # type: ignore[override]
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def __pow__(self, n: int, modulo: Any | None = None) -> "Dimension":
        # three-argument pow() is not meaningful here
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        if not isinstance(n, int):
            raise TypeError(f"Exponent must be int, got {type(n).__name__}")
        return Dimension(e * n for e in self)

    def __rtruediv__(self, other: DimLike) -> "Dimension":
        """Handles (tuple / Dimension) by calculating (other / self)."""
        return Dimension(other) / self

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    def as_tuple(self) -> DimTuple:
        return tuple(self)

    def __repr__(self) -> str:
        names = ("L", "M", "T", "I", "Θ", "N", "J")
        parts = "".join(f"[{n}^{v}]" for n, v in zip(names, self, strict=True) if v != 0)
        return parts or "[1]"

# --- Function shims ----------------------------------------------------------

def dim_mul(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) * b

def dim_div(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a) / b

def dim_pow(a: DimLike, n: int) -> Dimension:
    return Dimension(a) ** n

# --- Base axes ---------------------------------------------------------------

DIM_0: Dim       = Dimension((0, 0, 0, 0, 0, 0, 0))
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))

# --- Physical quantity kinds used by the relation registry ------------------

DURATION: Dim            = TIME
ELECTRIC_CURRENT: Dim    = CURRENT
AREA: Dim                = dim_pow(LENGTH, 2)                          # m²
VOLUME: Dim              = dim_pow(LENGTH, 3)                          # m³
SPEED: Dim               = dim_div(LENGTH, TIME)                       # m/s
ACCELERATION: Dim        = dim_div(SPEED, TIME)                        # m/s²
FORCE: Dim               = dim_mul(MASS, ACCELERATION)                 # N
ENERGY: Dim              = dim_mul(FORCE, LENGTH)                      # J
POWER: Dim               = dim_div(ENERGY, TIME)                       # W
CHARGE: Dim              = dim_mul(CURRENT, TIME)                      # C
ELECTRIC_POTENTIAL: Dim  = dim_div(POWER, CURRENT)                     # V
ELECTRIC_RESISTANCE: Dim = dim_div(ELECTRIC_POTENTIAL, CURRENT)        # Ω
CONCENTRATION_MASS: Dim  = dim_div(MASS, VOLUME)                       # g/L


# Human labels for error messages and reprs. Order matters only for aliases
# (TIME/DURATION, CURRENT/ELECTRIC_CURRENT): the first label wins.
DIMENSION_NAMES: dict[Dimension, str] = {}
for _name, _dim in (
    ("dimensionless", DIM_0),
    ("length", LENGTH),
    ("mass", MASS),
    ("duration", DURATION),
    ("electric current", ELECTRIC_CURRENT),
    ("temperature", TEMPERATURE),
    ("amount", AMOUNT),
    ("luminous intensity", LUMINOUS),
    ("area", AREA),
    ("volume", VOLUME),
    ("speed", SPEED),
    ("acceleration", ACCELERATION),
    ("force", FORCE),
    ("energy", ENERGY),
    ("power", POWER),
    ("electric charge", CHARGE),
    ("electric potential", ELECTRIC_POTENTIAL),
    ("electric resistance", ELECTRIC_RESISTANCE),
    ("mass concentration", CONCENTRATION_MASS),
):
    DIMENSION_NAMES.setdefault(_dim, _name)
del _name, _dim
