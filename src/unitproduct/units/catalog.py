"""
unitproduct.units.catalog
=========================

The unit catalog: every unit the package knows about, its scale factor to the
SI base unit of its dimension, and conversion between units of one dimension.

Features
--------
- Encapsulates state in a `UnitCatalog` class (thread-safe).
- Data-driven registration of metric, imperial and nautical units.
- Normalization that handles ASCII fallbacks and Unicode NFC.
- Lazy, safe synthesis of SI-prefixed units with anti-stacking checks.
- Aliases (e.g., "ohm" → "Ω", "kph" → "km/h").
- Clear public API: `register`, `register_alias`, `get`, `has`, `all`,
  `scale_factor`, `convert`.

The catalog does *not* parse compound expressions: "km/h" is a registered
symbol in its own right, not km divided by h.
"""
from __future__ import annotations

import logging
import re
import threading
import unicodedata
from typing import ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Union

from unitproduct.core.dimensions import (
    ACCELERATION,
    AREA,
    CHARGE,
    CONCENTRATION_MASS,
    CURRENT,
    ELECTRIC_POTENTIAL,
    ELECTRIC_RESISTANCE,
    ENERGY,
    LENGTH,
    MASS,
    POWER,
    SPEED,
    TIME,
    VOLUME,
)
from unitproduct.core.unit import Unit
from unitproduct.errors import IncompatibleDimension
from unitproduct.units.prefixes import PREFIXES

logger = logging.getLogger(__name__)

UnitLike = Union[Unit, str]

# Ordered list of prefix symbols by descending length for robust matching
_PREFIX_SYMBOLS_DESC = tuple(sorted((p.symbol for p in PREFIXES), key=len, reverse=True))
_PREFIX_FACTORS: Mapping[str, float] = {p.symbol: p.factor for p in PREFIXES}

# Symbols carrying an operator or a power can never take a prefix:
# "k" + "m²" is not 1000 m².
_COMPOUND_CHARS = frozenset("/·*^²³")

# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
_OHM_RE = re.compile(r"(?i)ohm")


def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Unicode normalize to NFC (composed forms like "µ").
    - Replace ASCII leading 'u' micro with Greek 'µ' **only** at start.
    - Map any spelling of 'ohm' to 'Ω'.
    - Strip surrounding whitespace.
    """
    if not s:
        return s

    s = s.strip()
    s = unicodedata.normalize("NFC", s)

    if s.startswith("u"):
        s = "µ" + s[1:]

    return _OHM_RE.sub("Ω", s)


# ---------------------------------------------------------------------------
# Unit catalog
# ---------------------------------------------------------------------------
class UnitCatalog:
    """Thread-safe catalog of `Unit` objects with SI prefix synthesis."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, Unit] = {}
        self._aliases: Dict[str, str] = {}
        self._non_prefixable: set[str] = set()

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    def __len__(self) -> int:
        return len(self._units)

    def set_non_prefixable(self, symbols: Iterable[str]) -> None:
        """Mark unit symbols that must not accept SI prefixes (e.g., 'kg', 'min')."""
        with self._lock:
            self._non_prefixable = {normalize_symbol(s) for s in symbols}

    def is_non_prefixable(self, symbol: str) -> bool:
        sym = normalize_symbol(symbol)
        return sym in self._non_prefixable or any(ch in _COMPOUND_CHARS for ch in sym)

    # -------------------------- registration -------------------------------
    def register(self, unit: Unit, replace: bool = False) -> None:
        """Register (or overwrite if replace is True) a `Unit` under its name."""
        with self._lock:
            if unit.name in getattr(UnitNamespace, "_reserved_names", ()):
                raise ValueError(
                    f"Cannot register unit '{unit.name}': "
                    "name conflicts with UnitNamespace attribute/method."
                )
            if not replace:
                if unit.name in self._units:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "a unit with this name already exists."
                    )
                if unit.name in self._aliases:
                    raise ValueError(
                        f"Cannot register unit '{unit.name}': "
                        "an alias with this name already exists."
                    )
            self._units[unit.name] = unit

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        norm_key = normalize_symbol(alias)
        literal_key = unicodedata.normalize("NFC", alias.strip())

        with self._lock:
            if canonical not in self._units:
                raise ValueError(f"Cannot alias '{alias}': unknown unit '{canonical}'")
            if not replace:
                for key in {literal_key, norm_key}:
                    if key in self._units and key != canonical:
                        raise ValueError(
                            f"Cannot register alias '{alias}' (which maps to '{key}'): "
                            f"a unit with the name '{key}' already exists."
                        )
            self._aliases[norm_key] = canonical
            self._aliases[literal_key] = canonical

    # ---------------------------- lookup -----------------------------------
    def has(self, symbol: str) -> bool:
        try:
            self.get(symbol)
            return True
        except ValueError:
            return False

    def get(self, symbol: str) -> Unit:
        """Lookup a unit by symbol. If missing, try to synthesize via SI prefix.

        Raises `ValueError` if unknown.
        """
        with self._lock:
            # exact, un-normalised hit first: "us" may be a real alias
            literal = self._aliases.get(symbol, symbol)
            u = self._units.get(literal)
            if u is not None:
                return u

            sym = normalize_symbol(symbol)
            sym = self._aliases.get(sym, sym)
            u = self._units.get(sym)
            if u is not None:
                return u

            synthesized = self._try_synthesize_prefixed(sym)
            if synthesized is not None:
                return synthesized

        raise ValueError(f"Unknown unit symbol: {symbol}")

    def all(self) -> Mapping[str, Unit]:
        with self._lock:
            return dict(self._units)

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)

    # ------------------------- conversion ----------------------------------
    def resolve(self, unit: UnitLike) -> Unit:
        return self.get(unit) if isinstance(unit, str) else unit

    def scale_factor(self, unit: UnitLike) -> float:
        """Multiplier converting a value in ``unit`` to its dimension's SI base unit."""
        return self.resolve(unit).scale_to_si

    def convert(self, value: float, from_unit: UnitLike, to_unit: UnitLike) -> float:
        """Convert ``value`` from ``from_unit`` to ``to_unit``.

        Raises `IncompatibleDimension` when the units measure different
        things. Converting between equal units returns ``value`` untouched.
        """
        src = self.resolve(from_unit)
        dst = self.resolve(to_unit)
        if src.dim != dst.dim:
            raise IncompatibleDimension(src, dst)
        if src == dst:
            return value
        return value * src.scale_to_si / dst.scale_to_si

    # ------------------------- internals -----------------------------------
    def _split_prefix(self, symbol: str) -> Tuple[Optional[str], str]:
        for p in _PREFIX_SYMBOLS_DESC:
            if symbol.startswith(p):
                return p, symbol[len(p):]
        return None, symbol

    def _looks_prefixed(self, symbol: str) -> bool:
        p, base = self._split_prefix(symbol)
        return p is not None and base in self._units

    def _try_synthesize_prefixed(self, sym: str) -> Optional[Unit]:
        prefix, base_sym = self._split_prefix(sym)
        if prefix is None or not base_sym:
            return None

        base = self._units.get(base_sym)
        if base is None:
            return None

        # Prevent stacked prefixes: base itself must not be prefixed
        if self._looks_prefixed(base_sym):
            return None

        if self.is_non_prefixable(base_sym):
            return None

        new_unit = Unit(sym, base.scale_to_si * _PREFIX_FACTORS[prefix], base.dim)
        self._units[sym] = new_unit
        logger.debug("Synthesized prefixed unit %r from %r", sym, base_sym)
        return new_unit


class UnitNamespace:
    """Attribute access to a catalog: ``u.km``, ``u("km/h")``."""

    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, catalog: "UnitCatalog") -> None:
        self._catalog = catalog

    def __contains__(self, spec: str) -> bool:
        return self._catalog.has(spec)

    def __call__(self, spec: str) -> Unit:
        return self._catalog.get(spec)

    def __getattr__(self, name: str) -> Unit:
        try:
            return self._catalog.get(name)
        except ValueError as e:
            # Unknown symbol should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        base_dir = set(super().__dir__())
        names = {n for n in self._catalog.all() if n.isidentifier()}
        aliases = {a for a in self._catalog._aliases if a.isidentifier()}
        return sorted(base_dir | names | aliases)

UnitNamespace._reserved_names = set(dir(UnitNamespace))


# ---------------------------------------------------------------------------
# Bootstrap a default catalog
# ---------------------------------------------------------------------------

def _bootstrap_default_catalog() -> UnitCatalog:
    cat = UnitCatalog()

    _MILE = 1609.344
    _NMI = 1852.0
    _FOOT = 0.3048
    _HOUR = 3600.0

    # (symbol, scale_to_si, dim)
    units = (
        # length
        ("m",      1.0,            LENGTH),
        ("ft",     _FOOT,          LENGTH),
        ("in",     0.0254,         LENGTH),
        ("yd",     0.9144,         LENGTH),
        ("mi",     _MILE,          LENGTH),
        ("nmi",    _NMI,           LENGTH),
        # duration
        ("s",      1.0,            TIME),
        ("min",    60.0,           TIME),
        ("h",      _HOUR,          TIME),
        ("d",      24.0 * _HOUR,   TIME),
        ("wk",     7.0 * 24.0 * _HOUR, TIME),
        # speed
        ("m/s",    1.0,            SPEED),
        ("km/h",   1000.0 / _HOUR, SPEED),
        ("mph",    _MILE / _HOUR,  SPEED),
        ("kn",     _NMI / _HOUR,   SPEED),
        ("ft/s",   _FOOT,          SPEED),
        # acceleration
        ("m/s²",   1.0,            ACCELERATION),
        ("ft/s²",  _FOOT,          ACCELERATION),
        ("ɡₙ",     9.80665,        ACCELERATION),
        # mass
        ("kg",     1.0,            MASS),
        ("g",      1e-3,           MASS),
        ("t",      1000.0,         MASS),
        ("lb",     0.45359237,     MASS),
        ("oz",     0.028349523125, MASS),
        # area
        ("m²",     1.0,            AREA),
        ("cm²",    1e-4,           AREA),
        ("km²",    1e6,            AREA),
        ("ha",     1e4,            AREA),
        ("ft²",    _FOOT ** 2,     AREA),
        ("acre",   4046.8564224,   AREA),
        # volume
        ("m³",     1.0,            VOLUME),
        ("cm³",    1e-6,           VOLUME),
        ("L",      1e-3,           VOLUME),
        ("ft³",    _FOOT ** 3,     VOLUME),
        ("gal",    0.003785411784, VOLUME),   # US liquid gallon
        # mass concentration
        ("kg/m³",  1.0,            CONCENTRATION_MASS),
        ("g/L",    1.0,            CONCENTRATION_MASS),
        ("g/mL",   1000.0,         CONCENTRATION_MASS),
        ("mg/dL",  0.01,           CONCENTRATION_MASS),
        # energy
        ("J",      1.0,            ENERGY),
        ("Wh",     _HOUR,          ENERGY),
        ("kWh",    1000.0 * _HOUR, ENERGY),
        ("cal",    4.184,          ENERGY),
        ("kcal",   4184.0,         ENERGY),
        # power
        ("W",      1.0,            POWER),
        ("hp",     745.69987158227022, POWER),   # mechanical horsepower
        # electric
        ("C",      1.0,            CHARGE),
        ("Ah",     _HOUR,          CHARGE),
        ("mAh",    3.6,            CHARGE),
        ("A",      1.0,            CURRENT),
        ("V",      1.0,            ELECTRIC_POTENTIAL),
        ("Ω",      1.0,            ELECTRIC_RESISTANCE),
    )
    for sym, scale, dim in units:
        cat.register(Unit(sym, scale, dim))

    aliases = (
        ("meter", "m"), ("meters", "m"), ("metre", "m"), ("metres", "m"),
        ("foot", "ft"), ("feet", "ft"), ("inch", "in"), ("mile", "mi"), ("miles", "mi"),
        ("NM", "nmi"),
        ("sec", "s"), ("minute", "min"), ("minutes", "min"),
        ("hr", "h"), ("hour", "h"), ("hours", "h"),
        ("day", "d"), ("days", "d"), ("week", "wk"), ("weeks", "wk"),
        ("mps", "m/s"), ("kph", "km/h"), ("kmh", "km/h"), ("fps", "ft/s"),
        ("knot", "kn"), ("knots", "kn"),
        ("m/s^2", "m/s²"), ("ft/s^2", "ft/s²"), ("gn", "ɡₙ"),
        ("m^2", "m²"), ("m2", "m²"), ("cm^2", "cm²"), ("km^2", "km²"), ("ft^2", "ft²"),
        ("m^3", "m³"), ("m3", "m³"), ("cm^3", "cm³"), ("ft^3", "ft³"), ("cc", "cm³"),
        ("l", "L"), ("liter", "L"), ("litre", "L"),
        ("kg/m^3", "kg/m³"),
        ("ohm", "Ω"),
    )
    for alias, canonical in aliases:
        cat.register_alias(alias, canonical)

    cat.set_non_prefixable([
        "kg", "t",
        "ft", "in", "yd", "mi", "nmi",
        "min", "h", "d", "wk",
        "mph", "kn", "ɡₙ",
        "lb", "oz", "ha", "acre", "gal",
        "cal", "kcal", "kWh", "mAh", "hp",
    ])

    return cat


# Public, shared default catalog
DEFAULT_CATALOG: UnitCatalog = _bootstrap_default_catalog()


__all__ = [
    "UnitCatalog",
    "UnitNamespace",
    "DEFAULT_CATALOG",
    "normalize_symbol",
]
