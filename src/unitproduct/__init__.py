"""
unitproduct: conversion-exact multiplication and division of physical measurements.

Multiplying a speed by a duration gives a distance, and ``60 km/h * 2 h``
gives exactly ``120 km``: a registry of dimension relations
(Factor1 × Factor2 = Product) lists, per relation, the unit combinations in
which raw values multiply without conversion, and falls back to the SI units
otherwise.

This module exposes a minimal, stable public API. The default unit catalog,
relation registry and engine are built on first access.
"""

from importlib import metadata as _metadata


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject for local dev.
try:
    __version__ = _metadata.version("unitproduct")
except _metadata.PackageNotFoundError:
    import tomllib
    from pathlib import Path as _Path

    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

from typing import TYPE_CHECKING, Any

from unitproduct.core.measurement import Measurement
from unitproduct.core.unit import Unit
from unitproduct.errors import (
    DivisionByZero,
    DuplicateRelationKey,
    IncompatibleDimension,
    InexactPreferredMapping,
    MissingDefaultMapping,
    NoRelationRegistered,
    RegistryFrozen,
    RegistryNotFrozen,
    UnitProductError,
)
from unitproduct.relations.mapping import Relation, UnitMapping

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from unitproduct.units.catalog import UnitNamespace

__all__ = [
    "__version__", "__author__", "__license__",
    "Measurement", "Unit", "UnitMapping", "Relation",
    "RelationRegistry", "ArithmeticEngine", "multiply", "divide",
    "UnitProductError", "NoRelationRegistered", "IncompatibleDimension",
    "DivisionByZero", "InexactPreferredMapping", "DuplicateRelationKey",
    "MissingDefaultMapping", "RegistryFrozen", "RegistryNotFrozen",
]

# Lazy access helpers -------------------------------------------------------

_LAZY = {
    "RelationRegistry": ("unitproduct.relations.registry", "RelationRegistry"),
    "DEFAULT_RELATIONS": ("unitproduct.relations.registry", "DEFAULT_RELATIONS"),
    "ArithmeticEngine": ("unitproduct.engine", "ArithmeticEngine"),
    "DEFAULT_ENGINE": ("unitproduct.engine", "DEFAULT_ENGINE"),
    "multiply": ("unitproduct.engine", "multiply"),
    "divide": ("unitproduct.engine", "divide"),
    "DEFAULT_CATALOG": ("unitproduct.units.catalog", "DEFAULT_CATALOG"),
}


def _get_namespace() -> "UnitNamespace":
    # Import here to avoid import-time side-effects / circular imports.
    from unitproduct.units.catalog import DEFAULT_CATALOG  # local import
    return DEFAULT_CATALOG.as_namespace()


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. 'u' is a namespace over the default unit catalog;
    the registry/engine names import their modules on first use.
    """
    if name == "u":
        return _get_namespace()
    if name in _LAZY:
        import importlib

        module_name, attr = _LAZY[name]
        return getattr(importlib.import_module(module_name), attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["u"] + list(_LAZY))
