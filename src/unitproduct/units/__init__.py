"""
unitproduct.units
=================

The unit catalog and SI prefixes.
"""

from .catalog import DEFAULT_CATALOG, UnitCatalog, UnitNamespace

__all__ = ["UnitCatalog", "UnitNamespace", "DEFAULT_CATALOG"]
