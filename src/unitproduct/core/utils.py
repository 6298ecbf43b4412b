"""
unitproduct.core.utils
======================

Helpers for turning dimension vectors into readable text (e.g. 'kg·m/s²').
"""

from __future__ import annotations

from unitproduct.core.dimensions import DIMENSION_NAMES, Dim, Dimension

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


# (axis index, SI symbol) in display order: M, L, T, I, Θ, N, J
_DISPLAY_AXES = ((1, "kg"), (0, "m"), (2, "s"), (3, "A"), (4, "K"), (5, "mol"), (6, "cd"))


def format_dim(dim: Dim) -> str:
    """Render a dimension as base SI units, e.g. ``(1, 1, -2, 0, 0, 0, 0)`` -> 'kg·m/s²'."""
    up = [sym + _sup(dim[i]) for i, sym in _DISPLAY_AXES if dim[i] > 0]
    down = [sym + _sup(-dim[i]) for i, sym in _DISPLAY_AXES if dim[i] < 0]
    text = "·".join(up) or "1"
    if down:
        text += "/" + "·".join(down)
    return text


def dimension_name(dim: Dim) -> str:
    """Human label for ``dim``: 'speed' when known, otherwise its SI form."""
    name = DIMENSION_NAMES.get(Dimension(dim))
    if name is not None:
        return name
    return format_dim(dim)


__all__ = ["format_dim", "dimension_name"]
