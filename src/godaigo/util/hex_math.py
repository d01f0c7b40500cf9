"""Hex math utilities: coordinate conversion for hexagonal grids.

Axial <-> cube <-> pixel conversion for a flat-top layout. Pixel positions
are relative to the board origin; the renderer adds its own canvas offset.
Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math

from godaigo.models.hex import HexCoord

_SQRT3 = math.sqrt(3)


def axial_to_cube(coord: HexCoord) -> tuple[int, int, int]:
    """Return (x, y, z) with x = q, z = r and y = -q - r."""
    return coord.q, -coord.q - coord.r, coord.r


def cube_to_axial(x: int, y: int, z: int) -> HexCoord:
    return HexCoord(x, z)


def cube_round(fx: float, fy: float, fz: float) -> HexCoord:
    """Round fractional cube coordinates to the nearest hex.

    The component with the largest rounding error is recomputed from the
    other two so that x + y + z stays 0.
    """
    x = round(fx)
    y = round(fy)
    z = round(fz)

    x_diff = abs(x - fx)
    y_diff = abs(y - fy)
    z_diff = abs(z - fz)

    if x_diff > y_diff and x_diff > z_diff:
        x = -y - z
    elif y_diff > z_diff:
        y = -x - z
    else:
        z = -x - y

    return cube_to_axial(x, y, z)


def axial_round(fq: float, fr: float) -> HexCoord:
    """Snap fractional axial coordinates to the nearest hex."""
    return cube_round(fq, -fq - fr, fr)


def hex_to_pixel(coord: HexCoord, size: float) -> tuple[float, float]:
    """Center of a hex in pixels for hexes of circumradius ``size``."""
    x = size * (1.5 * coord.q)
    y = size * (_SQRT3 / 2 * coord.q + _SQRT3 * coord.r)
    return x, y


def pixel_to_hex(x: float, y: float, size: float) -> HexCoord:
    """Hex containing the pixel (x, y)."""
    fq = (2 / 3 * x) / size
    fr = (-1 / 3 * x + _SQRT3 / 3 * y) / size
    return axial_round(fq, fr)
