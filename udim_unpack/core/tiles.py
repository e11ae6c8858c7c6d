# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
UDIM tile resolution.

Maps a polygon's UV bounding box to the tile it lives in.  A polygon belongs to
a tile when its UVs fit within one unit square, allowing a small tolerance for
vertices that authoring tools put just below a tile boundary instead of on it.
"""

import math
from typing import Optional, Tuple

from ..common.constants import (
    BASE_TILE,
    DEFAULT_TOLERANCE,
    MAX_TILE_COLUMN,
    NOT_A_TILE,
    TILE_MARKER_FORMAT,
    TILES_PER_ROW,
)
from ..common.logging import debug, error

__all__ = [
    "resolve_part",
    "resolve_tile",
    "tile_offset",
    "tile_origin",
    "tile_name",
]


def resolve_part(min_value: float, max_value: float, tolerance: float = DEFAULT_TOLERANCE) -> int:
    """
    Resolve one axis of a UV bounding box to a tile column or row.

    The lower bound decides, unless it sits within ``tolerance`` below the next
    integer boundary and the upper bound actually crosses that boundary.  Then
    the lower bound was meant to be on the boundary.
    :param min_value: Smallest coordinate on this axis. Assumed non-negative.
    :param max_value: Largest coordinate on this axis.
    :param tolerance: Maximum distance below the boundary to snap up.
    :return: The column (for U) or row (for V) index.
    """
    i = math.floor(min_value)
    boundary = i + 1
    gap = boundary - min_value
    near_boundary = gap <= tolerance or math.isclose(gap, tolerance)
    if near_boundary and max_value > boundary:
        return boundary
    return i


def resolve_tile(
    min_u: float,
    min_v: float,
    max_u: float,
    max_v: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Optional[int]:
    """
    Resolve a UV bounding box to a UDIM tile number.
    :return: The tile number, or ``NOT_A_TILE`` if the box spans more than one
    tile in either direction or lies outside the 10-column tile grid.
    """
    limit = 1.0 + tolerance
    if (max_u - min_u) > limit or (max_v - min_v) > limit:
        debug(f"UV box ({min_u}, {min_v})-({max_u}, {max_v}) spans more than one tile")
        return NOT_A_TILE

    u_col = resolve_part(min_u, max_u, tolerance)
    v_row = resolve_part(min_v, max_v, tolerance)
    if u_col > MAX_TILE_COLUMN:
        error(f"UV column {u_col} exceeds the {MAX_TILE_COLUMN + 1} tiles of a UDIM row")
        return NOT_A_TILE
    if u_col < 0 or v_row < 0:
        error(f"UV box ({min_u}, {min_v})-({max_u}, {max_v}) lies below the first tile")
        return NOT_A_TILE
    return BASE_TILE + TILES_PER_ROW * v_row + u_col


def tile_offset(tile: int) -> int:
    return tile - BASE_TILE


def tile_origin(tile: int) -> Tuple[int, int]:
    """The ``(u, v)`` integer origin of a tile, e.g. ``1012 -> (1, 1)``."""
    v_row, u_col = divmod(tile_offset(tile), TILES_PER_ROW)
    return u_col, v_row


def tile_name(name: str, tile: int) -> str:
    """Display name of the material serving ``tile``."""
    return TILE_MARKER_FORMAT.format(name=name, tile=tile)
