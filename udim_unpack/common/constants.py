# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
This module defines the constants of the UDIM tile convention and of the
conversion run.

Tile numbering: tile ``1001`` covers ``[0,1) x [0,1)``; every column to the
right adds 1 (at most 9 columns per row) and every row up adds 10.
"""

from typing import FrozenSet, Optional

# IDE and Documentation support.
__all__ = [
    "BASE_TILE",
    "TILES_PER_ROW",
    "MAX_TILE_COLUMN",
    "NOT_A_TILE",
    "INVALID_INDEX",
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_MATERIALS",
    "DEFAULT_MAX_TILE_OFFSET",
    "TILE_MARKER_FORMAT",
    "BY_CONTROL_POINT",
    "BY_POLYGON_VERTEX",
    "BY_POLYGON",
    "ALL_SAME",
    "SUPPORTED_UV_MAPPINGS",
    "SUPPORTED_MATERIAL_MAPPINGS",
    "DIRECT",
    "INDEX_TO_DIRECT",
    "REFERENCE_MODES",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
    "EXIT_INPUT_OVER_CAPACITY",
    "EXIT_TILE_OVER_CAPACITY",
]

# Tile numbering.
BASE_TILE: int = 1001
TILES_PER_ROW: int = 10
MAX_TILE_COLUMN: int = 9

# Returned by the tile resolver when a polygon's UVs don't fit a single tile.
NOT_A_TILE: Optional[int] = None

# Returned by index translation when a material slot can't be found.
INVALID_INDEX: int = -1

# How far below a tile boundary a UV may sit and still count as on the boundary.
# Authoring tools write 0.999999 for 1.0 often enough that this matters.
DEFAULT_TOLERANCE: float = 0.001

# Capacity of a single conversion run.
DEFAULT_MAX_MATERIALS: int = 1024
DEFAULT_MAX_TILE_OFFSET: int = 100  # Tiles 1001 through 1100.

# Display name of a material serving a tile, e.g. "Skin_1002".
TILE_MARKER_FORMAT: str = "{name}_{tile}"

# Mapping modes: how a UV or material value attaches to mesh topology.
BY_CONTROL_POINT: str = "BY_CONTROL_POINT"
BY_POLYGON_VERTEX: str = "BY_POLYGON_VERTEX"
BY_POLYGON: str = "BY_POLYGON"
ALL_SAME: str = "ALL_SAME"

SUPPORTED_UV_MAPPINGS: FrozenSet[str] = frozenset({BY_CONTROL_POINT, BY_POLYGON_VERTEX})
SUPPORTED_MATERIAL_MAPPINGS: FrozenSet[str] = frozenset({ALL_SAME, BY_POLYGON})

# Reference modes: values stored directly, or through an index array.
DIRECT: str = "DIRECT"
INDEX_TO_DIRECT: str = "INDEX_TO_DIRECT"
REFERENCE_MODES: FrozenSet[str] = frozenset({DIRECT, INDEX_TO_DIRECT})

# Process exit codes of the command line front end.
EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = -1
EXIT_INPUT_OVER_CAPACITY: int = 3
EXIT_TILE_OVER_CAPACITY: int = 4
