# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Common utilities shared by the core, the Blender adapter and the front ends.

Re-exports the most frequently used symbols for convenient access::

    from ..common import debug, warn, error
    from ..common import BASE_TILE, NOT_A_TILE, INVALID_INDEX
    from ..common import UVChannel, MaterialAssignment
"""

# Logging
from .logging import DEBUG_MODE, debug, warn, error, safe_report

# Constants (subset)
from .constants import (
    BASE_TILE,
    NOT_A_TILE,
    INVALID_INDEX,
    DEFAULT_TOLERANCE,
    DEFAULT_MAX_MATERIALS,
    DEFAULT_MAX_TILE_OFFSET,
    BY_CONTROL_POINT,
    BY_POLYGON_VERTEX,
    BY_POLYGON,
    ALL_SAME,
    DIRECT,
    INDEX_TO_DIRECT,
)

# Types
from .types import UVChannel, MaterialAssignment, MeshReport

__all__ = [
    # Logging
    "DEBUG_MODE",
    "debug",
    "warn",
    "error",
    "safe_report",
    # Constants (subset)
    "BASE_TILE",
    "NOT_A_TILE",
    "INVALID_INDEX",
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_MATERIALS",
    "DEFAULT_MAX_TILE_OFFSET",
    "BY_CONTROL_POINT",
    "BY_POLYGON_VERTEX",
    "BY_POLYGON",
    "ALL_SAME",
    "DIRECT",
    "INDEX_TO_DIRECT",
    # Types
    "UVChannel",
    "MaterialAssignment",
    "MeshReport",
]
