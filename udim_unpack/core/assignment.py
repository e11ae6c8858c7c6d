# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Material assignment rewriting.

A mesh bound to one material as a whole only needs per-polygon indices once
one of its polygons moves to another tile.  Until then it is left alone.
"""

from ..common.constants import ALL_SAME, BY_POLYGON, INVALID_INDEX
from ..common.logging import debug, error
from ..common.types import MaterialAssignment

__all__ = [
    "ensure_per_polygon",
    "polygon_material",
    "set_polygon_material",
]


def ensure_per_polygon(assignment: MaterialAssignment, polygon_count: int) -> bool:
    """
    Switch a whole-mesh assignment to one index per polygon.

    Every polygon keeps the material it had.  Does nothing when the assignment
    is already per polygon.
    :return: True if the assignment was upgraded.
    """
    if assignment.mapping_mode != ALL_SAME:
        return False
    index = assignment.indices[0] if assignment.indices else 0
    assignment.mapping_mode = BY_POLYGON
    assignment.indices = [index] * polygon_count
    debug(f"Material assignment switched to per-polygon ({polygon_count} polygons, slot {index})")
    return True


def polygon_material(assignment: MaterialAssignment, polygon: int) -> int:
    """The node-local material slot of a polygon."""
    if assignment.mapping_mode == ALL_SAME:
        return assignment.indices[0] if assignment.indices else 0
    if 0 <= polygon < len(assignment.indices):
        return assignment.indices[polygon]
    error(f"Polygon {polygon} has no material index ({len(assignment.indices)} assigned)")
    return INVALID_INDEX


def set_polygon_material(assignment: MaterialAssignment, polygon: int, local: int) -> None:
    if assignment.mapping_mode != BY_POLYGON:
        raise ValueError("Per-polygon materials need a BY_POLYGON assignment")
    assignment.indices[polygon] = local
