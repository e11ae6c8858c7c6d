# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Per-polygon UV sampling and renormalization.

Both work on *slots*: rows of the channel's ``values`` array.  A polygon's
slots are found the same way for reading and for writing, so a polygon is
always renormalized exactly where it was sampled.
"""

from typing import Optional, Tuple

import numpy as np

from ..common.constants import BY_CONTROL_POINT, BY_POLYGON_VERTEX
from ..common.types import UVChannel
from .errors import UnsupportedChannelError

__all__ = [
    "polygon_uv_slots",
    "polygon_uv_bounds",
    "renormalize_polygon",
]


def polygon_uv_slots(mesh, channel: UVChannel, polygon: int, first_corner: int) -> np.ndarray:
    """
    Find the rows of ``channel.values`` holding a polygon's UVs.
    :param mesh: The mesh the channel belongs to.
    :param channel: The UV channel to address.
    :param polygon: Index of the polygon.
    :param first_corner: Number of polygon corners in all preceding polygons.
    Only used for per-polygon-vertex channels.
    :return: One slot per polygon corner, in corner order.
    """
    num_corners = mesh.vertices_in_polygon(polygon)
    if channel.mapping_mode == BY_CONTROL_POINT:
        keys = np.fromiter(
            (mesh.control_point_index(polygon, v) for v in range(num_corners)),
            dtype=np.int64,
            count=num_corners,
        )
    elif channel.mapping_mode == BY_POLYGON_VERTEX:
        keys = np.arange(first_corner, first_corner + num_corners, dtype=np.int64)
    else:
        raise UnsupportedChannelError(
            f"UV channel {channel.name!r} has unsupported mapping mode {channel.mapping_mode!r}"
        )

    if channel.is_indexed:
        return channel.indices[keys]
    return keys


def polygon_uv_bounds(channel: UVChannel, slots: np.ndarray) -> Tuple[float, float, float, float]:
    """
    Bounding box of the UVs in ``slots``.
    :return: ``(min_u, min_v, max_u, max_v)``.
    """
    uvs = channel.values[slots]
    min_u, min_v = uvs.min(axis=0)
    max_u, max_v = uvs.max(axis=0)
    return float(min_u), float(min_v), float(max_u), float(max_v)


def renormalize_polygon(
    channel: UVChannel,
    slots: np.ndarray,
    shifted: Optional[np.ndarray] = None,
) -> int:
    """
    Move a polygon's UVs back into the unit square, in place.

    Every coordinate ``c`` becomes ``c - floor(c)``, so the results lie in
    [0, 1).  A corner on the far edge of its tile wraps to 0, and a corner
    snapped up by the resolver tolerance keeps its fraction (0.9995 stays
    0.9995).
    :param shifted: Optional boolean mask over ``channel.values`` of slots
    already moved by an earlier polygon. Those are left alone and the mask
    is updated.
    :return: The number of slots moved.
    """
    pending = np.unique(slots)
    if shifted is not None:
        pending = pending[~shifted[pending]]
        shifted[pending] = True
    values = channel.values[pending]
    channel.values[pending] = values - np.floor(values)
    return len(pending)
