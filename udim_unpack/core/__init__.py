# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Conversion core.

Pure Python (numpy only): nothing in this package imports ``bpy``, so it can
be driven from Blender through :mod:`udim_unpack.blender.adapter` or from any
other scene model implementing the contract in :mod:`udim_unpack.common.scene`.
"""

from .errors import (
    UDIMUnpackError,
    UnsupportedChannelError,
    CapacityError,
    InputCapacityError,
    TileCapacityError,
)
from .tiles import resolve_part, resolve_tile, tile_offset, tile_origin, tile_name
from .uvs import polygon_uv_slots, polygon_uv_bounds, renormalize_polygon
from .cache import MaterialCache, check_scene_capacity
from .translator import IndexTranslator
from .assignment import ensure_per_polygon, polygon_material, set_polygon_material
from .context import ConversionOptions, ConversionContext
from .orchestrator import classify_channel, process_mesh, convert_scene

__all__ = [
    # Errors
    "UDIMUnpackError",
    "UnsupportedChannelError",
    "CapacityError",
    "InputCapacityError",
    "TileCapacityError",
    # Tiles
    "resolve_part",
    "resolve_tile",
    "tile_offset",
    "tile_origin",
    "tile_name",
    # UVs
    "polygon_uv_slots",
    "polygon_uv_bounds",
    "renormalize_polygon",
    # Materials
    "MaterialCache",
    "check_scene_capacity",
    "IndexTranslator",
    "ensure_per_polygon",
    "polygon_material",
    "set_polygon_material",
    # Driver
    "ConversionOptions",
    "ConversionContext",
    "classify_channel",
    "process_mesh",
    "convert_scene",
]
