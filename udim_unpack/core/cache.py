# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Tile material cache.

Splitting a shared material yields one material per ``(base material, tile)``
pair.  The cache makes sure each pair is created once per run, however many
polygons, UV channels or nodes ask for it:

- Tile 1001 is served by the base material itself, renamed in place
  (``"Skin"`` becomes ``"Skin_1001"``).
- Every other tile gets a clone of the base, named after the base's original
  name (``"Skin_1002"``), appended to the scene and to the requesting node.
  This holds even when no polygon uses tile 1001: the base is then left
  unrenamed in the node's slots, unused, next to its clone.

Which bases have been claimed is recorded here, not read back out of material
names, so a user material that happens to be called ``"Rock_1002"`` is still
treated as a fresh base.
"""

from typing import Dict, Optional, Tuple

from ..common.constants import (
    BASE_TILE,
    DEFAULT_MAX_MATERIALS,
    DEFAULT_MAX_TILE_OFFSET,
    INVALID_INDEX,
)
from ..common.logging import debug
from .errors import InputCapacityError, TileCapacityError
from .tiles import tile_name, tile_offset

__all__ = [
    "MaterialCache",
    "check_scene_capacity",
]


def check_scene_capacity(scene, max_materials: int) -> None:
    """
    Refuse to start a run on a scene that is already over capacity.
    :raises InputCapacityError: If the scene holds more than ``max_materials``.
    """
    count = scene.materials.count()
    if count > max_materials:
        raise InputCapacityError(
            f"Scene has {count} materials, more than the maximum of {max_materials}"
        )


class MaterialCache:
    """
    Memoizes ``(base scene index, tile offset) -> scene index`` for one run.

    Create a new cache for every conversion run; entries refer to scene
    material indices and mean nothing in another scene.
    """

    def __init__(
        self,
        max_materials: int = DEFAULT_MAX_MATERIALS,
        max_tile_offset: int = DEFAULT_MAX_TILE_OFFSET,
    ):
        self.max_materials = max_materials
        self.max_tile_offset = max_tile_offset
        self._entries: Dict[Tuple[int, int], int] = {}
        # Tile material scene index -> scene index of the base it serves.
        self._base_of: Dict[int, int] = {}
        # Base scene index -> its name before any tile claimed it.
        self._base_names: Dict[int, str] = {}
        self.num_created = 0
        self.num_renamed = 0

    @property
    def capacity(self) -> int:
        return self.max_materials * self.max_tile_offset

    def __len__(self):
        return len(self._entries)

    def lookup(self, base_index: int, tile: int) -> Optional[int]:
        """The cached scene index for a pair, or None. Never creates anything."""
        return self._entries.get((self.base_of(base_index), tile_offset(tile)))

    def base_of(self, scene_index: int) -> int:
        """The base material a tile material was made from, or the index itself."""
        return self._base_of.get(scene_index, scene_index)

    def is_claimed(self, base_index: int) -> bool:
        return base_index in self._base_names

    def resolve(self, scene, node, base_index: int, tile: int) -> int:
        """
        Find or create the material serving ``tile`` for a base material.
        :param scene: The scene owning the global material list.
        :param node: The node requesting the material; the result is attached
        to its local material list if missing.
        :param base_index: Scene index of the polygon's current material. May
        be a tile material from an earlier request; it is mapped back to its
        base first.
        :param tile: The UDIM tile number.
        :return: Scene index of the material serving the tile.
        :raises TileCapacityError: If the tile or the new material doesn't fit
        the run's capacity.
        """
        base_index = self.base_of(base_index)
        offset = tile_offset(tile)
        if not 0 <= offset < self.max_tile_offset:
            raise TileCapacityError(
                f"Tile {tile} is beyond the maximum tile offset of {self.max_tile_offset}"
            )

        key = (base_index, offset)
        cached = self._entries.get(key)
        if cached is not None:
            self._attach(node, scene.materials.get(cached))
            return cached

        if len(self._entries) >= self.capacity:
            raise TileCapacityError(f"Material cache is full ({self.capacity} entries)")

        base = scene.materials.get(base_index)
        base_name = self._base_names.setdefault(base_index, base.name)
        if tile == BASE_TILE:
            base.name = tile_name(base_name, tile)
            result = base_index
            self.num_renamed += 1
            debug(f"Renamed material {base_name!r} to {base.name!r}")
        else:
            if scene.materials.count() >= self.max_materials:
                raise TileCapacityError(
                    f"Creating a material for tile {tile} would exceed the maximum of "
                    f"{self.max_materials} materials"
                )
            clone = base.clone()
            clone.name = tile_name(base_name, tile)
            result = scene.materials.add(clone)
            node.materials.add(clone)
            self.num_created += 1
            debug(f"Created material {clone.name!r} for tile {tile}")

        self._entries[key] = result
        self._base_of[result] = base_index
        return result

    @staticmethod
    def _attach(node, material) -> None:
        if node.materials.index_of(material) == INVALID_INDEX:
            node.materials.add(material)
            debug(f"Attached material {material.name!r} to {node.name!r}")
