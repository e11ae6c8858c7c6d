# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Translation between a node's material slots and the scene's material list.

Polygons address materials by node-local slot, the cache by scene index.
"""

from typing import Dict

from ..common.constants import INVALID_INDEX
from ..common.logging import error

__all__ = ["IndexTranslator"]


class IndexTranslator:
    """
    Bijective map between one node's local material slots and scene indices.

    Built when a mesh starts processing.  Call :meth:`sync` after anything may
    have attached materials to the node; only the new slots are scanned.
    """

    def __init__(self, scene, node):
        self.scene = scene
        self.node = node
        self._to_scene: Dict[int, int] = {}
        self._to_local: Dict[int, int] = {}
        self._scanned = 0
        self.sync()

    def __len__(self):
        return len(self._to_scene)

    def sync(self) -> int:
        """
        Add entries for node slots added since the last scan.
        :return: The number of slots scanned.
        """
        count = self.node.materials.count()
        start = self._scanned
        for local in range(start, count):
            material = self.node.materials.get(local)
            if material is None:  # Empty slot.
                continue
            scene_index = self.scene.materials.index_of(material)
            if scene_index == INVALID_INDEX:
                error(f"Material slot {local} of {self.node.name!r} is not in the scene material list")
                continue
            self._to_scene[local] = scene_index
            self._to_local.setdefault(scene_index, local)
        self._scanned = count
        return count - start

    def to_scene(self, local: int) -> int:
        scene_index = self._to_scene.get(local, INVALID_INDEX)
        if scene_index == INVALID_INDEX:
            error(f"Material slot {local} of {self.node.name!r} is out of range")
        return scene_index

    def to_local(self, scene_index: int) -> int:
        local = self._to_local.get(scene_index, INVALID_INDEX)
        if local == INVALID_INDEX:
            error(f"Scene material {scene_index} is not attached to {self.node.name!r}")
        return local
