# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

# <pep8 compliant>

"""
Blender scene adapter.

Presents Blender data through the scene contract of
:mod:`udim_unpack.common.scene`:

- The scene material list is a snapshot of ``bpy.data.materials`` taken when
  the run starts.  ``bpy.data.materials`` is kept sorted by name, so indices
  into it shift whenever a material is added or renamed; the snapshot only
  grows at the end.
- A node is a mesh object; its local list is its material slots.
- UV layers are per-polygon-vertex (one UV per loop) and direct.
- Blender stores a material index on every polygon.  When all of them are
  equal the mesh is presented as bound to one material as a whole, so the
  core only switches to per-polygon indices when it needs to.

Mesh data is bulk-read into numpy arrays with ``foreach_get`` and written back
by :meth:`BlenderMesh.commit` with ``foreach_set``.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Set

import numpy as np

import bpy

from ..common.constants import ALL_SAME, BY_POLYGON, BY_POLYGON_VERTEX, DIRECT, INVALID_INDEX
from ..common.logging import debug, warn
from ..common.types import MaterialAssignment, UVChannel

__all__ = [
    "BlenderMaterial",
    "BlenderMaterialList",
    "BlenderSlotList",
    "BlenderMesh",
    "BlenderNode",
    "BlenderScene",
]


class BlenderMaterial:
    """A ``bpy.types.Material`` with the name/clone interface of the core."""

    __slots__ = ("material",)

    def __init__(self, material):
        self.material = material

    @property
    def name(self) -> str:
        return self.material.name

    @name.setter
    def name(self, value: str) -> None:
        self.material.name = value

    def clone(self) -> "BlenderMaterial":
        # Material.copy() also links the copy into bpy.data.materials.
        return BlenderMaterial(self.material.copy())

    def __eq__(self, other):
        if not isinstance(other, BlenderMaterial):
            return NotImplemented
        return self.material == other.material

    def __hash__(self):
        return hash(self.material.as_pointer())

    def __repr__(self):
        return f"BlenderMaterial({self.material.name!r})"


class BlenderMaterialList:
    """The scene's material list: a stable-order snapshot of ``bpy.data.materials``."""

    def __init__(self, materials: Iterable):
        self._materials: List[BlenderMaterial] = [BlenderMaterial(m) for m in materials]

    def count(self) -> int:
        return len(self._materials)

    def get(self, index: int) -> BlenderMaterial:
        return self._materials[index]

    def add(self, material: BlenderMaterial) -> int:
        existing = self.index_of(material)
        if existing != INVALID_INDEX:
            return existing
        self._materials.append(material)
        return len(self._materials) - 1

    def index_of(self, material: BlenderMaterial) -> int:
        for i, candidate in enumerate(self._materials):
            if candidate == material:
                return i
        return INVALID_INDEX

    def index_of_name(self, name: str) -> int:
        for i, candidate in enumerate(self._materials):
            if candidate.name == name:
                return i
        return INVALID_INDEX


class BlenderSlotList:
    """An object's material slots.  Empty slots read as None."""

    def __init__(self, obj):
        self.object = obj

    def count(self) -> int:
        return len(self.object.material_slots)

    def get(self, index: int) -> Optional[BlenderMaterial]:
        material = self.object.material_slots[index].material
        return BlenderMaterial(material) if material is not None else None

    def add(self, material: BlenderMaterial) -> int:
        self.object.data.materials.append(material.material)
        return len(self.object.material_slots) - 1

    def index_of(self, material: BlenderMaterial) -> int:
        for i, slot in enumerate(self.object.material_slots):
            if slot.material is not None and slot.material == material.material:
                return i
        return INVALID_INDEX

    def index_of_name(self, name: str) -> int:
        for i, slot in enumerate(self.object.material_slots):
            if slot.material is not None and slot.material.name == name:
                return i
        return INVALID_INDEX


class BlenderMesh:
    """The mesh data of a Blender object, read into numpy arrays."""

    def __init__(self, obj):
        self.object = obj
        self.data = obj.data
        mesh = self.data

        num_polygons = len(mesh.polygons)
        self._loop_start = np.empty(num_polygons, dtype=np.int32)
        self._loop_total = np.empty(num_polygons, dtype=np.int32)
        mesh.polygons.foreach_get("loop_start", self._loop_start)
        mesh.polygons.foreach_get("loop_total", self._loop_total)
        self._loop_vertex = np.empty(len(mesh.loops), dtype=np.int32)
        mesh.loops.foreach_get("vertex_index", self._loop_vertex)

        self._uv_channels: List[UVChannel] = []
        for layer in mesh.uv_layers:
            uv_flat = np.zeros(len(layer.data) * 2, dtype=np.float64)
            layer.data.foreach_get("uv", uv_flat)
            self._uv_channels.append(
                UVChannel(
                    name=layer.name,
                    mapping_mode=BY_POLYGON_VERTEX,
                    reference_mode=DIRECT,
                    values=uv_flat.reshape(-1, 2),
                )
            )

        self._material_assignments: List[MaterialAssignment] = []
        if len(obj.material_slots) > 0:
            material_index = np.zeros(num_polygons, dtype=np.int32)
            mesh.polygons.foreach_get("material_index", material_index)
            if num_polygons == 0 or np.all(material_index == material_index[0]):
                first = int(material_index[0]) if num_polygons else 0
                assignment = MaterialAssignment(mapping_mode=ALL_SAME, indices=[first])
            else:
                assignment = MaterialAssignment(mapping_mode=BY_POLYGON, indices=material_index.tolist())
            self._material_assignments.append(assignment)

    def polygon_count(self) -> int:
        return len(self._loop_start)

    def vertices_in_polygon(self, polygon: int) -> int:
        return int(self._loop_total[polygon])

    def control_point_index(self, polygon: int, vertex: int) -> int:
        return int(self._loop_vertex[self._loop_start[polygon] + vertex])

    def uv_channels(self) -> List[UVChannel]:
        return self._uv_channels

    def material_assignments(self) -> List[MaterialAssignment]:
        return self._material_assignments

    def commit(self) -> None:
        """Write UVs and polygon material indices back to the Blender mesh."""
        mesh = self.data
        for channel in self._uv_channels:
            layer = mesh.uv_layers.get(channel.name)
            if layer is None:
                warn(f"UV layer {channel.name!r} disappeared from {mesh.name!r}, not written")
                continue
            layer.data.foreach_set("uv", channel.values.astype(np.float32).ravel())

        if self._material_assignments:
            assignment = self._material_assignments[0]
            num_polygons = self.polygon_count()
            if assignment.mapping_mode == ALL_SAME:
                material_index = np.full(num_polygons, assignment.indices[0], dtype=np.int32)
            else:
                material_index = np.asarray(assignment.indices, dtype=np.int32)
            mesh.polygons.foreach_set("material_index", material_index)

        mesh.update()
        debug(f"Wrote UVs and material indices of {mesh.name!r}")


class BlenderNode:
    """A mesh object as a scene node."""

    def __init__(self, obj, mesh: Optional[BlenderMesh] = None):
        self.object = obj
        self.name = obj.name
        self.materials = BlenderSlotList(obj)
        self.mesh = mesh


class BlenderScene:
    """
    The Blender file as a scene.

    :param objects: Objects to convert.  Defaults to every object of the
    current scene.  Non-mesh objects are walked but carry no mesh.
    """

    def __init__(self, objects: Optional[Iterable] = None):
        self.materials = BlenderMaterialList(bpy.data.materials)
        if objects is None:
            objects = bpy.context.scene.objects
        self.objects = list(objects)

    def walk(self) -> Iterator[BlenderNode]:
        """Yield a node per object, parents before children.

        Objects sharing mesh data with an object already visited get no mesh:
        the data was already converted through the first one.
        """
        selected = set(o.name for o in self.objects)
        roots = [o for o in self.objects if o.parent is None or o.parent.name not in selected]
        seen_data: Set[str] = set()
        stack = list(reversed(roots))
        while stack:
            obj = stack.pop()
            mesh = None
            if obj.type == "MESH" and obj.data is not None:
                if obj.data.name in seen_data:
                    debug(f"{obj.name}: mesh {obj.data.name!r} already converted through another object")
                else:
                    seen_data.add(obj.data.name)
                    mesh = BlenderMesh(obj)
            yield BlenderNode(obj, mesh)
            stack.extend(reversed([c for c in obj.children if c.name in selected]))
