# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
In-memory scene model.

The conversion core only talks to scenes through a small duck-typed contract.
The Blender adapter (:mod:`udim_unpack.blender.adapter`) implements it on top
of ``bpy`` data; the classes here implement it in plain Python for headless
callers and tests.

Contract::

    material.name                   # read / write
    material.clone()                # deep copy, independent identity

    materials.count()               # scene-wide list or a node's local list
    materials.get(i)
    materials.add(material) -> int  # index of the appended material
    materials.index_of(material)    # identity match, INVALID_INDEX if absent
    materials.index_of_name(name)   # INVALID_INDEX if absent

    node.name, node.materials, node.mesh
    scene.materials, scene.walk()   # depth-first over nodes

    mesh.polygon_count()
    mesh.vertices_in_polygon(p)
    mesh.control_point_index(p, v)
    mesh.uv_channels()              # list of UVChannel
    mesh.material_assignments()     # list of MaterialAssignment, first one used
    mesh.commit()                   # write edited records back to storage
"""

from __future__ import annotations

import copy
from typing import Dict, Iterator, List, Optional, Sequence

from .constants import INVALID_INDEX
from .types import MaterialAssignment, UVChannel

__all__ = [
    "Material",
    "MaterialList",
    "Mesh",
    "Node",
    "Scene",
]


class Material:
    """A named material with arbitrary properties."""

    def __init__(self, name: str, properties: Optional[Dict[str, object]] = None):
        self.name = name
        self.properties = properties if properties is not None else {}

    def clone(self) -> "Material":
        return Material(self.name, copy.deepcopy(self.properties))

    def __repr__(self):
        return f"Material({self.name!r})"


class MaterialList:
    """An ordered list of materials, addressed by slot number."""

    def __init__(self, materials: Optional[Sequence[Material]] = None):
        self._materials: List[Material] = list(materials or [])

    def count(self) -> int:
        return len(self._materials)

    def get(self, index: int) -> Material:
        return self._materials[index]

    def add(self, material: Material) -> int:
        self._materials.append(material)
        return len(self._materials) - 1

    def index_of(self, material: Material) -> int:
        for i, candidate in enumerate(self._materials):
            if candidate is material:
                return i
        return INVALID_INDEX

    def index_of_name(self, name: str) -> int:
        for i, candidate in enumerate(self._materials):
            if candidate.name == name:
                return i
        return INVALID_INDEX

    def names(self) -> List[str]:
        return [m.name for m in self._materials]

    def __len__(self):
        return len(self._materials)

    def __iter__(self):
        return iter(self._materials)


class Mesh:
    """A polygon mesh.

    :param polygons: For each polygon, the control point index of each corner.
    :param uv_channels: UV sets of the mesh.
    :param material_assignments: Material assignment elements; only the first
        is used by the conversion.
    """

    def __init__(
        self,
        polygons: Sequence[Sequence[int]],
        uv_channels: Optional[List[UVChannel]] = None,
        material_assignments: Optional[List[MaterialAssignment]] = None,
    ):
        self.polygons = [list(p) for p in polygons]
        self._uv_channels = list(uv_channels or [])
        self._material_assignments = list(material_assignments or [])

    def polygon_count(self) -> int:
        return len(self.polygons)

    def vertices_in_polygon(self, polygon: int) -> int:
        return len(self.polygons[polygon])

    def control_point_index(self, polygon: int, vertex: int) -> int:
        return self.polygons[polygon][vertex]

    def uv_channels(self) -> List[UVChannel]:
        return self._uv_channels

    def material_assignments(self) -> List[MaterialAssignment]:
        return self._material_assignments

    def commit(self) -> None:
        """Nothing to write back; the records above are the storage."""


class Node:
    """A scene node with its own material slots and an optional mesh."""

    def __init__(
        self,
        name: str,
        mesh: Optional[Mesh] = None,
        materials: Optional[Sequence[Material]] = None,
        children: Optional[Sequence["Node"]] = None,
    ):
        self.name = name
        self.mesh = mesh
        self.materials = MaterialList(materials)
        self.children: List[Node] = list(children or [])


class Scene:
    """A scene: the global material list and a forest of nodes."""

    def __init__(self, materials: Optional[Sequence[Material]] = None, nodes: Optional[Sequence[Node]] = None):
        self.materials = MaterialList(materials)
        self.nodes: List[Node] = list(nodes or [])

    def walk(self) -> Iterator[Node]:
        """Yield every node, depth first, parents before children."""
        stack = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
