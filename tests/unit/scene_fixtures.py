"""
Scene builders shared by the unit tests.

Meshes are built from per-polygon UV lists.  Every polygon corner gets its own
control point, so per-control-point and per-polygon-vertex channels address
the same UVs.
"""

import numpy as np

from udim_unpack.common.constants import ALL_SAME, BY_POLYGON_VERTEX, DIRECT, INDEX_TO_DIRECT
from udim_unpack.common.scene import Material, Mesh, Node, Scene
from udim_unpack.common.types import MaterialAssignment, UVChannel


def square(u, v, size=0.5):
    """Corners of an axis-aligned UV square with its lower left corner at (u, v)."""
    return [(u, v), (u + size, v), (u + size, v + size), (u, v + size)]


def build_channel(polygon_uvs, name="UVMap", mapping_mode=BY_POLYGON_VERTEX, reference_mode=DIRECT):
    values = [uv for uvs in polygon_uvs for uv in uvs]
    indices = np.arange(len(values)) if reference_mode == INDEX_TO_DIRECT else None
    return UVChannel(
        name=name,
        mapping_mode=mapping_mode,
        reference_mode=reference_mode,
        values=np.array(values, dtype=np.float64),
        indices=indices,
    )


def build_mesh(polygon_uvs, assignment=None, channels=None, **channel_kwargs):
    polygons = []
    corner = 0
    for uvs in polygon_uvs:
        polygons.append(list(range(corner, corner + len(uvs))))
        corner += len(uvs)
    if channels is None:
        channels = [build_channel(polygon_uvs, **channel_kwargs)]
    if assignment is None:
        assignment = MaterialAssignment(mapping_mode=ALL_SAME, indices=[0])
    return Mesh(polygons, channels, [assignment])


def build_scene(polygon_uvs, material_names=("Skin",), node_name="Body", **mesh_kwargs):
    """A scene with one node holding one mesh and all ``material_names``."""
    materials = [Material(name) for name in material_names]
    mesh = build_mesh(polygon_uvs, **mesh_kwargs)
    node = Node(node_name, mesh=mesh, materials=materials)
    return Scene(materials, [node]), node, mesh
