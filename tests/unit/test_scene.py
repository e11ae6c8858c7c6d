"""
Unit tests for ``udim_unpack.common.scene`` and ``udim_unpack.common.types``.
"""

import unittest

import numpy as np

from udim_unpack.common.constants import BY_POLYGON_VERTEX, DIRECT, INDEX_TO_DIRECT, INVALID_INDEX
from udim_unpack.common.scene import Material, MaterialList, Mesh, Node, Scene
from udim_unpack.common.types import MeshReport, UVChannel


class TestMaterial(unittest.TestCase):

    def test_clone_is_independent(self):
        original = Material("Skin", {"roughness": 0.4})
        clone = original.clone()
        self.assertIsNot(clone, original)
        self.assertEqual(clone.name, "Skin")
        clone.name = "Skin_1002"
        clone.properties["roughness"] = 0.9
        self.assertEqual(original.name, "Skin")
        self.assertEqual(original.properties["roughness"], 0.4)


class TestMaterialList(unittest.TestCase):

    def test_add_returns_index(self):
        materials = MaterialList([Material("A")])
        self.assertEqual(materials.add(Material("B")), 1)
        self.assertEqual(materials.count(), 2)

    def test_index_of_is_identity(self):
        a = Material("A")
        materials = MaterialList([Material("A"), a])
        self.assertEqual(materials.index_of(a), 1)
        self.assertEqual(materials.index_of(Material("A")), INVALID_INDEX)

    def test_index_of_name(self):
        materials = MaterialList([Material("A"), Material("B")])
        self.assertEqual(materials.index_of_name("B"), 1)
        self.assertEqual(materials.index_of_name("C"), INVALID_INDEX)


class TestMesh(unittest.TestCase):

    def test_topology(self):
        mesh = Mesh([[0, 1, 2, 3], [3, 2, 4]])
        self.assertEqual(mesh.polygon_count(), 2)
        self.assertEqual(mesh.vertices_in_polygon(1), 3)
        self.assertEqual(mesh.control_point_index(1, 2), 4)
        self.assertEqual(mesh.uv_channels(), [])
        self.assertEqual(mesh.material_assignments(), [])


class TestSceneWalk(unittest.TestCase):

    def test_depth_first(self):
        leaf = Node("Leaf")
        scene = Scene(nodes=[Node("Root", children=[Node("Mid", children=[leaf]), Node("Side")]), Node("Other")])
        self.assertEqual([n.name for n in scene.walk()], ["Root", "Mid", "Leaf", "Side", "Other"])


class TestUVChannel(unittest.TestCase):

    def test_values_reshaped(self):
        channel = UVChannel("UV", BY_POLYGON_VERTEX, DIRECT, [0.1, 0.2, 0.3, 0.4])
        self.assertEqual(channel.values.shape, (2, 2))
        self.assertEqual(channel.values.dtype, np.float64)
        self.assertFalse(channel.is_indexed)

    def test_indexed(self):
        channel = UVChannel("UV", BY_POLYGON_VERTEX, INDEX_TO_DIRECT, [(0.1, 0.2)], indices=[0, 0, 0])
        self.assertTrue(channel.is_indexed)
        self.assertEqual(channel.indices.dtype, np.int64)


class TestMeshReport(unittest.TestCase):

    def test_defaults(self):
        report = MeshReport("Body")
        self.assertFalse(report.changed)
        self.assertEqual(report.tiles, [])
        self.assertEqual(report.skipped_channels, [])
        self.assertEqual(report.skipped_polygons, 0)


if __name__ == "__main__":
    unittest.main()
