"""
Unit tests for ``udim_unpack.core.cache``.

Tests rename-in-place for tile 1001, cloning for other tiles, idempotent
lookups and the capacity limits.
"""

import unittest

from udim_unpack.common.constants import EXIT_INPUT_OVER_CAPACITY, EXIT_TILE_OVER_CAPACITY
from udim_unpack.common.scene import Material, Node, Scene
from udim_unpack.core.cache import MaterialCache, check_scene_capacity
from udim_unpack.core.errors import CapacityError, InputCapacityError, TileCapacityError


def _scene(*names):
    materials = [Material(name) for name in names]
    node = Node("Body", materials=materials)
    return Scene(materials, [node]), node


class TestBaseTile(unittest.TestCase):
    """Tile 1001 is served by the base material itself."""

    def test_renames_in_place(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        result = cache.resolve(scene, node, 0, 1001)
        self.assertEqual(result, 0)
        self.assertEqual(scene.materials.count(), 1)
        self.assertEqual(scene.materials.get(0).name, "Skin_1001")
        self.assertEqual(cache.num_renamed, 1)
        self.assertEqual(cache.num_created, 0)

    def test_idempotent(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        first = cache.resolve(scene, node, 0, 1001)
        second = cache.resolve(scene, node, 0, 1001)
        self.assertEqual(first, second)
        self.assertEqual(scene.materials.count(), 1)
        self.assertEqual(scene.materials.get(0).name, "Skin_1001")

    def test_base_tile_after_other_tile_is_not_a_clone(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        cache.resolve(scene, node, 0, 1002)
        result = cache.resolve(scene, node, 0, 1001)
        self.assertEqual(result, 0)
        self.assertEqual(scene.materials.names(), ["Skin_1001", "Skin_1002"])


class TestOtherTiles(unittest.TestCase):
    """Every other tile gets exactly one clone."""

    def test_clone_created(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        cache.resolve(scene, node, 0, 1001)
        result = cache.resolve(scene, node, 0, 1002)
        self.assertEqual(result, 1)
        self.assertEqual(scene.materials.count(), 2)
        self.assertEqual(scene.materials.get(1).name, "Skin_1002")
        self.assertIsNot(scene.materials.get(1), scene.materials.get(0))
        self.assertEqual(node.materials.count(), 2)
        self.assertIs(node.materials.get(1), scene.materials.get(1))
        self.assertEqual(cache.num_created, 1)

    def test_clone_idempotent(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        first = cache.resolve(scene, node, 0, 1002)
        second = cache.resolve(scene, node, 0, 1002)
        self.assertEqual(first, second)
        self.assertEqual(scene.materials.count(), 2)
        self.assertEqual(node.materials.count(), 2)

    def test_clone_copies_properties(self):
        scene, node = _scene("Skin")
        scene.materials.get(0).properties["base_color"] = [1.0, 0.5, 0.5]
        cache = MaterialCache()
        clone = scene.materials.get(cache.resolve(scene, node, 0, 1002))
        self.assertEqual(clone.properties["base_color"], [1.0, 0.5, 0.5])
        clone.properties["base_color"][0] = 0.0
        self.assertEqual(scene.materials.get(0).properties["base_color"][0], 1.0)

    def test_clone_named_after_original_base_name(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        cache.resolve(scene, node, 0, 1001)
        cache.resolve(scene, node, 0, 1011)
        self.assertEqual(scene.materials.names(), ["Skin_1001", "Skin_1011"])

    def test_tile_material_maps_back_to_base(self):
        """Resolving from a tile material never clones a clone."""
        scene, node = _scene("Skin")
        cache = MaterialCache()
        clone_index = cache.resolve(scene, node, 0, 1002)
        self.assertEqual(cache.base_of(clone_index), 0)
        self.assertEqual(cache.resolve(scene, node, clone_index, 1002), clone_index)
        self.assertEqual(cache.resolve(scene, node, clone_index, 1001), 0)
        third = cache.resolve(scene, node, clone_index, 1003)
        self.assertEqual(scene.materials.get(third).name, "Skin_1003")
        self.assertEqual(scene.materials.count(), 3)

    def test_separate_bases(self):
        scene, node = _scene("Skin", "Cloth")
        cache = MaterialCache()
        skin = cache.resolve(scene, node, 0, 1002)
        cloth = cache.resolve(scene, node, 1, 1002)
        self.assertNotEqual(skin, cloth)
        self.assertEqual(scene.materials.get(cloth).name, "Cloth_1002")

    def test_marker_like_user_name_is_still_a_base(self):
        scene, node = _scene("Rock_1002")
        cache = MaterialCache()
        self.assertFalse(cache.is_claimed(0))
        self.assertEqual(cache.resolve(scene, node, 0, 1001), 0)
        self.assertEqual(scene.materials.get(0).name, "Rock_1002_1001")
        self.assertTrue(cache.is_claimed(0))


class TestAttachToNode(unittest.TestCase):
    """A cached material is attached to every node that asks for it."""

    def test_second_node_gets_existing_material(self):
        scene, node = _scene("Skin")
        other = Node("Arm", materials=[scene.materials.get(0)])
        scene.nodes.append(other)
        cache = MaterialCache()
        created = cache.resolve(scene, node, 0, 1002)
        again = cache.resolve(scene, other, 0, 1002)
        self.assertEqual(created, again)
        self.assertEqual(scene.materials.count(), 2)
        self.assertEqual(other.materials.count(), 2)
        self.assertIs(other.materials.get(1), scene.materials.get(created))

    def test_no_duplicate_attach(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        cache.resolve(scene, node, 0, 1002)
        cache.resolve(scene, node, 0, 1002)
        self.assertEqual(node.materials.count(), 2)


    def test_attach_ignores_same_named_user_material(self):
        scene, node = _scene("Skin")
        lookalike = Material("Skin_1002")
        other = Node("Arm", materials=[scene.materials.get(0), lookalike])
        scene.nodes.append(other)
        cache = MaterialCache()
        created = cache.resolve(scene, node, 0, 1002)
        cache.resolve(scene, other, 0, 1002)
        clone = scene.materials.get(created)
        self.assertIsNot(clone, lookalike)
        self.assertEqual(other.materials.count(), 3)
        self.assertEqual(other.materials.index_of(clone), 2)


class TestLookup(unittest.TestCase):

    def test_lookup_never_creates(self):
        scene, node = _scene("Skin")
        cache = MaterialCache()
        self.assertIsNone(cache.lookup(0, 1002))
        self.assertEqual(len(cache), 0)
        index = cache.resolve(scene, node, 0, 1002)
        self.assertEqual(cache.lookup(0, 1002), index)
        self.assertEqual(len(cache), 1)


class TestCapacity(unittest.TestCase):
    """Running out of capacity is fatal."""

    def test_too_many_materials(self):
        scene, node = _scene("Skin")
        cache = MaterialCache(max_materials=2)
        cache.resolve(scene, node, 0, 1002)
        with self.assertRaises(TileCapacityError) as ctx:
            cache.resolve(scene, node, 0, 1003)
        self.assertEqual(ctx.exception.exit_code, EXIT_TILE_OVER_CAPACITY)
        self.assertEqual(scene.materials.count(), 2)

    def test_rename_needs_no_capacity(self):
        scene, node = _scene("Skin")
        cache = MaterialCache(max_materials=1)
        self.assertEqual(cache.resolve(scene, node, 0, 1001), 0)

    def test_tile_beyond_max_offset(self):
        scene, node = _scene("Skin")
        cache = MaterialCache(max_tile_offset=5)
        cache.resolve(scene, node, 0, 1005)
        with self.assertRaises(TileCapacityError):
            cache.resolve(scene, node, 0, 1011)

    def test_capacity_is_product(self):
        cache = MaterialCache(max_materials=8, max_tile_offset=10)
        self.assertEqual(cache.capacity, 80)

    def test_input_over_capacity(self):
        scene, _ = _scene("A", "B", "C")
        with self.assertRaises(InputCapacityError) as ctx:
            check_scene_capacity(scene, 2)
        self.assertEqual(ctx.exception.exit_code, EXIT_INPUT_OVER_CAPACITY)

    def test_input_at_capacity(self):
        scene, _ = _scene("A", "B")
        check_scene_capacity(scene, 2)

    def test_both_are_capacity_errors(self):
        self.assertTrue(issubclass(InputCapacityError, CapacityError))
        self.assertTrue(issubclass(TileCapacityError, CapacityError))
        self.assertNotEqual(InputCapacityError.exit_code, TileCapacityError.exit_code)


if __name__ == "__main__":
    unittest.main()
