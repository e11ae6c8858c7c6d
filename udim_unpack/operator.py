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
Unpack operator and add-on preferences.

The operator works on the objects of the current scene (or the selection),
dispatching to :func:`udim_unpack.api.unpack_udims`.
"""

from __future__ import annotations

from typing import Set

import bpy
import bpy.props
import bpy.types

from .api import unpack_udims
from .common.constants import DEFAULT_MAX_MATERIALS, DEFAULT_MAX_TILE_OFFSET, DEFAULT_TOLERANCE
from .common.logging import debug, safe_report

# IDE and Documentation support.
__all__ = [
    "UDIMUnpackPreferences",
    "UnpackUDIMs",
    "menu_func",
    "classes",
]


class UDIMUnpackPreferences(bpy.types.AddonPreferences):
    """
    Preferences for the UDIM unpack add-on.
    """
    bl_idname = __package__

    default_tolerance: bpy.props.FloatProperty(
        name="Default Boundary Tolerance",
        description=("How far below a tile boundary a UV may sit and still count as on the boundary. "
                     "Catches vertices written as 0.999999 instead of 1.0"),
        default=DEFAULT_TOLERANCE,
        min=0.0,
        soft_max=0.1,
        precision=4,
    )

    max_materials: bpy.props.IntProperty(
        name="Maximum Materials",
        description="Stop when the file would hold more materials than this",
        default=DEFAULT_MAX_MATERIALS,
        min=1,
    )

    max_tile_offset: bpy.props.IntProperty(
        name="Maximum Tiles",
        description="Number of tiles from 1001 that may be used",
        default=DEFAULT_MAX_TILE_OFFSET,
        min=1,
        max=10000,
    )

    def draw(self, context):
        layout = self.layout

        box = layout.box()
        box.label(text="Unpack Defaults:", icon='UV')
        box.prop(self, "default_tolerance")
        box.prop(self, "max_materials")
        box.prop(self, "max_tile_offset")


class UnpackUDIMs(bpy.types.Operator):
    """
    Operator that gives every UDIM tile used by a mesh its own material.
    """

    # Metadata.
    bl_idname = "object.udim_unpack"
    bl_label = "Unpack UDIM Tiles"
    bl_description = ("Split materials shared across UDIM tiles into one material per tile "
                      "and move each tile's UVs back into the unit square")
    bl_options = {"REGISTER", "UNDO"}

    # Options for the user.
    selected_only: bpy.props.BoolProperty(
        name="Selection Only",
        description="Convert selected objects only",
        default=False,
    )
    tolerance: bpy.props.FloatProperty(
        name="Boundary Tolerance",
        description="How far below a tile boundary a UV may sit and still count as on the boundary",
        default=DEFAULT_TOLERANCE,
        min=0.0,
        soft_max=0.1,
        precision=4,
    )

    def invoke(self, context, event):
        """Initialize properties from preferences before running."""
        prefs = self._preferences(context)
        if prefs is not None:
            self.tolerance = prefs.default_tolerance
        return self.execute(context)

    def execute(self, context) -> Set[str]:
        if context.object is not None and context.object.mode != "OBJECT":
            # Edit-mode changes only reach the mesh data in object mode.
            bpy.ops.object.mode_set(mode="OBJECT")

        prefs = self._preferences(context)
        max_materials = prefs.max_materials if prefs is not None else DEFAULT_MAX_MATERIALS
        max_tile_offset = prefs.max_tile_offset if prefs is not None else DEFAULT_MAX_TILE_OFFSET

        objects = context.selected_objects if self.selected_only else context.scene.objects
        result = unpack_udims(
            objects,
            tolerance=self.tolerance,
            max_materials=max_materials,
            max_tile_offset=max_tile_offset,
            operator=self,
        )
        if result.status == "CANCELLED":
            safe_report(self, {"ERROR"}, f"UDIM unpack stopped: {result.error_message}")
            return {"CANCELLED"}

        if not result.changed:
            safe_report(self, {"INFO"}, "No mesh uses more than one UDIM tile")
            return {"FINISHED"}

        safe_report(
            self,
            {"INFO"},
            f"Unpacked {result.num_changed} of {result.num_meshes} meshes, "
            f"created {result.materials_created} tile materials",
        )
        return {"FINISHED"}

    @staticmethod
    def _preferences(context):
        addon = context.preferences.addons.get(__package__)
        if addon is None or addon.preferences is None:
            debug("UDIM unpack preferences not available, using defaults")
            return None
        return addon.preferences


def menu_func(self, _) -> None:
    """
    Calls the unpack operator from the Object menu.
    """
    self.layout.operator(UnpackUDIMs.bl_idname, text="Unpack UDIM Tiles")


classes = (UDIMUnpackPreferences, UnpackUDIMs)
