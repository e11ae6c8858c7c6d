# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Split materials shared across UDIM tiles into one material per tile.

The Blender modules are imported when the add-on is registered, so the
conversion core (:mod:`udim_unpack.core`) can be imported and tested without
Blender.
"""

# Reload functionality.
if "operator" in locals():
    import importlib

    importlib.reload(operator)  # noqa: F821

# IDE and Documentation support.
__all__ = [
    "register",
    "unregister",
]


def register() -> None:
    import bpy.types  # To add the menu entry.
    import bpy.utils  # To (un)register the add-on.

    from . import operator

    for cls in operator.classes:
        bpy.utils.register_class(cls)

    bpy.types.VIEW3D_MT_object.append(operator.menu_func)


def unregister() -> None:
    import bpy.types
    import bpy.utils

    from . import operator

    for cls in reversed(operator.classes):
        bpy.utils.unregister_class(cls)

    bpy.types.VIEW3D_MT_object.remove(operator.menu_func)


# Allow the add-on to be ran directly without installation.
if __name__ == "__main__":
    register()
