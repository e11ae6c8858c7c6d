# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Command line front end: convert one scene file into another.

Inside Blender, arguments go after ``--``::

    blender --background --factory-startup -noaudio \
            --python-expr "import sys, udim_unpack.cli as c; sys.exit(c.main())" \
            -- character.fbx character_unpacked.fbx

With the ``bpy`` module installed as a Python package, the ``udim-unpack``
script does the same::

    udim-unpack character.fbx character_unpacked.fbx --always

Exit codes:
    0   success
    -1  bad arguments, missing input, unsupported format or import/export failure
    3   the input already holds more materials than allowed
    4   too many tile materials were needed
"""

import argparse
import os
import sys
from typing import List, Optional

from .common.constants import (
    DEFAULT_MAX_MATERIALS,
    DEFAULT_MAX_TILE_OFFSET,
    DEFAULT_TOLERANCE,
    EXIT_FAILURE,
    EXIT_SUCCESS,
)
from .common.logging import debug, error
from .core.context import ConversionOptions

__all__ = [
    "SUPPORTED_FORMATS",
    "build_parser",
    "script_args",
    "scene_format",
    "main",
]

# File extension -> format name.
SUPPORTED_FORMATS = {
    ".fbx": "FBX",
    ".obj": "OBJ",
    ".glb": "GLTF",
    ".gltf": "GLTF",
    ".blend": "BLEND",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="udim-unpack",
        description="Give every UDIM tile used by a mesh its own material and move its UVs into the unit square.",
    )
    parser.add_argument("input", help="Scene file to read (.fbx, .obj, .glb, .gltf or .blend)")
    parser.add_argument("output", help="Scene file to write")
    parser.add_argument(
        "-a", "--always",
        action="store_true",
        help="Write the output even when nothing changed",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Tile boundary tolerance (default {DEFAULT_TOLERANCE})",
    )
    parser.add_argument(
        "--max-materials",
        type=int,
        default=DEFAULT_MAX_MATERIALS,
        help=f"Maximum number of materials in the scene (default {DEFAULT_MAX_MATERIALS})",
    )
    parser.add_argument(
        "--max-tile-offset",
        type=int,
        default=DEFAULT_MAX_TILE_OFFSET,
        help=f"Number of tiles from 1001 that may be used (default {DEFAULT_MAX_TILE_OFFSET})",
    )
    return parser


def script_args(argv: Optional[List[str]] = None) -> List[str]:
    """The arguments meant for this script: everything after ``--`` when run by Blender."""
    if argv is None:
        argv = sys.argv
    if "--" in argv:
        return argv[argv.index("--") + 1:]
    return argv[1:]


def scene_format(path: str) -> Optional[str]:
    return SUPPORTED_FORMATS.get(os.path.splitext(path)[1].lower())


def _load(path: str, file_format: str) -> None:
    import bpy

    if file_format == "BLEND":
        bpy.ops.wm.open_mainfile(filepath=path)
        return
    bpy.ops.wm.read_homefile(use_empty=True)
    if file_format == "FBX":
        bpy.ops.import_scene.fbx(filepath=path)
    elif file_format == "OBJ":
        bpy.ops.wm.obj_import(filepath=path)
    elif file_format == "GLTF":
        bpy.ops.import_scene.gltf(filepath=path)


def _save(path: str, file_format: str) -> None:
    import bpy

    if file_format == "BLEND":
        bpy.ops.wm.save_as_mainfile(filepath=path, copy=True)
    elif file_format == "FBX":
        bpy.ops.export_scene.fbx(filepath=path)
    elif file_format == "OBJ":
        bpy.ops.wm.obj_export(filepath=path)
    elif file_format == "GLTF":
        export_format = "GLB" if path.lower().endswith(".glb") else "GLTF_SEPARATE"
        bpy.ops.export_scene.gltf(filepath=path, export_format=export_format)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(script_args(argv))
    except SystemExit as e:
        # --help exits with 0; argument errors with 2.
        return EXIT_SUCCESS if not e.code else EXIT_FAILURE

    if not os.path.isfile(args.input):
        error(f"Input file {args.input!r} does not exist")
        return EXIT_FAILURE
    input_format = scene_format(args.input)
    output_format = scene_format(args.output)
    if input_format is None or output_format is None:
        error(f"Unsupported file format, expected one of {', '.join(sorted(SUPPORTED_FORMATS))}")
        return EXIT_FAILURE

    try:
        options = ConversionOptions(
            tolerance=args.tolerance,
            max_materials=args.max_materials,
            max_tile_offset=args.max_tile_offset,
            always_export=args.always,
        )
    except ValueError as e:
        error(str(e))
        return EXIT_FAILURE

    from .api import unpack_scene
    from .blender.adapter import BlenderScene

    try:
        _load(args.input, input_format)
    except RuntimeError as e:
        error(f"Failed to import {args.input!r}: {e}")
        return EXIT_FAILURE

    result = unpack_scene(BlenderScene(), options=options)
    if result.status == "CANCELLED":
        return result.exit_code

    print(
        f"{result.num_changed} of {result.num_meshes} meshes changed, "
        f"{result.materials_created} tile materials created, tiles {result.tiles}"
    )
    if not result.changed and not options.always_export:
        print("Nothing changed, no output written (use --always to write anyway)")
        return EXIT_SUCCESS

    try:
        _save(args.output, output_format)
    except RuntimeError as e:
        error(f"Failed to export {args.output!r}: {e}")
        return EXIT_FAILURE
    debug(f"Wrote {args.output!r}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
