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
Public API for programmatic UDIM unpacking.

These entry points let other add-ons, command line scripts and headless
automation run the conversion *without* going through operator invocation
(``bpy.ops``).  They build a conversion context, run the same pipeline as the
operator and return a lightweight result dataclass.

Quick start::

    from udim_unpack.api import unpack_udims

    # Every object in the current scene
    result = unpack_udims()
    print(result.status, result.num_changed, result.materials_created)

    # Some objects, with a looser boundary tolerance
    result = unpack_udims(bpy.context.selected_objects, tolerance=0.01)

Any scene model implementing the contract of :mod:`udim_unpack.common.scene`::

    from udim_unpack.api import unpack_scene
    from udim_unpack.common.scene import Scene

    result = unpack_scene(my_scene, max_materials=256)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .common.constants import (
    DEFAULT_MAX_MATERIALS,
    DEFAULT_MAX_TILE_OFFSET,
    DEFAULT_TOLERANCE,
    EXIT_SUCCESS,
)
from .common.logging import debug, error
from .common.types import MeshReport
from .core.context import ConversionContext, ConversionOptions
from .core.errors import CapacityError
from .core.orchestrator import convert_scene

__all__ = [
    "UnpackResult",
    "unpack_scene",
    "unpack_udims",
]


@dataclass
class UnpackResult:
    """Return value from :func:`unpack_scene` and :func:`unpack_udims`.

    Attributes:
        status: ``"FINISHED"`` on success, ``"CANCELLED"`` when the run hit a
            capacity limit.
        changed: Whether anything in the scene changed (it needs saving).
        num_meshes: Number of meshes visited.
        num_changed: Number of meshes that changed.
        materials_created: Number of tile materials cloned.  Bases are cloned
            for every tile but 1001, so a mesh entirely in tile 1002 gains a
            clone and keeps its unused, unrenamed base material.
        materials_renamed: Number of base materials renamed for tile 1001.
        tiles: Sorted distinct tiles seen across all meshes.
        reports: Per-mesh :class:`MeshReport` records.
        warnings: Accumulated warning messages.
        error_message: Why the run was cancelled, if it was.
        exit_code: Process exit code matching the outcome.
    """

    status: str = "FINISHED"
    changed: bool = False
    num_meshes: int = 0
    num_changed: int = 0
    materials_created: int = 0
    materials_renamed: int = 0
    tiles: List[int] = field(default_factory=list)
    reports: List[MeshReport] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error_message: str = ""
    exit_code: int = EXIT_SUCCESS


def _run(ctx: ConversionContext, scene) -> UnpackResult:
    result = UnpackResult()
    try:
        result.changed = convert_scene(ctx, scene)
    except CapacityError as e:
        error(str(e))
        result.status = "CANCELLED"
        result.error_message = str(e)
        result.exit_code = e.exit_code

    result.num_meshes = len(ctx.reports)
    result.num_changed = ctx.num_changed
    result.materials_created = ctx.cache.num_created
    result.materials_renamed = ctx.cache.num_renamed
    result.tiles = sorted(ctx.tiles_used)
    result.reports = list(ctx.reports)
    result.warnings = list(ctx.warnings)
    debug(f"Unpack {result.status}: {result.num_changed}/{result.num_meshes} meshes changed")
    return result


def unpack_scene(
    scene,
    options: Optional[ConversionOptions] = None,
    operator=None,
    **kwargs,
) -> UnpackResult:
    """Unpack the UDIM tiles of every mesh in ``scene``.

    :param scene: A scene implementing the contract of :mod:`udim_unpack.common.scene`.
    :param options: Conversion options; built from ``kwargs`` when omitted.
    :param operator: Operator to report through, if any.
    :return: :class:`UnpackResult`.
    """
    if options is None:
        options = ConversionOptions(**kwargs)
    ctx = ConversionContext(options=options, operator=operator)
    return _run(ctx, scene)


def unpack_udims(
    objects: Optional[Iterable] = None,
    tolerance: float = DEFAULT_TOLERANCE,
    max_materials: int = DEFAULT_MAX_MATERIALS,
    max_tile_offset: int = DEFAULT_MAX_TILE_OFFSET,
    operator=None,
) -> UnpackResult:
    """Unpack the UDIM tiles of Blender objects.

    :param objects: Objects to convert.  Defaults to every object in the
        current scene.
    :param tolerance: How far below a tile boundary a UV may sit and still
        count as on it.
    :param max_materials: Maximum number of materials in the file.
    :param max_tile_offset: Number of tiles from 1001 that may be used.
    :param operator: Operator to report through, if any.
    :return: :class:`UnpackResult`.
    """
    from .blender.adapter import BlenderScene

    options = ConversionOptions(
        tolerance=tolerance,
        max_materials=max_materials,
        max_tile_offset=max_tile_offset,
    )
    return unpack_scene(BlenderScene(objects), options=options, operator=operator)
