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
Per-mesh and per-scene conversion driver.

For every UV channel of a mesh, each polygon is first classified into a tile.
Then, polygon by polygon, the mesh's material assignment is upgraded to
per-polygon if needed, the polygon is pointed at its tile's material and its
UVs are moved back into the unit square.

A channel is classified completely before anything is edited, so a channel
that can't be read leaves the mesh untouched and UVs shifted for one polygon
never change the tile of the next.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..common.constants import (
    BASE_TILE,
    INVALID_INDEX,
    NOT_A_TILE,
    SUPPORTED_MATERIAL_MAPPINGS,
    SUPPORTED_UV_MAPPINGS,
)
from ..common.logging import debug
from ..common.types import MaterialAssignment, MeshReport, UVChannel
from .assignment import ensure_per_polygon, polygon_material, set_polygon_material
from .cache import check_scene_capacity
from .context import ConversionContext
from .errors import UnsupportedChannelError
from .tiles import resolve_tile
from .translator import IndexTranslator
from .uvs import polygon_uv_bounds, polygon_uv_slots, renormalize_polygon

__all__ = [
    "classify_channel",
    "process_mesh",
    "convert_scene",
]


def classify_channel(ctx: ConversionContext, mesh, channel: UVChannel) -> List[Tuple[Optional[int], np.ndarray]]:
    """
    Resolve the tile of every polygon for one UV channel. Read-only.
    :return: ``(tile, slots)`` per polygon; ``tile`` is ``NOT_A_TILE`` when the
    polygon doesn't fit one tile.
    :raises UnsupportedChannelError: If the channel's mapping mode is unknown.
    :raises IndexError: If the channel has fewer values than the mesh needs.
    """
    plan = []
    first_corner = 0
    for polygon in range(mesh.polygon_count()):
        slots = polygon_uv_slots(mesh, channel, polygon, first_corner)
        first_corner += len(slots)
        if len(slots) == 0:
            plan.append((NOT_A_TILE, slots))
            continue
        tile = resolve_tile(*polygon_uv_bounds(channel, slots), tolerance=ctx.options.tolerance)
        plan.append((tile, slots))
    return plan


def _apply_channel(
    ctx: ConversionContext,
    scene,
    node,
    mesh,
    channel: UVChannel,
    plan: List[Tuple[Optional[int], np.ndarray]],
    assignment: MaterialAssignment,
    translator: IndexTranslator,
    report: MeshReport,
) -> bool:
    changed = False
    shifted = np.zeros(len(channel.values), dtype=bool)
    polygon_count = mesh.polygon_count()
    tiles = set(report.tiles)

    for polygon, (tile, slots) in enumerate(plan):
        if tile is NOT_A_TILE:
            report.skipped_polygons += 1
            continue
        tiles.add(tile)

        if tile != BASE_TILE and ensure_per_polygon(assignment, polygon_count):
            changed = True

        current = translator.to_scene(polygon_material(assignment, polygon))
        if current == INVALID_INDEX:
            report.skipped_polygons += 1
            continue

        target = ctx.cache.resolve(scene, node, current, tile)
        translator.sync()
        if target != current:
            local = translator.to_local(target)
            if local == INVALID_INDEX:
                report.skipped_polygons += 1
                continue
            # A polygon moved to another tile by an earlier channel may be back on 1001 here.
            ensure_per_polygon(assignment, polygon_count)
            set_polygon_material(assignment, polygon, local)
            changed = True

        if tile != BASE_TILE and renormalize_polygon(channel, slots, shifted):
            changed = True

    report.tiles = sorted(tiles)
    ctx.tiles_used.update(tiles)
    return changed


def process_mesh(ctx: ConversionContext, scene, node, mesh) -> bool:
    """
    Split the tiles of one mesh into per-tile materials.
    :param ctx: The conversion context of this run.
    :param scene: Scene owning the global material list.
    :param node: Node owning ``mesh`` and its local material slots.
    :param mesh: The mesh to convert.
    :return: True if the mesh's materials or UVs were changed.
    :raises CapacityError: If the run runs out of material capacity.
    """
    report = MeshReport(node_name=node.name)
    ctx.reports.append(report)

    assignments = mesh.material_assignments()
    if not assignments:
        ctx.warn(f"{node.name}: mesh has no material assignment, skipped")
        return False
    if len(assignments) > 1:
        ctx.warn(f"{node.name}: mesh has {len(assignments)} material assignments, only the first is used")
    assignment = assignments[0]
    if assignment.mapping_mode not in SUPPORTED_MATERIAL_MAPPINGS:
        ctx.warn(f"{node.name}: material mapping mode {assignment.mapping_mode} is not supported, skipped")
        return False

    translator = IndexTranslator(scene, node)
    changed = False
    for channel in mesh.uv_channels():
        if channel.mapping_mode not in SUPPORTED_UV_MAPPINGS:
            ctx.warn(f"{node.name}: UV channel {channel.name!r} uses mapping mode {channel.mapping_mode}, skipped")
            report.skipped_channels.append(channel.name)
            continue
        try:
            plan = classify_channel(ctx, mesh, channel)
        except (UnsupportedChannelError, IndexError) as e:
            ctx.warn(f"{node.name}: UV channel {channel.name!r} can't be read ({e}), skipped")
            report.skipped_channels.append(channel.name)
            continue
        if _apply_channel(ctx, scene, node, mesh, channel, plan, assignment, translator, report):
            changed = True

    report.changed = changed
    debug(f"{node.name}: tiles {report.tiles}, changed={changed}")
    return changed


def convert_scene(ctx: ConversionContext, scene) -> bool:
    """
    Convert every mesh in a scene.

    Meshes are visited depth first.  Problems with one mesh are reported and
    the walk goes on; capacity errors end the run.
    :return: True if any mesh changed, i.e. the scene needs to be saved.
    :raises InputCapacityError: If the scene is over capacity before starting.
    :raises TileCapacityError: If too many tile materials are needed.
    """
    check_scene_capacity(scene, ctx.options.max_materials)

    changed = False
    for node in scene.walk():
        mesh = node.mesh
        if mesh is None:
            continue
        if process_mesh(ctx, scene, node, mesh):
            mesh.commit()
            changed = True
    debug(
        f"Converted {len(ctx.reports)} meshes: {ctx.num_changed} changed, "
        f"{ctx.cache.num_created} materials created, tiles {sorted(ctx.tiles_used)}"
    )
    return changed
