# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Data types shared by the conversion core and the scene adapters.

A mesh exposes its UV channels and material assignments as these records; the
core mutates them in place and the adapter writes them back to its own storage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .constants import DIRECT, INDEX_TO_DIRECT, ALL_SAME

__all__ = [
    "UVChannel",
    "MaterialAssignment",
    "MeshReport",
]


@dataclass
class UVChannel:
    """One named UV set of a mesh.

    ``values`` is an ``(N, 2)`` float64 array of UV pairs.  When
    ``reference_mode`` is ``INDEX_TO_DIRECT``, ``indices`` maps a control point
    or polygon-vertex key to a row of ``values``.
    """

    name: str
    mapping_mode: str
    reference_mode: str = DIRECT
    values: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.float64))
    indices: Optional[np.ndarray] = None

    def __post_init__(self):
        self.values = np.asarray(self.values, dtype=np.float64).reshape(-1, 2)
        if self.indices is not None:
            self.indices = np.asarray(self.indices, dtype=np.int64)
        if self.reference_mode == INDEX_TO_DIRECT and self.indices is None:
            raise ValueError(f"UV channel {self.name!r} is indexed but has no index array")

    @property
    def is_indexed(self) -> bool:
        return self.reference_mode == INDEX_TO_DIRECT


@dataclass
class MaterialAssignment:
    """Which node-local material slot each polygon uses.

    ``ALL_SAME``: ``indices`` holds a single slot for the whole mesh.
    ``BY_POLYGON``: ``indices`` holds one slot per polygon.
    """

    mapping_mode: str = ALL_SAME
    indices: List[int] = field(default_factory=lambda: [0])


@dataclass
class MeshReport:
    """Summary of what the conversion did to one mesh.

    A mesh that only uses tiles other than 1001 keeps its original material
    in its slots, unrenamed and no longer used by any polygon, next to the
    tile clones.
    """

    node_name: str
    changed: bool = False
    tiles: List[int] = field(default_factory=list)  # Sorted distinct tiles seen.
    skipped_channels: List[str] = field(default_factory=list)
    skipped_polygons: int = 0
