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
Conversion context: the "bag" of mutable state threaded through a run.

Every core function takes ``ctx`` as its first argument.  Create one context
per conversion run (operator execute, API call or command line invocation)
and discard it when the run is done; the material cache inside it refers to
one scene only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

from ..common.constants import (
    DEFAULT_MAX_MATERIALS,
    DEFAULT_MAX_TILE_OFFSET,
    DEFAULT_TOLERANCE,
)
from ..common.logging import safe_report
from ..common.types import MeshReport
from .cache import MaterialCache


# ---------------------------------------------------------------------------
# Options mirroring the operator properties
# ---------------------------------------------------------------------------

@dataclass
class ConversionOptions:
    """User-facing conversion options (operator properties, API keyword args or CLI flags)."""

    tolerance: float = DEFAULT_TOLERANCE
    max_materials: int = DEFAULT_MAX_MATERIALS
    max_tile_offset: int = DEFAULT_MAX_TILE_OFFSET
    always_export: bool = False  # Write the output even when nothing changed.

    def __post_init__(self):
        if self.tolerance < 0:
            raise ValueError(f"Tolerance must not be negative, got {self.tolerance}")
        if self.max_materials < 1:
            raise ValueError(f"Maximum material count must be positive, got {self.max_materials}")
        if self.max_tile_offset < 1:
            raise ValueError(f"Maximum tile offset must be positive, got {self.max_tile_offset}")


# ---------------------------------------------------------------------------
# Per-run state
# ---------------------------------------------------------------------------

@dataclass
class ConversionContext:
    """All mutable state accumulated during a single conversion run."""

    options: ConversionOptions = field(default_factory=ConversionOptions)

    # The operator instance, or None for API / command line usage.
    operator: object = None

    cache: MaterialCache = None  # Built from the options when left empty.

    reports: List[MeshReport] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    tiles_used: Set[int] = field(default_factory=set)

    def __post_init__(self):
        if self.cache is None:
            self.cache = MaterialCache(self.options.max_materials, self.options.max_tile_offset)

    @property
    def num_changed(self) -> int:
        return sum(1 for report in self.reports if report.changed)

    def warn(self, message: str) -> None:
        """Record a warning and report it through the operator or the console."""
        self.warnings.append(message)
        self.safe_report({"WARNING"}, message)

    def safe_report(self, level: Set[str], message: str) -> None:
        """Report a message through the operator if there is one, or the console."""
        safe_report(self.operator, level, message)
