# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Exceptions raised by the conversion core.

Only capacity errors abort a run.  Everything else that can go wrong with a
single mesh is reported as a warning and the mesh is skipped.
"""

from ..common.constants import EXIT_INPUT_OVER_CAPACITY, EXIT_TILE_OVER_CAPACITY

__all__ = [
    "UDIMUnpackError",
    "UnsupportedChannelError",
    "CapacityError",
    "InputCapacityError",
    "TileCapacityError",
]


class UDIMUnpackError(Exception):
    """Base class for all errors raised by the conversion."""


class UnsupportedChannelError(UDIMUnpackError):
    """A UV channel uses a mapping mode the conversion can't address."""


class CapacityError(UDIMUnpackError):
    """The run's material bookkeeping is full. Fatal for the whole run."""

    exit_code = -1


class InputCapacityError(CapacityError):
    """The input scene already holds more materials than the run allows."""

    exit_code = EXIT_INPUT_OVER_CAPACITY


class TileCapacityError(CapacityError):
    """Too many tile materials were created during the run."""

    exit_code = EXIT_TILE_OVER_CAPACITY
