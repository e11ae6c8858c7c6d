# Blender add-on to unpack UDIM tiles into per-tile materials.
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Console output for the UDIM unpack add-on.

Python's ``logging`` module prints nothing inside Blender since no handlers
are configured for add-ons, so output goes straight to the console through
the functions here.  Don't ``import logging``.

Usage::

    from ..common.logging import debug, warn, error

    debug(f"Resolved tile {tile} for polygon {p}")   # Only when DEBUG_MODE is on
    warn(f"Mesh {name} has no material assignment")  # WARNING: ...
    error(f"UV column {u_col} is out of range")       # ERROR: ...

Messages meant for the user go through :func:`safe_report`, which uses the
operator's report area when there is one and the console otherwise.
"""

__all__ = ["DEBUG_MODE", "debug", "warn", "error", "console_report", "safe_report"]


DEBUG_MODE = False
"""Print debug output too.  Switch on while developing."""


def debug(*args, **kwargs):
    if DEBUG_MODE:
        print(*args, **kwargs)


def warn(*args, **kwargs):
    print("WARNING:", *args, **kwargs)


def error(*args, **kwargs):
    print("ERROR:", *args, **kwargs)


def console_report(level, message):
    """Print a report on the console, picking the function from the report level set."""
    if "ERROR" in level:
        error(message)
    elif "WARNING" in level:
        warn(message)
    else:
        debug(message)


def safe_report(operator, level, message):
    """
    Report a message to the user.

    Goes through ``operator.report()`` when an operator is given and it has a
    UI to report to.  The API, the command line and the tests run without
    one, and get the console instead.
    :param operator: A ``bpy.types.Operator`` instance, or ``None``.
    :param level: Report level set: ``{'INFO'}``, ``{'WARNING'}`` or ``{'ERROR'}``.
    :param message: The message.
    """
    if operator is None:
        console_report(level, message)
        return
    try:
        operator.report(level, message)
    except Exception:  # Operators outside a UI context refuse to report.
        console_report(level, message)
