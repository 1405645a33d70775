"""Frame transformations.

This sub-module provides:

- **Rotation matrices**: elementary ``Rx``/``Rz`` rotations and the
  perifocal-to-ECI rotation built from them.
- **Render frame**: the ``(x, y, z) -> (x, z, -y)`` relabeling and km to
  body-radii scaling applied to every propagated state.
"""

from .render import remap_eci_to_render, remap_render_to_eci, state_km_to_render
from .rotations import Rx, Rz, rotation_perifocal_to_eci

__all__ = [
    "Rx",
    "Rz",
    "rotation_perifocal_to_eci",
    "remap_eci_to_render",
    "remap_render_to_eci",
    "state_km_to_render",
]
