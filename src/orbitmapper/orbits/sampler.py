"""Closed-orbit polyline sampling.

:func:`sample_orbit_polyline` returns an :class:`OrbitPolyline`, a lazy,
restartable sequence of ``segments + 1`` render-frame points covering one
revolution.  Step ``s`` uses mean anomaly
``M = (M0 + 2*pi*s/segments) mod 2*pi``, a fixed-count fixed-point Kepler
solve, the half-angle conversion to true anomaly and the Kepler
geometry.  The first and last points coincide, closing the loop.

Points are produced one at a time on iteration; :meth:`OrbitPolyline.to_array`
evaluates every step at once with ``jax.vmap`` for upload as a vertex
buffer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import jax
import jax.numpy as jnp
from jax import Array

from orbitmapper.config import get_dtype
from orbitmapper.constants import DEG2RAD, TWO_PI
from orbitmapper.orbits.geometry import position_eci_from_elements
from orbitmapper.orbits.keplerian import (
    anomaly_eccentric_to_true,
    anomaly_mean_to_eccentric_fixed_point,
)
from orbitmapper.types import OrbitalElements

MIN_SEGMENTS = 8


@dataclass(frozen=True)
class OrbitPolyline:
    """One revolution of an orbit as ``segments + 1`` render-frame points.

    Iterating yields ``(3,)`` position arrays; iterating again restarts
    from the first point.

    Attributes:
        elements: Element set being drawn.
        segments: Number of line segments (already clamped to at least
            :data:`MIN_SEGMENTS`).
    """

    elements: OrbitalElements
    segments: int

    def __len__(self) -> int:
        return self.segments + 1

    def __iter__(self) -> Iterator[Array]:
        for s in range(self.segments + 1):
            yield self._point(jnp.asarray(s / self.segments, dtype=get_dtype()))

    def __getitem__(self, index: int) -> Array:
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError(f"polyline index {index} out of range for {n} points")
        return self._point(jnp.asarray(index / self.segments, dtype=get_dtype()))

    def to_array(self) -> Array:
        """Evaluate every point at once.

        Returns:
            Array of shape ``(segments + 1, 3)``.
        """
        fractions = jnp.arange(self.segments + 1, dtype=get_dtype()) / self.segments
        return jax.vmap(self._point)(fractions)

    def _point(self, fraction: Array) -> Array:
        e = self.elements.eccentricity
        M0 = self.elements.mean_anomaly_deg * DEG2RAD
        M = jnp.mod(M0 + fraction * TWO_PI, TWO_PI)
        E = anomaly_mean_to_eccentric_fixed_point(M, e)
        nu = anomaly_eccentric_to_true(E, e)
        return position_eci_from_elements(self.elements, nu)


def sample_orbit_polyline(elements: OrbitalElements, segments: int) -> OrbitPolyline:
    """Sample one full revolution of an orbit.

    Args:
        elements: Element set to draw.
        segments: Requested segment count; values below
            :data:`MIN_SEGMENTS` are raised to it.

    Returns:
        OrbitPolyline: ``max(MIN_SEGMENTS, segments) + 1`` points.

    Examples:
        ```python
        from orbitmapper.orbits import sample_orbit_polyline
        from orbitmapper.types import OrbitalElements
        line = sample_orbit_polyline(OrbitalElements(semi_major_axis=1.1), 128)
        vertices = line.to_array()  # shape (129, 3)
        ```
    """
    return OrbitPolyline(elements, max(MIN_SEGMENTS, int(segments)))
