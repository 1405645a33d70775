"""Angle conversion and wrapping helpers.

``to_radians`` and ``from_radians`` wrap the ``use_degrees`` convention
with JAX-traceable ``jnp.where``.  ``wrap_degrees`` and ``wrap_two_pi``
operate on Python floats and are used wherever a value leaves JAX for
display or text encoding.
"""

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitmapper.constants import TWO_PI


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def _wrap(angle: float, period: float) -> float:
    x = math.fmod(angle, period)
    if x < 0.0:
        x += period
    # fmod of a tiny negative value lands exactly on the period after the shift
    if x >= period:
        x -= period
    # -0.0 would print as "-0.0000" in a text field
    return x + 0.0


def wrap_degrees(angle: float) -> float:
    """Wrap an angle in degrees to ``[0, 360)``.

    Args:
        angle (float): Angle in degrees.

    Returns:
        float: Equivalent angle in ``[0, 360)``.
    """
    return _wrap(float(angle), 360.0)


def wrap_two_pi(angle: float) -> float:
    """Wrap an angle in radians to ``[0, 2pi)``.

    Args:
        angle (float): Angle in radians.

    Returns:
        float: Equivalent angle in ``[0, 2pi)``.
    """
    return _wrap(float(angle), TWO_PI)
