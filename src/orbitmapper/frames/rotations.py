"""Elementary and orbital-plane rotation matrices.

``Rx`` and ``Rz`` are passive (frame) rotations: they re-express a fixed
vector in axes rotated counter-clockwise by ``angle``.  The perifocal to
ECI rotation is the active composition ``Z(RAAN) X(i) Z(omega)``, which is
the product of their transposes.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitmapper.utils import to_radians


def Rx(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[1.0, 0.0, 0.0],
                      [0.0,  +c,  +s],
                      [0.0,  -s,  +c]])


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,  +s, 0.0],
                      [ -s,  +c, 0.0],
                      [0.0, 0.0, 1.0]])


def rotation_perifocal_to_eci(
    raan: ArrayLike,
    inclination: ArrayLike,
    arg_periapsis: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Rotation taking perifocal (PQW) coordinates into the body-equatorial frame.

    Args:
        raan: Right ascension of the ascending node.
        inclination: Inclination.
        arg_periapsis: Argument of periapsis.
        use_degrees: If ``True``, angles are in degrees.

    Returns:
        Array: 3x3 matrix ``Z(RAAN) X(i) Z(omega)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitmapper.frames import rotation_perifocal_to_eci
        R = rotation_perifocal_to_eci(0.0, 90.0, 0.0, use_degrees=True)
        R @ jnp.array([0.0, 1.0, 0.0])  # -> [0, 0, 1]
        ```
    """
    return (
        Rz(raan, use_degrees).T
        @ Rx(inclination, use_degrees).T
        @ Rz(arg_periapsis, use_degrees).T
    )
