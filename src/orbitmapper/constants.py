"""
The `constants` module defines the mathematical, time and physical constants used by the orbit core.
"""

from math import pi as PI

# Mathematical Constants

"""
Full revolution in radians. Units: *rad*
"""
TWO_PI = 2.0 * PI

"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00). Units: *days*
"""
JD2000 = 2451545.0

"""
Seconds in one day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
Minutes in one day. Units: *min*
"""
MINUTES_PER_DAY = 1440.0

# Earth Constants

"""
Earth's equatorial radius, used as the rendering length unit. Units: *km*

References:

    1. NIMA Technical Report TR8350.2 (WGS-84 semi-major axis)
"""
R_EARTH_KM = 6378.137

"""
Earth's gravitational parameter. Units: *km^3/s^2*

References:

    1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2010
"""
GM_EARTH_KM = 398600.4418

# Validity limits

"""
Largest eccentricity the mean-element integrator accepts (exclusive).
"""
ECC_MAX = 0.999

"""
Upper bound on radius and semi-major axis accepted from a raw state vector. Units: *km*
"""
RADIUS_MAX_KM = 1.0e6

"""
Node-vector magnitude at or below which an orbit is treated as equatorial. Units: *km^2/s*
"""
EQUATORIAL_TOL = 1.0e-12

"""
Eccentricity at or below which an orbit is treated as circular.
"""
CIRCULAR_TOL = 1.0e-10
