"""
Orbit propagators.

Every propagator satisfies the :class:`Propagator` protocol: given an
absolute time, return a render-frame :class:`~orbitmapper.types.CartesianState`.

- :class:`KeplerPropagator`: two-body motion of a classical element set.
- :class:`TLEPropagator`: SGP4 propagation of a two-line mean-element record.
- :class:`EphemerisPropagator`: timestamped state samples, via synthesized
  TLEs or linear interpolation.
"""

from orbitmapper.propagators._base import Propagator
from orbitmapper.propagators.ephemeris import EphemerisPropagator
from orbitmapper.propagators.kepler import KeplerPropagator
from orbitmapper.propagators.tle import TLEPropagator

__all__ = [
    "Propagator",
    "KeplerPropagator",
    "TLEPropagator",
    "EphemerisPropagator",
]
