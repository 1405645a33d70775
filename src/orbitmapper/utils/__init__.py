"""Shared utility functions for orbitmapper.

Provides angle conversion and wrapping helpers.
"""

from orbitmapper.utils._angle import from_radians, to_radians, wrap_degrees, wrap_two_pi

__all__ = [
    "from_radians",
    "to_radians",
    "wrap_degrees",
    "wrap_two_pi",
]
