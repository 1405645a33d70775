"""
The propagator capability shared by every orbit source.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from orbitmapper.types import CartesianState


@runtime_checkable
class Propagator(Protocol):
    """Anything that can place a satellite at an absolute time.

    Implementations are immutable once constructed: ``propagate`` is a
    pure read, so one instance may be shared between threads.  A failed
    propagation returns :meth:`CartesianState.zero` and never raises.
    """

    def propagate(self, t: datetime) -> CartesianState:
        """Return the render-frame state at absolute time ``t``."""
        ...
