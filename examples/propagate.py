# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "orbitmapper"]
#
# [tool.uv.sources]
# orbitmapper = { path = ".." }
# ///
"""Propagate a satellite and sample its drawn orbit.

Builds a propagator from either a TLE record or a single ECI state
vector, prints render-frame positions over a time span, and samples the
Keplerian polyline a renderer would draw for the same orbit.

Requires orbitmapper to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/propagate.py [OPTIONS]

Examples:
    # ISS TLE, one position every 10 minutes for 3 hours
    uv run examples/propagate.py --timestep 600 --duration 3

    # Single state vector [km, km/s] turned into a synthetic TLE
    uv run examples/propagate.py --state 7000 0 0 0 5.9 4.4

    # Denser polyline
    uv run examples/propagate.py --segments 256
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated

import jax.numpy as jnp
import typer

from orbitmapper import (
    EphemerisPropagator,
    EphemerisSample,
    TLEPropagator,
    sample_orbit_polyline,
)

ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"


def main(
    line1: Annotated[str, typer.Option(help="First TLE line")] = ISS_LINE1,
    line2: Annotated[str, typer.Option(help="Second TLE line")] = ISS_LINE2,
    state: Annotated[
        tuple[float, float, float, float, float, float] | None,
        typer.Option(help="ECI state x y z vx vy vz [km, km/s]; overrides the TLE"),
    ] = None,
    timestep: Annotated[float, typer.Option(help="Output timestep in seconds")] = 300.0,
    duration: Annotated[float, typer.Option(help="Propagation duration in hours")] = 1.5,
    segments: Annotated[int, typer.Option(help="Polyline segment count")] = 64,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
) -> None:
    """Propagate one satellite and print its render-frame track."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if state is None:
        prop = TLEPropagator(line1, line2)
        if not prop.is_valid:
            print("ERROR: TLE record did not parse. Exiting.")
            raise typer.Exit(1)
        t0 = prop.epoch
        elements = prop.try_get_mean_elements()
    else:
        t0 = datetime.now(timezone.utc).replace(microsecond=0)
        prop = EphemerisPropagator([EphemerisSample(t0, state[:3], state[3:])])
        if not prop.has_sgp4:
            print("WARNING: state has no valid elliptical orbit; showing the raw sample.")
        elements = prop.try_get_keplerian_elements()

    print(f"Propagator: {prop!r}")
    period = prop.try_get_orbital_period_seconds()
    if period is not None:
        print(f"  Period: {period:.1f} s ({period / 60.0:.2f} min)")

    # ── Track ────────────────────────────────────────────────────────────
    print("\n── Render-frame track [Earth radii] ──")
    n_steps = int(duration * 3600.0 // timestep) + 1
    for k in range(n_steps):
        t = t0 + timedelta(seconds=k * timestep)
        s = prop.propagate(t)
        r = float(jnp.linalg.norm(s.position))
        x, y, z = (float(c) for c in s.position)
        print(f"  {t.isoformat()}  [{x:+.5f} {y:+.5f} {z:+.5f}]  |r|={r:.5f}")

    # ── Polyline ─────────────────────────────────────────────────────────
    if elements is None:
        print("\nNo Keplerian elements available; skipping polyline.")
        return

    print(f"\n── Orbit polyline ({elements}) ──")
    vertices = sample_orbit_polyline(elements, segments).to_array()
    radii = jnp.linalg.norm(vertices, axis=1)
    print(f"  Vertices: {vertices.shape[0]}")
    print(f"  Radius range: {float(radii.min()):.5f} .. {float(radii.max()):.5f} Earth radii")
    print(f"  Closed: {bool(jnp.allclose(vertices[0], vertices[-1]))}")


if __name__ == "__main__":
    typer.run(main)
