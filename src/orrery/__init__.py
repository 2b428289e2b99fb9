"""
orrery — Celestial Position & Trajectory Engine
================================================

A NumPy library that places the bodies of the solar system relative to any
chosen reference body and samples their orbit paths for display.

Pipeline::

    SolarSystem (catalog + hierarchy)
        │
        ▼
    PositionResolver  ◄── EphemerisSource (analytic / astropy)
        │                 FrameTransform (equatorial ↔ ecliptic)
        ▼
    TrajectorySampler ──► Scene (visible positions / trajectories)

Frames
------
**Equatorial (J2000)** — the ephemeris frame, centred on the reference body.

**Ecliptic of R** — the equatorial frame rotated about x by the axial tilt
of the reference body R.  This is what the renderer draws.

**Display axes** — ephemeris (x, y, z) relabelled as (x, z, y) so the
renderer's y-axis is the pole; lengths scaled from km by
``SOLAR_SYSTEM_SCALE``.
"""

from .errors import (
    OrreryError,
    UnknownBodyError,
    EphemerisCoverageError,
    InvalidHierarchyError,
    InvalidSampleCountError,
)

from .epoch import Epoch, DEFAULT_EPOCH

from .bodies import (
    BodyId, BodyType, CelestialBody,
    CATALOG, SolarSystem,
    catalog_body, orbital_period,
)

from .frames import (
    axial_tilt,
    equatorial_to_ecliptic, ecliptic_to_equatorial,
    equatorial_to_ecliptic_matrix, ecliptic_to_equatorial_matrix,
    to_display_axes,
)

from .ephemeris import (
    Correction, DEFAULT_CORRECTION, Frame, StateVector,
    EphemerisSource, AnalyticEphemeris,
    EPHEMERIS_PATHS, default_ephemeris,
)

from .resolver import Plane, Position, PositionResolver

from .trajectory import Trajectory, TrajectorySampler, sample_epochs

from .scene import DisplayConfig, Scene

from .utils import (
    AU_KM, C_KM_S, SOLAR_SYSTEM_SCALE, TRAJ_POINTS, TRAJ_TOTAL_DAYS,
    julian_date, normalize, rotation_matrix_x,
)

__version__ = "0.3.0"
__all__ = [
    # ── Errors ──
    "OrreryError", "UnknownBodyError", "EphemerisCoverageError",
    "InvalidHierarchyError", "InvalidSampleCountError",
    # ── Time ──
    "Epoch", "DEFAULT_EPOCH", "julian_date",
    # ── Bodies ──
    "BodyId", "BodyType", "CelestialBody", "CATALOG", "SolarSystem",
    "catalog_body", "orbital_period",
    # ── Frames ──
    "axial_tilt", "equatorial_to_ecliptic", "ecliptic_to_equatorial",
    "equatorial_to_ecliptic_matrix", "ecliptic_to_equatorial_matrix",
    "to_display_axes",
    # ── Ephemeris ──
    "Correction", "DEFAULT_CORRECTION", "Frame", "StateVector",
    "EphemerisSource", "AnalyticEphemeris", "EPHEMERIS_PATHS",
    "default_ephemeris",
    # ── Positions & trajectories ──
    "Plane", "Position", "PositionResolver",
    "Trajectory", "TrajectorySampler", "sample_epochs",
    "DisplayConfig", "Scene",
    # ── Constants / utilities ──
    "AU_KM", "C_KM_S", "SOLAR_SYSTEM_SCALE", "TRAJ_POINTS", "TRAJ_TOTAL_DAYS",
    "normalize", "rotation_matrix_x",
]
