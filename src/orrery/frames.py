"""
orrery.frames — Equatorial / Ecliptic Frame Rotation
=====================================================

Positions leave the ephemeris referred to the equator of the reference
body's frame.  The display wants them referred to the body's orbital
(ecliptic) plane.  The two differ by a rotation about the x-axis through
the body's axial tilt ε::

    x' = x
    y' = y·cos ε − z·sin ε
    z' = y·sin ε + z·cos ε

The inverse rotates through −ε.  Every function accepts a single (3,)
vector or a batch of (N,3) vectors.

Display Axes
------------
The ephemeris keeps z as the pole; the renderer keeps y up.
``to_display_axes`` swaps the 2nd and 3rd components.  This is an axis
relabelling convention, not a physical rotation, and it is its own inverse.
"""

import numpy as np
from numpy.typing import NDArray

from .bodies import BodyId, CelestialBody, catalog_body
from .utils import as_vectors, rotation_matrix_x


# ════════════════════════════════════════════════════════════════════════════
#  Internal Helpers
# ════════════════════════════════════════════════════════════════════════════

def _apply_dcm(R: NDArray, vec: NDArray) -> NDArray:
    """Apply 3×3 DCM to a single (3,) or batch (N,3) of vectors."""
    vec = as_vectors(vec)
    if vec.ndim == 1:
        return R @ vec
    return (R @ vec.T).T


def axial_tilt(body) -> float:
    """Axial tilt [rad] of a ``CelestialBody`` or catalog ``BodyId``."""
    if isinstance(body, CelestialBody):
        return np.deg2rad(body.axial_tilt_deg)
    if isinstance(body, BodyId):
        return np.deg2rad(catalog_body(body).axial_tilt_deg)
    raise TypeError(f"Expected CelestialBody or BodyId, got {type(body).__name__}")


# ════════════════════════════════════════════════════════════════════════════
#  Equatorial ↔ Ecliptic
# ════════════════════════════════════════════════════════════════════════════

def equatorial_to_ecliptic_matrix(body) -> NDArray:
    """3×3 DCM such that v_ecl = R @ v_eq for the given reference body."""
    return rotation_matrix_x(axial_tilt(body))


def ecliptic_to_equatorial_matrix(body) -> NDArray:
    """Equatorial ← ecliptic DCM (rotation through −tilt)."""
    return rotation_matrix_x(-axial_tilt(body))


def equatorial_to_ecliptic(vec: NDArray, body) -> NDArray:
    """Rotate vector(s) from the equatorial to the ecliptic frame of ``body``.

    Parameters
    ----------
    vec : (3,) or (N,3) — vector(s) in the equatorial frame
    body : CelestialBody or BodyId — reference body supplying the tilt

    Returns
    -------
    vec_ecl : same shape — vector(s) in the ecliptic frame
    """
    return _apply_dcm(equatorial_to_ecliptic_matrix(body), vec)


def ecliptic_to_equatorial(vec: NDArray, body) -> NDArray:
    """Rotate vector(s) from the ecliptic to the equatorial frame of ``body``."""
    return _apply_dcm(ecliptic_to_equatorial_matrix(body), vec)


# ════════════════════════════════════════════════════════════════════════════
#  Display Axis Convention
# ════════════════════════════════════════════════════════════════════════════

def to_display_axes(vec: NDArray) -> NDArray:
    """Swap the 2nd and 3rd components of (3,) or (N,3) vector(s)."""
    vec = as_vectors(vec)
    return vec[..., [0, 2, 1]]
