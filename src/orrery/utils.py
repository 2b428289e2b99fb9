"""
orrery.utils — Foundational Utilities
======================================

Physical and display constants, vector helpers and calendar → Julian Date
conversion.  All functions are pure NumPy.
"""

import numpy as np
from numpy.typing import NDArray

# ── Physical Constants ──────────────────────────────────────────────────────
AU_KM = 149_597_870.7           # Astronomical Unit                 [km]
C_KM_S = 299_792.458            # Speed of light                    [km/s]
EARTH_MOON_MASS_RATIO = 81.30056
OBLIQUITY_J2000_DEG = 23.439281  # Mean obliquity of the ecliptic at J2000 [deg]
PRECESSION_DEG_PER_CENTURY = 1.3969713  # General precession in longitude

J2000_JD = 2_451_545.0
DAILY_SECONDS = 86400.0
DAYS_PER_CENTURY = 36_525.0

# ── Display Constants ───────────────────────────────────────────────────────
SOLAR_SYSTEM_SCALE = 0.005      # display units per km
TRAJ_TOTAL_DAYS = 365.5         # default trajectory span [days]
TRAJ_POINTS = 1000              # default trajectory sample count


# ── Vector Helpers ──────────────────────────────────────────────────────────

def as_vectors(v: NDArray) -> NDArray:
    """Coerce to a float64 (3,) or (N,3) array, rejecting anything else."""
    v = np.asarray(v, dtype=np.float64)
    if v.ndim == 1 and v.shape[0] == 3:
        return v
    if v.ndim == 2 and v.shape[1] == 3:
        return v
    raise ValueError(f"Expected (3,) or (N,3) array, got shape {v.shape}.")


def normalize(v: NDArray) -> NDArray:
    """Unit vector(s) along a (3,) or (N,3) input."""
    v = as_vectors(v)
    mag = np.linalg.norm(v, axis=-1, keepdims=True)
    if np.any(mag < 1e-15):
        raise ValueError("Cannot normalize a near-zero vector.")
    return v / mag


def rotation_matrix_x(angle: float) -> NDArray:
    """Active right-hand rotation about the x-axis.

    Parameters
    ----------
    angle : float — rotation angle [rad]

    Returns
    -------
    R : (3,3) ndarray — such that v' = R @ v
    """
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0,   c,  -s],
        [0.0,   s,   c],
    ])


# ── Time Utilities ──────────────────────────────────────────────────────────

def julian_date(year: int, month: int, day: int,
                hour: float = 0.0, minute: float = 0.0,
                second: float = 0.0) -> float:
    """Compute Julian Date from a Gregorian calendar date (UTC)."""
    if month <= 2:
        year -= 1
        month += 12
    A = int(year / 100)
    B = 2 - A + int(A / 4)
    JD = (int(365.25 * (year + 4716))
          + int(30.6001 * (month + 1))
          + day + B - 1524.5)
    JD += (hour + minute / 60.0 + second / 3600.0) / 24.0
    return JD


def centuries_since_j2000(days: float) -> float:
    """Julian centuries elapsed since J2000.0 for a day offset."""
    return days / DAYS_PER_CENTURY
