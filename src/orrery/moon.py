"""
orrery.moon — Analytic Lunar Ephemeris
=======================================

Geocentric Moon position from the principal periodic terms of the
truncated lunar theory in Meeus (1998, Ch. 47).  Accuracy is ~0.3° in
longitude, ~0.2° in latitude and ~0.5% in distance, ample for drawing the
Moon's orbit.

The theory yields ecliptic coordinates of date.  General precession in
longitude is removed to refer them to the J2000 ecliptic, which is then
rotated to the J2000 equator like the planetary positions.

Reference
---------
Meeus, J. (1998). *Astronomical Algorithms*, 2nd ed., Willmann-Bell, Ch. 47.
"""

import numpy as np
from numpy.typing import NDArray

from .utils import (
    OBLIQUITY_J2000_DEG, PRECESSION_DEG_PER_CENTURY,
    centuries_since_j2000, rotation_matrix_x,
)

MEAN_EARTH_MOON_DIST_KM = 385_000.56

# ── Periodic terms ──────────────────────────────────────────────────────────
# Columns: multiples of (D, M, M', F), coefficient
# Longitude / latitude coefficients in 1e-6 deg, distance in 1e-3 km.

_LON_TERMS = np.array([
    (0, 0, 1, 0, 6288774), (2, 0, -1, 0, 1274027), (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618), (0, 1, 0, 0, -185116), (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793), (2, -1, -1, 0, 57066), (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758), (0, 1, -1, 0, -40923), (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383), (2, 0, 0, -2, 15327), (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980), (4, 0, -1, 0, 10675), (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548), (2, 1, -1, 0, -7888),
], dtype=np.float64)

_LAT_TERMS = np.array([
    (0, 0, 0, 1, 5128122), (0, 0, 1, 1, 280602), (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237), (2, 0, -1, 1, 55413), (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573), (0, 0, 2, 1, 17198), (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822), (2, -1, 0, -1, 8216), (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200), (2, 1, 0, -1, -3359), (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211), (2, -1, -1, -1, 2065), (0, 1, -1, -1, -1870),
], dtype=np.float64)

_DIST_TERMS = np.array([
    (0, 0, 1, 0, -20905355), (2, 0, -1, 0, -3699111), (2, 0, 0, 0, -2955968),
    (0, 0, 2, 0, -569925), (0, 1, 0, 0, 48888), (0, 0, 0, 2, -3149),
    (2, 0, -2, 0, 246158), (2, -1, -1, 0, -152138), (2, 0, 1, 0, -170733),
    (2, -1, 0, 0, -204586), (0, 1, -1, 0, -129620), (1, 0, 0, 0, 108743),
    (0, 1, 1, 0, 104755), (2, 0, 0, -2, 10321),
], dtype=np.float64)

_ECL_TO_EQ = rotation_matrix_x(np.deg2rad(OBLIQUITY_J2000_DEG))


def fundamental_arguments(T: float) -> tuple[float, NDArray]:
    """Moon's mean longitude L' [deg] and (D, M, M', F) [rad] at T centuries."""
    Lp = 218.3164477 + 481267.88123421 * T \
        - 0.0015786 * T**2 + T**3 / 538841.0 - T**4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T \
        - 0.0018819 * T**2 + T**3 / 545868.0 - T**4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T \
        - 0.0001536 * T**2 + T**3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T \
        + 0.0087414 * T**2 + T**3 / 69699.0 - T**4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T \
        - 0.0036539 * T**2 - T**3 / 3526000.0 + T**4 / 863310000.0
    args = np.deg2rad(np.array([D, M, Mp, F]) % 360.0)
    return Lp, args


def _series(terms: NDArray, args: NDArray, trig) -> float:
    return float(np.sum(terms[:, 4] * trig(terms[:, :4] @ args)))


def moon_ecliptic_of_date(days: float) -> tuple[float, float, float]:
    """Geocentric ecliptic longitude [deg], latitude [deg] and distance [km]."""
    T = centuries_since_j2000(days)
    Lp, args = fundamental_arguments(T)
    lam = Lp + _series(_LON_TERMS, args, np.sin) * 1e-6
    beta = _series(_LAT_TERMS, args, np.sin) * 1e-6
    dist = MEAN_EARTH_MOON_DIST_KM + _series(_DIST_TERMS, args, np.cos) * 1e-3
    return lam % 360.0, beta, dist


def moon_geocentric_ecliptic(days: float) -> NDArray:
    """Geocentric Moon position in the J2000 ecliptic frame [km]."""
    lam, beta, dist = moon_ecliptic_of_date(days)
    lam = np.deg2rad(lam - PRECESSION_DEG_PER_CENTURY * centuries_since_j2000(days))
    beta = np.deg2rad(beta)
    cos_b = np.cos(beta)
    return dist * np.array([cos_b * np.cos(lam), cos_b * np.sin(lam), np.sin(beta)])


def moon_geocentric_equatorial(days: float) -> NDArray:
    """Geocentric Moon position in the J2000 equatorial frame [km]."""
    return _ECL_TO_EQ @ moon_geocentric_ecliptic(days)
